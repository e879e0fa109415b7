# core/extra_fields.py
"""
Per-subcategory "extra fields".

A subcategory declares its extra specification fields as a JSON map of
field name to type, e.g.::

    {"marca": "text", "potencia": "number", "tipo": "select:LED,Fluorescente"}

Types are parsed into a closed set of kinds. Specification blobs submitted with
a line item are checked against the known fields; keys the schema does not
declare are kept as they are.
"""
import json
import logging
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from core.errors import ValidationError

logger = logging.getLogger(__name__)

SELECT_PREFIX = "select:"
NUMERIC_TYPES = {"number", "numeric", "integer"}


class TextField(BaseModel):
    kind: Literal["text"] = "text"
    name: str
    # Original HTML input type (text, date, email, ...)
    input_type: str = "text"


class NumberField(BaseModel):
    kind: Literal["number"] = "number"
    name: str


class ChoiceField(BaseModel):
    kind: Literal["choice"] = "choice"
    name: str
    options: list[str]


ExtraField = Annotated[Union[TextField, NumberField, ChoiceField], Field(discriminator="kind")]


def parse_field(name: str, raw_type: Any) -> TextField | NumberField | ChoiceField:
    raw = str(raw_type or "text").strip()
    if raw.lower().startswith(SELECT_PREFIX):
        options = [o.strip() for o in raw[len(SELECT_PREFIX):].split(",") if o.strip()]
        return ChoiceField(name=name, options=options)
    if raw.lower() in NUMERIC_TYPES:
        return NumberField(name=name)
    return TextField(name=name, input_type=raw or "text")


def load_schema(raw: str | dict | None) -> dict[str, Any]:
    """Decode the stored JSON map. Unreadable schemas count as empty."""
    if not raw:
        return {}
    if isinstance(raw, dict):
        return raw
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring unreadable campos_extra: %r", raw)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring campos_extra that is not an object: %r", raw)
        return {}
    return data


def parse_schema(raw: str | dict | None) -> list[TextField | NumberField | ChoiceField]:
    return [parse_field(name, raw_type) for name, raw_type in load_schema(raw).items()]


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        try:
            float(value)
        except ValueError:
            return False
        return True
    return False


def validate_specifications(
    fields: list[TextField | NumberField | ChoiceField],
    specs: dict[str, Any] | None,
    *,
    context: str = "",
) -> dict[str, Any]:
    """
    Check ``specs`` against ``fields`` and return it unchanged.

    Raises:
        ValidationError: a declared field holds a value of the wrong kind
    """
    specs = dict(specs or {})
    by_name = {f.name: f for f in fields}
    where = f" en {context}" if context else ""

    for key, value in specs.items():
        field = by_name.get(key)
        if field is None or _is_empty(value):
            continue
        if isinstance(field, NumberField):
            if not _is_number(value):
                raise ValidationError(f"El campo '{key}'{where} debe ser numérico")
        elif isinstance(field, ChoiceField):
            if str(value) not in field.options:
                raise ValidationError(
                    f"Valor '{value}' no permitido para '{key}'{where}; opciones: {', '.join(field.options)}"
                )
        elif isinstance(value, (dict, list)):
            raise ValidationError(f"El campo '{key}'{where} debe ser texto")

    return specs
