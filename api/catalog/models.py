# api/catalog/models.py
from typing import Any

from pydantic import BaseModel, ConfigDict

from core.extra_fields import ExtraField


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre: str
    slug: str
    descripcion: str | None = None
    icono: str | None = None
    orden_display: int


class SubcategoryResponse(BaseModel):
    id: int
    id_categoria: int
    nombre: str
    descripcion: str | None = None
    unidad_medida: str
    permite_cantidad: bool
    orden_display: int

    # Raw declaration as stored, plus its typed form
    campos_extra: dict[str, Any] = {}
    campos: list[ExtraField] = []
