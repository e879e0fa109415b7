# api/inventory/db_manager.py
"""
Inventory submission and retrieval.

A submission is a snapshot header plus its line items, written in a single
transaction. Snapshots are append-only; a room's current inventory is its
most recent snapshot.
"""
import json
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.inventory import Inventory, InventoryDetail
from db_models.category import Subcategory
from db_models.room import Room
from core.deps import Identity
from core.errors import QuantityReconciliationError, TransactionError, ValidationError
from core.extra_fields import load_schema, parse_schema, validate_specifications
from core.permissions import require_category_edit
from api.catalog.db_manager import get_subcategories_by_ids
from api.rooms.db_manager import get_room_or_raise
from .models import InventoryDetailCreate, QUANTITY_FIELDS
from . import queries

logger = logging.getLogger(__name__)


def check_quantities(detalle: InventoryDetailCreate, subcategory: Subcategory | None = None) -> None:
    """
    Quantities must be non-negative integers and the total must equal
    bueno + regular + malo + roto.

    Raises:
        ValidationError: a quantity is negative or not an integer
        QuantityReconciliationError: the breakdown does not add up
    """
    for field in QUANTITY_FIELDS:
        value = getattr(detalle, field)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValidationError(
                f"{field} debe ser un entero no negativo (subcategoría {detalle.id_subcategoria})"
            )

    suma = detalle.suma_estados
    if detalle.cantidad_total != suma:
        raise QuantityReconciliationError(
            detalle.id_subcategoria,
            detalle.cantidad_total,
            suma,
            subcategory.nombre if subcategory is not None else None,
        )


def dump_specifications(specs: dict[str, Any] | None) -> str:
    return json.dumps(specs or {}, ensure_ascii=False, sort_keys=True)


def load_specifications(raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Unreadable especificaciones: %r", raw)
        return {}
    return data if isinstance(data, dict) else {}


async def submit_inventory(
    db: AsyncSession,
    room_id: int,
    identity: Identity,
    detalles: list[InventoryDetailCreate],
    *,
    observaciones: str | None = None,
    estado_general: str | None = None,
) -> int:
    """
    Record a new inventory snapshot for a room.

    Every check runs before the first insert. The header and all line items
    are then committed together; any database failure rolls the whole
    snapshot back.

    Returns the new snapshot id.

    Raises:
        ValidationError / QuantityReconciliationError: bad input, nothing written
        NotFoundError: the room does not exist
        AuthorizationError: the caller may not edit a referenced category
        TransactionError: the write failed and was rolled back
    """
    if not detalles:
        raise ValidationError("Detalles de inventario requeridos")

    await get_room_or_raise(db, room_id)

    subcategories = await get_subcategories_by_ids(db, sorted({d.id_subcategoria for d in detalles}))

    # Unknown subcategory ids are left to the foreign key
    if not identity.is_admin():
        for category_id in sorted({s.id_categoria for s in subcategories.values()}):
            await require_category_edit(db, identity.rol, category_id)

    for detalle in detalles:
        sub = subcategories.get(detalle.id_subcategoria)
        check_quantities(detalle, sub)
        if sub is not None:
            validate_specifications(parse_schema(sub.campos_extra), detalle.especificaciones, context=sub.nombre)

    inventario = Inventory(
        id_aula=room_id,
        id_usuario=identity.id,
        observaciones=observaciones or None,
        estado_general=estado_general or None,
    )

    try:
        db.add(inventario)
        await db.flush()  # populate inventario.id without committing

        db.add_all([
            InventoryDetail(
                id_inventario=inventario.id,
                id_subcategoria=d.id_subcategoria,
                cantidad_total=d.cantidad_total,
                cantidad_bueno=d.cantidad_bueno,
                cantidad_regular=d.cantidad_regular,
                cantidad_malo=d.cantidad_malo,
                cantidad_roto=d.cantidad_roto,
                especificaciones=dump_specifications(d.especificaciones),
                observaciones=d.observaciones or None,
            )
            for d in detalles
        ])
        await db.flush()
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.warning("Inventory for room %s rolled back: %s", room_id, exc)
        raise TransactionError("Error guardando inventario") from exc

    logger.info(
        "Inventory %s saved for room %s by user %s (%d lines)",
        inventario.id, room_id, identity.id, len(detalles),
    )
    return inventario.id


def _detail_payload(row) -> dict:
    detalle: InventoryDetail = row.InventoryDetail
    return {
        "id": detalle.id,
        "id_subcategoria": detalle.id_subcategoria,
        "cantidad_total": detalle.cantidad_total,
        "cantidad_bueno": detalle.cantidad_bueno,
        "cantidad_regular": detalle.cantidad_regular,
        "cantidad_malo": detalle.cantidad_malo,
        "cantidad_roto": detalle.cantidad_roto,
        "especificaciones": load_specifications(detalle.especificaciones),
        "observaciones": detalle.observaciones,
        "subcategoria_nombre": row.subcategoria_nombre,
        "subcategoria_descripcion": row.subcategoria_descripcion,
        "unidad_medida": row.unidad_medida,
        "campos_extra": load_schema(row.campos_extra),
        "categoria_nombre": row.categoria_nombre,
        "categoria_icono": row.categoria_icono,
    }


async def get_current_inventory(
    db: AsyncSession, room_id: int
) -> tuple[Room | None, dict | None, list[dict]]:
    """
    Latest snapshot of a room and its line items.

    A room without snapshots (or an unknown room) yields ``(None, None, [])``.
    """
    result = await db.execute(queries.select_latest_inventory(room_id))
    header = result.mappings().one_or_none()
    if header is None:
        return None, None, []

    room = await get_room_or_raise(db, room_id)

    result = await db.execute(queries.select_inventory_details(header["id"]))
    detalles = [_detail_payload(row) for row in result.all()]

    return room, dict(header), detalles


async def get_inventory_history(db: AsyncSession, room_id: int) -> list[dict]:
    """Every snapshot of a room, newest first."""
    await get_room_or_raise(db, room_id)
    result = await db.execute(queries.select_inventory_history(room_id))
    return [dict(row) for row in result.mappings().all()]
