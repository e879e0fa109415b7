# api/inventory/queries.py
"""
SQLAlchemy query builders for inventory snapshots.
"""
from sqlalchemy import select, func

from db_models.category import Category, Subcategory
from db_models.inventory import Inventory, InventoryDetail
from db_models.room import Room
from db_models.user import User


def select_latest_inventory(room_id: int):
    """
    Most recent snapshot of a room with submitter and room labels.
    Ties on fecha_registro go to the highest id.
    """
    return (
        select(
            Inventory.id,
            Inventory.id_aula,
            Inventory.fecha_registro,
            Inventory.observaciones,
            Inventory.estado_general,
            User.nombre.label("registrado_por"),
            Room.codigo.label("aula_codigo"),
            Room.nombre.label("aula_nombre"),
        )
        .join(User, Inventory.id_usuario == User.id)
        .join(Room, Inventory.id_aula == Room.id)
        .where(Inventory.id_aula == room_id)
        .order_by(Inventory.fecha_registro.desc(), Inventory.id.desc())
        .limit(1)
    )


def select_inventory_details(inventory_id: int):
    """Line items joined with subcategory and category display metadata."""
    return (
        select(
            InventoryDetail,
            Subcategory.nombre.label("subcategoria_nombre"),
            Subcategory.descripcion.label("subcategoria_descripcion"),
            Subcategory.unidad_medida,
            Subcategory.campos_extra,
            Category.nombre.label("categoria_nombre"),
            Category.icono.label("categoria_icono"),
        )
        .join(Subcategory, InventoryDetail.id_subcategoria == Subcategory.id)
        .join(Category, Subcategory.id_categoria == Category.id)
        .where(InventoryDetail.id_inventario == inventory_id)
        .order_by(
            Category.orden_display.asc(),
            Subcategory.orden_display.asc(),
            InventoryDetail.id.asc(),
        )
    )


def select_inventory_history(room_id: int):
    """All snapshots of a room, newest first, with line count and unit total."""
    return (
        select(
            Inventory.id,
            Inventory.fecha_registro,
            Inventory.observaciones,
            Inventory.estado_general,
            User.nombre.label("registrado_por"),
            func.count(InventoryDetail.id).label("total_detalles"),
            func.coalesce(func.sum(InventoryDetail.cantidad_total), 0).label("total_items"),
        )
        .join(User, Inventory.id_usuario == User.id)
        .outerjoin(InventoryDetail, InventoryDetail.id_inventario == Inventory.id)
        .where(Inventory.id_aula == room_id)
        .group_by(
            Inventory.id,
            Inventory.fecha_registro,
            Inventory.observaciones,
            Inventory.estado_general,
            User.nombre,
        )
        .order_by(Inventory.fecha_registro.desc(), Inventory.id.desc())
    )
