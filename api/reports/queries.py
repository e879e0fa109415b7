# api/reports/queries.py
"""
SQLAlchemy query builders for reports.

Every report reads only the latest snapshot of each room.
"""
from sqlalchemy import select, func

from db_models.category import Category, Subcategory
from db_models.inventory import Inventory, InventoryDetail
from db_models.room import Room


def latest_inventories():
    """
    Subquery with one row per room: its most recent snapshot.
    Ties on fecha_registro go to the highest id.
    """
    ranked = (
        select(
            Inventory.id.label("id"),
            Inventory.id_aula.label("id_aula"),
            Inventory.fecha_registro.label("fecha_registro"),
            func.row_number()
            .over(
                partition_by=Inventory.id_aula,
                order_by=(Inventory.fecha_registro.desc(), Inventory.id.desc()),
            )
            .label("rn"),
        )
        .subquery("ranked")
    )
    return (
        select(ranked.c.id, ranked.c.id_aula, ranked.c.fecha_registro)
        .where(ranked.c.rn == 1)
        .subquery("ultimos")
    )


def _quantity_sums():
    return (
        func.coalesce(func.sum(InventoryDetail.cantidad_total), 0).label("total_items"),
        func.coalesce(func.sum(InventoryDetail.cantidad_bueno), 0).label("items_buenos"),
        func.coalesce(func.sum(InventoryDetail.cantidad_regular), 0).label("items_regulares"),
        func.coalesce(func.sum(InventoryDetail.cantidad_malo), 0).label("items_malos"),
        func.coalesce(func.sum(InventoryDetail.cantidad_roto), 0).label("items_rotos"),
    )


def summary_totals():
    """Active room count, rooms with a snapshot, and quantity sums over latest snapshots."""
    latest = latest_inventories()
    return (
        select(
            func.count(func.distinct(Room.id)).label("total_aulas"),
            func.count(func.distinct(latest.c.id_aula)).label("aulas_con_inventario"),
            *_quantity_sums(),
        )
        .select_from(Room)
        .outerjoin(latest, latest.c.id_aula == Room.id)
        .outerjoin(InventoryDetail, InventoryDetail.id_inventario == latest.c.id)
        .where(Room.activa == True)
    )


def room_rollup():
    """One row per active room with its latest snapshot's sums (zeros if none)."""
    latest = latest_inventories()
    return (
        select(
            Room.id,
            Room.codigo,
            Room.nombre,
            Room.edificio,
            latest.c.id.label("id_inventario"),
            latest.c.fecha_registro.label("ultimo_inventario"),
            *_quantity_sums(),
        )
        .select_from(Room)
        .outerjoin(latest, latest.c.id_aula == Room.id)
        .outerjoin(InventoryDetail, InventoryDetail.id_inventario == latest.c.id)
        .where(Room.activa == True)
        .group_by(
            Room.id,
            Room.codigo,
            Room.nombre,
            Room.edificio,
            latest.c.id,
            latest.c.fecha_registro,
        )
    )


def latest_line_items_with_stock():
    """Line items of latest snapshots in active rooms that hold at least one unit."""
    latest = latest_inventories()
    return (
        select(
            Room.id.label("id_aula"),
            Room.codigo.label("aula"),
            Room.nombre.label("aula_nombre"),
            Category.nombre.label("categoria"),
            Subcategory.nombre.label("subcategoria"),
            InventoryDetail.cantidad_total,
            InventoryDetail.cantidad_malo,
            InventoryDetail.cantidad_roto,
            latest.c.fecha_registro,
        )
        .select_from(InventoryDetail)
        .join(latest, InventoryDetail.id_inventario == latest.c.id)
        .join(Room, Room.id == latest.c.id_aula)
        .join(Subcategory, InventoryDetail.id_subcategoria == Subcategory.id)
        .join(Category, Subcategory.id_categoria == Category.id)
        .where(Room.activa == True, InventoryDetail.cantidad_total > 0)
    )
