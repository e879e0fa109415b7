# api/reports/db_manager.py
"""
Aggregate reports, recomputed from stored snapshots on each call.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from . import queries

QUANTITY_KEYS = ("total_items", "items_buenos", "items_regulares", "items_malos", "items_rotos")


def percentage(part: int, total: int) -> float:
    """part/total as a percentage with one decimal; 0 when total is 0."""
    if not total:
        return 0.0
    return round(part / total * 100, 1)


async def get_summary(db: AsyncSession) -> dict:
    result = await db.execute(queries.summary_totals())
    row = result.mappings().one()

    summary = {key: int(row[key] or 0) for key in row.keys()}
    summary["porcentaje_operativo"] = percentage(
        summary["items_buenos"] + summary["items_regulares"],
        summary["total_items"],
    )
    return summary


async def get_critical_items(db: AsyncSession, threshold: float) -> list[dict]:
    """
    Line items whose poor+broken share exceeds ``threshold`` percent.

    Ordered by problem percentage (highest first), then room code,
    category and subcategory.
    """
    result = await db.execute(queries.latest_line_items_with_stock())

    items = []
    for row in result.mappings().all():
        problemas = row["cantidad_malo"] + row["cantidad_roto"]
        if problemas / row["cantidad_total"] * 100 <= threshold:
            continue
        item = dict(row)
        item["porcentaje_problemas"] = percentage(problemas, row["cantidad_total"])
        items.append(item)

    items.sort(key=lambda i: (-i["porcentaje_problemas"], i["aula"], i["categoria"], i["subcategoria"]))
    return items


async def get_room_report(db: AsyncSession) -> list[dict]:
    """Per-room rollup, worst operational percentage first, then room code."""
    result = await db.execute(queries.room_rollup())

    rooms = []
    for row in result.mappings().all():
        room = dict(row)
        for key in QUANTITY_KEYS:
            room[key] = int(room[key] or 0)
        room["porcentaje_operativo"] = percentage(
            room["items_buenos"] + room["items_regulares"],
            room["total_items"],
        )
        rooms.append(room)

    rooms.sort(key=lambda r: (r["porcentaje_operativo"], r["codigo"]))
    return rooms
