# api/catalog/db_manager.py
"""
Read-only access to categories and subcategories.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.category import Category, Subcategory
from core.errors import NotFoundError
from core.extra_fields import load_schema, parse_schema
from core.permissions import require_category_view
from db_models.user import UserRole
from . import queries


async def list_categories(db: AsyncSession, role: str) -> list[Category]:
    """Active categories; non-administrators only see those they may view."""
    if role == UserRole.ADMINISTRADOR.value:
        stmt = queries.select_active_categories()
    else:
        stmt = queries.select_viewable_categories(role)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_subcategories(db: AsyncSession, role: str, category_id: int) -> list[Subcategory]:
    """
    Active subcategories of a category, by display order then name.

    Raises:
        AuthorizationError: the role may not view the category
        NotFoundError: the category does not exist or is inactive
    """
    await require_category_view(db, role, category_id)

    result = await db.execute(queries.select_active_category_by_id(category_id))
    if result.scalar_one_or_none() is None:
        raise NotFoundError(f"Categoría {category_id} no encontrada")

    result = await db.execute(queries.select_active_subcategories(category_id))
    return list(result.scalars().all())


async def get_subcategories_by_ids(db: AsyncSession, ids: list[int]) -> dict[int, Subcategory]:
    if not ids:
        return {}
    result = await db.execute(queries.select_subcategories_by_ids(ids))
    return {s.id: s for s in result.scalars().all()}


def subcategory_payload(sub: Subcategory) -> dict:
    return {
        "id": sub.id,
        "id_categoria": sub.id_categoria,
        "nombre": sub.nombre,
        "descripcion": sub.descripcion,
        "unidad_medida": sub.unidad_medida,
        "permite_cantidad": sub.permite_cantidad,
        "orden_display": sub.orden_display,
        "campos_extra": load_schema(sub.campos_extra),
        "campos": parse_schema(sub.campos_extra),
    }
