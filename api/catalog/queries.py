# api/catalog/queries.py
"""
SQLAlchemy query builders for the category hierarchy.
"""
from sqlalchemy import select, exists

from db_models.category import Category, Subcategory, CategoryPermission


def select_active_categories():
    return (
        select(Category)
        .where(Category.activa == True)
        .order_by(Category.orden_display.asc(), Category.nombre.asc())
    )


def select_viewable_categories(role: str):
    """Active categories the role has a puede_ver row for."""
    allowed = exists().where(
        CategoryPermission.id_categoria == Category.id,
        CategoryPermission.rol == role,
        CategoryPermission.puede_ver == True,
    )
    return select_active_categories().where(allowed)


def select_active_category_by_id(category_id: int):
    return select(Category).where(Category.id == category_id, Category.activa == True)


def select_active_subcategories(category_id: int):
    return (
        select(Subcategory)
        .where(Subcategory.id_categoria == category_id, Subcategory.activa == True)
        .order_by(Subcategory.orden_display.asc(), Subcategory.nombre.asc())
    )


def select_subcategories_by_ids(ids: list[int]):
    return select(Subcategory).where(Subcategory.id.in_(ids))
