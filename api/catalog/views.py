# api/catalog/views.py
"""
Category hierarchy endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from .models import CategoryResponse, SubcategoryResponse
from . import db_manager

router = APIRouter(prefix="/categorias", tags=["catalogo"])


@router.get("", response_model=list[CategoryResponse], summary="List categories visible to the caller")
async def list_categories_endpoint(
    identity: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> list[CategoryResponse]:
    categories = await db_manager.list_categories(db, identity.rol)
    return [CategoryResponse.model_validate(c) for c in categories]


@router.get(
    "/{category_id}/subcategorias",
    response_model=list[SubcategoryResponse],
    summary="List subcategories of a category",
)
async def list_subcategories_endpoint(
    category_id: int,
    identity: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> list[SubcategoryResponse]:
    """Requires view permission on the category (403 otherwise)."""
    subcategories = await db_manager.list_subcategories(db, identity.rol, category_id)
    return [SubcategoryResponse(**db_manager.subcategory_payload(s)) for s in subcategories]
