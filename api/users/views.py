# api/users/views.py
"""
User administration. Administrators only.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import AdminUser
from .models import UserCreate, UserUpdate, UserResponse, UserCreatedResponse
from . import db_manager

router = APIRouter(prefix="/admin/usuarios", tags=["admin"])


@router.get("", response_model=list[UserResponse], summary="List all users")
async def list_users_endpoint(
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> list[UserResponse]:
    users = await db_manager.list_users(db)
    return [UserResponse.model_validate(u) for u in users]


@router.post(
    "",
    response_model=UserCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
)
async def create_user_endpoint(
    user_data: UserCreate,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> UserCreatedResponse:
    """The password is hashed before storage; emails are unique regardless of case."""
    user = await db_manager.create_user(db, **user_data.model_dump())
    return UserCreatedResponse(usuario=UserResponse.model_validate(user))


@router.put("/{user_id}", response_model=UserResponse, summary="Update user")
async def update_user_endpoint(
    user_id: int,
    updates: UserUpdate,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    user = await db_manager.update_user(db, user_id, updates.model_dump(exclude_unset=True), admin.id)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=UserResponse, summary="Deactivate user")
async def deactivate_user_endpoint(
    user_id: int,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    user = await db_manager.deactivate_user(db, user_id, admin.id)
    return UserResponse.model_validate(user)
