# api/auth/views.py
"""
Login and current-user endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from core.permissions import capabilities_for
from .models import LoginRequest, LoginResponse, SessionUser, ProfileResponse, PermissionHints
from . import db_manager


router = APIRouter(tags=["authentication"])


@router.post("/login", response_model=LoginResponse, summary="Login and get a token")
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_session),
) -> LoginResponse:
    """
    Exchange email and password for a 24 hour access token.
    """
    token, user = await db_manager.authenticate(db, credentials.email, credentials.password)
    return LoginResponse(token=token, user=SessionUser.model_validate(user))


@router.get("/me", response_model=ProfileResponse, summary="Get current user")
async def get_me(
    identity: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    """Get the current authenticated user's profile."""
    user = await db_manager.get_active_user(db, identity.id)
    return ProfileResponse.model_validate(user)


@router.get("/me/permisos", response_model=PermissionHints, summary="Role capabilities (UI hints)")
async def get_my_permissions(identity: CurrentUser) -> PermissionHints:
    return PermissionHints(rol=identity.rol, **capabilities_for(identity.rol))
