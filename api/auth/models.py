# api/auth/models.py
"""
Pydantic models for authentication endpoints.
"""
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, ConfigDict


class LoginRequest(BaseModel):
    """Login credentials."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class SessionUser(BaseModel):
    """User fields returned alongside a fresh token."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre: str
    email: str
    rol: str


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    token_type: str = "bearer"
    user: SessionUser


class ProfileResponse(BaseModel):
    """Current user profile."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre: str
    email: str
    rol: str
    ultimo_acceso: datetime | None = None
    fecha_creacion: datetime


class PermissionHints(BaseModel):
    """Static capabilities of the caller's role. Display hints only."""
    rol: str
    view: list[str]
    edit: list[str]
    admin: bool
