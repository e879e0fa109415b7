# api/users/models.py
"""
Pydantic models for user administration.
"""
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator

from core.security import MAX_PASSWORD_BYTES

ROLE_PATTERN = "^(administrador|supervisor|soporte_ti|mantenimiento|docente)$"


def check_password_bytes(value: str | None) -> str | None:
    if value is not None and len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"la contraseña no puede superar {MAX_PASSWORD_BYTES} bytes")
    return value


class UserCreate(BaseModel):
    """Request to create a new user."""
    nombre: str = Field(..., min_length=1, max_length=150)
    email: EmailStr
    password: str = Field(..., min_length=6)
    rol: str = Field(default="docente", pattern=ROLE_PATTERN)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        return check_password_bytes(value)


class UserUpdate(BaseModel):
    """Partial update. Email is immutable once created."""
    nombre: str | None = Field(None, min_length=1, max_length=150)
    rol: str | None = Field(None, pattern=ROLE_PATTERN)
    activo: bool | None = None
    password: str | None = Field(None, min_length=6)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        return check_password_bytes(value)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre: str
    email: str
    rol: str
    activo: bool
    fecha_creacion: datetime
    ultimo_acceso: datetime | None = None


class UserCreatedResponse(BaseModel):
    success: bool = True
    usuario: UserResponse
