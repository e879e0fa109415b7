# db_models/user.py
"""
User model with the institution's fixed set of roles.

Roles:
- administrador: full access, bypasses every category permission
- supervisor: manages rooms, sees every category
- soporte_ti: audio/video equipment
- mantenimiento: furniture, climate, lighting, infrastructure
- docente: read-only access as granted per category
"""
from datetime import datetime
from enum import Enum

from sqlalchemy import String, Boolean, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base


class UserRole(str, Enum):
    """User roles for authorization."""
    ADMINISTRADOR = "administrador"
    SUPERVISOR = "supervisor"
    SOPORTE_TI = "soporte_ti"
    MANTENIMIENTO = "mantenimiento"
    DOCENTE = "docente"


class User(Base):
    __tablename__ = "usuarios"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    nombre: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
    )

    # Always stored lowercase so lookups are case-insensitive
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    rol: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=UserRole.DOCENTE.value,
    )

    # Users are deactivated, never deleted
    activo: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    fecha_creacion: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    ultimo_acceso: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
