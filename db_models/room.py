# db_models/room.py
from datetime import datetime

from sqlalchemy import String, Boolean, Integer, DateTime, func, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base


class Room(Base):
    """A classroom, lab or auditorium; the unit of inventory tracking."""
    __tablename__ = "aulas"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Upper-cased before storage
    codigo: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        index=True,
        nullable=False,
    )

    nombre: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
    )

    edificio: Mapped[str | None] = mapped_column(String(100), nullable=True)
    piso: Mapped[int | None] = mapped_column(Integer, nullable=True)
    capacidad: Mapped[int | None] = mapped_column(Integer, nullable=True)

    tipo: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="aula",
        server_default="aula",
    )

    activa: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )

    fecha_creacion: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    # Snapshots are history; rooms are never deleted through the API
    inventarios: Mapped[list["Inventory"]] = relationship(
        "Inventory",
        back_populates="aula",
    )
