# db_models/inventory.py
from datetime import datetime

from sqlalchemy import (
    String,
    Integer,
    DateTime,
    Text,
    ForeignKey,
    CheckConstraint,
    Index,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base


class Inventory(Base):
    """
    One point-in-time inventory of a room.

    Rows are never updated: a new submission for the same room appends a new
    snapshot and the room's current state is the most recent one.
    """
    __tablename__ = "inventarios"
    __table_args__ = (
        Index("ix_inventarios_aula_fecha", "id_aula", "fecha_registro"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    id_aula: Mapped[int] = mapped_column(
        ForeignKey("aulas.id"),
        nullable=False,
        index=True,
    )
    id_usuario: Mapped[int] = mapped_column(
        ForeignKey("usuarios.id"),
        nullable=False,
    )

    observaciones: Mapped[str | None] = mapped_column(Text, nullable=True)
    estado_general: Mapped[str | None] = mapped_column(String(20), nullable=True)

    fecha_registro: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    aula: Mapped["Room"] = relationship("Room", back_populates="inventarios")
    detalles: Mapped[list["InventoryDetail"]] = relationship(
        "InventoryDetail",
        back_populates="inventario",
        cascade="all, delete-orphan",
    )


class InventoryDetail(Base):
    """Quantity breakdown of one subcategory inside a snapshot."""
    __tablename__ = "detalles_inventario"
    __table_args__ = (
        CheckConstraint(
            "cantidad_total >= 0 AND cantidad_bueno >= 0 AND cantidad_regular >= 0 "
            "AND cantidad_malo >= 0 AND cantidad_roto >= 0",
            name="ck_detalles_cantidades_no_negativas",
        ),
        CheckConstraint(
            "cantidad_total = cantidad_bueno + cantidad_regular + cantidad_malo + cantidad_roto",
            name="ck_detalles_cantidades_cuadran",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    id_inventario: Mapped[int] = mapped_column(
        ForeignKey("inventarios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    id_subcategoria: Mapped[int] = mapped_column(
        ForeignKey("subcategorias.id"),
        nullable=False,
        index=True,
    )

    cantidad_total: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cantidad_bueno: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cantidad_regular: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cantidad_malo: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cantidad_roto: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # JSON text keyed by the subcategory's campos_extra
    especificaciones: Mapped[str | None] = mapped_column(Text, nullable=True)
    observaciones: Mapped[str | None] = mapped_column(Text, nullable=True)

    inventario: Mapped["Inventory"] = relationship("Inventory", back_populates="detalles")
