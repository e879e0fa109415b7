# db_models/category.py
from sqlalchemy import String, Boolean, Integer, Text, ForeignKey, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base


class Category(Base):
    """Static reference data: furniture, audio/video, lighting, ..."""
    __tablename__ = "categorias"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    nombre: Mapped[str] = mapped_column(String(100), nullable=False)

    # Stable key used by the role capability table (e.g. "audio_video")
    slug: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )

    descripcion: Mapped[str | None] = mapped_column(Text, nullable=True)
    icono: Mapped[str | None] = mapped_column(String(20), nullable=True)
    orden_display: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    activa: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )

    subcategorias: Mapped[list["Subcategory"]] = relationship(
        "Subcategory",
        back_populates="categoria",
        order_by="Subcategory.orden_display",
    )


class Subcategory(Base):
    __tablename__ = "subcategorias"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    id_categoria: Mapped[int] = mapped_column(
        ForeignKey("categorias.id"),
        nullable=False,
        index=True,
    )

    nombre: Mapped[str] = mapped_column(String(100), nullable=False)
    descripcion: Mapped[str | None] = mapped_column(Text, nullable=True)
    unidad_medida: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default="unidad",
        server_default="unidad",
    )
    permite_cantidad: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )

    # JSON text: {"marca": "text", "potencia": "number", "tipo": "select:LED,Fluorescente"}
    campos_extra: Mapped[str | None] = mapped_column(Text, nullable=True)

    orden_display: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    activa: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )

    categoria: Mapped["Category"] = relationship("Category", back_populates="subcategorias")


class CategoryPermission(Base):
    """(rol, categoria) -> view/edit flags. Administrators never need a row."""
    __tablename__ = "permisos_categoria"

    rol: Mapped[str] = mapped_column(String(20), primary_key=True)
    id_categoria: Mapped[int] = mapped_column(
        ForeignKey("categorias.id", ondelete="CASCADE"),
        primary_key=True,
    )

    puede_ver: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    puede_editar: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
