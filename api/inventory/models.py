# api/inventory/models.py
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.rooms.models import RoomResponse

QUANTITY_FIELDS = (
    "cantidad_total",
    "cantidad_bueno",
    "cantidad_regular",
    "cantidad_malo",
    "cantidad_roto",
)


class InventoryDetailCreate(BaseModel):
    """One subcategory's quantity breakdown. Missing quantities count as zero."""
    id_subcategoria: int
    cantidad_total: int = Field(0, ge=0)
    cantidad_bueno: int = Field(0, ge=0)
    cantidad_regular: int = Field(0, ge=0)
    cantidad_malo: int = Field(0, ge=0)
    cantidad_roto: int = Field(0, ge=0)
    especificaciones: dict[str, Any] = Field(default_factory=dict)
    observaciones: str | None = None

    @field_validator(*QUANTITY_FIELDS, mode="before")
    @classmethod
    def null_is_zero(cls, value):
        return 0 if value is None else value

    @field_validator("especificaciones", mode="before")
    @classmethod
    def null_is_empty(cls, value):
        return {} if value is None else value

    @property
    def suma_estados(self) -> int:
        return self.cantidad_bueno + self.cantidad_regular + self.cantidad_malo + self.cantidad_roto


class InventoryCreate(BaseModel):
    observaciones: str | None = None
    estado_general: str | None = Field(None, max_length=20)
    detalles: list[InventoryDetailCreate] = Field(..., min_length=1)


class InventoryCreatedResponse(BaseModel):
    success: bool = True
    inventario_id: int
    message: str = "Inventario guardado correctamente"


class InventoryHeader(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    id_aula: int
    fecha_registro: datetime
    observaciones: str | None = None
    estado_general: str | None = None
    registrado_por: str
    aula_codigo: str
    aula_nombre: str


class InventoryDetailResponse(BaseModel):
    id: int
    id_subcategoria: int
    cantidad_total: int
    cantidad_bueno: int
    cantidad_regular: int
    cantidad_malo: int
    cantidad_roto: int
    especificaciones: dict[str, Any] = {}
    observaciones: str | None = None

    subcategoria_nombre: str
    subcategoria_descripcion: str | None = None
    unidad_medida: str
    campos_extra: dict[str, Any] = {}
    categoria_nombre: str
    categoria_icono: str | None = None


class CurrentInventoryResponse(BaseModel):
    aula: RoomResponse | None = None
    inventario: InventoryHeader | None = None
    detalles: list[InventoryDetailResponse] = []


class InventoryHistoryEntry(BaseModel):
    id: int
    fecha_registro: datetime
    observaciones: str | None = None
    estado_general: str | None = None
    registrado_por: str
    total_detalles: int
    total_items: int
