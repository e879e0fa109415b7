# api/reports/models.py
"""
Pydantic models for report responses.
"""
from datetime import datetime
from pydantic import BaseModel


class QuantityTotals(BaseModel):
    total_items: int = 0
    items_buenos: int = 0
    items_regulares: int = 0
    items_malos: int = 0
    items_rotos: int = 0
    porcentaje_operativo: float = 0.0


class SummaryReport(QuantityTotals):
    """Totals across the latest snapshot of every active room."""
    total_aulas: int
    aulas_con_inventario: int


class CriticalItem(BaseModel):
    id_aula: int
    aula: str
    aula_nombre: str
    categoria: str
    subcategoria: str
    cantidad_total: int
    cantidad_malo: int
    cantidad_roto: int
    porcentaje_problemas: float
    fecha_registro: datetime


class RoomReportRow(QuantityTotals):
    id: int
    codigo: str
    nombre: str
    edificio: str | None = None
    id_inventario: int | None = None
    ultimo_inventario: datetime | None = None
