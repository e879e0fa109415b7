# api/reports/views.py
"""
Aggregate report endpoints.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from config import settings
from core.deps import CurrentUser
from .models import SummaryReport, CriticalItem, RoomReportRow
from . import db_manager

router = APIRouter(prefix="/reportes", tags=["reportes"])


@router.get("/resumen", response_model=SummaryReport, summary="Overall summary")
async def get_summary_endpoint(
    identity: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> SummaryReport:
    data = await db_manager.get_summary(db)
    return SummaryReport(**data)


@router.get("/criticos", response_model=list[CriticalItem], summary="Items with a high share of poor or broken units")
async def get_critical_items_endpoint(
    identity: CurrentUser,
    umbral: float | None = Query(
        None,
        ge=0,
        le=100,
        description="Problem percentage threshold; defaults to CRITICAL_THRESHOLD",
    ),
    db: AsyncSession = Depends(get_session),
) -> list[CriticalItem]:
    threshold = settings.CRITICAL_THRESHOLD if umbral is None else umbral
    items = await db_manager.get_critical_items(db, threshold)
    return [CriticalItem(**i) for i in items]


@router.get("/aulas", response_model=list[RoomReportRow], summary="Per-room rollup")
async def get_room_report_endpoint(
    identity: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> list[RoomReportRow]:
    rows = await db_manager.get_room_report(db)
    return [RoomReportRow(**r) for r in rows]
