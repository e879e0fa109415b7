# api/inventory/views.py
"""
Room inventory endpoints: current snapshot, history and submission.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from api.rooms.models import RoomResponse
from .models import (
    InventoryCreate,
    InventoryCreatedResponse,
    CurrentInventoryResponse,
    InventoryHeader,
    InventoryDetailResponse,
    InventoryHistoryEntry,
)
from . import db_manager

router = APIRouter(prefix="/aulas/{room_id}/inventario", tags=["inventario"])


@router.get("", response_model=CurrentInventoryResponse, summary="Current inventory of a room")
async def get_current_inventory_endpoint(
    room_id: int,
    identity: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> CurrentInventoryResponse:
    """
    Most recent snapshot with its line items.
    Rooms without any snapshot return nulls and an empty list.
    """
    room, header, detalles = await db_manager.get_current_inventory(db, room_id)
    if header is None:
        return CurrentInventoryResponse(aula=None, inventario=None, detalles=[])

    return CurrentInventoryResponse(
        aula=RoomResponse.model_validate(room),
        inventario=InventoryHeader(**header),
        detalles=[InventoryDetailResponse(**d) for d in detalles],
    )


@router.post(
    "",
    response_model=InventoryCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a new inventory snapshot",
)
async def submit_inventory_endpoint(
    room_id: int,
    payload: InventoryCreate,
    identity: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> InventoryCreatedResponse:
    """
    Every line item must satisfy total = bueno + regular + malo + roto.
    Each call appends a new snapshot, even with an identical payload.
    """
    inventario_id = await db_manager.submit_inventory(
        db,
        room_id,
        identity,
        payload.detalles,
        observaciones=payload.observaciones,
        estado_general=payload.estado_general,
    )
    return InventoryCreatedResponse(inventario_id=inventario_id)


@router.get(
    "/historial",
    response_model=list[InventoryHistoryEntry],
    summary="All inventory snapshots of a room",
)
async def get_inventory_history_endpoint(
    room_id: int,
    identity: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> list[InventoryHistoryEntry]:
    history = await db_manager.get_inventory_history(db, room_id)
    return [InventoryHistoryEntry(**entry) for entry in history]
