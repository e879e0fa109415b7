# api/rooms/views.py
"""
Room listing and management. Only administrador and supervisor may write.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser, RoomManager
from .models import RoomCreate, RoomUpdate, RoomResponse, RoomCreatedResponse
from . import db_manager

router = APIRouter(prefix="/aulas", tags=["aulas"])


@router.get("", response_model=list[RoomResponse], summary="List rooms")
async def list_rooms_endpoint(
    identity: CurrentUser,
    activa: bool = Query(True, description="Filter by active flag"),
    db: AsyncSession = Depends(get_session),
) -> list[RoomResponse]:
    rooms = await db_manager.list_rooms(db, activa)
    return [RoomResponse.model_validate(r) for r in rooms]


@router.post(
    "",
    response_model=RoomCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a room",
)
async def create_room_endpoint(
    payload: RoomCreate,
    identity: RoomManager,
    db: AsyncSession = Depends(get_session),
) -> RoomCreatedResponse:
    """Create a room. The code is stored upper-cased and must be unique."""
    room = await db_manager.create_room(db, **payload.model_dump())
    return RoomCreatedResponse(aula=RoomResponse.model_validate(room))


@router.get("/{room_id}", response_model=RoomResponse, summary="Get a room")
async def get_room_endpoint(
    room_id: int,
    identity: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> RoomResponse:
    room = await db_manager.get_room_or_raise(db, room_id)
    return RoomResponse.model_validate(room)


@router.put("/{room_id}", response_model=RoomResponse, summary="Update a room")
async def update_room_endpoint(
    room_id: int,
    updates: RoomUpdate,
    identity: RoomManager,
    db: AsyncSession = Depends(get_session),
) -> RoomResponse:
    room = await db_manager.update_room(db, room_id, updates.model_dump(exclude_unset=True))
    return RoomResponse.model_validate(room)
