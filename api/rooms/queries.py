# api/rooms/queries.py
"""
SQLAlchemy query builders for rooms.
"""
from sqlalchemy import select

from db_models.room import Room


def select_rooms(activa: bool = True):
    """Rooms filtered by active flag, ordered by code."""
    return select(Room).where(Room.activa == activa).order_by(Room.codigo.asc())


def select_room_by_id(room_id: int):
    return select(Room).where(Room.id == room_id)


def select_room_by_code(codigo: str):
    return select(Room).where(Room.codigo == codigo)
