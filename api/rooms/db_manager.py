# api/rooms/db_manager.py
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from db_models.room import Room
from core.errors import ConflictError, NotFoundError, ValidationError
from . import queries

logger = logging.getLogger(__name__)

# Non-nullable columns; an explicit null in an update leaves them untouched
REQUIRED_FIELDS = ("codigo", "nombre", "tipo", "activa")


def normalize_code(codigo: str) -> str:
    codigo = codigo.strip().upper()
    if not codigo:
        raise ValidationError("El código del aula es obligatorio")
    return codigo


async def list_rooms(db: AsyncSession, activa: bool = True) -> list[Room]:
    result = await db.execute(queries.select_rooms(activa))
    return list(result.scalars().all())


async def get_room_or_raise(db: AsyncSession, room_id: int) -> Room:
    result = await db.execute(queries.select_room_by_id(room_id))
    room = result.scalar_one_or_none()
    if room is None:
        raise NotFoundError(f"Aula {room_id} no encontrada")
    return room


async def _ensure_code_free(db: AsyncSession, codigo: str, exclude_id: int | None = None) -> None:
    result = await db.execute(queries.select_room_by_code(codigo))
    existing = result.scalar_one_or_none()
    if existing is not None and existing.id != exclude_id:
        raise ConflictError("Ya existe un aula con ese código")


async def create_room(
    db: AsyncSession,
    *,
    codigo: str,
    nombre: str,
    edificio: str | None = None,
    piso: int | None = None,
    capacidad: int | None = None,
    tipo: str = "aula",
) -> Room:
    """
    Create a room with an upper-cased code.

    Raises:
        ConflictError: the code is already taken
    """
    codigo = normalize_code(codigo)

    # Best-effort check; the unique constraint is the final authority
    await _ensure_code_free(db, codigo)

    room = Room(
        codigo=codigo,
        nombre=nombre,
        edificio=edificio,
        piso=piso,
        capacidad=capacidad,
        tipo=tipo or "aula",
        activa=True,
    )
    db.add(room)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError("Ya existe un aula con ese código") from exc

    await db.refresh(room)
    logger.info("Room %s created (id=%s)", room.codigo, room.id)
    return room


async def update_room(db: AsyncSession, room_id: int, changes: dict) -> Room:
    room = await get_room_or_raise(db, room_id)

    if changes.get("codigo") is not None:
        changes["codigo"] = normalize_code(changes["codigo"])
        await _ensure_code_free(db, changes["codigo"], exclude_id=room.id)

    for field, value in changes.items():
        if value is None and field in REQUIRED_FIELDS:
            continue
        setattr(room, field, value)

    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError("Ya existe un aula con ese código") from exc

    await db.refresh(room)
    return room
