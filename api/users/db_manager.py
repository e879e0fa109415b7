# api/users/db_manager.py
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from db_models.user import User
from core.errors import ConflictError, NotFoundError, ValidationError
from core.security import get_password_hash
from api.auth.db_manager import normalize_email

logger = logging.getLogger(__name__)


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.nombre.asc()))
    return list(result.scalars().all())


async def get_user_or_raise(db: AsyncSession, user_id: int) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError("Usuario no encontrado")
    return user


async def create_user(db: AsyncSession, *, nombre: str, email: str, password: str, rol: str) -> User:
    """
    Create a user with a bcrypt-hashed password.

    Raises:
        ConflictError: the email (case-insensitive) is already registered
    """
    email = normalize_email(email)

    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none() is not None:
        raise ConflictError("Ya existe un usuario con ese email")

    user = User(
        nombre=nombre,
        email=email,
        password_hash=get_password_hash(password),
        rol=rol,
        activo=True,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError("Ya existe un usuario con ese email") from exc

    await db.refresh(user)
    logger.info("User %s created with role %s", user.id, user.rol)
    return user


async def update_user(db: AsyncSession, user_id: int, changes: dict, acting_user_id: int) -> User:
    """
    Apply a partial update.

    Raises:
        ValidationError: an administrator tries to deactivate their own
            account or change their own role
    """
    user = await get_user_or_raise(db, user_id)

    if user_id == acting_user_id:
        if changes.get("activo") is False:
            raise ValidationError("No puedes desactivar tu propio usuario")
        if changes.get("rol") is not None and changes["rol"] != user.rol:
            raise ValidationError("No puedes cambiar tu propio rol")

    if changes.get("nombre") is not None:
        user.nombre = changes["nombre"]
    if changes.get("rol") is not None:
        user.rol = changes["rol"]
    if changes.get("activo") is not None:
        user.activo = changes["activo"]
    if changes.get("password") is not None:
        user.password_hash = get_password_hash(changes["password"])

    await db.commit()
    await db.refresh(user)
    return user


async def deactivate_user(db: AsyncSession, user_id: int, acting_user_id: int) -> User:
    """Soft delete. Users are never removed so their snapshots keep an author."""
    if user_id == acting_user_id:
        raise ValidationError("No puedes desactivar tu propio usuario")

    user = await get_user_or_raise(db, user_id)
    user.activo = False
    await db.commit()
    await db.refresh(user)
    logger.info("User %s deactivated by %s", user_id, acting_user_id)
    return user
