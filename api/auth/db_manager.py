# api/auth/db_manager.py
import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.user import User
from core.errors import InvalidCredentials, NotFoundError
from core.security import verify_password, create_access_token, build_token_claims

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def select_active_user_by_email(email: str):
    return select(User).where(User.email == normalize_email(email), User.activo == True)


async def authenticate(db: AsyncSession, email: str, password: str) -> tuple[str, User]:
    """
    Check credentials and issue an access token.

    Updates ``ultimo_acceso`` on success.

    Raises:
        InvalidCredentials: unknown or inactive email, or wrong password
    """
    result = await db.execute(select_active_user_by_email(email))
    user = result.scalar_one_or_none()

    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Failed login for %s", normalize_email(email))
        raise InvalidCredentials()

    user.ultimo_acceso = datetime.now(timezone.utc)
    await db.commit()

    token = create_access_token(build_token_claims(user))
    logger.info("User %s logged in (%s)", user.id, user.rol)
    return token, user


async def get_active_user(db: AsyncSession, user_id: int) -> User:
    stmt = select(User).where(User.id == user_id, User.activo == True)
    result = await db.execute(stmt)
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError("Usuario no encontrado")
    return user
