# core/deps.py
"""
FastAPI dependencies for authentication and authorization.

Authentication is stateless: the identity is rebuilt from the signed token on
every request, no session is stored server side.
"""
import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel

from db_models.user import UserRole
from core.errors import AuthenticationError, AuthorizationError
from core.security import decode_token

logger = logging.getLogger(__name__)

# OAuth2 scheme for token extraction from Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)


class Identity(BaseModel):
    """Caller identity as carried by the access token."""
    id: int
    email: str
    rol: str
    nombre: str

    def is_admin(self) -> bool:
        return self.rol == UserRole.ADMINISTRADOR.value

    def can_manage_rooms(self) -> bool:
        return self.rol in (UserRole.ADMINISTRADOR.value, UserRole.SUPERVISOR.value)


def identity_from_token(token: str | None) -> Identity:
    """
    Verify ``token`` and return the identity it carries.

    Raises:
        AuthenticationError: If token is missing, tampered with, expired or malformed
    """
    if token is None:
        raise AuthenticationError("Token de acceso requerido")

    payload = decode_token(token)
    if payload is None:
        raise AuthenticationError("Token inválido o expirado")

    if payload.get("type") != "access":
        raise AuthenticationError("Tipo de token inválido")

    try:
        return Identity(
            id=int(payload["sub"]),
            email=payload["email"],
            rol=payload["rol"],
            nombre=payload["nombre"],
        )
    except (KeyError, ValueError, TypeError):
        raise AuthenticationError("Token con datos incompletos")


async def get_current_identity(
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> Identity:
    return identity_from_token(token)


# Role-based access dependencies

async def require_admin(
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> Identity:
    """Dependency that requires the administrador role."""
    if not identity.is_admin():
        logger.warning("User %s (%s) denied admin access", identity.id, identity.rol)
        raise AuthorizationError("Acceso denegado")
    return identity


async def require_room_manager(
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> Identity:
    """Dependency that requires administrador or supervisor."""
    if not identity.can_manage_rooms():
        logger.warning("User %s (%s) denied room management", identity.id, identity.rol)
        raise AuthorizationError("No tienes permisos para gestionar aulas")
    return identity


# Type aliases for cleaner endpoint signatures
CurrentUser = Annotated[Identity, Depends(get_current_identity)]
AdminUser = Annotated[Identity, Depends(require_admin)]
RoomManager = Annotated[Identity, Depends(require_room_manager)]
