# core/permissions.py
"""
Category-level permissions.

Enforcement reads the ``permisos_categoria`` table. ``ROLE_CAPABILITIES`` is
the static role table the seed script derives those rows from; clients get it
through ``/me/permisos`` to decide what to show, never as an authority.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.category import CategoryPermission
from db_models.user import UserRole
from core.errors import AuthorizationError

logger = logging.getLogger(__name__)

VIEW = "view"
EDIT = "edit"

ALL = "*"

CATEGORY_SLUGS = (
    "mobiliario",
    "audio_video",
    "climatizacion",
    "iluminacion",
    "infraestructura",
)

ROLE_CAPABILITIES: dict[str, frozenset[tuple[str, str]]] = {
    UserRole.SUPERVISOR.value: frozenset({
        (VIEW, ALL),
        (EDIT, "inventario"),
        (EDIT, "reportes"),
        (EDIT, "aulas"),
    }),
    UserRole.SOPORTE_TI.value: frozenset({
        (VIEW, "audio_video"),
        (VIEW, "inventario"),
        (EDIT, "audio_video"),
    }),
    UserRole.MANTENIMIENTO.value: frozenset({
        (VIEW, "mobiliario"),
        (VIEW, "climatizacion"),
        (VIEW, "iluminacion"),
        (VIEW, "infraestructura"),
        (VIEW, "inventario"),
        (EDIT, "mobiliario"),
        (EDIT, "climatizacion"),
        (EDIT, "iluminacion"),
        (EDIT, "infraestructura"),
    }),
    UserRole.DOCENTE.value: frozenset({
        (VIEW, "inventario"),
    }),
}


def has_capability(role: str, capability: str, resource: str) -> bool:
    """Look up the static table. Administrators hold every capability."""
    if role == UserRole.ADMINISTRADOR.value:
        return True
    pairs = ROLE_CAPABILITIES.get(role, frozenset())
    return (capability, resource) in pairs or (capability, ALL) in pairs


def category_flags_for(role: str, slug: str) -> tuple[bool, bool]:
    """
    (puede_ver, puede_editar) for one category, as seeded into permisos_categoria.

    Supervisors edit the whole inventory, which covers every category.
    """
    can_view = has_capability(role, VIEW, slug)
    can_edit = has_capability(role, EDIT, slug) or has_capability(role, EDIT, "inventario")
    return can_view or can_edit, can_edit


def capabilities_for(role: str) -> dict:
    """Serializable view of a role's entry, used as UI hints."""
    if role == UserRole.ADMINISTRADOR.value:
        return {"view": [ALL], "edit": [ALL], "admin": True}
    pairs = ROLE_CAPABILITIES.get(role, frozenset())
    return {
        "view": sorted(r for c, r in pairs if c == VIEW),
        "edit": sorted(r for c, r in pairs if c == EDIT),
        "admin": False,
    }


async def get_category_permission(
    db: AsyncSession, role: str, category_id: int
) -> CategoryPermission | None:
    stmt = select(CategoryPermission).where(
        CategoryPermission.rol == role,
        CategoryPermission.id_categoria == category_id,
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def can_view(db: AsyncSession, role: str, category_id: int) -> bool:
    if role == UserRole.ADMINISTRADOR.value:
        return True
    perm = await get_category_permission(db, role, category_id)
    return perm is not None and perm.puede_ver


async def can_edit(db: AsyncSession, role: str, category_id: int) -> bool:
    if role == UserRole.ADMINISTRADOR.value:
        return True
    perm = await get_category_permission(db, role, category_id)
    return perm is not None and perm.puede_editar


async def require_category_view(db: AsyncSession, role: str, category_id: int) -> None:
    if not await can_view(db, role, category_id):
        logger.warning("Role %s denied view on category %s", role, category_id)
        raise AuthorizationError("No tienes permisos para acceder a esta categoría")


async def require_category_edit(db: AsyncSession, role: str, category_id: int) -> None:
    if not await can_edit(db, role, category_id):
        logger.warning("Role %s denied edit on category %s", role, category_id)
        raise AuthorizationError("No tienes permisos para editar esta categoría")
