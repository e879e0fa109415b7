"""
Seed reference data: categories, subcategories, category permissions and a
first administrator.

Usage:
    python seed_database.py
    ADMIN_EMAIL=admin@instituto.edu ADMIN_PASSWORD=... python seed_database.py
"""
import json
import logging
import os

from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, sessionmaker

from config import settings
from config.database import to_sync_url
from core.log_config import configure_logging
from core.permissions import ROLE_CAPABILITIES, category_flags_for
from core.security import get_password_hash
from db_base import Base
from db_models import Category, Subcategory, CategoryPermission, User, UserRole

logger = logging.getLogger("seed_database")

# (slug, nombre, icono, descripcion, subcategorias)
# subcategoria: (nombre, unidad_medida, campos_extra)
CATALOG = [
    ("mobiliario", "Mobiliario", "🪑", "Mesas, sillas y muebles", [
        ("Sillas", "unidad", {"material": "select:Madera,Metal,Plástico"}),
        ("Mesas", "unidad", {"material": "select:Madera,Metal,Melamina", "plazas": "number"}),
        ("Pizarras", "unidad", {"tipo": "select:Acrílica,Tiza,Digital"}),
        ("Armarios", "unidad", {}),
    ]),
    ("audio_video", "Audio y Video", "📽️", "Equipos de proyección y sonido", [
        ("Proyectores", "unidad", {"marca": "text", "modelo": "text", "lumenes": "number"}),
        ("Pantallas", "unidad", {"tipo": "select:Retráctil,Fija,Motorizada"}),
        ("Parlantes", "unidad", {"marca": "text"}),
        ("Computadoras", "unidad", {"marca": "text", "serie": "text", "ram_gb": "number"}),
    ]),
    ("climatizacion", "Climatización", "❄️", "Aire acondicionado y ventilación", [
        ("Aire acondicionado", "unidad", {"btu": "number", "marca": "text"}),
        ("Ventiladores", "unidad", {"tipo": "select:Techo,Pared,Pedestal"}),
    ]),
    ("iluminacion", "Iluminación", "💡", "Luminarias", [
        ("Luminarias", "unidad", {"tipo": "select:LED,Fluorescente,Halógena", "potencia_w": "number"}),
    ]),
    ("infraestructura", "Infraestructura", "🏫", "Puertas, ventanas y tomas", [
        ("Puertas", "unidad", {}),
        ("Ventanas", "unidad", {}),
        ("Tomacorrientes", "unidad", {}),
        ("Cortinas", "juego", {"material": "text"}),
    ]),
]


def seed_catalog(session: Session) -> dict[str, Category]:
    """Insert missing categories and their subcategories. Returns categories by slug."""
    categories = {}
    for order, (slug, nombre, icono, descripcion, subcategorias) in enumerate(CATALOG, start=1):
        category = session.execute(select(Category).where(Category.slug == slug)).scalar_one_or_none()
        if category is None:
            category = Category(
                slug=slug,
                nombre=nombre,
                icono=icono,
                descripcion=descripcion,
                orden_display=order,
                activa=True,
            )
            session.add(category)
            session.flush()
            for sub_order, (sub_nombre, unidad, campos) in enumerate(subcategorias, start=1):
                session.add(Subcategory(
                    id_categoria=category.id,
                    nombre=sub_nombre,
                    unidad_medida=unidad,
                    permite_cantidad=True,
                    campos_extra=json.dumps(campos, ensure_ascii=False) if campos else None,
                    orden_display=sub_order,
                    activa=True,
                ))
            logger.info("Seeded category %s with %d subcategories", slug, len(subcategorias))
        categories[slug] = category
    session.flush()
    return categories


def seed_permissions(session: Session, categories: dict[str, Category]) -> int:
    """Write permisos_categoria rows from the static role table. Returns rows written."""
    written = 0
    for role in ROLE_CAPABILITIES:
        for slug, category in categories.items():
            puede_ver, puede_editar = category_flags_for(role, slug)
            perm = session.get(CategoryPermission, (role, category.id))
            if perm is None:
                perm = CategoryPermission(rol=role, id_categoria=category.id)
                session.add(perm)
            perm.puede_ver = puede_ver
            perm.puede_editar = puede_editar
            written += 1
    session.flush()
    return written


def seed_admin(session: Session, email: str, password: str, nombre: str = "Administrador") -> User:
    email = email.strip().lower()
    user = session.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if user is None:
        user = User(
            nombre=nombre,
            email=email,
            password_hash=get_password_hash(password),
            rol=UserRole.ADMINISTRADOR.value,
            activo=True,
        )
        session.add(user)
        session.flush()
        logger.info("Created administrator %s", email)
    return user


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    engine = create_engine(to_sync_url(settings.DATABASE_URL))
    Base.metadata.create_all(bind=engine)

    SessionLocal = sessionmaker(bind=engine)
    with SessionLocal() as session:
        categories = seed_catalog(session)
        rows = seed_permissions(session, categories)
        logger.info("Wrote %d category permission rows", rows)

        admin_password = os.environ.get("ADMIN_PASSWORD")
        if admin_password:
            seed_admin(session, os.environ.get("ADMIN_EMAIL", "admin@instituto.edu"), admin_password)
        else:
            logger.warning("ADMIN_PASSWORD not set; skipping administrator")

        session.commit()


if __name__ == "__main__":
    main()
