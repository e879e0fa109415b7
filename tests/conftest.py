import os
import tempfile
from datetime import timedelta
from pathlib import Path

os.environ["MODE"] = "test"

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from httpx import AsyncClient, ASGITransport

from main import app as fastapi_app
import db as project_db
import db_models  # ensure models are imported
from db_base import Base
from db_models import Subcategory, CategoryPermission, User
from core.security import get_password_hash, create_access_token
from seed_database import seed_catalog, seed_permissions

TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="inventario-tests-")) / "test.db"
TEST_DATABASE_URL = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
SYNC_DATABASE_URL = f"sqlite:///{TEST_DB_PATH}"

# Async engine for app interactions (foreign keys switched on by build_engine)
engine = project_db.build_engine(TEST_DATABASE_URL, poolclass=NullPool)
AsyncSessionTest = project_db.make_session_factory(engine)

sync_engine = create_engine(SYNC_DATABASE_URL)
SyncSession = sessionmaker(bind=sync_engine, expire_on_commit=False)

TEST_USERS = {
    "admin": ("Test Admin", "admin@instituto.edu", "adminpass", "administrador"),
    "supervisor": ("Test Supervisor", "supervisor@instituto.edu", "superpass", "supervisor"),
    "mantenimiento": ("Test Mantenimiento", "mantenimiento@instituto.edu", "mantpass", "mantenimiento"),
    "soporte": ("Test Soporte", "soporte@instituto.edu", "soportepass", "soporte_ti"),
    "docente": ("Test Docente", "docente@instituto.edu", "docentepass", "docente"),
}


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="session", autouse=True)
def prepare_db():
    # Fresh schema in a throwaway SQLite file
    Base.metadata.drop_all(bind=sync_engine)
    Base.metadata.create_all(bind=sync_engine)
    yield
    Base.metadata.drop_all(bind=sync_engine)
    sync_engine.dispose()


@pytest.fixture(scope="session", autouse=True)
def seeded(prepare_db):
    """Seed the catalog, role permissions and one user per role."""
    with SyncSession() as session:
        categories = seed_catalog(session)
        seed_permissions(session, categories)

        users = {}
        for key, (nombre, email, password, rol) in TEST_USERS.items():
            user = User(
                nombre=nombre,
                email=email,
                password_hash=get_password_hash(password),
                rol=rol,
                activo=True,
            )
            session.add(user)
            users[key] = user
        session.commit()

        subcategories = session.execute(select(Subcategory)).scalars().all()
        return {
            "users": {
                key: {"id": u.id, "email": u.email, "rol": u.rol, "nombre": u.nombre}
                for key, u in users.items()
            },
            "categories": {slug: c.id for slug, c in categories.items()},
            "subcategories": {s.nombre: s.id for s in subcategories},
        }


@pytest.fixture
def categories(seeded):
    return seeded["categories"]


@pytest.fixture
def subcategories(seeded):
    return seeded["subcategories"]


@pytest.fixture
def set_permission():
    """Upsert a permisos_categoria row for the duration of a test."""
    touched = []

    def _set(rol: str, category_id: int, puede_ver: bool, puede_editar: bool = False):
        with SyncSession() as session:
            perm = session.get(CategoryPermission, (rol, category_id))
            if perm is None:
                perm = CategoryPermission(rol=rol, id_categoria=category_id)
                session.add(perm)
                touched.append((rol, category_id, None))
            else:
                touched.append((rol, category_id, (perm.puede_ver, perm.puede_editar)))
            perm.puede_ver = puede_ver
            perm.puede_editar = puede_editar
            session.commit()

    yield _set

    with SyncSession() as session:
        for rol, category_id, previous in reversed(touched):
            perm = session.get(CategoryPermission, (rol, category_id))
            if perm is None:
                continue
            if previous is None:
                session.delete(perm)
            else:
                perm.puede_ver, perm.puede_editar = previous
        session.commit()


@pytest.fixture
async def db_session():
    async with AsyncSessionTest() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def async_client():
    # Override the get_session dependency to create a fresh session for each request
    async def override_get_session():
        async with AsyncSessionTest() as session:
            yield session

    fastapi_app.dependency_overrides[project_db.get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://testserver") as ac:
        yield ac

    # Clean up
    fastapi_app.dependency_overrides.clear()


def token_for(user: dict, expires_delta: timedelta | None = None) -> str:
    claims = {
        "sub": str(user["id"]),
        "email": user["email"],
        "rol": user["rol"],
        "nombre": user["nombre"],
    }
    return create_access_token(claims, expires_delta=expires_delta)


@pytest.fixture
def make_token():
    """Build an access token for one of the seeded users."""
    return token_for


def _headers(user: dict) -> dict:
    return {"Authorization": f"Bearer {token_for(user)}"}


@pytest.fixture
def users(seeded):
    return seeded["users"]


@pytest.fixture
def admin_headers(users):
    """Authorization headers for the administrador."""
    return _headers(users["admin"])


@pytest.fixture
def supervisor_headers(users):
    return _headers(users["supervisor"])


@pytest.fixture
def mantenimiento_headers(users):
    return _headers(users["mantenimiento"])


@pytest.fixture
def soporte_headers(users):
    return _headers(users["soporte"])


@pytest.fixture
def docente_headers(users):
    return _headers(users["docente"])


_room_counter = 0


@pytest.fixture
def make_room(async_client, admin_headers):
    """Create a room with a unique code and return its JSON."""
    async def _make(**overrides):
        global _room_counter
        _room_counter += 1
        payload = {"codigo": f"T-{_room_counter:03d}", "nombre": f"Aula test {_room_counter}"}
        payload.update(overrides)
        resp = await async_client.post("/api/aulas", json=payload, headers=admin_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["aula"]

    return _make
