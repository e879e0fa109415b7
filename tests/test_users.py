import pytest

from core.errors import ValidationError
from core.security import get_password_hash


@pytest.mark.anyio
async def test_admin_lists_users(async_client, admin_headers):
    response = await async_client.get("/api/admin/usuarios", headers=admin_headers)
    assert response.status_code == 200
    emails = [u["email"] for u in response.json()]
    assert "docente@instituto.edu" in emails
    assert all("password_hash" not in u for u in response.json())


@pytest.mark.anyio
async def test_non_admin_forbidden(async_client, supervisor_headers, docente_headers):
    for headers in (supervisor_headers, docente_headers):
        response = await async_client.get("/api/admin/usuarios", headers=headers)
        assert response.status_code == 403


@pytest.mark.anyio
async def test_admin_routes_require_token(async_client):
    response = await async_client.get("/api/admin/usuarios")
    assert response.status_code == 401


@pytest.mark.anyio
async def test_create_user_and_login(async_client, admin_headers):
    response = await async_client.post(
        "/api/admin/usuarios",
        json={"nombre": "Nuevo Técnico", "email": "Tecnico@Instituto.edu", "password": "clave123", "rol": "soporte_ti"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    usuario = response.json()["usuario"]
    assert usuario["email"] == "tecnico@instituto.edu"
    assert usuario["rol"] == "soporte_ti"
    assert usuario["activo"] is True

    login = await async_client.post(
        "/api/login", json={"email": "tecnico@instituto.edu", "password": "clave123"}
    )
    assert login.status_code == 200
    assert login.json()["user"]["rol"] == "soporte_ti"


@pytest.mark.anyio
async def test_create_user_defaults_to_docente(async_client, admin_headers):
    response = await async_client.post(
        "/api/admin/usuarios",
        json={"nombre": "Profe", "email": "profe@instituto.edu", "password": "clave123"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert response.json()["usuario"]["rol"] == "docente"


@pytest.mark.anyio
async def test_duplicate_email_rejected(async_client, admin_headers):
    response = await async_client.post(
        "/api/admin/usuarios",
        json={"nombre": "Otro", "email": "SUPERVISOR@instituto.edu", "password": "clave123"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Ya existe un usuario con ese email"


@pytest.mark.anyio
async def test_invalid_role_and_short_password(async_client, admin_headers):
    response = await async_client.post(
        "/api/admin/usuarios",
        json={"nombre": "X", "email": "x1@instituto.edu", "password": "clave123", "rol": "director"},
        headers=admin_headers,
    )
    assert response.status_code == 400

    response = await async_client.post(
        "/api/admin/usuarios",
        json={"nombre": "X", "email": "x2@instituto.edu", "password": "123"},
        headers=admin_headers,
    )
    assert response.status_code == 400


@pytest.mark.anyio
async def test_update_and_deactivate_user(async_client, admin_headers):
    created = await async_client.post(
        "/api/admin/usuarios",
        json={"nombre": "Temporal", "email": "temporal@instituto.edu", "password": "clave123"},
        headers=admin_headers,
    )
    user_id = created.json()["usuario"]["id"]

    response = await async_client.put(
        f"/api/admin/usuarios/{user_id}",
        json={"rol": "mantenimiento", "password": "nueva456"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["rol"] == "mantenimiento"

    login = await async_client.post(
        "/api/login", json={"email": "temporal@instituto.edu", "password": "nueva456"}
    )
    assert login.status_code == 200

    response = await async_client.delete(f"/api/admin/usuarios/{user_id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["activo"] is False

    login = await async_client.post(
        "/api/login", json={"email": "temporal@instituto.edu", "password": "nueva456"}
    )
    assert login.status_code == 401


@pytest.mark.anyio
async def test_admin_cannot_deactivate_self(async_client, admin_headers, users):
    response = await async_client.delete(
        f"/api/admin/usuarios/{users['admin']['id']}", headers=admin_headers
    )
    assert response.status_code == 400


@pytest.mark.anyio
async def test_update_unknown_user(async_client, admin_headers):
    response = await async_client.put(
        "/api/admin/usuarios/999999", json={"nombre": "Nadie"}, headers=admin_headers
    )
    assert response.status_code == 404


@pytest.mark.anyio
async def test_password_longer_than_bcrypt_limit(async_client, admin_headers):
    response = await async_client.post(
        "/api/admin/usuarios",
        json={"nombre": "Largo", "email": "largo@instituto.edu", "password": "x" * 80},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert "password" in response.json()["error"]

    created = await async_client.post(
        "/api/admin/usuarios",
        json={"nombre": "Largo", "email": "largo@instituto.edu", "password": "x" * 72},
        headers=admin_headers,
    )
    assert created.status_code == 201

    response = await async_client.put(
        f"/api/admin/usuarios/{created.json()['usuario']['id']}",
        json={"password": "ñ" * 40},
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_password_hash_rejects_long_input():
    with pytest.raises(ValidationError):
        get_password_hash("x" * 73)


@pytest.mark.anyio
async def test_admin_cannot_lock_self_out_via_update(async_client, admin_headers, users):
    url = f"/api/admin/usuarios/{users['admin']['id']}"

    response = await async_client.put(url, json={"activo": False}, headers=admin_headers)
    assert response.status_code == 400

    response = await async_client.put(url, json={"rol": "docente"}, headers=admin_headers)
    assert response.status_code == 400

    # Resending the current role is not a change
    response = await async_client.put(url, json={"rol": "administrador"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["activo"] is True
    assert response.json()["rol"] == "administrador"
