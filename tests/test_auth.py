from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from config import settings
from core.deps import identity_from_token
from core.errors import AuthenticationError
from core.security import (
    create_access_token,
    decode_token,
    get_password_hash,
    verify_password,
)


def test_password_hash_round_trip():
    hashed = get_password_hash("secreto123")
    assert hashed != "secreto123"
    assert verify_password("secreto123", hashed)
    assert not verify_password("otra-clave", hashed)


def test_verify_password_with_garbage_hash():
    assert verify_password("secreto123", "not-a-bcrypt-hash") is False


def test_access_token_carries_identity(users, make_token):
    token = make_token(users["supervisor"])
    payload = decode_token(token)
    assert payload["sub"] == str(users["supervisor"]["id"])
    assert payload["rol"] == "supervisor"
    assert payload["type"] == "access"

    identity = identity_from_token(token)
    assert identity.id == users["supervisor"]["id"]
    assert identity.can_manage_rooms()
    assert not identity.is_admin()


def test_token_missing_claims_is_rejected():
    token = create_access_token({"sub": "1"})
    with pytest.raises(AuthenticationError):
        identity_from_token(token)


def test_token_signed_with_other_key_is_rejected(users):
    forged = jwt.encode(
        {"sub": str(users["admin"]["id"]), "email": "x@instituto.edu", "rol": "administrador",
         "nombre": "X", "type": "access"},
        "some-other-key",
        algorithm="HS256",
    )
    assert decode_token(forged) is None
    with pytest.raises(AuthenticationError):
        identity_from_token(forged)


def test_default_expiry_is_configured_hours(users, make_token):
    before = datetime.now(timezone.utc)
    payload = decode_token(make_token(users["docente"]))
    lifetime = datetime.fromtimestamp(payload["exp"], timezone.utc) - before
    expected = timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)
    assert expected - timedelta(minutes=1) <= lifetime <= expected + timedelta(minutes=1)


@pytest.mark.anyio
async def test_login_success(async_client):
    response = await async_client.post(
        "/api/login",
        json={"email": "admin@instituto.edu", "password": "adminpass"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["token"]
    assert data["user"]["email"] == "admin@instituto.edu"
    assert data["user"]["rol"] == "administrador"
    assert "password_hash" not in data["user"]


@pytest.mark.anyio
async def test_login_email_is_case_insensitive(async_client):
    response = await async_client.post(
        "/api/login",
        json={"email": "Docente@Instituto.EDU", "password": "docentepass"},
    )
    assert response.status_code == 200
    assert response.json()["user"]["rol"] == "docente"


@pytest.mark.anyio
async def test_login_wrong_password(async_client):
    response = await async_client.post(
        "/api/login",
        json={"email": "admin@instituto.edu", "password": "wrong"},
    )
    assert response.status_code == 401
    assert response.json()["error"] == "Credenciales incorrectas"


@pytest.mark.anyio
async def test_login_unknown_user_same_message(async_client):
    response = await async_client.post(
        "/api/login",
        json={"email": "nadie@instituto.edu", "password": "whatever"},
    )
    assert response.status_code == 401
    assert response.json()["error"] == "Credenciales incorrectas"


@pytest.mark.anyio
async def test_login_missing_password(async_client):
    response = await async_client.post("/api/login", json={"email": "admin@instituto.edu"})
    assert response.status_code == 400
    assert "password" in response.json()["error"]


@pytest.mark.anyio
async def test_me_after_login_records_last_access(async_client):
    login = await async_client.post(
        "/api/login",
        json={"email": "supervisor@instituto.edu", "password": "superpass"},
    )
    token = login.json()["token"]

    response = await async_client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "supervisor@instituto.edu"
    assert data["ultimo_acceso"] is not None


@pytest.mark.anyio
async def test_me_without_token(async_client):
    response = await async_client.get("/api/me")
    assert response.status_code == 401
    assert "error" in response.json()


@pytest.mark.anyio
async def test_expired_token_is_rejected(async_client, users, make_token):
    token = make_token(users["admin"], expires_delta=timedelta(seconds=-5))
    response = await async_client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.anyio
async def test_tampered_token_is_rejected(async_client, users, make_token):
    token = make_token(users["docente"])
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])
    response = await async_client.get("/api/me", headers={"Authorization": f"Bearer {tampered}"})
    assert response.status_code == 401


@pytest.mark.anyio
async def test_permission_hints(async_client, mantenimiento_headers, admin_headers):
    response = await async_client.get("/api/me/permisos", headers=mantenimiento_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["rol"] == "mantenimiento"
    assert data["admin"] is False
    assert "mobiliario" in data["edit"]
    assert "audio_video" not in data["view"]

    response = await async_client.get("/api/me/permisos", headers=admin_headers)
    assert response.json()["admin"] is True
