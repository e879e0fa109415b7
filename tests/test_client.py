from datetime import timedelta

import httpx
import pytest

from client.inventory_client import (
    ApiError,
    InventoryClient,
    LocalValidationError,
    SessionExpired,
    normalize_line_item,
)


@pytest.fixture
async def client(async_client):
    # Share the ASGI transport of the test app
    api = InventoryClient("http://testserver/api", http=async_client)
    yield api
    await api.close()


def test_normalize_line_item_fills_zeros():
    item = normalize_line_item({"id_subcategoria": 4, "cantidad_total": 2, "cantidad_bueno": 2})
    assert item["cantidad_regular"] == 0
    assert item["cantidad_malo"] == 0
    assert item["cantidad_roto"] == 0


def test_normalize_line_item_rejects_mismatch():
    with pytest.raises(LocalValidationError):
        normalize_line_item({"id_subcategoria": 4, "cantidad_total": 5, "cantidad_bueno": 2})
    with pytest.raises(LocalValidationError):
        normalize_line_item({"id_subcategoria": 4, "cantidad_total": 1, "cantidad_bueno": -1, "cantidad_malo": 2})
    with pytest.raises(LocalValidationError):
        normalize_line_item({"cantidad_total": 0})


@pytest.mark.anyio
async def test_login_and_browse(client):
    user = await client.login("supervisor@instituto.edu", "superpass")
    assert user["rol"] == "supervisor"
    assert client.is_authenticated

    me = await client.me()
    assert me["email"] == "supervisor@instituto.edu"

    hints = await client.permissions()
    assert hints["rol"] == "supervisor"

    categories = await client.list_categories()
    assert len(categories) == 5
    subs = await client.list_subcategories(categories[0]["id"])
    assert subs


@pytest.mark.anyio
async def test_submit_and_reports(client, subcategories):
    await client.login("admin@instituto.edu", "adminpass")
    room = await client.create_room(codigo="cli-1", nombre="Aula cliente")
    assert room["codigo"] == "CLI-1"
    assert room["id"] in [r["id"] for r in await client.list_rooms()]

    inventario_id = await client.submit_inventory(
        room["id"],
        [{"id_subcategoria": subcategories["Puertas"], "cantidad_total": 1, "cantidad_roto": 1}],
        observaciones="Puerta dañada",
    )
    current = await client.get_inventory(room["id"])
    assert current["inventario"]["id"] == inventario_id

    history = await client.inventory_history(room["id"])
    assert [h["id"] for h in history] == [inventario_id]

    critical = await client.critical_items()
    assert any(i["aula"] == "CLI-1" and i["porcentaje_problemas"] == 100.0 for i in critical)

    summary = await client.summary()
    assert summary["total_items"] >= 1

    rows = await client.room_report()
    assert any(r["codigo"] == "CLI-1" for r in rows)


@pytest.mark.anyio
async def test_local_validation_sends_nothing(users, make_token):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(500)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        api = InventoryClient("http://testserver/api", http=http)
        api.token = make_token(users["admin"])
        with pytest.raises(LocalValidationError):
            await api.submit_inventory(1, [{"id_subcategoria": 1, "cantidad_total": 5, "cantidad_bueno": 2}])
        with pytest.raises(LocalValidationError):
            await api.submit_inventory(1, [])

    assert requests == []


@pytest.mark.anyio
async def test_expired_session_logs_out(client, users, make_token):
    client.token = make_token(users["docente"], expires_delta=timedelta(seconds=-5))
    client.user = {"email": users["docente"]["email"]}

    with pytest.raises(SessionExpired):
        await client.list_rooms()
    assert client.token is None
    assert client.user is None
    assert not client.is_authenticated


@pytest.mark.anyio
async def test_server_errors_carry_message(client):
    await client.login("docente@instituto.edu", "docentepass")
    with pytest.raises(ApiError) as excinfo:
        await client.create_room(codigo="DOC-1", nombre="No permitido")
    assert excinfo.value.status_code == 403
    assert not isinstance(excinfo.value, SessionExpired)
    # A 403 keeps the session
    assert client.is_authenticated


@pytest.mark.anyio
async def test_bad_login_raises(client):
    with pytest.raises(SessionExpired) as excinfo:
        await client.login("docente@instituto.edu", "incorrecta")
    assert excinfo.value.message == "Credenciales incorrectas"
