import pytest

from api.reports.db_manager import percentage


def test_percentage():
    assert percentage(0, 0) == 0.0
    assert percentage(5, 0) == 0.0
    assert percentage(80, 100) == 80.0
    assert percentage(1, 3) == 33.3


async def submit(client, room_id, detalles, headers):
    response = await client.post(
        f"/api/aulas/{room_id}/inventario", json={"detalles": detalles}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()["inventario_id"]


def line(sub_id, total, bueno=0, regular=0, malo=0, roto=0):
    return {
        "id_subcategoria": sub_id,
        "cantidad_total": total,
        "cantidad_bueno": bueno,
        "cantidad_regular": regular,
        "cantidad_malo": malo,
        "cantidad_roto": roto,
    }


@pytest.mark.anyio
async def test_summary_counts_latest_snapshot_only(async_client, admin_headers, docente_headers, make_room, subcategories):
    before = (await async_client.get("/api/reportes/resumen", headers=admin_headers)).json()

    room = await make_room()
    await submit(async_client, room["id"], [line(subcategories["Sillas"], 100, 100)], admin_headers)
    await submit(async_client, room["id"], [line(subcategories["Sillas"], 20, 10, 6, 3, 1)], admin_headers)

    response = await async_client.get("/api/reportes/resumen", headers=docente_headers)
    assert response.status_code == 200
    after = response.json()

    assert after["total_aulas"] == before["total_aulas"] + 1
    assert after["aulas_con_inventario"] == before["aulas_con_inventario"] + 1
    assert after["total_items"] == before["total_items"] + 20
    assert after["items_buenos"] == before["items_buenos"] + 10
    assert after["items_regulares"] == before["items_regulares"] + 6
    assert after["items_malos"] == before["items_malos"] + 3
    assert after["items_rotos"] == before["items_rotos"] + 1
    assert after["porcentaje_operativo"] == percentage(
        after["items_buenos"] + after["items_regulares"], after["total_items"]
    )


@pytest.mark.anyio
async def test_critical_items_threshold(async_client, supervisor_headers, make_room, subcategories):
    room = await make_room()
    await submit(
        async_client,
        room["id"],
        [
            line(subcategories["Proyectores"], 10, 5, 0, 3, 2),
            line(subcategories["Sillas"], 10, 9, 0, 1, 0),
            line(subcategories["Mesas"], 0),
        ],
        supervisor_headers,
    )

    response = await async_client.get("/api/reportes/criticos", headers=supervisor_headers)
    assert response.status_code == 200
    items = response.json()
    ours = [i for i in items if i["aula"] == room["codigo"]]
    assert [i["subcategoria"] for i in ours] == ["Proyectores"]
    assert ours[0]["porcentaje_problemas"] == 50.0
    assert ours[0]["categoria"] == "Audio y Video"

    percentages = [i["porcentaje_problemas"] for i in items]
    assert percentages == sorted(percentages, reverse=True)
    assert all(p > 30 for p in percentages)

    response = await async_client.get("/api/reportes/criticos?umbral=5", headers=supervisor_headers)
    ours = [i for i in response.json() if i["aula"] == room["codigo"]]
    assert [i["subcategoria"] for i in ours] == ["Proyectores", "Sillas"]


@pytest.mark.anyio
async def test_critical_items_threshold_out_of_range(async_client, supervisor_headers):
    response = await async_client.get("/api/reportes/criticos?umbral=150", headers=supervisor_headers)
    assert response.status_code == 400


@pytest.mark.anyio
async def test_room_report(async_client, docente_headers, admin_headers, make_room, subcategories):
    with_inventory = await make_room()
    without_inventory = await make_room()
    await submit(
        async_client,
        with_inventory["id"],
        [line(subcategories["Proyectores"], 10, 5, 0, 3, 2), line(subcategories["Sillas"], 10, 9, 0, 1, 0)],
        admin_headers,
    )

    response = await async_client.get("/api/reportes/aulas", headers=docente_headers)
    assert response.status_code == 200
    rows = response.json()
    by_code = {r["codigo"]: r for r in rows}

    row = by_code[with_inventory["codigo"]]
    assert row["total_items"] == 20
    assert row["items_buenos"] == 14
    assert row["items_malos"] == 4
    assert row["items_rotos"] == 2
    assert row["porcentaje_operativo"] == 70.0
    assert row["ultimo_inventario"] is not None

    empty = by_code[without_inventory["codigo"]]
    assert empty["total_items"] == 0
    assert empty["porcentaje_operativo"] == 0.0
    assert empty["id_inventario"] is None

    keys = [(r["porcentaje_operativo"], r["codigo"]) for r in rows]
    assert keys == sorted(keys)


@pytest.mark.anyio
async def test_reports_require_token(async_client):
    response = await async_client.get("/api/reportes/resumen")
    assert response.status_code == 401
