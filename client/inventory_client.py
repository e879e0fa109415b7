# client/inventory_client.py
"""
Async HTTP client for the inventory API.

Mirrors what the web front end does: keeps the bearer token, checks line
item quantities locally before submitting, and drops the session on any
401 response.
"""
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"

QUANTITY_FIELDS = (
    "cantidad_total",
    "cantidad_bueno",
    "cantidad_regular",
    "cantidad_malo",
    "cantidad_roto",
)


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class SessionExpired(ApiError):
    """401 from the server. The client has already logged itself out."""


class LocalValidationError(ValueError):
    """Submission rejected before sending anything."""


def normalize_line_item(detalle: dict[str, Any]) -> dict[str, Any]:
    """Fill missing quantities with zero and check the breakdown adds up."""
    item = dict(detalle)
    if item.get("id_subcategoria") is None:
        raise LocalValidationError("Cada detalle necesita id_subcategoria")

    for field in QUANTITY_FIELDS:
        value = item.get(field) or 0
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise LocalValidationError(f"{field} debe ser un entero no negativo")
        item[field] = value

    suma = item["cantidad_bueno"] + item["cantidad_regular"] + item["cantidad_malo"] + item["cantidad_roto"]
    if item["cantidad_total"] != suma:
        raise LocalValidationError(
            f"La suma de los estados no coincide con el total (subcategoría {item['id_subcategoria']})"
        )
    return item


class InventoryClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        http: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=timeout)
        self.base_url = base_url.rstrip("/")
        self.token: str | None = None
        self.user: dict | None = None

    async def __aenter__(self) -> "InventoryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def logout(self) -> None:
        self.token = None
        self.user = None

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        response = await self._http.request(method, f"{self.base_url}{path}", headers=headers, **kwargs)

        if response.status_code == 401:
            # Any 401, whichever call produced it, ends the session
            self.logout()
            raise SessionExpired(401, _error_message(response))
        if response.is_error:
            raise ApiError(response.status_code, _error_message(response))
        return response.json()

    # --- session ---

    async def login(self, email: str, password: str) -> dict:
        data = await self._request("POST", "/login", json={"email": email, "password": password})
        self.token = data["token"]
        self.user = data["user"]
        logger.debug("Logged in as %s", self.user.get("email"))
        return self.user

    async def me(self) -> dict:
        return await self._request("GET", "/me")

    async def permissions(self) -> dict:
        return await self._request("GET", "/me/permisos")

    # --- catalog ---

    async def list_rooms(self, activa: bool = True) -> list[dict]:
        return await self._request("GET", "/aulas", params={"activa": str(activa).lower()})

    async def create_room(self, **room: Any) -> dict:
        data = await self._request("POST", "/aulas", json=room)
        return data["aula"]

    async def list_categories(self) -> list[dict]:
        return await self._request("GET", "/categorias")

    async def list_subcategories(self, category_id: int) -> list[dict]:
        return await self._request("GET", f"/categorias/{category_id}/subcategorias")

    # --- inventory ---

    async def get_inventory(self, room_id: int) -> dict:
        return await self._request("GET", f"/aulas/{room_id}/inventario")

    async def inventory_history(self, room_id: int) -> list[dict]:
        return await self._request("GET", f"/aulas/{room_id}/inventario/historial")

    async def submit_inventory(
        self,
        room_id: int,
        detalles: list[dict[str, Any]],
        observaciones: str | None = None,
        estado_general: str | None = None,
    ) -> int:
        """
        Validate locally, then submit. Returns the new inventario_id.

        The server repeats every check; the local pass only saves a round trip.
        """
        if not detalles:
            raise LocalValidationError("Debes registrar al menos un detalle")
        payload = {
            "observaciones": observaciones,
            "estado_general": estado_general,
            "detalles": [normalize_line_item(d) for d in detalles],
        }
        data = await self._request("POST", f"/aulas/{room_id}/inventario", json=payload)
        return data["inventario_id"]

    # --- reports ---

    async def summary(self) -> dict:
        return await self._request("GET", "/reportes/resumen")

    async def critical_items(self, umbral: float | None = None) -> list[dict]:
        params = {"umbral": umbral} if umbral is not None else None
        return await self._request("GET", "/reportes/criticos", params=params)

    async def room_report(self) -> list[dict]:
        return await self._request("GET", "/reportes/aulas")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"Error {response.status_code}"
