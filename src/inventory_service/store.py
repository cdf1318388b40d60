from __future__ import annotations

import logging
from typing import Any

import httpx

from inventory.config import DEFAULT_CONFIG, InventoryConfig
from inventory.data_models import InventoryRecord, NewInventoryRecord, SearchFilter
from inventory.errors import StoreError

logger = logging.getLogger(__name__)

_SINGLE_OBJECT = "application/vnd.pgrst.object+json"


class InventoryStore:
    """Async façade over the Supabase REST (PostgREST) endpoint for the inventory table.

    One ``httpx.AsyncClient`` is opened in ``connect`` and shared by every
    request until ``close``. Each call is an independent round trip; nothing
    is cached locally.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 10.0,
        config: InventoryConfig = DEFAULT_CONFIG,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def rest_url(self) -> str:
        return f"{self.base_url}/rest/v1"

    async def connect(self) -> None:
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            base_url=self.rest_url,
            headers={
                "apikey": self.api_key,
                "Authorization": f"Bearer {self.api_key}",
                "Accept": "application/json",
            },
            timeout=self.timeout_seconds,
            transport=self._transport,
        )
        logger.info("Inventory store client ready for %s (table=%s)", self.base_url, self.config.table)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def ping(self) -> bool:
        if self._client is None:
            return False
        try:
            resp = await self._client.get(f"/{self.config.table}", params={"select": "id", "limit": "1"})
        except httpx.HTTPError:
            return False
        return resp.is_success

    async def find_inventory(self, search: SearchFilter) -> list[InventoryRecord]:
        params: dict[str, str] = {"select": ",".join(self.config.select_columns)}
        for column, value in search.as_params().items():
            params[column] = f"eq.{value}"
        params["order"] = "year.desc"

        resp = await self._send("GET", params=params)
        rows = _decode(resp)
        if not isinstance(rows, list):
            raise StoreError("Unexpected response from inventory store")
        return [InventoryRecord.from_row(row) for row in rows]

    async def create_inventory_row(self, record: NewInventoryRecord) -> InventoryRecord:
        resp = await self._send(
            "POST",
            params={"select": ",".join(self.config.created_columns)},
            json=record.to_row(),
            headers={"Prefer": "return=representation", "Accept": _SINGLE_OBJECT},
        )
        row = _decode(resp)
        if not isinstance(row, dict):
            raise StoreError("Unexpected response from inventory store")
        return InventoryRecord.from_row(row)

    async def _send(
        self,
        method: str,
        params: dict[str, str],
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        if self._client is None:
            raise StoreError("Inventory store is not connected")
        try:
            resp = await self._client.request(method, f"/{self.config.table}", params=params, json=json, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("Inventory store %s failed: %s", method, exc)
            raise StoreError(str(exc) or exc.__class__.__name__) from exc

        if resp.is_error:
            message, code = _error_details(resp)
            logger.warning("Inventory store rejected %s (status=%s code=%s): %s", method, resp.status_code, code, message)
            raise StoreError(message, status_code=resp.status_code, code=code)
        return resp


def _decode(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise StoreError("Unexpected response from inventory store") from exc


def _error_details(resp: httpx.Response) -> tuple[str, str | None]:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        code = body.get("code")
        return str(body["message"]), None if code is None else str(code)
    text = resp.text.strip()
    return (text or f"HTTP {resp.status_code}"), None
