import json

import httpx
import pytest

from inventory_service.settings import ServiceSettings
from inventory_service.store import InventoryStore

SUPABASE_URL = "https://test-project.supabase.co"
API_KEY = "test-anon-key"


class FakePostgrest:
    """In-memory stand-in for the Supabase REST endpoint of one table."""

    def __init__(self, table: str = "inventory") -> None:
        self.table = table
        self.rows: list[dict] = []
        self.requests: list[httpx.Request] = []
        self.fail_with: tuple[int, object] | None = None
        self.raise_exc: Exception | None = None
        self._next_id = 1

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_exc is not None:
            raise self.raise_exc
        if request.headers.get("apikey") != API_KEY:
            return httpx.Response(401, json={"message": "Invalid API key"})
        if request.url.path != f"/rest/v1/{self.table}":
            return httpx.Response(404, json={"code": "42P01", "message": f"relation \"{request.url.path}\" does not exist"})
        if self.fail_with is not None:
            status, body = self.fail_with
            if isinstance(body, str):
                return httpx.Response(status, text=body)
            return httpx.Response(status, json=body)

        columns = request.url.params.get("select", "*").split(",")
        if request.method == "GET":
            return httpx.Response(200, json=[self._project(r, columns) for r in self._query(request.url.params)])
        if request.method == "POST":
            payload = json.loads(request.content)
            row = {"id": self._next_id, **payload}
            self._next_id += 1
            self.rows.append(row)
            body = self._project(row, columns)
            if request.headers.get("accept") == "application/vnd.pgrst.object+json":
                return httpx.Response(201, json=body)
            return httpx.Response(201, json=[body])
        return httpx.Response(405, json={"message": "Method not allowed"})

    def _query(self, params: httpx.QueryParams) -> list[dict]:
        rows = list(self.rows)
        for key, value in params.multi_items():
            if value.startswith("eq."):
                rows = [r for r in rows if str(r.get(key)) == value[3:]]
        order = params.get("order")
        if order:
            column, _, direction = order.partition(".")
            rows.sort(key=lambda r: r.get(column) or 0, reverse=direction == "desc")
        if params.get("limit"):
            rows = rows[: int(params["limit"])]
        return rows

    @staticmethod
    def _project(row: dict, columns: list[str]) -> dict:
        if columns == ["*"]:
            return dict(row)
        return {c: row.get(c) for c in columns}


@pytest.fixture
def fake_db():
    return FakePostgrest()


@pytest.fixture
def settings(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SUPABASE_URL", SUPABASE_URL)
    monkeypatch.setenv("SUPABASE_ANON_KEY", API_KEY)
    monkeypatch.setenv("LOG_FORMAT", "text")
    return ServiceSettings()


@pytest.fixture
def store(fake_db):
    return InventoryStore(base_url=SUPABASE_URL, api_key=API_KEY, transport=fake_db.transport())
