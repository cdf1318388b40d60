from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from inventory.config import InventoryConfig
from inventory.errors import InventoryError, ValidationError
from inventory_service.gateway import handle_create, handle_search
from inventory_service.logging_config import configure_logging, new_request_id, request_id
from inventory_service.schemas import (
    CreateInventoryRequest,
    CreateResponse,
    ErrorResponse,
    HealthResponse,
    ReadinessResponse,
    SearchResponse,
    request_error_message,
)
from inventory_service.settings import ServiceSettings
from inventory_service.store import InventoryStore

logger = logging.getLogger(__name__)

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def build_store(settings: ServiceSettings) -> InventoryStore:
    return InventoryStore(
        base_url=settings.supabase_url,
        api_key=settings.supabase_anon_key,
        timeout_seconds=settings.store_timeout_seconds,
        config=InventoryConfig(table=settings.inventory_table),
    )


# ── App Factory ─────────────────────────────────────────────────────

def create_app(settings: ServiceSettings | None = None, store: InventoryStore | None = None) -> FastAPI:
    settings = settings or ServiceSettings()
    configure_logging(level=settings.log_level, fmt=settings.log_format)
    store = store or build_store(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        await store.connect()
        try:
            yield
        finally:
            await store.close()

    app = FastAPI(title="Wrecker Parts Inventory API", version="1.0.0", lifespan=lifespan)
    app.state.store = store
    app.state.settings = settings

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next: Any) -> Response:
        rid = request.headers.get("X-Request-ID") or new_request_id()
        token = request_id.set(rid)
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": str(exc)},
            )
        finally:
            request_id.reset(token)
        response.headers["X-Request-ID"] = rid
        return response

    # outermost, so error responses built above still get CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Error Mapping ───────────────────────────────────────────────

    @app.exception_handler(InventoryError)
    async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
        if isinstance(exc, ValidationError):
            logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = request_error_message(list(exc.errors()))
        logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})

    # ── Health ──────────────────────────────────────────────────────

    @app.get("/", response_model=HealthResponse)
    async def root() -> HealthResponse:
        return HealthResponse(ok=True)

    @app.get("/ready", response_model=ReadinessResponse)
    async def ready(response: Response) -> ReadinessResponse:
        reachable = await store.ping()
        if not reachable:
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadinessResponse(ok=reachable, store=reachable)

    # ── Inventory ───────────────────────────────────────────────────

    @app.get("/search", response_model=SearchResponse, responses=ERROR_RESPONSES)
    async def search(make: str | None = None, model: str | None = None, state: str | None = None) -> SearchResponse:
        return await handle_search(store, make, model, state)

    @app.post(
        "/inventory",
        response_model=CreateResponse,
        status_code=status.HTTP_201_CREATED,
        responses=ERROR_RESPONSES,
    )
    async def create_inventory(payload: CreateInventoryRequest) -> CreateResponse:
        return await handle_create(store, payload)

    return app


def main() -> None:
    import uvicorn

    settings = ServiceSettings()
    app = create_app(settings)
    logger.info("API running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
