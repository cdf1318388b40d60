from __future__ import annotations

import logging
from typing import Protocol

from inventory.data_models import InventoryRecord, NewInventoryRecord, SearchFilter
from inventory.formatting import to_display_row
from inventory.validation import parse_search_filter
from inventory_service.schemas import (
    CreateInventoryRequest,
    CreateResponse,
    DisplayRowModel,
    SearchResponse,
    StoredRecordModel,
)

logger = logging.getLogger(__name__)


class InventoryAccessor(Protocol):
    async def find_inventory(self, search: SearchFilter) -> list[InventoryRecord]: ...

    async def create_inventory_row(self, record: NewInventoryRecord) -> InventoryRecord: ...


async def handle_search(
    store: InventoryAccessor,
    make: str | None,
    model: str | None,
    state: str | None,
) -> SearchResponse:
    search = parse_search_filter(make, model, state)
    rows = await store.find_inventory(search)
    logger.info("Search %s/%s/%s matched %d rows", search.make, search.model, search.state, len(rows))
    return SearchResponse(
        results=[DisplayRowModel.from_display(to_display_row(row)) for row in rows],
    )


async def handle_create(store: InventoryAccessor, payload: CreateInventoryRequest) -> CreateResponse:
    created = await store.create_inventory_row(payload.to_record())
    logger.info(
        "Created inventory row id=%s for %s %s (%s) by %s",
        created.id, created.make, created.model, created.year, created.wrecker_name,
    )
    return CreateResponse(ok=True, created=StoredRecordModel(**created.to_dict()))
