from __future__ import annotations

from inventory.data_models import DisplayRow, InventoryRecord


def format_location(state: str, suburb: str | None) -> str:
    return f"{state} - {suburb}" if suburb else state


def format_contact(wrecker_name: str, contact: str) -> str:
    return f"{wrecker_name} - {contact}"


def to_display_row(record: InventoryRecord) -> DisplayRow:
    return DisplayRow(
        make=record.make,
        model=record.model,
        year=record.year,
        colour=record.colour or "",
        location=format_location(record.state, record.suburb),
        contact=format_contact(record.wrecker_name, record.contact),
    )
