from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InventoryConfig:
    table: str = "inventory"
    min_year: int = 1950
    max_year: int = 2035
    required_fields: tuple[str, ...] = ("make", "model", "year", "state", "wrecker_name", "contact")
    optional_fields: tuple[str, ...] = ("colour", "suburb")
    select_columns: tuple[str, ...] = (
        "make",
        "model",
        "year",
        "colour",
        "state",
        "suburb",
        "wrecker_name",
        "contact",
    )

    @property
    def created_columns(self) -> tuple[str, ...]:
        return ("id", *self.select_columns)


DEFAULT_CONFIG = InventoryConfig()
