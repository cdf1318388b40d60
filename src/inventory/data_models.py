from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


RecordId = int | str


@dataclass(frozen=True)
class SearchFilter:
    make: str
    model: str
    state: str

    def as_params(self) -> dict[str, str]:
        return {"make": self.make, "model": self.model, "state": self.state}


@dataclass(frozen=True)
class NewInventoryRecord:
    make: str
    model: str
    year: int
    state: str
    wrecker_name: str
    contact: str
    colour: str | None = None
    suburb: str | None = None

    def to_row(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class InventoryRecord:
    id: RecordId | None
    make: str
    model: str
    year: int
    state: str
    wrecker_name: str
    contact: str
    colour: str | None = None
    suburb: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "InventoryRecord":
        return cls(
            id=row.get("id"),
            make=row.get("make") or "",
            model=row.get("model") or "",
            year=row.get("year"),
            state=row.get("state") or "",
            wrecker_name=row.get("wrecker_name") or "",
            contact=row.get("contact") or "",
            colour=row.get("colour"),
            suburb=row.get("suburb"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "make": self.make,
            "model": self.model,
            "year": self.year,
            "colour": self.colour,
            "state": self.state,
            "suburb": self.suburb,
            "wrecker_name": self.wrecker_name,
            "contact": self.contact,
        }


@dataclass(frozen=True)
class DisplayRow:
    make: str
    model: str
    year: int | None
    colour: str
    location: str
    contact: str
