from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationInfo, field_validator, model_validator
from pydantic_core import PydanticCustomError

from inventory.data_models import DisplayRow, NewInventoryRecord
from inventory.validation import BODY_MESSAGE, YEAR_MESSAGE, as_text, check_year, is_blank, missing_fields_message, missing_required

# validation error types raised by CreateInventoryRequest, highest priority first
CREATE_ERROR_TYPES = ("body_type", "missing_fields", "year_invalid", "string_type")


class HealthResponse(BaseModel):
    ok: bool = True


class ReadinessResponse(BaseModel):
    ok: bool
    store: bool


class ErrorResponse(BaseModel):
    error: str


class DisplayRowModel(BaseModel):
    make: str
    model: str
    year: int | None
    colour: str
    location: str
    contact: str

    @classmethod
    def from_display(cls, row: DisplayRow) -> "DisplayRowModel":
        return cls(
            make=row.make,
            model=row.model,
            year=row.year,
            colour=row.colour,
            location=row.location,
            contact=row.contact,
        )


class SearchResponse(BaseModel):
    results: list[DisplayRowModel]


class StoredRecordModel(BaseModel):
    id: int | str | None
    make: str
    model: str
    year: int
    colour: str | None = None
    state: str
    suburb: str | None = None
    wrecker_name: str
    contact: str


class CreateResponse(BaseModel):
    ok: bool = True
    created: StoredRecordModel


def _text_or_error(value: Any, field: str | None) -> str:
    text = as_text(value)
    if text is None:
        raise PydanticCustomError("string_type", "Field '{field}' must be a string", {"field": field})
    return text


class CreateInventoryRequest(BaseModel):
    make: str
    model: str
    year: int
    state: str
    wrecker_name: str
    contact: str
    colour: str | None = None
    suburb: str | None = None

    @model_validator(mode="before")
    @classmethod
    def require_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise PydanticCustomError("body_type", BODY_MESSAGE)
        if missing_required(data):
            raise PydanticCustomError("missing_fields", missing_fields_message())
        return data

    @field_validator("year", mode="before")
    @classmethod
    def lenient_year(cls, value: Any) -> int:
        year = check_year(value)
        if year is None:
            raise PydanticCustomError("year_invalid", YEAR_MESSAGE)
        return year

    @field_validator("make", "model", "state", "wrecker_name", "contact", mode="before")
    @classmethod
    def scalar_text(cls, value: Any, info: ValidationInfo) -> str:
        return _text_or_error(value, info.field_name)

    @field_validator("colour", "suburb", mode="before")
    @classmethod
    def optional_text(cls, value: Any, info: ValidationInfo) -> str | None:
        if is_blank(value):
            return None
        return _text_or_error(value, info.field_name)

    def to_record(self) -> NewInventoryRecord:
        return NewInventoryRecord(
            make=self.make,
            model=self.model,
            year=self.year,
            state=self.state,
            wrecker_name=self.wrecker_name,
            contact=self.contact,
            colour=self.colour,
            suburb=self.suburb,
        )


def request_error_message(errors: list[dict[str, Any]]) -> str:
    """Pick the client-facing message for a rejected request body."""
    by_type = {err.get("type"): err.get("msg", "") for err in errors}
    for error_type in CREATE_ERROR_TYPES:
        if error_type in by_type:
            return by_type[error_type]
    return BODY_MESSAGE
