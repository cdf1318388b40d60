from __future__ import annotations

import math
import re
from typing import Any

from inventory.config import DEFAULT_CONFIG, InventoryConfig
from inventory.data_models import SearchFilter
from inventory.errors import ValidationError

SEARCH_PARAMS_MESSAGE = "Please provide make, model, and state."
YEAR_MESSAGE = "Year must be a valid number (e.g., 2015)"
BODY_MESSAGE = "Request body must be a JSON object."

_LEADING_INT = re.compile(r"([+-]?)([0-9]+)")
# wider than any in-range year; keeps int() away from huge digit runs
_MAX_YEAR_DIGITS = 4


def missing_fields_message(config: InventoryConfig = DEFAULT_CONFIG) -> str:
    return "Missing required fields: " + ", ".join(config.required_fields)


def is_blank(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0
    return False


def missing_required(data: dict[str, Any], config: InventoryConfig = DEFAULT_CONFIG) -> list[str]:
    return [name for name in config.required_fields if is_blank(data.get(name))]


def as_text(value: Any) -> str | None:
    """Return the string form of a JSON scalar, or None for objects, arrays and booleans."""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    return value if isinstance(value, str) else str(value)


def parse_year(value: Any) -> int | None:
    """Parse a year the way a lenient form post would: leading integer digits win.

    Returns None when no integer can be read from the value, or when the digit
    run is too long to be a year.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value.strip())
        if match is None:
            return None
        sign, digits = match.groups()
        if len(digits.lstrip("0")) > _MAX_YEAR_DIGITS:
            return None
        return int(sign + digits)
    return None


def check_year(value: Any, config: InventoryConfig = DEFAULT_CONFIG) -> int | None:
    year = parse_year(value)
    if year is None or year < config.min_year or year > config.max_year:
        return None
    return year


def parse_search_filter(make: str | None, model: str | None, state: str | None) -> SearchFilter:
    if not make or not model or not state:
        raise ValidationError(SEARCH_PARAMS_MESSAGE)
    return SearchFilter(make=make, model=model, state=state)
