from __future__ import annotations


class InventoryError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(InventoryError):
    status_code = 400


class StoreError(InventoryError):
    """The external store rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.upstream_status = status_code
        self.code = code
