from __future__ import annotations
from typing import Any

class LaundryError(Exception):
    """Base of the domain errors. Routes render them as {"error": code, "detail": message}."""
    code = "error"
    http_status = 400
    message = "Request failed"

    def __init__(self, message: str | None = None, **context: Any):
        super().__init__(message or self.message)
        self.detail = message or self.message
        self.context = context

    def to_dict(self) -> dict:
        body = {"error": self.code, "detail": self.detail}
        if self.context:
            body["context"] = self.context
        return body


class ValidationError(LaundryError):
    code = "validation_error"
    message = "Missing or invalid information"


class ItemLimitError(LaundryError):
    code = "item_limit"
    message = "Clothing quantity must be between 1 and 10"


class CapacityExceeded(LaundryError):
    code = "capacity_exceeded"
    http_status = 409
    message = "This slot is fully booked"


class NotFound(LaundryError):
    code = "not_found"
    http_status = 404
    message = "Not found"


class StoreError(LaundryError):
    code = "store_error"
    http_status = 503
    message = "Storage is unavailable, try again"


def pydantic_errors_safe(ve) -> list[dict]:
    """pydantic error list with ctx values made JSON-serializable."""
    errs = ve.errors()
    for e in errs:
        if "ctx" in e and isinstance(e["ctx"], dict):
            e["ctx"] = {k: str(v) for k, v in e["ctx"].items()}
    return errs
