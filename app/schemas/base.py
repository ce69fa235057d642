"""
schemas/base.py
---------------
Response envelope shared by every endpoint, plus the helper that turns a
pydantic error list into field/message pairs.

Every body has the shape:
    {"status": "success" | "error", "message"?: str, "data"?: ..., "errors"?: [...]}
Keys that are None are dropped when the envelope is serialised.
"""

from typing import Any, Generic, Iterable, List, Literal, Mapping, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

# Location prefixes FastAPI adds in front of the real field name
_LOC_SOURCES = {"body", "path", "query"}


class FieldError(BaseModel):
    field: str
    message: str


class Envelope(BaseModel, Generic[T]):
    status: Literal["success", "error"] = "success"
    message: Optional[str] = None
    data: Optional[T] = None
    errors: Optional[List[FieldError]] = None


class MessageResponse(BaseModel):
    status: Literal["success", "error"] = "success"
    message: str


def field_errors(errors: Iterable[Mapping[str, Any]]) -> List[FieldError]:
    """Flatten pydantic / FastAPI validation errors into FieldError items."""
    result: List[FieldError] = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in _LOC_SOURCES]
        # JSON decode errors locate a character offset, not a field
        field = "body" if err.get("type") == "json_invalid" else ".".join(loc) or "body"
        if err.get("type") == "missing":
            message = "Request body is required" if field == "body" else f"{field} is required"
        else:
            message = err.get("msg", "Invalid value")
        result.append(FieldError(field=field, message=message))
    return result
