"""JSON helpers for partial case updates sent over the wire."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel


def to_json_compatible(value: Any) -> Any:
    """Convert models, enums and datetimes into JSON-ready primitives.

    Datetimes are rendered in UTC with a 'Z' suffix.
    """
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
    if isinstance(value, dict):
        return {k: to_json_compatible(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_json_compatible(v) for v in value]
    return value
