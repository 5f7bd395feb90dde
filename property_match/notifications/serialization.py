"""Serialization of marketplace records for notification payloads."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any


def to_dict(obj: Any) -> dict:
    """Convert a record to a JSON-ready dictionary."""
    if is_dataclass(obj):
        return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}
    elif isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}
    else:
        return {"value": str(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, (datetime, date, time)):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        return to_dict(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value
