"""Enumeration types for marketplace entities."""

from enum import Enum
from typing import TypeVar

from property_match.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


class PropertyType(str, Enum):
    LAND = "land"
    HOUSE = "house"
    COMMERCIAL = "commercial"
    APARTMENT = "apartment"
    VILLA = "villa"


class PropertyStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    SOLD = "sold"
    WITHDRAWN = "withdrawn"


class BuyerRequestStatus(str, Enum):
    ACTIVE = "active"
    MATCHED = "matched"
    FULFILLED = "fulfilled"
    CANCELLED = "cancelled"


class Urgency(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ContactMethod(str, Enum):
    PHONE = "phone"
    EMAIL = "email"
    WHATSAPP = "whatsapp"


class Timeline(str, Enum):
    IMMEDIATE = "immediate"
    ONE_TO_THREE_MONTHS = "1-3months"
    THREE_TO_SIX_MONTHS = "3-6months"
    SIX_TO_TWELVE_MONTHS = "6-12months"


class SiteVisitStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Property types where bedroom/bathroom counts are meaningful
RESIDENTIAL_TYPES = frozenset({PropertyType.HOUSE, PropertyType.APARTMENT, PropertyType.VILLA})


def coerce_enum(enum_cls: type[E], value: object, field_name: str) -> E:
    """Convert a raw value to ``enum_cls``, raising ValidationError if it is not a member."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {field_name} {value!r}; expected one of: {allowed}") from None
