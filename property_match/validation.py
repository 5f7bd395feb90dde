"""Validation and normalization of submitted marketplace records.

Each ``normalize_*`` function returns a copy of its input with enum fields
coerced and numeric fields converted to ``Decimal``, or raises
``ValidationError`` naming the first problem found.
"""

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from property_match.exceptions import InvalidStatusTransitionError, ValidationError
from property_match.models.listing import (
    BuyerRequest,
    BuyerRequestStatus,
    ContactMethod,
    Property,
    PropertyStatus,
    PropertyType,
    PropertyUpdate,
    SiteVisit,
    Timeline,
    Urgency,
)
from property_match.models.listing.enums import coerce_enum

# Allowed property status changes; nothing ever returns to pending.
PROPERTY_TRANSITIONS: dict[PropertyStatus, frozenset[PropertyStatus]] = {
    PropertyStatus.PENDING: frozenset({PropertyStatus.APPROVED, PropertyStatus.WITHDRAWN}),
    PropertyStatus.APPROVED: frozenset({PropertyStatus.SOLD}),
    PropertyStatus.SOLD: frozenset(),
    PropertyStatus.WITHDRAWN: frozenset(),
}


def normalize_property(prop: Property) -> Property:
    """Validate a property submission."""
    _require_text(prop.location_district, "location_district")
    _require_text(prop.location_town, "location_town")
    _require_text(prop.owner_name, "owner_name")
    _require_text(prop.owner_phone, "owner_phone")
    if prop.property_type is None:
        raise ValidationError("property_type is required")

    return replace(
        prop,
        property_type=coerce_enum(PropertyType, prop.property_type, "property_type"),
        asking_price=_positive_decimal(prop.asking_price, "asking_price", required=True),
        size_acres=_positive_decimal(prop.size_acres, "size_acres"),
        size_sqft=_positive_decimal(prop.size_sqft, "size_sqft"),
        bedrooms=_non_negative_int(prop.bedrooms, "bedrooms"),
        bathrooms=_non_negative_int(prop.bathrooms, "bathrooms"),
        title=(prop.title or "").strip(),
        location_district=prop.location_district.strip(),
        location_town=prop.location_town.strip(),
        images=[],
        created_at=_as_utc(prop.created_at),
    )


def normalize_property_update(changes: PropertyUpdate) -> PropertyUpdate:
    """Validate a partial listing update."""
    if changes.is_empty():
        raise ValidationError("No fields to update")
    return replace(
        changes,
        property_type=(
            coerce_enum(PropertyType, changes.property_type, "property_type")
            if changes.property_type is not None
            else None
        ),
        asking_price=_positive_decimal(changes.asking_price, "asking_price"),
    )


def normalize_buyer_request(request: BuyerRequest) -> BuyerRequest:
    """Validate a buyer request submission."""
    _require_text(request.contact_name, "contact_name")
    _require_text(request.contact_phone, "contact_phone")
    if request.property_type is None:
        raise ValidationError("property_type is required")

    budget_min = _positive_decimal(request.budget_min, "budget_min", required=True)
    budget_max = _positive_decimal(request.budget_max, "budget_max", required=True)
    if budget_min >= budget_max:
        raise ValidationError(
            f"budget_min ({budget_min}) must be less than budget_max ({budget_max})"
        )

    districts = [d.strip() for d in (request.preferred_districts or []) if d and d.strip()]
    if not districts:
        raise ValidationError("At least one preferred district is required")

    return replace(
        request,
        property_type=coerce_enum(PropertyType, request.property_type, "property_type"),
        budget_min=budget_min,
        budget_max=budget_max,
        preferred_districts=districts,
        min_bedrooms=_non_negative_int(request.min_bedrooms, "min_bedrooms"),
        min_bathrooms=_non_negative_int(request.min_bathrooms, "min_bathrooms"),
        min_size_acres=_positive_decimal(request.min_size_acres, "min_size_acres"),
        min_size_sqft=_positive_decimal(request.min_size_sqft, "min_size_sqft"),
        urgency=coerce_enum(Urgency, request.urgency, "urgency"),
        preferred_contact_method=coerce_enum(
            ContactMethod, request.preferred_contact_method, "preferred_contact_method"
        ),
        timeline=coerce_enum(Timeline, request.timeline, "timeline"),
        status=BuyerRequestStatus.ACTIVE,
        created_at=_as_utc(request.created_at),
    )


def normalize_site_visit(visit: SiteVisit) -> SiteVisit:
    """Validate a site visit booking."""
    _require_text(visit.property_id, "property_id")
    _require_text(visit.visitor_name, "visitor_name")
    _require_text(visit.visitor_phone, "visitor_phone")
    if visit.preferred_date is None:
        raise ValidationError("preferred_date is required")
    if visit.preferred_time is None:
        raise ValidationError("preferred_time is required")
    return replace(visit, created_at=_as_utc(visit.created_at))


def check_property_transition(current: PropertyStatus, new: PropertyStatus) -> None:
    """Raise InvalidStatusTransitionError unless ``current -> new`` is allowed."""
    if new not in PROPERTY_TRANSITIONS[current]:
        raise InvalidStatusTransitionError(
            f"Cannot change property status from {current.value} to {new.value}"
        )


def allowed_sources(new: PropertyStatus) -> list[PropertyStatus]:
    """Statuses a property may be in for a change to ``new`` to be legal."""
    return [src for src, targets in PROPERTY_TRANSITIONS.items() if new in targets]


def _as_utc(value: datetime | None) -> datetime | None:
    """Naive timestamps are taken to be UTC so all stored times compare."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def _require_text(value: Any, name: str) -> None:
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} is required")


def _positive_decimal(value: Any, name: str, required: bool = False) -> Decimal | None:
    if value is None:
        if required:
            raise ValidationError(f"{name} is required")
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{name} must be a number, got {value!r}") from None
    if not number.is_finite() or number <= 0:
        raise ValidationError(f"{name} must be greater than 0, got {value}")
    return number


def _non_negative_int(value: Any, name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be a whole number, got {value!r}")
    if value < 0:
        raise ValidationError(f"{name} cannot be negative, got {value}")
    return value
