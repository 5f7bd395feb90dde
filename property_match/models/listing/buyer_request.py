"""Buyer request model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from property_match.models.listing.enums import (
    BuyerRequestStatus,
    ContactMethod,
    PropertyType,
    Timeline,
    Urgency,
)


@dataclass
class BuyerRequest:
    """Search criteria submitted by a prospective buyer.

    Utility requirements set to ``False`` mean "don't care", never
    "must not have". Minimums left as ``None`` place no constraint.
    """

    property_type: PropertyType
    budget_min: Decimal
    budget_max: Decimal
    preferred_districts: list[str]
    contact_name: str
    contact_phone: str
    preferred_towns: str | None = None
    requires_water: bool = False
    requires_power: bool = False
    requires_internet: bool = False
    min_bedrooms: int | None = None
    min_bathrooms: int | None = None
    min_size_acres: Decimal | None = None
    min_size_sqft: Decimal | None = None
    additional_requirements: str | None = None
    contact_email: str | None = None
    urgency: Urgency = Urgency.MEDIUM
    preferred_contact_method: ContactMethod = ContactMethod.PHONE
    timeline: Timeline = Timeline.THREE_TO_SIX_MONTHS
    request_id: str = ""  # Assigned by the repository on create
    user_id: str | None = None
    status: BuyerRequestStatus = BuyerRequestStatus.ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None
