"""Notification events for submissions and buyer matches."""

import uuid
from datetime import datetime, timezone
from typing import Any

from property_match.models import Event
from property_match.models.listing import BuyerRequest, Property
from property_match.notifications.serialization import serialize_value, to_dict

SOURCE = "property-match"

PROPERTY_SUBMITTED = "property.submitted"
BUYER_REQUEST_SUBMITTED = "buyer_request.submitted"
BUYER_REQUEST_MATCHED = "buyer_request.matched"


def property_submitted(prop: Property, admin_email: str) -> Event:
    """Admin alert for a new listing awaiting review."""
    return _event(
        PROPERTY_SUBMITTED,
        subject=prop.property_id,
        data={"property": to_dict(prop)},
        recipient=admin_email,
        title=f"New Property Submission - {prop.title}",
    )


def buyer_request_submitted(request: BuyerRequest, admin_email: str) -> Event:
    """Admin alert for a new buyer request."""
    districts = ", ".join(request.preferred_districts)
    return _event(
        BUYER_REQUEST_SUBMITTED,
        subject=request.request_id,
        data={"buyer_request": to_dict(request)},
        recipient=admin_email,
        title=f"New Buyer Request - {request.property_type.value} in {districts}",
    )


def properties_matched(request: BuyerRequest, properties: list[Property]) -> Event:
    """Message to the buyer listing the properties that match their request.

    The recipient is the buyer's email, which may be missing.
    """
    return _event(
        BUYER_REQUEST_MATCHED,
        subject=request.request_id,
        data={
            "buyer": {
                "contact_name": request.contact_name,
                "contact_phone": request.contact_phone,
                "contact_email": request.contact_email,
                "preferred_contact_method": serialize_value(request.preferred_contact_method),
            },
            "properties": [_match_summary(p) for p in properties],
        },
        recipient=request.contact_email,
        title=f"Property Matches Found - {len(properties)} Properties Match Your Criteria",
    )


def _match_summary(prop: Property) -> dict[str, Any]:
    primary = prop.primary_image
    return {
        "property_id": prop.property_id,
        "title": prop.title,
        "property_type": serialize_value(prop.property_type),
        "location_district": prop.location_district,
        "location_town": prop.location_town,
        "asking_price": serialize_value(prop.asking_price),
        "bedrooms": prop.bedrooms,
        "bathrooms": prop.bathrooms,
        "image_url": primary.image_url if primary else None,
    }


def _event(
    event_type: str,
    subject: str,
    data: dict,
    recipient: str | None,
    title: str,
) -> Event:
    return Event(
        event_id=str(uuid.uuid4()),
        event_type=event_type,
        event_time=datetime.now(timezone.utc),
        source=SOURCE,
        subject=subject,
        data=data,
        metadata={"recipient": recipient, "title": title},
    )
