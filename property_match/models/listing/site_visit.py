"""Site visit model."""

from dataclasses import dataclass
from datetime import date, datetime, time

from property_match.models.listing.enums import SiteVisitStatus


@dataclass
class SiteVisit:
    """A visitor's request to view a property on site."""

    property_id: str
    visitor_name: str
    visitor_phone: str
    preferred_date: date
    preferred_time: time
    visitor_email: str | None = None
    message: str | None = None
    visit_id: str = ""
    status: SiteVisitStatus = SiteVisitStatus.PENDING
    created_at: datetime | None = None
    # Filled from the visited property when listing visits
    property_title: str | None = None
    location_district: str | None = None
    location_town: str | None = None
