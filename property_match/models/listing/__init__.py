"""Marketplace listing models."""

from property_match.models.listing.buyer_request import BuyerRequest
from property_match.models.listing.enums import (
    RESIDENTIAL_TYPES,
    BuyerRequestStatus,
    ContactMethod,
    PropertyStatus,
    PropertyType,
    SiteVisitStatus,
    Timeline,
    Urgency,
)
from property_match.models.listing.filters import FilterSpec
from property_match.models.listing.property import Property, PropertyImage, PropertyUpdate
from property_match.models.listing.site_visit import SiteVisit
from property_match.models.listing.stats import BuyerRequestStats, PropertyStats

__all__ = [
    "RESIDENTIAL_TYPES",
    "BuyerRequest",
    "BuyerRequestStats",
    "BuyerRequestStatus",
    "ContactMethod",
    "FilterSpec",
    "Property",
    "PropertyImage",
    "PropertyStats",
    "PropertyStatus",
    "PropertyType",
    "PropertyUpdate",
    "SiteVisit",
    "SiteVisitStatus",
    "Timeline",
    "Urgency",
]
