"""Listing repositories: in-memory and PostgreSQL backends."""

from property_match.store.base import (
    BuyerRequestRepository,
    PropertyRepository,
    SiteVisitRepository,
)
from property_match.store.memory import (
    InMemoryBuyerRequestRepository,
    InMemoryPropertyRepository,
    InMemorySiteVisitRepository,
    ListingDataStore,
)
from property_match.store.postgres import (
    PostgresBuyerRequestRepository,
    PostgresDatabase,
    PostgresPropertyRepository,
    PostgresSiteVisitRepository,
)

__all__ = [
    "BuyerRequestRepository",
    "InMemoryBuyerRequestRepository",
    "InMemoryPropertyRepository",
    "InMemorySiteVisitRepository",
    "ListingDataStore",
    "PostgresBuyerRequestRepository",
    "PostgresDatabase",
    "PostgresPropertyRepository",
    "PostgresSiteVisitRepository",
    "PropertyRepository",
    "SiteVisitRepository",
]
