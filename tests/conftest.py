"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Callable

import pytest

from property_match.models.listing import (
    BuyerRequest,
    Property,
    PropertyStatus,
    PropertyType,
)
from property_match.store import (
    InMemoryBuyerRequestRepository,
    InMemoryPropertyRepository,
    InMemorySiteVisitRepository,
    ListingDataStore,
)

BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def make_property() -> Callable[..., Property]:
    """Factory for valid listings; keyword arguments override the defaults."""

    def _make(**overrides: Any) -> Property:
        values: dict[str, Any] = {
            "title": "3 Bedroom House in Kira",
            "property_type": PropertyType.HOUSE,
            "location_district": "Wakiso",
            "location_town": "Kira",
            "asking_price": Decimal("250000000"),
            "owner_name": "Sarah Namukasa",
            "owner_phone": "+256772000111",
            "has_water": True,
            "has_power": True,
            "has_internet": False,
            "bedrooms": 3,
            "bathrooms": 2,
            "size_acres": Decimal("0.25"),
            "description": "Quiet neighbourhood close to the main road.",
        }
        values.update(overrides)
        return Property(**values)

    return _make


@pytest.fixture
def make_approved(make_property: Callable[..., Property]) -> Callable[..., Property]:
    """Factory for approved listings with an id and a creation time.

    ``age_hours`` moves ``created_at`` back from a fixed base time.
    """
    counter = iter(range(1, 10_000))

    def _make(age_hours: int = 0, **overrides: Any) -> Property:
        n = next(counter)
        overrides.setdefault("property_id", f"prop-{n:03d}")
        overrides.setdefault("status", PropertyStatus.APPROVED)
        overrides.setdefault("created_at", BASE_TIME - timedelta(hours=age_hours))
        return make_property(**overrides)

    return _make


@pytest.fixture
def make_request() -> Callable[..., BuyerRequest]:
    """Factory for valid buyer requests; keyword arguments override the defaults."""

    def _make(**overrides: Any) -> BuyerRequest:
        values: dict[str, Any] = {
            "property_type": PropertyType.HOUSE,
            "budget_min": Decimal("100000000"),
            "budget_max": Decimal("300000000"),
            "preferred_districts": ["Wakiso", "Kampala"],
            "contact_name": "David Okello",
            "contact_phone": "+256701000222",
            "contact_email": "david@example.com",
        }
        values.update(overrides)
        return BuyerRequest(**values)

    return _make


@pytest.fixture
def data_store() -> ListingDataStore:
    """Fresh in-memory tables shared by the repositories of one test."""
    return ListingDataStore()


@pytest.fixture
def property_repo(data_store: ListingDataStore) -> InMemoryPropertyRepository:
    return InMemoryPropertyRepository(data_store)


@pytest.fixture
def request_repo(data_store: ListingDataStore) -> InMemoryBuyerRequestRepository:
    return InMemoryBuyerRequestRepository(data_store)


@pytest.fixture
def visit_repo(data_store: ListingDataStore) -> InMemorySiteVisitRepository:
    return InMemorySiteVisitRepository(data_store)
