"""Tests for record validation and status transition rules."""

from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

import pytest

from property_match.exceptions import InvalidStatusTransitionError, ValidationError
from property_match.models.listing import (
    BuyerRequestStatus,
    PropertyStatus,
    PropertyType,
    PropertyUpdate,
    SiteVisit,
    Urgency,
)
from property_match.validation import (
    PROPERTY_TRANSITIONS,
    allowed_sources,
    check_property_transition,
    normalize_buyer_request,
    normalize_property,
    normalize_property_update,
    normalize_site_visit,
)


class TestNormalizeProperty:
    """Tests for normalize_property."""

    def test_valid_property(self, make_property) -> None:
        prop = normalize_property(make_property(title="  Nice House ", location_district=" Wakiso "))
        assert prop.title == "Nice House"
        assert prop.location_district == "Wakiso"

    def test_coerces_strings(self, make_property) -> None:
        prop = normalize_property(make_property(property_type="land", asking_price="15000000"))
        assert prop.property_type == PropertyType.LAND
        assert prop.asking_price == Decimal("15000000")

    @pytest.mark.parametrize("field", ["location_district", "location_town", "owner_name", "owner_phone"])
    def test_missing_required_text(self, make_property, field: str) -> None:
        with pytest.raises(ValidationError, match=f"{field} is required"):
            normalize_property(make_property(**{field: "  "}))

    def test_missing_property_type(self, make_property) -> None:
        with pytest.raises(ValidationError, match="property_type is required"):
            normalize_property(make_property(property_type=None))

    @pytest.mark.parametrize("price", [0, -1, "abc", None])
    def test_invalid_price(self, make_property, price: object) -> None:
        with pytest.raises(ValidationError, match="asking_price"):
            normalize_property(make_property(asking_price=price))

    def test_non_positive_size_rejected(self, make_property) -> None:
        with pytest.raises(ValidationError, match="size_acres"):
            normalize_property(make_property(size_acres=Decimal("0")))

    def test_negative_bedrooms_rejected(self, make_property) -> None:
        with pytest.raises(ValidationError, match="bedrooms cannot be negative"):
            normalize_property(make_property(bedrooms=-1))

    def test_fractional_bedrooms_rejected(self, make_property) -> None:
        with pytest.raises(ValidationError, match="whole number"):
            normalize_property(make_property(bathrooms=1.5))

    def test_zero_bedrooms_allowed(self, make_property) -> None:
        assert normalize_property(make_property(bedrooms=0)).bedrooms == 0

    def test_naive_created_at_taken_as_utc(self, make_property) -> None:
        prop = normalize_property(make_property(created_at=datetime(2024, 1, 1, 9, 30)))
        assert prop.created_at == datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc)

    def test_aware_created_at_unchanged(self, make_property) -> None:
        eat = timezone(timedelta(hours=3))
        stamp = datetime(2024, 1, 1, 9, 30, tzinfo=eat)
        assert normalize_property(make_property(created_at=stamp)).created_at.tzinfo is eat


class TestNormalizePropertyUpdate:
    """Tests for normalize_property_update."""

    def test_empty_update_rejected(self) -> None:
        with pytest.raises(ValidationError, match="No fields to update"):
            normalize_property_update(PropertyUpdate())

    def test_partial_update(self) -> None:
        changes = normalize_property_update(PropertyUpdate(asking_price="5000", property_type="villa"))
        assert changes.asking_price == Decimal("5000")
        assert changes.property_type == PropertyType.VILLA
        assert changes.title is None


class TestNormalizeBuyerRequest:
    """Tests for normalize_buyer_request."""

    def test_valid_request(self, make_request) -> None:
        request = normalize_buyer_request(
            make_request(preferred_districts=[" Kampala ", "", "Wakiso"], urgency="high")
        )
        assert request.preferred_districts == ["Kampala", "Wakiso"]
        assert request.urgency == Urgency.HIGH
        assert request.status == BuyerRequestStatus.ACTIVE

    def test_status_forced_active(self, make_request) -> None:
        request = normalize_buyer_request(make_request(status=BuyerRequestStatus.FULFILLED))
        assert request.status == BuyerRequestStatus.ACTIVE

    @pytest.mark.parametrize(("low", "high"), [("300", "100"), ("100", "100")])
    def test_budget_must_increase(self, make_request, low: str, high: str) -> None:
        with pytest.raises(ValidationError, match="budget_min"):
            normalize_buyer_request(make_request(budget_min=Decimal(low), budget_max=Decimal(high)))

    def test_non_positive_budget_rejected(self, make_request) -> None:
        with pytest.raises(ValidationError, match="budget_min"):
            normalize_buyer_request(make_request(budget_min=Decimal("0")))

    def test_districts_required(self, make_request) -> None:
        with pytest.raises(ValidationError, match="preferred district"):
            normalize_buyer_request(make_request(preferred_districts=[" "]))

    def test_contact_required(self, make_request) -> None:
        with pytest.raises(ValidationError, match="contact_phone is required"):
            normalize_buyer_request(make_request(contact_phone=""))

    def test_invalid_timeline(self, make_request) -> None:
        with pytest.raises(ValidationError, match="timeline"):
            normalize_buyer_request(make_request(timeline="someday"))


class TestNormalizeSiteVisit:
    """Tests for normalize_site_visit."""

    def test_missing_visitor_name(self) -> None:
        visit = SiteVisit("prop-001", "", "+256700000000", date(2025, 2, 1), time(10, 0))
        with pytest.raises(ValidationError, match="visitor_name is required"):
            normalize_site_visit(visit)

    def test_missing_date(self) -> None:
        visit = SiteVisit("prop-001", "Grace", "+256700000000", None, time(10, 0))  # type: ignore[arg-type]
        with pytest.raises(ValidationError, match="preferred_date"):
            normalize_site_visit(visit)


class TestTransitions:
    """Tests for property status transition rules."""

    @pytest.mark.parametrize(
        ("current", "new"),
        [
            (PropertyStatus.PENDING, PropertyStatus.APPROVED),
            (PropertyStatus.PENDING, PropertyStatus.WITHDRAWN),
            (PropertyStatus.APPROVED, PropertyStatus.SOLD),
        ],
    )
    def test_allowed(self, current: PropertyStatus, new: PropertyStatus) -> None:
        check_property_transition(current, new)

    @pytest.mark.parametrize(
        ("current", "new"),
        [
            (PropertyStatus.APPROVED, PropertyStatus.PENDING),
            (PropertyStatus.SOLD, PropertyStatus.APPROVED),
            (PropertyStatus.WITHDRAWN, PropertyStatus.APPROVED),
            (PropertyStatus.PENDING, PropertyStatus.SOLD),
            (PropertyStatus.APPROVED, PropertyStatus.APPROVED),
        ],
    )
    def test_rejected(self, current: PropertyStatus, new: PropertyStatus) -> None:
        with pytest.raises(InvalidStatusTransitionError):
            check_property_transition(current, new)

    def test_nothing_returns_to_pending(self) -> None:
        assert all(PropertyStatus.PENDING not in targets for targets in PROPERTY_TRANSITIONS.values())
        assert allowed_sources(PropertyStatus.PENDING) == []

    def test_allowed_sources(self) -> None:
        assert allowed_sources(PropertyStatus.SOLD) == [PropertyStatus.APPROVED]
        assert allowed_sources(PropertyStatus.APPROVED) == [PropertyStatus.PENDING]
