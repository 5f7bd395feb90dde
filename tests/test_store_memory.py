"""Tests for the in-memory repositories."""

from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from unittest.mock import patch

import pytest

from property_match.exceptions import InvalidStatusTransitionError, NotFoundError, ValidationError
from property_match.models.listing import (
    BuyerRequestStatus,
    FilterSpec,
    PropertyStatus,
    PropertyType,
    PropertyUpdate,
    SiteVisit,
    SiteVisitStatus,
)
from property_match.store import InMemoryPropertyRepository, ListingDataStore


def _approve(repo, prop):
    created = repo.create(prop)
    return repo.update_status(created.property_id, PropertyStatus.APPROVED, approved_by="admin-1")


class TestPropertyCreate:
    """Tests for creating listings."""

    def test_create_assigns_id_and_pending(self, property_repo, make_property) -> None:
        created = property_repo.create(make_property(status=PropertyStatus.APPROVED))
        assert created.property_id
        assert created.status == PropertyStatus.PENDING
        assert created.created_at is not None
        assert created.approved_by is None

    def test_ids_unique(self, property_repo, make_property) -> None:
        ids = {property_repo.create(make_property()).property_id for _ in range(5)}
        assert len(ids) == 5

    def test_zero_price_rejected(self, property_repo, make_property, data_store) -> None:
        with pytest.raises(ValidationError):
            property_repo.create(make_property(asking_price=Decimal("0")))
        assert data_store.properties == {}

    def test_returned_copy_is_detached(self, property_repo, make_property) -> None:
        created = property_repo.create(make_property())
        created.title = "Changed"
        assert property_repo.get_by_id(created.property_id, approved_only=False).title != "Changed"


class TestPropertyQueries:
    """Tests for approved listing queries."""

    def test_pending_hidden(self, property_repo, make_property, make_request) -> None:
        """A pending listing never shows up, however well it fits."""
        pending = property_repo.create(make_property())
        assert property_repo.get_approved() == []
        assert property_repo.get_approved(FilterSpec(district="Wakiso")) == []
        assert property_repo.get_by_id(pending.property_id) is None
        assert property_repo.find_matches(make_request()) == []

    def test_get_by_id_admin_view(self, property_repo, make_property) -> None:
        pending = property_repo.create(make_property())
        found = property_repo.get_by_id(pending.property_id, approved_only=False)
        assert found is not None and found.status == PropertyStatus.PENDING

    def test_get_by_id_unknown(self, property_repo) -> None:
        assert property_repo.get_by_id("nope") is None

    def test_get_approved_filters_and_orders(self, property_repo, make_property) -> None:
        base = datetime(2025, 3, 1, tzinfo=timezone.utc)
        older = _approve(property_repo, make_property(created_at=base))
        newer = _approve(property_repo, make_property(created_at=base + timedelta(days=1)))
        _approve(property_repo, make_property(property_type=PropertyType.LAND, bedrooms=None))

        houses = property_repo.get_approved(FilterSpec(property_type=PropertyType.HOUSE))
        assert [p.property_id for p in houses] == [newer.property_id, older.property_id]

    def test_naive_created_at_orders_with_stamped(self, property_repo, make_property) -> None:
        """A caller-supplied naive time is stored as UTC and sorts with generated times."""
        imported = _approve(property_repo, make_property(created_at=datetime(2024, 1, 1)))
        fresh = _approve(property_repo, make_property())

        listed = property_repo.get_approved()

        assert [p.property_id for p in listed] == [fresh.property_id, imported.property_id]
        assert listed[1].created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_get_all_includes_every_status(self, property_repo, make_property) -> None:
        property_repo.create(make_property())
        _approve(property_repo, make_property())
        assert len(property_repo.get_all()) == 2

    def test_find_matches(self, property_repo, make_property, make_request) -> None:
        hit = _approve(property_repo, make_property(location_district="Kampala"))
        _approve(property_repo, make_property(location_district="Jinja"))
        matches = property_repo.find_matches(make_request())
        assert [p.property_id for p in matches] == [hit.property_id]


class TestPropertyStatus:
    """Tests for status transitions."""

    def test_approve_records_admin_and_time(self, property_repo, make_property) -> None:
        approved = _approve(property_repo, make_property())
        assert approved.status == PropertyStatus.APPROVED
        assert approved.approved_by == "admin-1"
        assert approved.approved_at is not None

    def test_approve_requires_admin(self, property_repo, make_property) -> None:
        created = property_repo.create(make_property())
        with pytest.raises(ValidationError, match="approved_by"):
            property_repo.update_status(created.property_id, "approved")

    def test_unknown_id(self, property_repo) -> None:
        with pytest.raises(NotFoundError):
            property_repo.update_status("missing", PropertyStatus.APPROVED, approved_by="admin-1")

    def test_invalid_status_value(self, property_repo, make_property) -> None:
        created = property_repo.create(make_property())
        with pytest.raises(ValidationError, match="Invalid status"):
            property_repo.update_status(created.property_id, "archived")

    def test_sold_after_approved(self, property_repo, make_property) -> None:
        approved = _approve(property_repo, make_property())
        sold = property_repo.update_status(approved.property_id, "sold")
        assert sold.status == PropertyStatus.SOLD
        assert sold.approved_by == "admin-1"
        assert property_repo.get_approved() == []

    def test_cannot_sell_pending(self, property_repo, make_property) -> None:
        created = property_repo.create(make_property())
        with pytest.raises(InvalidStatusTransitionError):
            property_repo.update_status(created.property_id, PropertyStatus.SOLD)
        assert property_repo.get_by_id(created.property_id, approved_only=False).status == PropertyStatus.PENDING

    def test_withdrawn_is_final(self, property_repo, make_property) -> None:
        created = property_repo.create(make_property())
        property_repo.update_status(created.property_id, PropertyStatus.WITHDRAWN)
        with pytest.raises(InvalidStatusTransitionError):
            property_repo.update_status(created.property_id, PropertyStatus.APPROVED, approved_by="a")


class TestPropertyUpdateAndDelete:
    """Tests for partial updates and deletion."""

    def test_partial_update(self, property_repo, make_property) -> None:
        created = property_repo.create(make_property())
        updated = property_repo.update(created.property_id, PropertyUpdate(asking_price=Decimal("9000")))
        assert updated.asking_price == Decimal("9000")
        assert updated.title == created.title

    def test_update_unknown(self, property_repo) -> None:
        with pytest.raises(NotFoundError):
            property_repo.update("missing", PropertyUpdate(title="x"))

    def test_delete_removes_images(self, property_repo, make_property, data_store) -> None:
        """After delete, the listing and its images are gone."""
        created = property_repo.create(make_property())
        property_repo.add_images(created.property_id, ["https://img/1.jpg", "https://img/2.jpg"])

        property_repo.delete(created.property_id)

        assert property_repo.get_by_id(created.property_id, approved_only=False) is None
        assert property_repo.get_images(created.property_id) == []
        assert data_store.images == {}

    def test_delete_unknown(self, property_repo) -> None:
        with pytest.raises(NotFoundError):
            property_repo.delete("missing")


class TestPropertyImages:
    """Tests for image handling."""

    def test_first_image_primary(self, property_repo, make_property) -> None:
        created = property_repo.create(make_property())
        images = property_repo.add_images(created.property_id, ["a.jpg", "", "b.jpg"])
        assert [(i.image_url, i.image_order, i.is_primary) for i in images] == [
            ("a.jpg", 0, True),
            ("b.jpg", 1, False),
        ]

    def test_appended_images_continue_order(self, property_repo, make_property) -> None:
        created = property_repo.create(make_property())
        property_repo.add_images(created.property_id, ["a.jpg"])
        more = property_repo.add_images(created.property_id, ["b.jpg", "c.jpg"])
        assert [i.image_order for i in more] == [1, 2]
        assert not any(i.is_primary for i in more)

    def test_images_attached_to_listing(self, property_repo, make_property) -> None:
        approved = _approve(property_repo, make_property())
        property_repo.add_images(approved.property_id, ["a.jpg", "b.jpg"])
        found = property_repo.get_by_id(approved.property_id)
        assert [i.image_url for i in found.images] == ["a.jpg", "b.jpg"]
        assert found.primary_image.image_url == "a.jpg"

    def test_no_urls(self, property_repo, make_property) -> None:
        created = property_repo.create(make_property())
        assert property_repo.add_images(created.property_id, []) == []

    def test_unknown_property(self, property_repo) -> None:
        with pytest.raises(NotFoundError):
            property_repo.add_images("missing", ["a.jpg"])


class TestCreateWithImages:
    """Tests for storing a listing and its images together."""

    def test_creates_listing_and_images(self, property_repo, make_property) -> None:
        created = property_repo.create_with_images(make_property(), ["a.jpg", "b.jpg"])
        assert created.status == PropertyStatus.PENDING
        assert [i.image_url for i in created.images] == ["a.jpg", "b.jpg"]
        assert len(property_repo.get_images(created.property_id)) == 2

    def test_without_images(self, property_repo, make_property, data_store) -> None:
        created = property_repo.create_with_images(make_property())
        assert created.images == []
        assert list(data_store.properties) == [created.property_id]

    def test_image_failure_removes_listing(self, property_repo, make_property, data_store) -> None:
        """No pending listing is left behind when its images cannot be saved."""
        with patch.object(property_repo, "_insert_images", side_effect=RuntimeError("disk full")):
            with pytest.raises(RuntimeError, match="disk full"):
                property_repo.create_with_images(make_property(), ["a.jpg"])

        assert data_store.properties == {}
        assert data_store.images == {}

    def test_invalid_listing_saves_nothing(self, property_repo, make_property, data_store) -> None:
        with pytest.raises(ValidationError):
            property_repo.create_with_images(make_property(owner_name=" "), ["a.jpg"])
        assert data_store.properties == {}
        assert data_store.images == {}


class TestPropertyStats:
    """Tests for dashboard counts."""

    def test_stats(self, make_property) -> None:
        repo = InMemoryPropertyRepository(ListingDataStore(), recent_days=30)
        long_ago = datetime.now(timezone.utc) - timedelta(days=90)
        repo.create(make_property(asking_price=Decimal("100"), created_at=long_ago))
        _approve(repo, make_property(asking_price=Decimal("300")))

        stats = repo.stats()
        assert stats.total == 2
        assert stats.pending == 1
        assert stats.approved == 1
        assert stats.sold == 0
        assert stats.average_price == Decimal("200")
        assert stats.recent == 1

    def test_empty_stats(self, property_repo) -> None:
        stats = property_repo.stats()
        assert stats.total == 0
        assert stats.average_price is None


class TestBuyerRequestRepository:
    """Tests for buyer requests."""

    def test_create_forces_active(self, request_repo, make_request) -> None:
        created = request_repo.create(make_request(status=BuyerRequestStatus.MATCHED))
        assert created.request_id
        assert created.status == BuyerRequestStatus.ACTIVE

    def test_invalid_budget(self, request_repo, make_request) -> None:
        with pytest.raises(ValidationError):
            request_repo.create(make_request(budget_min=Decimal("500"), budget_max=Decimal("100")))

    def test_get_by_id(self, request_repo, make_request) -> None:
        created = request_repo.create(make_request())
        assert request_repo.get_by_id(created.request_id) == created
        assert request_repo.get_by_id("missing") is None

    def test_get_all_newest_first(self, request_repo, make_request) -> None:
        base = datetime(2025, 1, 1, tzinfo=timezone.utc)
        first = request_repo.create(make_request(created_at=base))
        second = request_repo.create(make_request(created_at=base + timedelta(hours=1)))
        assert [r.request_id for r in request_repo.get_all()] == [second.request_id, first.request_id]

    def test_update_status_any_value(self, request_repo, make_request) -> None:
        created = request_repo.create(make_request())
        for status in ("matched", "cancelled", "active", "fulfilled"):
            assert request_repo.update_status(created.request_id, status).status == BuyerRequestStatus(status)

    def test_update_status_unknown(self, request_repo) -> None:
        with pytest.raises(NotFoundError):
            request_repo.update_status("missing", BuyerRequestStatus.MATCHED)

    def test_stats(self, request_repo, make_request) -> None:
        created = request_repo.create(make_request())
        request_repo.create(make_request())
        request_repo.update_status(created.request_id, BuyerRequestStatus.FULFILLED)
        stats = request_repo.stats()
        assert (stats.total, stats.active, stats.fulfilled, stats.recent) == (2, 1, 1, 2)


class TestSiteVisitRepository:
    """Tests for site visit bookings."""

    def _visit(self, property_id: str) -> SiteVisit:
        return SiteVisit(
            property_id=property_id,
            visitor_name="Grace Auma",
            visitor_phone="+256752000333",
            preferred_date=date(2025, 2, 14),
            preferred_time=time(10, 30),
        )

    def test_book_visit(self, property_repo, visit_repo, make_property) -> None:
        approved = _approve(property_repo, make_property(title="Lake View Villa"))
        visit = visit_repo.create(self._visit(approved.property_id))
        assert visit.visit_id
        assert visit.status == SiteVisitStatus.PENDING
        assert visit.property_title == "Lake View Villa"

    def test_pending_property_rejected(self, property_repo, visit_repo, make_property) -> None:
        pending = property_repo.create(make_property())
        with pytest.raises(NotFoundError):
            visit_repo.create(self._visit(pending.property_id))

    def test_update_status(self, property_repo, visit_repo, make_property) -> None:
        approved = _approve(property_repo, make_property())
        visit = visit_repo.create(self._visit(approved.property_id))
        confirmed = visit_repo.update_status(visit.visit_id, "confirmed")
        assert confirmed.status == SiteVisitStatus.CONFIRMED
        assert visit_repo.get_all()[0].status == SiteVisitStatus.CONFIRMED

    def test_update_unknown(self, visit_repo) -> None:
        with pytest.raises(NotFoundError):
            visit_repo.update_status("missing", SiteVisitStatus.CANCELLED)
