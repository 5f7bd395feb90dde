"""In-memory listing store with relationship tracking.

Used for tests, demos and dry runs. Repositories hand out copies, so
callers never mutate stored records by accident.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from property_match.exceptions import NotFoundError
from property_match.models.listing import (
    BuyerRequest,
    BuyerRequestStats,
    BuyerRequestStatus,
    FilterSpec,
    Property,
    PropertyImage,
    PropertyStats,
    PropertyStatus,
    PropertyUpdate,
    SiteVisit,
    SiteVisitStatus,
)
from property_match.search import apply_filters, newest_first
from property_match.store.base import (
    DEFAULT_RECENT_DAYS,
    BuyerRequestRepository,
    PropertyRepository,
    SiteVisitRepository,
)
from property_match.validation import check_property_transition


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _is_recent(created_at: datetime | None, days: int) -> bool:
    if created_at is None:
        return False
    return created_at >= datetime.now(created_at.tzinfo) - timedelta(days=days)


@dataclass
class ListingDataStore:
    """In-memory tables for the marketplace."""

    # Primary entities
    properties: dict[str, Property] = field(default_factory=dict)
    images: dict[str, PropertyImage] = field(default_factory=dict)
    buyer_requests: dict[str, BuyerRequest] = field(default_factory=dict)
    site_visits: dict[str, SiteVisit] = field(default_factory=dict)

    # Relationship indexes
    _property_images: dict[str, list[str]] = field(default_factory=dict)

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "properties": len(self.properties),
            "property_images": len(self.images),
            "buyer_requests": len(self.buyer_requests),
            "site_visits": len(self.site_visits),
        }


class InMemoryPropertyRepository(PropertyRepository):
    """Property repository over a ``ListingDataStore``."""

    def __init__(
        self,
        store: ListingDataStore | None = None,
        recent_days: int = DEFAULT_RECENT_DAYS,
    ) -> None:
        super().__init__(recent_days)
        self.store = store if store is not None else ListingDataStore()

    def get_approved(self, filters: FilterSpec | None = None) -> list[Property]:
        approved = [
            p for p in self.store.properties.values() if p.status == PropertyStatus.APPROVED
        ]
        return [self._snapshot(p) for p in apply_filters(approved, filters)]

    def get_all(self) -> list[Property]:
        return [self._snapshot(p) for p in newest_first(self.store.properties.values())]

    def get_by_id(self, property_id: str, approved_only: bool = True) -> Property | None:
        prop = self.store.properties.get(property_id)
        if prop is None:
            return None
        if approved_only and prop.status != PropertyStatus.APPROVED:
            return None
        return self._snapshot(prop)

    def delete(self, property_id: str) -> None:
        if property_id not in self.store.properties:
            raise NotFoundError(f"Property {property_id} not found")
        for image_id in self.store._property_images.pop(property_id, []):
            self.store.images.pop(image_id, None)
        del self.store.properties[property_id]

    def get_images(self, property_id: str) -> list[PropertyImage]:
        image_ids = self.store._property_images.get(property_id, [])
        images = [replace(self.store.images[iid]) for iid in image_ids]
        return sorted(images, key=lambda img: img.image_order)

    def stats(self) -> PropertyStats:
        props = list(self.store.properties.values())
        counts = {status: 0 for status in PropertyStatus}
        for p in props:
            counts[p.status] += 1
        average = None
        if props:
            average = sum((p.asking_price for p in props), Decimal(0)) / len(props)
        return PropertyStats(
            total=len(props),
            pending=counts[PropertyStatus.PENDING],
            approved=counts[PropertyStatus.APPROVED],
            sold=counts[PropertyStatus.SOLD],
            withdrawn=counts[PropertyStatus.WITHDRAWN],
            average_price=average,
            recent=sum(1 for p in props if _is_recent(p.created_at, self.recent_days)),
        )

    def _insert(self, record: Property) -> Property:
        now = _now()
        stored = replace(
            record,
            property_id=str(uuid.uuid4()),
            created_at=record.created_at or now,
            updated_at=now,
            images=[],
        )
        self.store.properties[stored.property_id] = stored
        self.store._property_images[stored.property_id] = []
        return self._snapshot(stored)

    def _transition(
        self, property_id: str, status: PropertyStatus, approved_by: str | None
    ) -> Property:
        prop = self._require(property_id)
        check_property_transition(prop.status, status)
        now = _now()
        prop.status = status
        prop.updated_at = now
        if status == PropertyStatus.APPROVED:
            prop.approved_by = approved_by
            prop.approved_at = now
        return self._snapshot(prop)

    def _apply_update(self, property_id: str, changes: PropertyUpdate) -> Property:
        prop = self._require(property_id)
        if changes.title is not None:
            prop.title = changes.title
        if changes.description is not None:
            prop.description = changes.description
        if changes.property_type is not None:
            prop.property_type = changes.property_type
        if changes.asking_price is not None:
            prop.asking_price = changes.asking_price
        prop.updated_at = _now()
        return self._snapshot(prop)

    def _insert_images(self, property_id: str, urls: list[str]) -> list[PropertyImage]:
        self._require(property_id)
        image_ids = self.store._property_images.setdefault(property_id, [])
        existing = [self.store.images[iid] for iid in image_ids]
        next_order = max((img.image_order for img in existing), default=-1) + 1
        now = _now()

        created = []
        for offset, url in enumerate(urls):
            image = PropertyImage(
                image_id=str(uuid.uuid4()),
                property_id=property_id,
                image_url=url,
                image_order=next_order + offset,
                is_primary=not existing and offset == 0,
                created_at=now,
            )
            self.store.images[image.image_id] = image
            image_ids.append(image.image_id)
            created.append(replace(image))
        return created

    def _require(self, property_id: str) -> Property:
        prop = self.store.properties.get(property_id)
        if prop is None:
            raise NotFoundError(f"Property {property_id} not found")
        return prop

    def _snapshot(self, prop: Property) -> Property:
        return replace(prop, images=self.get_images(prop.property_id))


class InMemoryBuyerRequestRepository(BuyerRequestRepository):
    """Buyer request repository over a ``ListingDataStore``."""

    def __init__(
        self,
        store: ListingDataStore | None = None,
        recent_days: int = DEFAULT_RECENT_DAYS,
    ) -> None:
        super().__init__(recent_days)
        self.store = store if store is not None else ListingDataStore()

    def get_all(self) -> list[BuyerRequest]:
        requests = sorted(
            self.store.buyer_requests.values(),
            key=lambda r: (r.created_at is not None, r.created_at),
            reverse=True,
        )
        return [self._snapshot(r) for r in requests]

    def get_by_id(self, request_id: str) -> BuyerRequest | None:
        request = self.store.buyer_requests.get(request_id)
        return self._snapshot(request) if request is not None else None

    def stats(self) -> BuyerRequestStats:
        requests = list(self.store.buyer_requests.values())
        counts = {status: 0 for status in BuyerRequestStatus}
        for r in requests:
            counts[r.status] += 1
        return BuyerRequestStats(
            total=len(requests),
            active=counts[BuyerRequestStatus.ACTIVE],
            matched=counts[BuyerRequestStatus.MATCHED],
            fulfilled=counts[BuyerRequestStatus.FULFILLED],
            cancelled=counts[BuyerRequestStatus.CANCELLED],
            recent=sum(1 for r in requests if _is_recent(r.created_at, self.recent_days)),
        )

    def _insert(self, record: BuyerRequest) -> BuyerRequest:
        now = _now()
        stored = replace(
            record,
            request_id=str(uuid.uuid4()),
            created_at=record.created_at or now,
            updated_at=now,
        )
        self.store.buyer_requests[stored.request_id] = stored
        return self._snapshot(stored)

    def _set_status(self, request_id: str, status: BuyerRequestStatus) -> BuyerRequest:
        request = self.store.buyer_requests.get(request_id)
        if request is None:
            raise NotFoundError(f"Buyer request {request_id} not found")
        request.status = status
        request.updated_at = _now()
        return self._snapshot(request)

    @staticmethod
    def _snapshot(request: BuyerRequest) -> BuyerRequest:
        return replace(request, preferred_districts=list(request.preferred_districts))


class InMemorySiteVisitRepository(SiteVisitRepository):
    """Site visit repository over a ``ListingDataStore``."""

    def __init__(self, store: ListingDataStore | None = None) -> None:
        self.store = store if store is not None else ListingDataStore()

    def get_all(self) -> list[SiteVisit]:
        visits = sorted(
            self.store.site_visits.values(),
            key=lambda v: (v.created_at is not None, v.created_at),
            reverse=True,
        )
        return [self._with_property(v) for v in visits]

    def _insert(self, record: SiteVisit) -> SiteVisit:
        prop = self.store.properties.get(record.property_id)
        if prop is None or prop.status != PropertyStatus.APPROVED:
            raise NotFoundError(f"Property {record.property_id} not found")
        stored = replace(
            record,
            visit_id=str(uuid.uuid4()),
            created_at=record.created_at or _now(),
            property_title=None,
            location_district=None,
            location_town=None,
        )
        self.store.site_visits[stored.visit_id] = stored
        return self._with_property(stored)

    def _set_status(self, visit_id: str, status: SiteVisitStatus) -> SiteVisit:
        visit = self.store.site_visits.get(visit_id)
        if visit is None:
            raise NotFoundError(f"Site visit {visit_id} not found")
        visit.status = status
        return self._with_property(visit)

    def _with_property(self, visit: SiteVisit) -> SiteVisit:
        prop = self.store.properties.get(visit.property_id)
        if prop is None:
            return replace(visit)
        return replace(
            visit,
            property_title=prop.title,
            location_district=prop.location_district,
            location_town=prop.location_town,
        )
