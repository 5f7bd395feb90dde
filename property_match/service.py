"""Marketplace operations exposed to the presentation layer."""

import logging
from dataclasses import dataclass, field, replace
from typing import Generic, Iterable, TypeVar

from property_match.config import AppConfig
from property_match.exceptions import NotFoundError
from property_match.models.listing import (
    BuyerRequest,
    BuyerRequestStats,
    FilterSpec,
    Property,
    PropertyStats,
    PropertyStatus,
    SiteVisit,
)
from property_match.notifications import DispatchResult, Notifier, build_notifier
from property_match.store import (
    BuyerRequestRepository,
    InMemoryBuyerRequestRepository,
    InMemoryPropertyRepository,
    InMemorySiteVisitRepository,
    ListingDataStore,
    PostgresBuyerRequestRepository,
    PostgresDatabase,
    PostgresPropertyRepository,
    PostgresSiteVisitRepository,
    PropertyRepository,
    SiteVisitRepository,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Submission(Generic[T]):
    """A stored record plus how its notification went."""

    record: T
    notification: DispatchResult | None = None
    warnings: list[str] = field(default_factory=list)


@dataclass
class MatchNotification:
    request: BuyerRequest
    matches: list[Property]
    notification: DispatchResult | None


@dataclass
class DashboardOverview:
    properties: PropertyStats
    buyer_requests: BuyerRequestStats


class ListingService:
    """Coordinate repositories, matching and notifications.

    Parameters
    ----------
    properties : PropertyRepository
        Listing storage.
    buyer_requests : BuyerRequestRepository
        Buyer request storage.
    site_visits : SiteVisitRepository | None
        Site visit storage (required only for visit bookings).
    notifier : Notifier | None
        Best-effort notifications; None disables them.
    default_limit : int | None
        Page size for ``browse`` when the filters carry no limit; None
        returns every match.
    """

    def __init__(
        self,
        properties: PropertyRepository,
        buyer_requests: BuyerRequestRepository,
        site_visits: SiteVisitRepository | None = None,
        notifier: Notifier | None = None,
        default_limit: int | None = None,
    ) -> None:
        self.properties = properties
        self.buyer_requests = buyer_requests
        self.site_visits = site_visits
        self.notifier = notifier
        self.default_limit = default_limit

    # Submissions
    def submit_property(self, prop: Property, image_urls: Iterable[str] = ()) -> Submission[Property]:
        """Store a seller's listing (pending review), its images, then alert the admin."""
        created = self.properties.create_with_images(prop, image_urls)
        result = self.notifier.property_submitted(created) if self.notifier else None
        return self._notified(created, result)

    def submit_buyer_request(self, request: BuyerRequest) -> Submission[BuyerRequest]:
        """Store a buyer request, then alert the admin."""
        created = self.buyer_requests.create(request)
        result = self.notifier.buyer_request_submitted(created) if self.notifier else None
        return self._notified(created, result)

    def schedule_site_visit(self, visit: SiteVisit) -> SiteVisit:
        if self.site_visits is None:
            raise RuntimeError("ListingService was created without a site visit repository")
        return self.site_visits.create(visit)

    # Browsing
    def browse(self, filters: FilterSpec | None = None) -> list[Property]:
        """Approved listings matching ``filters``, newest first."""
        filters = filters or FilterSpec()
        if filters.limit is None and self.default_limit is not None:
            filters = replace(filters, limit=self.default_limit)
        results = self.properties.get_approved(filters)
        logger.debug("Browse returned %d properties", len(results))
        return results

    def property_details(self, property_id: str) -> Property | None:
        return self.properties.get_by_id(property_id)

    # Administration
    def approve_property(self, property_id: str, admin_id: str) -> Property:
        return self.properties.update_status(property_id, PropertyStatus.APPROVED, approved_by=admin_id)

    def reject_property(self, property_id: str) -> Property:
        return self.properties.update_status(property_id, PropertyStatus.WITHDRAWN)

    def mark_sold(self, property_id: str) -> Property:
        return self.properties.update_status(property_id, PropertyStatus.SOLD)

    def delete_property(self, property_id: str) -> None:
        self.properties.delete(property_id)

    def dashboard(self) -> DashboardOverview:
        return DashboardOverview(
            properties=self.properties.stats(),
            buyer_requests=self.buyer_requests.stats(),
        )

    # Matching
    def match_buyer_request(self, request_id: str) -> list[Property]:
        """Approved properties matching a stored request; the request is left unchanged.

        Raises
        ------
        NotFoundError
            If no buyer request has this id.
        """
        request = self._require_request(request_id)
        matches = self.properties.find_matches(request)
        logger.info("Buyer request %s matches %d properties", request_id, len(matches))
        return matches

    def notify_buyer_matches(self, request_id: str) -> MatchNotification:
        """Send the buyer their current matches. Status changes stay a separate admin action."""
        request = self._require_request(request_id)
        matches = self.properties.find_matches(request)
        result = None
        if self.notifier is not None:
            result = self.notifier.properties_matched(request, matches)
        return MatchNotification(request=request, matches=matches, notification=result)

    def _require_request(self, request_id: str) -> BuyerRequest:
        request = self.buyer_requests.get_by_id(request_id)
        if request is None:
            raise NotFoundError(f"Buyer request {request_id} not found")
        return request

    @staticmethod
    def _notified(record: T, result: DispatchResult | None) -> Submission[T]:
        warnings = [result.warning] if result is not None and result.warning else []
        return Submission(record=record, notification=result, warnings=warnings)


def build_service(config: AppConfig, db: PostgresDatabase | None = None) -> ListingService:
    """Wire a ListingService from ``config``.

    With an initialized ``db`` the PostgreSQL repositories are used;
    without one, listings live in memory for the life of the process.
    """
    recent_days = config.listings.recent_days
    site_visits: SiteVisitRepository
    if db is not None:
        properties: PropertyRepository = PostgresPropertyRepository(db, recent_days=recent_days)
        buyer_requests: BuyerRequestRepository = PostgresBuyerRequestRepository(db, recent_days=recent_days)
        site_visits = PostgresSiteVisitRepository(db)
    else:
        store = ListingDataStore()
        properties = InMemoryPropertyRepository(store, recent_days=recent_days)
        buyer_requests = InMemoryBuyerRequestRepository(store, recent_days=recent_days)
        site_visits = InMemorySiteVisitRepository(store)
    return ListingService(
        properties,
        buyer_requests,
        site_visits=site_visits,
        notifier=build_notifier(config),
        default_limit=config.listings.default_limit,
    )
