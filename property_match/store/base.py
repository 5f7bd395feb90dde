"""Repository contracts shared by the in-memory and PostgreSQL stores.

Validation and status rules live here so both backends enforce them the
same way; subclasses only implement storage.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Iterable

from property_match.exceptions import ValidationError
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
from property_match.models.listing.enums import coerce_enum
from property_match.search import match
from property_match.validation import (
    normalize_buyer_request,
    normalize_property,
    normalize_property_update,
    normalize_site_visit,
)

logger = logging.getLogger(__name__)

DEFAULT_RECENT_DAYS = 30


class PropertyRepository(ABC):
    """Storage for property listings and their ordered images."""

    def __init__(self, recent_days: int = DEFAULT_RECENT_DAYS) -> None:
        self.recent_days = recent_days

    def create(self, prop: Property) -> Property:
        """Validate and store a new listing with status ``pending``.

        Raises
        ------
        ValidationError
            If a required field is missing or a numeric field is out of range.
        """
        record = replace(
            normalize_property(prop),
            property_id="",
            status=PropertyStatus.PENDING,
            approved_by=None,
            approved_at=None,
        )
        created = self._insert(record)
        logger.info(
            "Created property %s (%s in %s)",
            created.property_id,
            created.property_type.value,
            created.location_district,
            extra={"property_id": created.property_id, "status": created.status.value},
        )
        return created

    def create_with_images(self, prop: Property, image_urls: Iterable[str] = ()) -> Property:
        """Create a listing together with its images, or neither.

        Backends without transactions delete the new listing again when
        the images cannot be saved, then re-raise the original error.
        """
        created = self.create(prop)
        try:
            images = self.add_images(created.property_id, image_urls)
        except Exception:
            logger.warning(
                "Saving images failed; removing property %s",
                created.property_id,
                extra={"property_id": created.property_id},
            )
            self.delete(created.property_id)
            raise
        return replace(created, images=images) if images else created

    def update_status(
        self,
        property_id: str,
        status: PropertyStatus | str,
        approved_by: str | None = None,
    ) -> Property:
        """Move a listing to ``status`` if the transition is allowed.

        Approval records ``approved_by`` and the approval time together.

        Raises
        ------
        NotFoundError
            If no property has this id.
        InvalidStatusTransitionError
            If the current status cannot move to ``status``.
        ValidationError
            If ``status`` is unknown or an approval lacks ``approved_by``.
        """
        new_status = coerce_enum(PropertyStatus, status, "status")
        if new_status == PropertyStatus.APPROVED:
            if not approved_by or not str(approved_by).strip():
                raise ValidationError("approved_by is required to approve a property")
        else:
            approved_by = None

        updated = self._transition(property_id, new_status, approved_by)
        logger.info(
            "Property %s is now %s",
            property_id,
            new_status.value,
            extra={"property_id": property_id, "status": new_status.value},
        )
        return updated

    def update(self, property_id: str, changes: PropertyUpdate) -> Property:
        """Apply a partial update to a listing's editable fields."""
        updated = self._apply_update(property_id, normalize_property_update(changes))
        logger.info("Updated property %s", property_id, extra={"property_id": property_id})
        return updated

    def add_images(self, property_id: str, image_urls: Iterable[str]) -> list[PropertyImage]:
        """Append images in order; a property's first image becomes primary.

        Raises
        ------
        NotFoundError
            If no property has this id.
        """
        urls = [url for url in image_urls if url]
        if not urls:
            return []
        images = self._insert_images(property_id, urls)
        logger.info(
            "Saved %d image(s) for property %s",
            len(images),
            property_id,
            extra={"property_id": property_id},
        )
        return images

    def find_matches(self, request: BuyerRequest) -> list[Property]:
        """Approved properties satisfying every criterion of ``request``."""
        return match(request, self.get_approved())

    @abstractmethod
    def get_approved(self, filters: FilterSpec | None = None) -> list[Property]:
        """Approved properties with images attached, newest first."""

    @abstractmethod
    def get_all(self) -> list[Property]:
        """Every property regardless of status, images attached, newest first."""

    @abstractmethod
    def get_by_id(self, property_id: str, approved_only: bool = True) -> Property | None:
        """A single property with images, or None when absent (or not approved)."""

    @abstractmethod
    def delete(self, property_id: str) -> None:
        """Delete a property and its images; NotFoundError for an unknown id."""

    @abstractmethod
    def get_images(self, property_id: str) -> list[PropertyImage]:
        """Images of a property ordered by ``image_order``."""

    @abstractmethod
    def stats(self) -> PropertyStats:
        """Counts by status, average asking price and recent submissions."""

    @abstractmethod
    def _insert(self, record: Property) -> Property: ...

    @abstractmethod
    def _transition(
        self, property_id: str, status: PropertyStatus, approved_by: str | None
    ) -> Property: ...

    @abstractmethod
    def _apply_update(self, property_id: str, changes: PropertyUpdate) -> Property: ...

    @abstractmethod
    def _insert_images(self, property_id: str, urls: list[str]) -> list[PropertyImage]: ...


class BuyerRequestRepository(ABC):
    """Storage for buyer search criteria."""

    def __init__(self, recent_days: int = DEFAULT_RECENT_DAYS) -> None:
        self.recent_days = recent_days

    def create(self, request: BuyerRequest) -> BuyerRequest:
        """Validate and store a request; status is always ``active`` on creation.

        Raises
        ------
        ValidationError
            If the budget range is not increasing, no district is given,
            or a required field is missing.
        """
        record = replace(normalize_buyer_request(request), request_id="")
        created = self._insert(record)
        logger.info(
            "Created buyer request %s (%s in %s)",
            created.request_id,
            created.property_type.value,
            ", ".join(created.preferred_districts),
            extra={"request_id": created.request_id, "status": created.status.value},
        )
        return created

    def update_status(self, request_id: str, status: BuyerRequestStatus | str) -> BuyerRequest:
        """Set any of the four request statuses; NotFoundError for an unknown id."""
        new_status = coerce_enum(BuyerRequestStatus, status, "status")
        updated = self._set_status(request_id, new_status)
        logger.info(
            "Buyer request %s is now %s",
            request_id,
            new_status.value,
            extra={"request_id": request_id, "status": new_status.value},
        )
        return updated

    @abstractmethod
    def get_all(self) -> list[BuyerRequest]:
        """All requests, newest first."""

    @abstractmethod
    def get_by_id(self, request_id: str) -> BuyerRequest | None:
        """A single request, or None when absent."""

    @abstractmethod
    def stats(self) -> BuyerRequestStats:
        """Counts by status and recent submissions."""

    @abstractmethod
    def _insert(self, record: BuyerRequest) -> BuyerRequest: ...

    @abstractmethod
    def _set_status(self, request_id: str, status: BuyerRequestStatus) -> BuyerRequest: ...


class SiteVisitRepository(ABC):
    """Storage for site visit bookings."""

    def create(self, visit: SiteVisit) -> SiteVisit:
        """Book a visit to an approved property; status starts ``pending``.

        Raises
        ------
        ValidationError
            If visitor details or the preferred slot are missing.
        NotFoundError
            If the property does not exist or is not approved.
        """
        record = replace(
            normalize_site_visit(visit),
            visit_id="",
            status=SiteVisitStatus.PENDING,
        )
        created = self._insert(record)
        logger.info(
            "Booked site visit %s for property %s",
            created.visit_id,
            created.property_id,
            extra={"visit_id": created.visit_id, "property_id": created.property_id},
        )
        return created

    def update_status(self, visit_id: str, status: SiteVisitStatus | str) -> SiteVisit:
        new_status = coerce_enum(SiteVisitStatus, status, "status")
        updated = self._set_status(visit_id, new_status)
        logger.info(
            "Site visit %s is now %s",
            visit_id,
            new_status.value,
            extra={"visit_id": visit_id, "status": new_status.value},
        )
        return updated

    @abstractmethod
    def get_all(self) -> list[SiteVisit]:
        """All visits, newest first, with the property's title and location."""

    @abstractmethod
    def _insert(self, record: SiteVisit) -> SiteVisit: ...

    @abstractmethod
    def _set_status(self, visit_id: str, status: SiteVisitStatus) -> SiteVisit: ...
