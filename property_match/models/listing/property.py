"""Property listing models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from property_match.models.listing.enums import PropertyStatus, PropertyType


@dataclass
class PropertyImage:
    """Image attached to a property, ordered by ``image_order``."""

    image_id: str
    property_id: str
    image_url: str
    image_order: int = 0
    is_primary: bool = False
    created_at: datetime | None = None


@dataclass
class Property:
    """Real estate listing submitted by a seller."""

    title: str
    property_type: PropertyType
    location_district: str
    location_town: str
    asking_price: Decimal
    owner_name: str
    owner_phone: str
    location_village: str | None = None
    distance_from_main_road: str | None = None  # Free text, e.g. "200m"
    has_water: bool = False
    has_power: bool = False
    has_internet: bool = False
    size_acres: Decimal | None = None
    size_sqft: Decimal | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    description: str | None = None
    owner_email: str | None = None
    property_id: str = ""  # Assigned by the repository on create
    status: PropertyStatus = PropertyStatus.PENDING
    submitted_by: str | None = None
    approved_by: str | None = None
    approved_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    images: list[PropertyImage] = field(default_factory=list)

    @property
    def primary_image(self) -> PropertyImage | None:
        """The image flagged primary, falling back to the first one."""
        for image in self.images:
            if image.is_primary:
                return image
        return self.images[0] if self.images else None


@dataclass
class PropertyUpdate:
    """Partial update of a listing's editable fields; None leaves a field unchanged."""

    title: str | None = None
    description: str | None = None
    property_type: PropertyType | None = None
    asking_price: Decimal | None = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (self.title, self.description, self.property_type, self.asking_price)
        )
