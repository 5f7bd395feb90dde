"""Sample listing and buyer request generators."""

from __future__ import annotations

import random
from decimal import Decimal
from typing import Iterator

from property_match.generators.base import BaseGenerator
from property_match.models.listing import (
    RESIDENTIAL_TYPES,
    BuyerRequest,
    ContactMethod,
    Property,
    PropertyType,
    Timeline,
    Urgency,
)

# District -> towns, central and eastern Uganda plus the larger regional centres
LOCATIONS: dict[str, list[str]] = {
    "Kampala": ["Kololo", "Ntinda", "Muyenga", "Bugolobi", "Nakawa", "Makindye"],
    "Wakiso": ["Kira", "Nansana", "Entebbe", "Gayaza", "Kajjansi", "Namugongo"],
    "Mukono": ["Mukono Town", "Seeta", "Namanve", "Nakifuma"],
    "Jinja": ["Jinja City", "Bugembe", "Njeru", "Buwenge"],
    "Mbarara": ["Mbarara City", "Kakoba", "Nyamitanga"],
    "Gulu": ["Gulu City", "Layibi", "Pece"],
    "Masaka": ["Masaka City", "Nyendo", "Kimaanya"],
    "Mpigi": ["Mpigi Town", "Buwama", "Kammengo"],
}

# Asking price ranges in UGX by property type
PRICE_RANGES: dict[PropertyType, tuple[int, int]] = {
    PropertyType.LAND: (15_000_000, 600_000_000),
    PropertyType.HOUSE: (120_000_000, 1_500_000_000),
    PropertyType.APARTMENT: (90_000_000, 900_000_000),
    PropertyType.VILLA: (600_000_000, 4_000_000_000),
    PropertyType.COMMERCIAL: (300_000_000, 5_000_000_000),
}

TITLE_TEMPLATES: dict[PropertyType, list[str]] = {
    PropertyType.LAND: ["{acres} Acre Plot in {town}", "Titled Land in {town}"],
    PropertyType.HOUSE: ["{beds} Bedroom House in {town}", "Family Home in {town}"],
    PropertyType.APARTMENT: ["{beds} Bedroom Apartment in {town}", "Modern Flat in {town}"],
    PropertyType.VILLA: ["{beds} Bedroom Villa in {town}", "Luxury Villa in {town}"],
    PropertyType.COMMERCIAL: ["Commercial Building in {town}", "Shop Space in {town}"],
}


class PropertyGenerator(BaseGenerator):
    """Generate synthetic property listings."""

    PROPERTY_TYPES = list(PropertyType)
    TYPE_WEIGHTS = [0.35, 0.30, 0.10, 0.15, 0.10]

    def generate(self) -> Property:
        """Generate a single listing (not yet stored, so no id or status).

        Returns
        -------
        Property
            Generated property.
        """
        property_type = random.choices(self.PROPERTY_TYPES, weights=self.TYPE_WEIGHTS, k=1)[0]
        district = random.choice(list(LOCATIONS))
        town = random.choice(LOCATIONS[district])
        low, high = PRICE_RANGES[property_type]
        # Round to the nearest 100,000 UGX, as sellers quote them
        price = random.randint(low // 100_000, high // 100_000) * 100_000

        bedrooms = bathrooms = None
        size_sqft = None
        if property_type in RESIDENTIAL_TYPES:
            bedrooms = random.randint(1, 6)
            bathrooms = random.randint(1, bedrooms)
            size_sqft = Decimal(random.randint(500, 6000))
        acres = Decimal(random.choice(["0.125", "0.25", "0.5", "1", "2", "5", "10"]))

        title = random.choice(TITLE_TEMPLATES[property_type]).format(
            acres=acres, beds=bedrooms, town=town
        )
        return Property(
            title=title,
            property_type=property_type,
            location_district=district,
            location_town=town,
            location_village=self.fake.street_name() if random.random() < 0.4 else None,
            distance_from_main_road=f"{random.choice([50, 100, 200, 500, 1000])}m",
            has_water=random.random() < 0.7,
            has_power=random.random() < 0.75,
            has_internet=random.random() < 0.4,
            size_acres=acres if property_type != PropertyType.APARTMENT else None,
            size_sqft=size_sqft,
            bedrooms=bedrooms,
            bathrooms=bathrooms,
            asking_price=Decimal(price),
            description=self.fake.paragraph(nb_sentences=3),
            owner_name=self.fake.name(),
            owner_phone=self.phone(),
            owner_email=self.fake.email() if random.random() < 0.6 else None,
        )

    def generate_batch(self, count: int) -> Iterator[Property]:
        """Generate multiple listings.

        Parameters
        ----------
        count : int
            Number of listings to generate.

        Yields
        ------
        Property
            Generated listings.
        """
        for _ in range(count):
            yield self.generate()

    def image_urls(self, max_images: int = 4) -> list[str]:
        """Placeholder image URLs for a listing (possibly none)."""
        return [self.fake.image_url() for _ in range(random.randint(0, max_images))]


class BuyerRequestGenerator(BaseGenerator):
    """Generate synthetic buyer requests."""

    def generate(self) -> BuyerRequest:
        """Generate a single buyer request with a valid budget range."""
        property_type = random.choice(list(PropertyType))
        low, high = PRICE_RANGES[property_type]
        budget_min = random.randint(low // 1_000_000, high // 2_000_000) * 1_000_000
        budget_max = budget_min + random.randint(1, 20) * 25_000_000
        districts = random.sample(list(LOCATIONS), k=random.randint(1, 3))

        residential = property_type in RESIDENTIAL_TYPES
        contact_method = random.choice(list(ContactMethod))
        return BuyerRequest(
            property_type=property_type,
            budget_min=Decimal(budget_min),
            budget_max=Decimal(budget_max),
            preferred_districts=districts,
            preferred_towns=random.choice(LOCATIONS[districts[0]]) if random.random() < 0.3 else None,
            requires_water=random.random() < 0.5,
            requires_power=random.random() < 0.5,
            requires_internet=random.random() < 0.2,
            min_bedrooms=random.randint(1, 4) if residential and random.random() < 0.6 else None,
            min_bathrooms=random.randint(1, 3) if residential and random.random() < 0.3 else None,
            min_size_acres=(
                Decimal(random.choice(["0.25", "0.5", "1", "2"]))
                if property_type == PropertyType.LAND
                else None
            ),
            contact_name=self.fake.name(),
            contact_phone=self.phone(),
            contact_email=(
                self.fake.email()
                if contact_method == ContactMethod.EMAIL or random.random() < 0.5
                else None
            ),
            urgency=random.choice(list(Urgency)),
            preferred_contact_method=contact_method,
            timeline=random.choice(list(Timeline)),
        )

    def generate_batch(self, count: int) -> Iterator[BuyerRequest]:
        """Generate multiple buyer requests."""
        for _ in range(count):
            yield self.generate()
