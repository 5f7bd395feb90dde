"""Populate repositories with generated listings and buyer requests."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass

from property_match.generators.listing import BuyerRequestGenerator, PropertyGenerator
from property_match.models.listing import PropertyStatus
from property_match.store import BuyerRequestRepository, PropertyRepository

logger = logging.getLogger(__name__)


@dataclass
class LoadSummary:
    """Counts of what a load run stored."""

    properties: int = 0
    images: int = 0
    approved: int = 0
    sold: int = 0
    buyer_requests: int = 0


def load_sample_data(
    properties: PropertyRepository,
    buyer_requests: BuyerRequestRepository,
    num_properties: int,
    num_requests: int,
    seed: int | None = None,
    approve_ratio: float = 0.7,
    sold_ratio: float = 0.1,
    admin_id: str = "sample-admin",
) -> LoadSummary:
    """Generate and store listings and buyer requests through the repositories.

    Listings go through the normal submission path, so they start
    ``pending``; ``approve_ratio`` of them are then approved and
    ``sold_ratio`` of the approved ones marked sold.

    Parameters
    ----------
    properties : PropertyRepository
        Destination for listings and their images.
    buyer_requests : BuyerRequestRepository
        Destination for buyer requests.
    num_properties : int
        Number of listings to generate.
    num_requests : int
        Number of buyer requests to generate.
    seed : int | None
        Random seed for reproducibility.
    approve_ratio : float
        Share of listings to approve.
    sold_ratio : float
        Share of approved listings to mark sold.
    admin_id : str
        Recorded as ``approved_by``.

    Returns
    -------
    LoadSummary
        What was stored.
    """
    property_gen = PropertyGenerator(seed=seed)
    request_gen = BuyerRequestGenerator(seed=seed)
    summary = LoadSummary()

    t0 = time.perf_counter()
    for listing in property_gen.generate_batch(num_properties):
        created = properties.create(listing)
        summary.properties += 1
        summary.images += len(properties.add_images(created.property_id, property_gen.image_urls()))

        if random.random() < approve_ratio:
            properties.update_status(created.property_id, PropertyStatus.APPROVED, approved_by=admin_id)
            summary.approved += 1
            if random.random() < sold_ratio:
                properties.update_status(created.property_id, PropertyStatus.SOLD)
                summary.sold += 1
    logger.info("Loaded %d properties in %.1fs", summary.properties, time.perf_counter() - t0)

    t0 = time.perf_counter()
    for request in request_gen.generate_batch(num_requests):
        buyer_requests.create(request)
        summary.buyer_requests += 1
    logger.info("Loaded %d buyer requests in %.1fs", summary.buyer_requests, time.perf_counter() - t0)

    return summary
