"""Aggregate counts for the admin dashboard."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class PropertyStats:
    total: int = 0
    pending: int = 0
    approved: int = 0
    sold: int = 0
    withdrawn: int = 0
    average_price: Decimal | None = None
    recent: int = 0  # Created within the recent window


@dataclass
class BuyerRequestStats:
    total: int = 0
    active: int = 0
    matched: int = 0
    fulfilled: int = 0
    cancelled: int = 0
    recent: int = 0
