"""Sample data generators for demos, load scripts and tests."""

from property_match.generators.base import BaseGenerator
from property_match.generators.listing import BuyerRequestGenerator, PropertyGenerator
from property_match.generators.loader import LoadSummary, load_sample_data

__all__ = [
    "BaseGenerator",
    "BuyerRequestGenerator",
    "LoadSummary",
    "PropertyGenerator",
    "load_sample_data",
]
