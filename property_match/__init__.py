"""property-match: listing, filtering and buyer matching for a property marketplace."""

__version__ = "0.1.0"
