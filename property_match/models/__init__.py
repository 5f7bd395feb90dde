"""Domain models for the property marketplace."""

from property_match.models.base import Event

__all__ = ["Event"]
