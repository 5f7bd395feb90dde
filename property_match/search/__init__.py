"""Property filtering and buyer-request matching."""

from property_match.search.filter_engine import apply_filters, matches_filters
from property_match.search.matcher import match, matches, unmet_criteria
from property_match.search.ordering import newest_first

__all__ = [
    "apply_filters",
    "match",
    "matches",
    "matches_filters",
    "newest_first",
    "unmet_criteria",
]
