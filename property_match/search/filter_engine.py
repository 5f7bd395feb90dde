"""Filter engine for public property browsing."""

from typing import Iterable

from property_match.models.listing import FilterSpec, Property
from property_match.search.ordering import newest_first


def apply_filters(properties: Iterable[Property], spec: FilterSpec | None = None) -> list[Property]:
    """Return the properties satisfying every predicate in ``spec``.

    Pure function over an already-approved candidate set: it never looks
    at ``status``. An empty spec returns every candidate; an inverted
    price range simply matches nothing.

    Parameters
    ----------
    properties : Iterable[Property]
        Candidate properties.
    spec : FilterSpec | None
        Filters to apply (None behaves like an empty spec).

    Returns
    -------
    list[Property]
        Matching properties, newest first, cut to ``spec.limit`` if set.
    """
    spec = spec or FilterSpec()
    search_term = spec.search_term
    selected = [p for p in properties if _satisfies(p, spec, search_term)]
    ordered = newest_first(selected)
    if spec.limit is not None:
        ordered = ordered[: spec.limit]
    return ordered


def matches_filters(prop: Property, spec: FilterSpec) -> bool:
    """Whether a single property satisfies ``spec``."""
    return _satisfies(prop, spec, spec.search_term)


def _satisfies(prop: Property, spec: FilterSpec, search_term: str | None) -> bool:
    if spec.property_type is not None and prop.property_type != spec.property_type:
        return False
    if spec.district is not None and prop.location_district != spec.district:
        return False
    if spec.min_price is not None and prop.asking_price < spec.min_price:
        return False
    if spec.max_price is not None and prop.asking_price > spec.max_price:
        return False
    # Utility flags only constrain when set
    if spec.has_water and not prop.has_water:
        return False
    if spec.has_power and not prop.has_power:
        return False
    if spec.has_internet and not prop.has_internet:
        return False
    if search_term is not None and not _contains(prop, search_term):
        return False
    return True


def _contains(prop: Property, term: str) -> bool:
    searchable = (prop.title, prop.description, prop.location_district, prop.location_town)
    return any(text and term in text.lower() for text in searchable)
