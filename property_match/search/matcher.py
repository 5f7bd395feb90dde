"""Match buyer requests against approved inventory."""

from typing import Iterable

from property_match.models.listing import BuyerRequest, Property, PropertyStatus
from property_match.search.ordering import newest_first

# (request minimum, property field) pairs
MINIMUMS = (
    ("min_bedrooms", "bedrooms"),
    ("min_bathrooms", "bathrooms"),
    ("min_size_acres", "size_acres"),
    ("min_size_sqft", "size_sqft"),
)

UTILITIES = (
    ("requires_water", "has_water"),
    ("requires_power", "has_power"),
    ("requires_internet", "has_internet"),
)


def match(request: BuyerRequest, candidates: Iterable[Property]) -> list[Property]:
    """Return the candidates satisfying every criterion of ``request``, newest first.

    Read-only: the request's status is never touched. A request for a
    property type absent from inventory yields an empty list.
    """
    return newest_first(p for p in candidates if matches(request, p))


def matches(request: BuyerRequest, prop: Property) -> bool:
    """Whether ``prop`` satisfies all of ``request``'s criteria."""
    return not unmet_criteria(request, prop)


def unmet_criteria(request: BuyerRequest, prop: Property) -> list[str]:
    """Names of the request criteria ``prop`` fails, empty when it matches.

    Useful when an admin reviews why a listing was not suggested.
    """
    unmet: list[str] = []
    if prop.status != PropertyStatus.APPROVED:
        unmet.append("status")
    if prop.property_type != request.property_type:
        unmet.append("property_type")
    if not request.budget_min <= prop.asking_price <= request.budget_max:
        unmet.append("budget")
    if prop.location_district not in request.preferred_districts:
        unmet.append("district")

    for requirement, flag in UTILITIES:
        if getattr(request, requirement) and not getattr(prop, flag):
            unmet.append(requirement)

    # A specified minimum needs the property to state the value at all
    for minimum_field, prop_field in MINIMUMS:
        minimum = getattr(request, minimum_field)
        if minimum is None:
            continue
        value = getattr(prop, prop_field)
        if value is None or value < minimum:
            unmet.append(minimum_field)

    return unmet
