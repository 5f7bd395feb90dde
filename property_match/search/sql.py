"""Compile filters and buyer criteria into parameterized SQL predicates.

The clauses mirror ``apply_filters`` and ``match`` exactly so the
PostgreSQL repository can push predicates into the query instead of
filtering in Python. Clause text is fixed; every user value travels as
a ``%s`` parameter.
"""

from typing import Any

from property_match.models.listing import BuyerRequest, FilterSpec, PropertyStatus
from property_match.search.matcher import MINIMUMS, UTILITIES

# Columns of a property row (alias ``p``), in SELECT order
PROPERTY_COLUMNS = (
    "id",
    "title",
    "property_type",
    "location_district",
    "location_town",
    "location_village",
    "distance_from_main_road",
    "has_water",
    "has_power",
    "has_internet",
    "size_acres",
    "size_sqft",
    "bedrooms",
    "bathrooms",
    "asking_price",
    "description",
    "owner_name",
    "owner_phone",
    "owner_email",
    "status",
    "submitted_by",
    "approved_by",
    "approved_at",
    "created_at",
    "updated_at",
)

SEARCH_COLUMNS = ("p.title", "p.description", "p.location_district", "p.location_town")

ORDER_NEWEST_FIRST = "ORDER BY p.created_at DESC, p.id DESC"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def compile_filters(spec: FilterSpec | None) -> tuple[list[str], list[Any]]:
    """Translate a FilterSpec into WHERE clauses and their parameters.

    Returns
    -------
    tuple[list[str], list[Any]]
        Clauses to AND together and the positional parameters they use.
    """
    clauses: list[str] = []
    params: list[Any] = []
    if spec is None:
        return clauses, params

    if spec.property_type is not None:
        clauses.append("p.property_type = %s")
        params.append(spec.property_type.value)
    if spec.district is not None:
        clauses.append("p.location_district = %s")
        params.append(spec.district)
    if spec.min_price is not None:
        clauses.append("p.asking_price >= %s")
        params.append(spec.min_price)
    if spec.max_price is not None:
        clauses.append("p.asking_price <= %s")
        params.append(spec.max_price)
    if spec.has_water:
        clauses.append("p.has_water = true")
    if spec.has_power:
        clauses.append("p.has_power = true")
    if spec.has_internet:
        clauses.append("p.has_internet = true")

    term = spec.search_term
    if term is not None:
        pattern = f"%{escape_like(term)}%"
        clauses.append("(" + " OR ".join(f"{col} ILIKE %s" for col in SEARCH_COLUMNS) + ")")
        params.extend([pattern] * len(SEARCH_COLUMNS))

    return clauses, params


def compile_match(request: BuyerRequest) -> tuple[list[str], list[Any]]:
    """Translate a buyer request's criteria into WHERE clauses and parameters."""
    clauses = [
        "p.status = %s",
        "p.property_type = %s",
        "p.asking_price BETWEEN %s AND %s",
        "p.location_district = ANY(%s)",
    ]
    params: list[Any] = [
        PropertyStatus.APPROVED.value,
        request.property_type.value,
        request.budget_min,
        request.budget_max,
        list(request.preferred_districts),
    ]

    for requirement, flag in UTILITIES:
        if getattr(request, requirement):
            clauses.append(f"p.{flag} = true")

    # NULL >= n is never true, so a missing value fails the minimum
    for minimum_field, prop_field in MINIMUMS:
        minimum = getattr(request, minimum_field)
        if minimum is not None:
            clauses.append(f"p.{prop_field} >= %s")
            params.append(minimum)

    return clauses, params


def where(clauses: list[str]) -> str:
    """Join clauses into a WHERE fragment (empty when there are none)."""
    if not clauses:
        return ""
    return "WHERE " + " AND ".join(clauses)
