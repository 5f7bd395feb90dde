"""Result ordering shared by filtering and matching."""

from typing import Iterable

from property_match.models.listing import Property


def newest_first(properties: Iterable[Property]) -> list[Property]:
    """Sort by creation time, most recent first.

    The sort is stable, so properties created at the same instant keep
    their incoming order. Records without a timestamp sort last.
    """
    return sorted(
        properties,
        key=lambda p: (p.created_at is not None, p.created_at),
        reverse=True,
    )
