"""Filter specification for public property browsing."""

from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from property_match.exceptions import ValidationError
from property_match.models.listing.enums import PropertyType, coerce_enum

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off", ""})


@dataclass(frozen=True)
class FilterSpec:
    """Optional predicates applied when listing approved properties.

    Every supplied field is ANDed with the others. Utility flags only
    constrain when ``True``; a blank ``search`` is treated as absent.
    """

    property_type: PropertyType | None = None
    district: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    has_water: bool | None = None
    has_power: bool | None = None
    has_internet: bool | None = None
    search: str | None = None
    limit: int | None = None  # Applied after filtering and ordering

    @property
    def search_term(self) -> str | None:
        """Trimmed, lower-cased search text, or None when blank."""
        if self.search is None:
            return None
        term = self.search.strip().lower()
        return term or None

    def is_empty(self) -> bool:
        return self == FilterSpec()

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "FilterSpec":
        """Build a FilterSpec from loosely typed caller input.

        Empty strings and None mean "not supplied", which is how the
        listing form sends unset fields.

        Raises
        ------
        ValidationError
            If ``raw`` has a key that is not a filter field or a value
            that cannot be converted.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ValidationError(f"Unknown filter field(s): {', '.join(unknown)}")

        values: dict[str, Any] = {}
        for key, value in raw.items():
            if value is None or (isinstance(value, str) and value.strip() == "" and key != "search"):
                continue
            if key == "property_type":
                values[key] = coerce_enum(PropertyType, value, "property_type")
            elif key in ("min_price", "max_price"):
                values[key] = _to_decimal(value, key)
            elif key in ("has_water", "has_power", "has_internet"):
                values[key] = _to_bool(value, key)
            elif key == "limit":
                values[key] = _to_limit(value)
            else:
                values[key] = str(value)
        return cls(**values)


def _to_decimal(value: Any, name: str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{name} must be a number, got {value!r}") from None
    if not number.is_finite():
        raise ValidationError(f"{name} must be a finite number, got {value!r}")
    return number


def _to_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ValidationError(f"{name} must be a boolean, got {value!r}")


def _to_limit(value: Any) -> int:
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"limit must be an integer, got {value!r}") from None
    if limit <= 0:
        raise ValidationError(f"limit must be positive, got {limit}")
    return limit
