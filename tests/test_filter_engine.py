"""Tests for the property filter engine."""

from decimal import Decimal

import pytest

from property_match.models.listing import FilterSpec, PropertyStatus, PropertyType
from property_match.search import apply_filters, matches_filters, newest_first


class TestApplyFilters:
    """Tests for apply_filters."""

    def test_house_in_price_range_with_water(self, make_approved) -> None:
        """A matching house is returned until the filter also asks for power."""
        house = make_approved(
            property_type=PropertyType.HOUSE,
            asking_price=Decimal("300000000"),
            location_district="Kampala",
            has_water=True,
            has_power=False,
        )
        spec = FilterSpec(
            property_type=PropertyType.HOUSE,
            min_price=Decimal("200000000"),
            max_price=Decimal("400000000"),
            has_water=True,
        )
        assert apply_filters([house], spec) == [house]

        with_power = FilterSpec(
            property_type=PropertyType.HOUSE,
            min_price=Decimal("200000000"),
            max_price=Decimal("400000000"),
            has_water=True,
            has_power=True,
        )
        assert apply_filters([house], with_power) == []

    def test_empty_spec_returns_everything(self, make_approved) -> None:
        props = [make_approved(age_hours=i) for i in range(3)]
        assert apply_filters(props) == props
        assert apply_filters(props, FilterSpec()) == props

    def test_empty_input(self) -> None:
        assert apply_filters([], FilterSpec(district="Kampala")) == []

    def test_price_bounds_inclusive(self, make_approved) -> None:
        prop = make_approved(asking_price=Decimal("1000"))
        assert apply_filters([prop], FilterSpec(min_price=Decimal("1000"), max_price=Decimal("1000"))) == [prop]

    def test_inverted_price_range_matches_nothing(self, make_approved) -> None:
        prop = make_approved(asking_price=Decimal("1500"))
        spec = FilterSpec(min_price=Decimal("2000"), max_price=Decimal("1000"))
        assert apply_filters([prop], spec) == []

    def test_false_utility_flag_does_not_constrain(self, make_approved) -> None:
        with_water = make_approved(has_water=True)
        without_water = make_approved(has_water=False)
        result = apply_filters([with_water, without_water], FilterSpec(has_water=False))
        assert len(result) == 2

    def test_district_is_exact(self, make_approved) -> None:
        prop = make_approved(location_district="Kampala")
        assert apply_filters([prop], FilterSpec(district="Kampala Central")) == []
        assert apply_filters([prop], FilterSpec(district="Kampala")) == [prop]

    def test_search_matches_town(self, make_approved) -> None:
        """A search finds a property by town even when title and description do not mention it."""
        prop = make_approved(title="Family Home", description="Spacious", location_town="Nakawa")
        assert apply_filters([prop], FilterSpec(search="Nakawa")) == [prop]

    def test_search_matches_description(self, make_approved) -> None:
        prop = make_approved(
            title="Shop Space",
            description="Located near Nakawa market",
            location_town="Bugolobi",
        )
        assert apply_filters([prop], FilterSpec(search="nakawa")) == [prop]

    def test_search_matches_district_case_insensitive(self, make_approved) -> None:
        prop = make_approved(location_district="Mukono", title="Plot", description=None)
        assert apply_filters([prop], FilterSpec(search="MUKONO")) == [prop]

    def test_search_without_hit(self, make_approved) -> None:
        prop = make_approved(title="Plot", description=None, location_town="Kira")
        assert apply_filters([prop], FilterSpec(search="Gulu")) == []

    def test_blank_search_is_ignored(self, make_approved) -> None:
        prop = make_approved()
        assert apply_filters([prop], FilterSpec(search="   ")) == [prop]

    def test_conjunction(self, make_approved) -> None:
        """Every supplied predicate must hold; failing any one excludes the property."""
        base = {
            "property_type": PropertyType.LAND,
            "location_district": "Wakiso",
            "asking_price": Decimal("50000000"),
            "has_water": True,
            "has_power": True,
            "has_internet": True,
            "title": "Titled Land",
        }
        spec = FilterSpec(
            property_type=PropertyType.LAND,
            district="Wakiso",
            min_price=Decimal("10000000"),
            max_price=Decimal("60000000"),
            has_water=True,
            has_power=True,
            has_internet=True,
            search="titled",
        )
        assert matches_filters(make_approved(**base), spec)

        failing = [
            {"property_type": PropertyType.HOUSE},
            {"location_district": "Mukono"},
            {"asking_price": Decimal("5000000")},
            {"asking_price": Decimal("70000000")},
            {"has_water": False},
            {"has_power": False},
            {"has_internet": False},
            {"title": "Plot"},
        ]
        for change in failing:
            assert not matches_filters(make_approved(**{**base, **change}), spec), change

    def test_idempotent(self, make_approved) -> None:
        props = [
            make_approved(age_hours=i, asking_price=Decimal(1000 * (i + 1)), has_power=i % 2 == 0)
            for i in range(6)
        ]
        spec = FilterSpec(max_price=Decimal("4000"), has_power=True)
        once = apply_filters(props, spec)
        assert apply_filters(once, spec) == once

    def test_ignores_status(self, make_approved) -> None:
        """Status is the repository's concern; the engine filters what it is given."""
        pending = make_approved(status=PropertyStatus.PENDING)
        assert apply_filters([pending]) == [pending]

    def test_limit_applied_after_ordering(self, make_approved) -> None:
        old = make_approved(age_hours=10)
        new = make_approved(age_hours=1)
        newer = make_approved(age_hours=0)
        assert apply_filters([old, new, newer], FilterSpec(limit=2)) == [newer, new]

    def test_does_not_mutate_input(self, make_approved) -> None:
        props = [make_approved(age_hours=5), make_approved(age_hours=1)]
        snapshot = list(props)
        apply_filters(props, FilterSpec(district="Nowhere"))
        assert props == snapshot


class TestOrdering:
    """Tests for newest_first."""

    def test_newest_first(self, make_approved) -> None:
        old = make_approved(age_hours=48)
        mid = make_approved(age_hours=24)
        new = make_approved(age_hours=0)
        assert newest_first([mid, old, new]) == [new, mid, old]

    def test_ties_keep_incoming_order(self, make_approved) -> None:
        first = make_approved(age_hours=3)
        second = make_approved(age_hours=3)
        third = make_approved(age_hours=3)
        assert newest_first([first, second, third]) == [first, second, third]

    def test_missing_timestamp_sorts_last(self, make_approved) -> None:
        undated = make_approved(created_at=None)
        dated = make_approved(age_hours=100)
        assert newest_first([undated, dated]) == [dated, undated]

    @pytest.mark.parametrize("count", [0, 1])
    def test_trivial_inputs(self, make_approved, count: int) -> None:
        props = [make_approved() for _ in range(count)]
        assert newest_first(props) == props
