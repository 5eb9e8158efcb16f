"""Unit tests for the derived-view engine.

Covers:
- create_selector: identity of results for the same source and params.
- sort_entities: missing values last, locale-aware strings, dates, booleans.
- Predicates: FieldEquals, TextSearch, DateRange, NumericRange.
- group_entities / distinct_values.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from admin_cache.modules.brands.dtos import Brand
from admin_cache.modules.core.selectors import (
    DateRange,
    FieldEquals,
    FilterSpec,
    NumericRange,
    TextSearch,
    create_selector,
    distinct_values,
    filter_entities,
    get_field,
    group_entities,
    sort_entities,
    to_millis,
)

pytestmark = pytest.mark.unit


def _rows(*dicts):
    return tuple(dicts)


# ===========================================================================
# Memoization
# ===========================================================================


class TestCreateSelector:
    def test_same_source_and_params_returns_same_object(self):
        selector = create_selector(lambda content, key: tuple(sorted(content)))
        content = (3, 1, 2)

        first = selector(content, "x")
        second = selector(content, "x")

        assert first is second
        assert selector.recomputations == 1

    def test_new_source_recomputes(self):
        selector = create_selector(lambda content: tuple(content))

        selector((1, 2))
        selector((1, 2, 3))

        assert selector.recomputations == 2

    def test_equal_params_hit_the_memo(self):
        selector = create_selector(filter_entities)
        content = _rows({"city": "Hanoi"}, {"city": "Hue"})

        first = selector(content, FilterSpec((FieldEquals("city", "Hue"),)))
        second = selector(content, FilterSpec((FieldEquals("city", "Hue"),)))

        assert first is second

    def test_different_params_recompute(self):
        selector = create_selector(sort_entities)
        content = _rows({"n": 2}, {"n": 1})

        asc = selector(content, "n", "asc")
        desc = selector(content, "n", "desc")

        assert asc is not desc
        assert selector.recomputations == 2

    def test_lru_eviction(self):
        selector = create_selector(lambda content: list(content), maxsize=1)
        first_source = (1,)
        second_source = (2,)

        first = selector(first_source)
        selector(second_source)
        again = selector(first_source)

        assert again == first
        assert again is not first
        assert selector.recomputations == 3

    def test_clear(self):
        selector = create_selector(lambda content: list(content))
        source = (1,)
        selector(source)

        selector.clear()
        selector(source)

        assert selector.recomputations == 2


# ===========================================================================
# Sorting
# ===========================================================================


class TestSortEntities:
    def test_missing_values_last_ascending(self):
        content = _rows({"name": "B"}, {"name": None}, {"name": "A"})

        result = sort_entities(content, "name", "asc")

        assert [row["name"] for row in result] == ["A", "B", None]

    def test_missing_values_last_descending(self):
        content = _rows({"name": "B"}, {}, {"name": "A"})

        result = sort_entities(content, "name", "desc")

        assert [row.get("name") for row in result] == ["B", "A", None]

    def test_accent_and_case_insensitive(self):
        content = _rows({"name": "zeta"}, {"name": "Ánh"}, {"name": "bình"})

        result = sort_entities(content, "name")

        assert [row["name"] for row in result] == ["Ánh", "bình", "zeta"]

    def test_numbers_sort_numerically(self):
        content = _rows({"n": 10}, {"n": 9}, {"n": Decimal("9.5")})

        result = sort_entities(content, "n")

        assert [row["n"] for row in result] == [9, Decimal("9.5"), 10]

    def test_dates_and_iso_strings_by_instant(self):
        content = _rows(
            {"at": datetime(2024, 3, 1)},
            {"at": date(2024, 1, 1)},
            {"at": datetime(2024, 2, 1, 12, 0)},
        )

        result = sort_entities(content, "at")

        assert [row["at"].month for row in result] == [1, 2, 3]

    def test_booleans_false_first(self):
        content = _rows({"flag": True}, {"flag": False})

        result = sort_entities(content, "flag")

        assert [row["flag"] for row in result] == [False, True]

    def test_stable_for_ties(self):
        content = _rows({"k": 1, "id": "a"}, {"k": 1, "id": "b"}, {"k": 0, "id": "c"})

        result = sort_entities(content, "k")

        assert [row["id"] for row in result] == ["c", "a", "b"]

    def test_unknown_order_rejected(self):
        with pytest.raises(ValueError):
            sort_entities((), "name", "up")

    def test_sorts_models(self):
        content = (Brand(brand_id=1, name="b"), Brand(brand_id=2, name="A"))

        result = sort_entities(content, "name")

        assert [brand.brand_id for brand in result] == [2, 1]


# ===========================================================================
# Predicates
# ===========================================================================


class TestPredicates:
    def test_field_equals_none_matches_all(self):
        assert FieldEquals("status", None).matches({"status": False})

    def test_field_equals(self):
        predicate = FieldEquals("status", True)

        assert predicate.matches({"status": True})
        assert not predicate.matches({"status": False})

    def test_text_search_any_field_case_insensitive(self):
        predicate = TextSearch("acme", ("name", "description"))

        assert predicate.matches({"name": "x", "description": "By ACME corp"})
        assert not predicate.matches({"name": "x", "description": None})

    def test_blank_search_matches_all(self):
        assert TextSearch("  ", ("name",)).matches({"name": "anything"})

    def test_date_range_inclusive(self):
        predicate = DateRange("at", date(2024, 1, 1), date(2024, 1, 31))

        assert predicate.matches({"at": datetime(2024, 1, 1)})
        assert predicate.matches({"at": "2024-01-31T00:00:00"})
        assert not predicate.matches({"at": datetime(2024, 2, 1)})

    def test_date_range_open_ended(self):
        predicate = DateRange("at", start=date(2024, 1, 1))

        assert predicate.matches({"at": datetime(2030, 1, 1)})
        assert not predicate.matches({"at": datetime(2023, 12, 31)})

    def test_date_range_keeps_missing_values(self):
        assert DateRange("at", date(2024, 1, 1)).matches({"at": None})

    def test_numeric_range(self):
        predicate = NumericRange("stock", 5, 10)

        assert predicate.matches({"stock": 5})
        assert predicate.matches({"stock": 10})
        assert not predicate.matches({"stock": 11})
        assert not predicate.matches({"stock": None})

    def test_conjunction(self):
        spec = FilterSpec((FieldEquals("status", True), TextSearch("a", ("name",))))
        content = _rows(
            {"status": True, "name": "alpha"},
            {"status": False, "name": "alpha"},
            {"status": True, "name": "beta"},
        )

        result = filter_entities(content, spec)

        assert result == (content[0], content[2])

    def test_open_spec_returns_everything(self):
        content = _rows({"a": 1}, {"a": 2})

        assert filter_entities(content, FilterSpec()) == content
        assert filter_entities(content, None) == content


# ===========================================================================
# Grouping and helpers
# ===========================================================================


class TestGrouping:
    def test_group_keeps_order(self):
        content = _rows(
            {"city": "Hue", "id": 1},
            {"city": "Hanoi", "id": 2},
            {"city": "Hue", "id": 3},
        )

        groups = group_entities(content, "city")

        assert list(groups) == ["Hue", "Hanoi"]
        assert [row["id"] for row in groups["Hue"]] == [1, 3]

    def test_distinct_values_skip_none(self):
        content = _rows({"size": "M"}, {"size": None}, {"size": "L"}, {"size": "M"})

        assert distinct_values(content, "size") == ("M", "L")


def test_get_field_dotted_path():
    assert get_field({"product": {"productId": 3}}, "product.productId") == 3
    assert get_field({"product": None}, "product.productId") is None


def test_to_millis_treats_naive_as_utc():
    assert to_millis(datetime(1970, 1, 1)) == 0
    assert to_millis(date(1970, 1, 2)) == 86_400_000
    assert to_millis(None) is None
