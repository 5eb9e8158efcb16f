"""Unit tests for presentation helpers and image version tokens."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from admin_cache.modules.core.formatting import (
    days_until,
    format_currency,
    format_date,
    format_number,
    format_percentage,
    format_ratio,
    format_relative_date,
)
from admin_cache.modules.core.images import ImageVersions

pytestmark = pytest.mark.unit

NOW = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)


# ===========================================================================
# Numbers and money
# ===========================================================================


class TestNumbers:
    def test_thousands_grouping(self):
        assert format_number(1234567) == "1,234,567"
        assert format_number(Decimal("1234.5"), 2) == "1,234.50"

    def test_rounds_half_up(self):
        assert format_number(Decimal("2.5")) == "3"

    def test_currency_suffix_default_symbol(self):
        assert format_currency(50000, "đ") == "50,000đ"

    def test_currency_prefix(self):
        assert format_currency(Decimal("12.5"), "$", 2, prefix=True) == "$12.50"

    def test_currency_missing_amount(self):
        assert format_currency(None) == "-"

    def test_percentage(self):
        assert format_percentage(15) == "15%"
        assert format_percentage(Decimal("12.50")) == "12.5%"
        assert format_percentage(Decimal("100.00")) == "100%"

    def test_ratio(self):
        assert format_ratio(1, 8) == "12.5"
        assert format_ratio(1, 3) == "33.3"
        assert format_ratio(5, 0) == "0"


# ===========================================================================
# Dates
# ===========================================================================


class TestDates:
    def test_format_date(self):
        assert format_date(date(2024, 1, 9)) == "09/01/2024"
        assert format_date(None) == "-"

    def test_days_until_rounds_up(self):
        assert days_until(datetime(2024, 5, 11, 0, 0, tzinfo=timezone.utc), NOW) == 1
        assert days_until(datetime(2024, 5, 13, 12, 0, tzinfo=timezone.utc), NOW) == 3

    def test_days_until_past_is_not_positive(self):
        assert days_until(datetime(2024, 5, 8, tzinfo=timezone.utc), NOW) <= 0

    @pytest.mark.parametrize(
        "value, expected",
        [
            (date(2024, 5, 10), "today"),
            (date(2024, 5, 11), "tomorrow"),
            (date(2024, 5, 9), "yesterday"),
            (date(2024, 5, 15), "in 5 days"),
            (date(2024, 5, 7), "3 days ago"),
        ],
    )
    def test_relative_date(self, value, expected):
        assert format_relative_date(value, NOW) == expected


# ===========================================================================
# Image versions
# ===========================================================================


class TestImageVersions:
    def test_url_carries_version(self):
        images = ImageVersions()
        images.bump(1)

        assert images.url_for("https://cdn.example.com/logo.png", 1) == (
            "https://cdn.example.com/logo.png?v=1"
        )

    def test_existing_query_kept(self):
        images = ImageVersions()

        url = images.url_for("https://cdn.example.com/logo.png?w=64", 1)

        assert url.startswith("https://cdn.example.com/logo.png?w=64&v=")

    def test_missing_url_passes_through(self):
        images = ImageVersions()

        assert images.url_for(None, 1) is None
        assert images.url_for("", 1) == ""

    def test_bump_moves_only_one_entity(self):
        images = ImageVersions()
        images.bump_all()
        before_other = images.token(2)

        images.bump(1)

        assert images.token(1) > before_other
        assert images.token(2) == before_other

    def test_bump_all_moves_everyone(self):
        images = ImageVersions()
        images.bump(1)
        token_one = images.token(1)

        images.bump_all()

        assert images.token(1) > token_one
        assert images.token(2) == images.token(1)

    def test_generation_tracks_last_bump(self):
        images = ImageVersions()
        assert images.generation == 0

        images.bump(5)
        first = images.generation
        images.bump_all()

        assert images.generation > first
