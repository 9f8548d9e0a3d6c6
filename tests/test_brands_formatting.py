"""Tests for brand lookup and display formatting."""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal

from trackie.brands import DEFAULT_BRAND_COLOR, KNOWN_BRANDS, brand_for
from trackie.formatting import format_amount, ordinal, tenure


class TestBrandLookup:
    """Tests for brand_for."""

    def test_known_brand_case_insensitive(self):
        assert brand_for("NETFLIX") == ("#E50914", "N")
        assert brand_for("  spotify ").color == "#1DB954"

    def test_unknown_brand_uses_default(self):
        brand = brand_for("acme cloud")
        assert brand.color == DEFAULT_BRAND_COLOR
        assert brand.initial == "A"

    def test_custom_default_color(self):
        assert brand_for("zed", default_color="#000000").color == "#000000"

    def test_empty_name(self):
        assert brand_for("").initial == "?"

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            KNOWN_BRANDS["new"] = ("#000000", "N")


class TestFormatAmount:
    """Tests for Indian-grouped amounts."""

    @pytest.mark.parametrize("amount,expected", [
        (Decimal("0"), "₹0"),
        (Decimal("649"), "₹649"),
        (Decimal("1200"), "₹1,200"),
        (Decimal("123456"), "₹1,23,456"),
        (Decimal("1234567"), "₹12,34,567"),
        (Decimal("119.5"), "₹119.50"),
        (Decimal("99.00"), "₹99"),
        (Decimal("0.125"), "₹0.13"),
        (Decimal("2.675"), "₹2.68"),
        (Decimal("99.995"), "₹100"),
    ])
    def test_grouping(self, amount, expected):
        assert format_amount(amount) == expected

    def test_custom_symbol(self):
        assert format_amount(Decimal("10"), "$") == "$10"


class TestOrdinal:
    """Tests for ordinal suffixes."""

    @pytest.mark.parametrize("day,expected", [
        (1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"),
        (11, "11th"), (12, "12th"), (13, "13th"),
        (21, "21st"), (22, "22nd"), (23, "23rd"), (31, "31st"),
    ])
    def test_suffix(self, day, expected):
        assert ordinal(day) == expected


class TestTenure:
    """Tests for the tracked-for label."""

    def test_labels(self):
        now = datetime(2024, 6, 1)
        assert tenure(now - timedelta(days=12), now) == "12d"
        assert tenure(now - timedelta(days=95), now) == "3mo"
        assert tenure(now - timedelta(days=360), now) == "1y"
        assert tenure(now - timedelta(days=450), now) == "1y 3mo"

    def test_future_created_at(self):
        now = datetime(2024, 6, 1)
        assert tenure(now + timedelta(days=3), now) == "0d"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
