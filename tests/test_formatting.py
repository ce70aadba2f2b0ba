from datetime import datetime, timedelta, timezone

import pytest

from formatting import (
    PriceFormatter,
    format_change,
    format_currency,
    format_distance_strict,
    format_market_cap,
    format_percentage,
    price_fraction_digits,
    round_half_up,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("price,digits", [
    (50000, 1),
    (10000, 1),
    (9999.99, 0),
    (1000.01, 0),
    (1000, 1),
    (100.5, 1),
    (100, 2),
    (0.1000001, 2),
    (0.1, 4),
    (0.01, 6),
    (0.0001, 8),
    (0.000001, 10),
    (0.0000005, 10),
])
def test_price_fraction_digits_boundaries(price, digits):
    assert price_fraction_digits(price) == digits


@pytest.mark.parametrize("price,expected", [
    (10000, "$10K"),
    (45123.45, "$45.1K"),
    (9999.99, "$10,000"),
    (1234.5, "$1,235"),
    (250.55, "$250.6"),
    (250, "$250"),
    (1.5, "$1.5"),
    (0.5, "$0.50"),
    (0.05123, "$0.0512"),
    (0.00001234, "$0.00001234"),
])
def test_price_formatter_renders_own_price(price, expected):
    assert PriceFormatter(price).format(price) == expected


def test_price_formatter_reuses_policy_for_other_amounts():
    fmt = PriceFormatter(0.5)
    assert fmt.format(-0.1) == "-$0.10"
    assert fmt.format(0.123) == "$0.12"


def test_currency_symbols_and_unknown_codes():
    assert format_currency(1234.5, "EUR", 0, 1) == "€1,234.5"
    assert format_currency(1234.5, "usd", 0, 1) == "$1,234.5"
    assert format_currency(1, "XYZ", 2, 2) == "XYZ\u00a01.00"


@pytest.mark.parametrize("value,expected", [
    (None, "--"),
    (0, "--"),
    (512, "$512"),
    (1_234_567_890, "$1.2B"),
    (850_000_000_000, "$850B"),
    (2.5e12, "$2.5T"),
    (999_960, "$1M"),
])
def test_market_cap(value, expected):
    assert format_market_cap(value) == expected


@pytest.mark.parametrize("value,expected", [
    (5.234, "+5.23%"),
    (-3.5, "-3.50%"),
    (0, "+0.00%"),
    (0.6, "+0.60%"),
    (-0.001, "-0.00%"),
    (1234.5, "+1,234.50%"),
])
def test_format_percentage(value, expected):
    assert format_percentage(value) == expected


@pytest.mark.parametrize("value,expected", [
    (0.4, "--"),
    (-0.5, "--"),
    (0.5, "+0.50%"),
    (0.6, "+0.60%"),
    (-0.6, "-0.60%"),
    (12.345, "+12.35%"),
])
def test_format_change_placeholder_when_rounding_to_zero(value, expected):
    assert format_change(value) == expected


def test_round_half_up_matches_ties_toward_positive():
    assert round_half_up(0.5) == 1
    assert round_half_up(-0.5) == 0
    assert round_half_up(-1.5) == -1
    assert round_half_up(2.4) == 2


@pytest.mark.parametrize("delta,expected", [
    (timedelta(seconds=1), "1 second"),
    (timedelta(seconds=30), "30 seconds"),
    (timedelta(minutes=5), "5 minutes"),
    (timedelta(minutes=90), "2 hours"),
    (timedelta(days=1), "1 day"),
    (timedelta(days=12), "12 days"),
    (timedelta(days=45), "2 months"),
    (timedelta(days=350), "1 year"),
    (timedelta(days=800), "2 years"),
])
def test_format_distance_strict(delta, expected):
    assert format_distance_strict(NOW - delta, NOW) == expected


def test_code_only_currencies_use_code_prefix():
    assert format_currency(1, "NGN", 2, 2) == "NGN\u00a01.00"
