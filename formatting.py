# formatting.py
"""
Number, currency and relative-time formatting for Slack coin messages.

Output follows the en-US convention of the chat frontend:
  $1,234.5   -$12.30   $45.1K   +3.21%   12 days
Rounding is half away from zero, applied to the shortest decimal
representation of the float so 0.125 rounds like the string "0.125".
"""

import math
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

PLACEHOLDER = "--"
COMPACT_PRICE_THRESHOLD = 10000

# Ordered (bound, inclusive, max fraction digits); first match wins.
PRICE_DIGIT_TABLE = (
    (10000, True, 1),
    (1000, False, 0),
    (100, False, 1),
    (0.1, False, 2),
    (0.01, False, 4),
    (0.0001, False, 6),
    (0.000001, False, 8),
)
FALLBACK_PRICE_DIGITS = 10

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
    "KRW": "₩",
    "ILS": "₪",
    "VND": "₫",
    "PHP": "₱",
    "CAD": "CA$",
    "AUD": "A$",
    "NZD": "NZ$",
    "HKD": "HK$",
    "MXN": "MX$",
    "BRL": "R$",
    "CNY": "CN¥",
    "TWD": "NT$",
}

COMPACT_UNITS = (
    (Decimal(1), ""),
    (Decimal(10) ** 3, "K"),
    (Decimal(10) ** 6, "M"),
    (Decimal(10) ** 9, "B"),
    (Decimal(10) ** 12, "T"),
)


def round_half_up(value: float) -> int:
    """Integer rounding with ties toward +infinity (0.5 -> 1, -0.5 -> 0)."""
    return math.floor(value + 0.5)


def price_fraction_digits(price: float) -> int:
    for bound, inclusive, digits in PRICE_DIGIT_TABLE:
        if (price >= bound) if inclusive else (price > bound):
            return digits
    return FALLBACK_PRICE_DIGITS


def _is_negative(value: float) -> bool:
    return math.copysign(1.0, value) < 0


def _quantize(d: Decimal, digits: int) -> Decimal:
    return d.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)


def _render(d: Decimal, min_digits: int, max_digits: int, grouping: bool = True) -> str:
    s = f"{d:,.{max_digits}f}" if grouping else f"{d:.{max_digits}f}"
    if "." not in s:
        return s
    whole, frac = s.split(".")
    frac = frac.rstrip("0").ljust(min_digits, "0")
    return f"{whole}.{frac}" if frac else whole


def format_decimal(value: float, min_digits: int = 0, max_digits: int = 2, compact: bool = False) -> str:
    """Unsigned magnitude of value, grouped, optionally with a K/M/B/T suffix."""
    magnitude = Decimal(repr(abs(float(value))))
    if not compact:
        return _render(_quantize(magnitude, max_digits), min_digits, max_digits)

    idx = 0
    while idx + 1 < len(COMPACT_UNITS) and magnitude >= COMPACT_UNITS[idx + 1][0]:
        idx += 1
    scaled = _quantize(magnitude / COMPACT_UNITS[idx][0], max_digits)
    if scaled >= 1000 and idx + 1 < len(COMPACT_UNITS):
        idx += 1
        scaled = _quantize(magnitude / COMPACT_UNITS[idx][0], max_digits)
    # compact output only groups from five integer digits up
    body = _render(scaled, min_digits, max_digits, grouping=scaled >= 10000)
    return body + COMPACT_UNITS[idx][1]


def currency_prefix(currency: str) -> str:
    code = (currency or "USD").upper()
    return CURRENCY_SYMBOLS.get(code, code + "\u00a0")


def format_currency(amount: float, currency: str = "USD", min_digits: int = 0,
                    max_digits: int = 2, compact: bool = False) -> str:
    body = format_decimal(amount, min_digits, max_digits, compact)
    sign = "-" if _is_negative(amount) else ""
    return f"{sign}{currency_prefix(currency)}{body}"


def format_percentage(value: float) -> str:
    """
    Signed percent with exactly two decimals.
    value is in percentage points (5.2 means 5.2%); it is turned into a
    ratio first and scaled back for display, like a percent-style formatter.
    """
    ratio = float(value) / 100
    scaled = _quantize(Decimal(repr(abs(ratio))).scaleb(2), 2)
    sign = "-" if _is_negative(ratio) else "+"
    return f"{sign}{scaled:,.2f}%"


def format_change(value: float) -> str:
    """Percentage change, or the placeholder when it rounds to a whole 0."""
    if round_half_up(value) == 0:
        return PLACEHOLDER
    return format_percentage(value)


def format_market_cap(value: Optional[float], currency: str = "USD") -> str:
    if not value:
        return PLACEHOLDER
    return format_currency(value, currency, 0, 1, compact=True)


class PriceFormatter:
    """
    Currency formatter whose digit policy is fixed by a reference price.
    The same instance formats the current price, the ATH and the pullback.
    """

    def __init__(self, price: float, currency: str = "USD"):
        self.currency = currency
        self.min_digits = 2 if price < 1 else 0
        self.max_digits = price_fraction_digits(price)
        self.compact = price >= COMPACT_PRICE_THRESHOLD

    def format(self, amount: float) -> str:
        return format_currency(amount, self.currency, self.min_digits,
                               self.max_digits, self.compact)


# ---------------- Relative time ----------------
MINUTES_IN_DAY = 1440
MINUTES_IN_MONTH = 43200
MINUTES_IN_YEAR = 525600


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def format_distance_strict(then: datetime, now: datetime) -> str:
    """Distance between two instants in a single unit: '45 seconds', '3 days', '2 years'."""
    seconds = abs((now - then).total_seconds())
    minutes = seconds / 60

    if minutes < 1:
        return _plural(round_half_up(seconds), "second")
    if minutes < 60:
        return _plural(round_half_up(minutes), "minute")
    if minutes < MINUTES_IN_DAY:
        return _plural(round_half_up(minutes / 60), "hour")
    if minutes < MINUTES_IN_MONTH:
        return _plural(round_half_up(minutes / MINUTES_IN_DAY), "day")
    if minutes < MINUTES_IN_YEAR:
        months = round_half_up(minutes / MINUTES_IN_MONTH)
        return _plural(1, "year") if months == 12 else _plural(months, "month")
    return _plural(round_half_up(minutes / MINUTES_IN_YEAR), "year")
