"""Conversions between pt-BR currency strings (``R$ 1.234,56``) and numbers.

Prices are stored as display strings, so every computation goes through
:func:`parse_amount`, which never raises: anything it cannot read counts as
zero.
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CURRENCY_SYMBOL = "R$"
THOUSANDS_SEPARATOR = "."
DECIMAL_SEPARATOR = ","

_WHITESPACE_RE = re.compile(r"\s+")
_NON_DIGIT_RE = re.compile(r"\D+")
_CENT = Decimal("0.01")


def parse_amount(display) -> float:
    if display is None:
        return 0.0
    if isinstance(display, (int, float)) and not isinstance(display, bool):
        value = float(display)
        return value if math.isfinite(value) else 0.0

    text = str(display).replace(CURRENCY_SYMBOL, "")
    text = _WHITESPACE_RE.sub("", text)
    text = text.replace(THOUSANDS_SEPARATOR, "").replace(DECIMAL_SEPARATOR, ".")
    if not text:
        return 0.0
    try:
        value = float(text)
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def _to_cents(value) -> Decimal:
    try:
        amount = Decimal(str(value if value is not None else 0))
    except InvalidOperation:
        return Decimal("0.00")
    if not amount.is_finite():
        return Decimal("0.00")
    return amount.quantize(_CENT, rounding=ROUND_HALF_UP)


def format_amount(value) -> str:
    amount = _to_cents(value)
    sign = "-" if amount < 0 else ""
    integer_part, _, cents = "{:.2f}".format(abs(amount)).partition(".")
    grouped = "{:,}".format(int(integer_part)).replace(",", THOUSANDS_SEPARATOR)
    return "{}{} {}{}{}".format(sign, CURRENCY_SYMBOL, grouped, DECIMAL_SEPARATOR, cents)


def format_from_digits(raw_digits) -> str:
    """Format a run of typed digits as cents (``"1234"`` -> ``R$ 12,34``)."""
    digits = _NON_DIGIT_RE.sub("", str(raw_digits or ""))
    cents = int(digits) if digits else 0
    return format_amount(Decimal(cents) / 100)


__all__ = [
    "CURRENCY_SYMBOL",
    "format_amount",
    "format_from_digits",
    "parse_amount",
]
