"""Revenue parser for free-form box-office amounts.

Converts values such as "$1,234", "$2.9 billion", "22M" or "15 тыс"
into whole currency units.

Unit letters are matched as substrings of the cleaned string, so any
stray "b", "m" or "k" selects a multiplier. With `strict_units=True`
only a unit directly following the number is accepted.
"""

import math
import re
from decimal import ROUND_FLOOR, Decimal, InvalidOperation

# =============================================================================
# CONSTANTS
# =============================================================================

NULL_SENTINELS = frozenset({"n/a", "nan"})
"""Lowercased placeholder strings meaning "no figure"."""

CURRENCY_SYMBOLS = "$€£¥"
"""Currency symbols stripped before unit detection."""

UNIT_MULTIPLIERS: tuple[tuple[tuple[str, ...], int], ...] = (
    (("billion", "b"), 1_000_000_000),
    (("million", "m"), 1_000_000),
    (("k", "тыс"), 1_000),
)
"""Unit tokens by precedence; longer tokens first within a unit."""

_INTEGER_PATTERN = re.compile(r"^[-+]?\d+$")
_DECIMAL_PATTERN = re.compile(r"^[-+]?\d+\.\d+$")
_NUMBER_PATTERN = re.compile(r"[-+]?\d*\.?\d+")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_CURRENCY_PATTERN = re.compile(f"[{re.escape(CURRENCY_SYMBOLS)}]")
_STRICT_UNIT_PATTERN = re.compile(
    r"([-+]?\d*\.?\d+)(billion|million|тыс|b|m|k)(?![^\W\d_])",
    re.IGNORECASE,
)


# =============================================================================
# PUBLIC API
# =============================================================================


def parse_revenue(value: object, *, strict_units: bool = False) -> int | None:
    """Parse a revenue value into an integer amount.

    Args:
        value: Raw value (string, number or None).
        strict_units: Require the unit to directly follow the number.

    Returns:
        Amount in whole currency units, or None if nothing parses.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, float | Decimal):
        return _parse_number(value)

    if isinstance(value, str):
        return _parse_text(value, strict_units)

    return None


# =============================================================================
# INTERNALS
# =============================================================================


def _parse_number(value: float | Decimal) -> int | None:
    """Round a finite number, rejecting NaN and infinities."""
    try:
        amount = Decimal(value)
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite():
        return None
    return _round_half_up(amount)


def _parse_text(value: str, strict_units: bool) -> int | None:
    """Parse a revenue string.

    Args:
        value: Raw revenue text.
        strict_units: Require the unit to directly follow the number.

    Returns:
        Parsed amount or None.
    """
    cleaned = _WHITESPACE_PATTERN.sub("", value.strip())
    if not cleaned or cleaned.lower() in NULL_SENTINELS:
        return None

    if _INTEGER_PATTERN.match(cleaned):
        return int(cleaned)

    if _DECIMAL_PATTERN.match(cleaned):
        return _round_half_up(Decimal(cleaned))

    cleaned = _CURRENCY_PATTERN.sub("", cleaned).replace(",", "")

    if strict_units:
        multiplier, numeric_part = _detect_strict_unit(cleaned)
    else:
        multiplier, numeric_part = _detect_unit(cleaned)

    number_match = _NUMBER_PATTERN.search(numeric_part)
    if number_match:
        return _round_half_up(Decimal(number_match.group(0)) * multiplier)

    return _parse_float_fallback(cleaned)


def _detect_unit(cleaned: str) -> tuple[int, str]:
    """Find the first unit present anywhere in the string.

    Returns:
        Multiplier and the string with that unit's tokens removed.
    """
    lowered = cleaned.lower()
    for tokens, multiplier in UNIT_MULTIPLIERS:
        if any(token in lowered for token in tokens):
            pattern = "|".join(re.escape(token) for token in tokens)
            return multiplier, re.sub(pattern, "", cleaned, flags=re.IGNORECASE)
    return 1, cleaned


def _detect_strict_unit(cleaned: str) -> tuple[int, str]:
    """Find a unit attached to a number (e.g. "2.9billion", "22M").

    Returns:
        Multiplier and the matched number, or (1, cleaned) if no unit.
    """
    match = _STRICT_UNIT_PATTERN.search(cleaned)
    if match is None:
        return 1, cleaned

    unit = match.group(2).lower()
    for tokens, multiplier in UNIT_MULTIPLIERS:
        if unit in tokens:
            return multiplier, match.group(1)
    return 1, cleaned


def _parse_float_fallback(cleaned: str) -> int | None:
    """Last resort: parse the whole cleaned string as a float."""
    try:
        amount = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(amount):
        return None
    return _round_half_up(Decimal(amount))


def _round_half_up(amount: Decimal) -> int:
    """Round to the nearest integer, halves toward +infinity."""
    return int((amount + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))
