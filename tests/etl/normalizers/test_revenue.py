"""Unit tests for the revenue parser."""

from decimal import Decimal

import pytest

from boxoffice.etl.normalizers.revenue import parse_revenue

# -------------------------------------------------------------------------
# Plain amounts
# -------------------------------------------------------------------------


class TestPlainAmounts:
    @staticmethod
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("$1,234", 1234),
            ("1234", 1234),
            ("  1 234 567 ", 1234567),
            ("€15,000", 15000),
            ("-500", -500),
        ],
    )
    def test_integer_strings(raw: str, expected: int) -> None:
        assert parse_revenue(raw) == expected

    @staticmethod
    def test_decimal_string_rounded() -> None:
        assert parse_revenue("1500.6") == 1501
        assert parse_revenue("1500.4") == 1500

    @staticmethod
    def test_half_rounds_up() -> None:
        assert parse_revenue("2.5") == 3
        assert parse_revenue("-2.5") == -2

    @staticmethod
    def test_int_returned_as_is() -> None:
        assert parse_revenue(402027830) == 402027830

    @staticmethod
    def test_float_rounded() -> None:
        assert parse_revenue(1500.6) == 1501

    @staticmethod
    def test_decimal_rounded() -> None:
        assert parse_revenue(Decimal("99.5")) == 100


# -------------------------------------------------------------------------
# Units
# -------------------------------------------------------------------------


class TestUnits:
    @staticmethod
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("$2.9 billion", 2_900_000_000),
            ("1.2B", 1_200_000_000),
            ("22M", 22_000_000),
            ("$45.5 million", 45_500_000),
            ("15K", 15_000),
            ("15 тыс", 15_000),
        ],
    )
    def test_unit_multipliers(raw: str, expected: int) -> None:
        assert parse_revenue(raw) == expected

    @staticmethod
    def test_multiply_before_rounding() -> None:
        assert parse_revenue("$1.2345M") == 1_234_500

    @staticmethod
    def test_billion_takes_precedence() -> None:
        # "b" is checked before "m" even though both letters appear
        assert parse_revenue("1.5 bn (approx. m)") == 1_500_000_000

    @staticmethod
    def test_stray_letter_selects_unit() -> None:
        # Substring matching: the "m" of "Estimate" is read as millions
        assert parse_revenue("Estimate: 12") == 12_000_000


class TestStrictUnits:
    @staticmethod
    def test_attached_unit_accepted() -> None:
        assert parse_revenue("$2.9 billion", strict_units=True) == 2_900_000_000
        assert parse_revenue("22M", strict_units=True) == 22_000_000

    @staticmethod
    def test_stray_letter_ignored() -> None:
        assert parse_revenue("Estimate: 12", strict_units=True) == 12

    @staticmethod
    def test_unit_inside_word_ignored() -> None:
        assert parse_revenue("12 mln", strict_units=True) == 12


# -------------------------------------------------------------------------
# Missing values
# -------------------------------------------------------------------------


class TestMissingValues:
    @staticmethod
    @pytest.mark.parametrize("raw", [None, "", "   ", "N/A", "n/a", "NaN", "—", "unknown"])
    def test_no_amount(raw: object) -> None:
        assert parse_revenue(raw) is None

    @staticmethod
    def test_non_finite_float() -> None:
        assert parse_revenue(float("nan")) is None
        assert parse_revenue(float("inf")) is None

    @staticmethod
    def test_bool_rejected() -> None:
        assert parse_revenue(True) is None

    @staticmethod
    def test_unsupported_type() -> None:
        assert parse_revenue(["$1,234"]) is None
