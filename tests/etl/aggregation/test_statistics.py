"""Unit tests for the five-number summary."""

import random

import pytest
from pytest import approx

from boxoffice.etl.aggregation import FiveNumberSummary, five_number_summary, median


class TestMedian:
    @staticmethod
    def test_odd() -> None:
        assert median([1, 3, 9]) == 3

    @staticmethod
    def test_even() -> None:
        assert median([1, 3, 9, 10]) == approx(6.0)


class TestFiveNumberSummary:
    @staticmethod
    def test_empty() -> None:
        assert five_number_summary([]) is None

    @staticmethod
    def test_single_value() -> None:
        assert five_number_summary([5]) == FiveNumberSummary(min=5, q1=5, median=5, q3=5, max=5)

    @staticmethod
    def test_even_sample() -> None:
        stats = five_number_summary([10, 20, 30, 40])
        assert stats is not None
        assert (stats.min, stats.max) == (10, 40)
        assert stats.q1 == approx(15)
        assert stats.median == approx(25)
        assert stats.q3 == approx(35)

    @staticmethod
    def test_odd_sample_excludes_median_from_halves() -> None:
        stats = five_number_summary([1, 2, 3, 4, 5, 6, 7])
        assert stats == FiveNumberSummary(min=1, q1=2, median=4, q3=6, max=7)

    @staticmethod
    def test_two_values() -> None:
        stats = five_number_summary([100, 300])
        assert stats is not None
        assert stats.q1 == 100
        assert stats.median == approx(200)
        assert stats.q3 == 300

    @staticmethod
    def test_three_values() -> None:
        assert five_number_summary([3, 1, 2]) == FiveNumberSummary(min=1, q1=1, median=2, q3=3, max=3)

    @staticmethod
    def test_unsorted_input() -> None:
        assert five_number_summary([40, 10, 30, 20]) == five_number_summary([10, 20, 30, 40])

    @staticmethod
    def test_accepts_generator() -> None:
        stats = five_number_summary(x * 10 for x in range(1, 5))
        assert stats is not None
        assert stats.median == approx(25)

    @staticmethod
    @pytest.mark.parametrize("size", [1, 2, 5, 8, 31])
    def test_ordering(size: int) -> None:
        values = [random.randint(0, 10**9) for _ in range(size)]
        stats = five_number_summary(values)
        assert stats is not None
        assert stats.min <= stats.q1 <= stats.median <= stats.q3 <= stats.max

    @staticmethod
    def test_camel_case_dump() -> None:
        stats = five_number_summary([1, 2])
        assert stats is not None
        assert set(stats.model_dump(by_alias=True)) == {"min", "q1", "median", "q3", "max"}
