"""Unit tests for the dashboard metrics aggregation."""

from datetime import UTC, datetime
from typing import Any

from pytest import approx

from boxoffice.etl.aggregation import MetricsPayload, YearlyGross, build_metrics

EARLY = datetime(2024, 5, 1, tzinfo=UTC)
LATE = datetime(2024, 5, 2, tzinfo=UTC)


def _make_row(**overrides: Any) -> dict[str, Any]:
    base: dict[str, Any] = {
        "title": "Barbie",
        "year": 2023,
        "source": "Box Office Mojo",
        "total_gross": 1_441_820_453,
        "scraped_at": EARLY,
    }
    base.update(overrides)
    return base


# -------------------------------------------------------------------------
# Empty input
# -------------------------------------------------------------------------


class TestEmptyInput:
    @staticmethod
    def test_no_rows() -> None:
        payload = build_metrics([])
        assert payload == MetricsPayload()
        assert payload.totals.movie_count == 0
        assert payload.totals.total_gross == 0
        assert payload.totals.latest_scrape is None
        assert payload.peak_year == YearlyGross(year=None, total_gross=0, count=0)
        assert payload.box_plot.overall is None

    @staticmethod
    def test_rows_without_gross() -> None:
        payload = build_metrics([_make_row(total_gross=None, scraped_at=LATE)])
        assert payload.totals.movie_count == 0
        assert payload.source_gross == []
        assert payload.totals.latest_scrape == LATE

    @staticmethod
    def test_non_mapping_rows_skipped() -> None:
        payload = build_metrics([None, ("Barbie", 2023), _make_row(), "Wonka"])  # type: ignore[list-item]
        assert payload.totals.movie_count == 1
        assert payload.totals.latest_scrape == EARLY

    @staticmethod
    def test_only_non_mapping_rows() -> None:
        assert build_metrics([None, (1, 2)]) == MetricsPayload()  # type: ignore[list-item]

    @staticmethod
    def test_numeric_title_and_source_coerced() -> None:
        payload = build_metrics([_make_row(title=1917, source=42)])
        assert payload.top_movies[0].title == "1917"
        assert payload.source_gross[0].source == "42"
        assert payload.box_plot.by_source[0].source == "42"

    @staticmethod
    def test_blank_title_and_source_defaulted() -> None:
        payload = build_metrics([_make_row(title="  ", source=None)])
        assert payload.top_movies[0].title == "Unknown"
        assert payload.top_movies[0].source == "Unknown"


# -------------------------------------------------------------------------
# Totals and grouped sums
# -------------------------------------------------------------------------


class TestTotals:
    @staticmethod
    def test_same_movie_two_sources() -> None:
        rows = [
            _make_row(source="Box Office Mojo", total_gross=100),
            _make_row(source="IMDb", total_gross=90, scraped_at=LATE),
        ]
        payload = build_metrics(rows)

        assert payload.totals.movie_count == 1
        assert payload.totals.total_gross == 100
        assert [(s.source, s.total_gross, s.count) for s in payload.source_gross] == [
            ("Box Office Mojo", 100, 1),
            ("IMDb", 90, 1),
        ]
        assert payload.totals.latest_scrape == LATE

    @staticmethod
    def test_repeated_scrapes_counted_once() -> None:
        rows = [
            _make_row(total_gross=100, scraped_at=EARLY),
            _make_row(total_gross=120, scraped_at=LATE),
        ]
        payload = build_metrics(rows)
        assert payload.totals.total_gross == 120
        assert payload.source_gross[0].count == 1

    @staticmethod
    def test_title_case_and_spacing_merged() -> None:
        payload = build_metrics([_make_row(title="Barbie"), _make_row(title=" barbie ")])
        assert payload.totals.movie_count == 1

    @staticmethod
    def test_same_title_different_years_kept() -> None:
        payload = build_metrics([_make_row(year=2023), _make_row(year=1994)])
        assert payload.totals.movie_count == 2

    @staticmethod
    def test_source_gross_sorted_descending_stable() -> None:
        rows = [
            _make_row(title="A", source="S1", total_gross=50),
            _make_row(title="B", source="S2", total_gross=80),
            _make_row(title="C", source="S3", total_gross=50),
        ]
        payload = build_metrics(rows)
        assert [s.source for s in payload.source_gross] == ["S2", "S1", "S3"]


class TestYearlyGross:
    @staticmethod
    def test_sorted_by_year_and_missing_year_excluded() -> None:
        rows = [
            _make_row(title="A", year=2024, total_gross=10),
            _make_row(title="B", year=2019, total_gross=30),
            _make_row(title="C", year=2024, total_gross=15),
            _make_row(title="D", year=None, total_gross=99),
        ]
        payload = build_metrics(rows)
        assert [(y.year, y.total_gross, y.count) for y in payload.yearly_gross] == [
            (2019, 30, 1),
            (2024, 25, 2),
        ]
        assert payload.totals.movie_count == 4

    @staticmethod
    def test_peak_year() -> None:
        rows = [
            _make_row(title="A", year=2019, total_gross=30),
            _make_row(title="B", year=2024, total_gross=25),
        ]
        assert build_metrics(rows).peak_year == YearlyGross(year=2019, total_gross=30, count=1)

    @staticmethod
    def test_peak_year_tie_keeps_earliest() -> None:
        rows = [
            _make_row(title="A", year=2024, total_gross=30),
            _make_row(title="B", year=2019, total_gross=30),
        ]
        assert build_metrics(rows).peak_year.year == 2019

    @staticmethod
    def test_peak_year_is_a_copy() -> None:
        payload = build_metrics([_make_row()])
        payload.peak_year.total_gross = 0
        assert payload.yearly_gross[0].total_gross == 1_441_820_453


# -------------------------------------------------------------------------
# Top movies
# -------------------------------------------------------------------------


class TestTopMovies:
    @staticmethod
    def test_ranked_by_gross() -> None:
        rows = [_make_row(title=f"Movie {i}", total_gross=i) for i in range(1, 6)]
        payload = build_metrics(rows, top_n=3)
        assert [m.title for m in payload.top_movies] == ["Movie 5", "Movie 4", "Movie 3"]

    @staticmethod
    def test_default_limit() -> None:
        rows = [_make_row(title=f"Movie {i}", total_gross=i) for i in range(60)]
        assert len(build_metrics(rows).top_movies) == 50

    @staticmethod
    def test_best_source_reported() -> None:
        rows = [
            _make_row(source="IMDb", total_gross=90),
            _make_row(source="The Numbers", total_gross=95),
        ]
        top = build_metrics(rows).top_movies[0]
        assert top.source == "The Numbers"
        assert top.year == 2023

    @staticmethod
    def test_missing_year_is_none() -> None:
        assert build_metrics([_make_row(year=None)]).top_movies[0].year is None


# -------------------------------------------------------------------------
# Box plots
# -------------------------------------------------------------------------


class TestBoxPlot:
    @staticmethod
    def test_overall_and_groups() -> None:
        rows = [
            _make_row(title="A", source="S1", year=2020, total_gross=10),
            _make_row(title="B", source="S1", year=2020, total_gross=20),
            _make_row(title="C", source="S2", year=2021, total_gross=30),
            _make_row(title="D", source="S2", year=None, total_gross=40),
        ]
        box_plot = build_metrics(rows).box_plot

        assert box_plot.overall is not None
        assert box_plot.overall.q1 == approx(15)
        assert box_plot.overall.median == approx(25)
        assert box_plot.overall.q3 == approx(35)
        assert [(b.source, b.count) for b in box_plot.by_source] == [("S1", 2), ("S2", 2)]
        assert [(b.year, b.count) for b in box_plot.by_year] == [(2020, 2), (2021, 1)]
        assert box_plot.by_year[1].stats.min == 30


# -------------------------------------------------------------------------
# Serialization
# -------------------------------------------------------------------------


class TestSerialization:
    @staticmethod
    def test_camel_case_payload() -> None:
        data = build_metrics([_make_row()]).model_dump(by_alias=True, mode="json")
        assert set(data) == {"totals", "sourceGross", "yearlyGross", "peakYear", "topMovies", "boxPlot"}
        assert set(data["totals"]) == {"movieCount", "totalGross", "latestScrape"}
        assert set(data["boxPlot"]) == {"overall", "bySource", "byYear"}
        assert data["topMovies"][0]["totalGross"] == 1_441_820_453

    @staticmethod
    def test_snapshot_of_iterator() -> None:
        rows = iter([_make_row(), _make_row(title="Wonka", total_gross=5)])
        payload = build_metrics(rows)
        assert payload.totals.movie_count == 2
        assert payload.totals.latest_scrape == EARLY
