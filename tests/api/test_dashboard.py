"""Unit tests for the dashboard view builder."""

from typing import Any

import pytest

from boxoffice.api.dashboard import (
    NO_DATA_MESSAGE,
    build_dashboard_view,
    clean_source,
    format_currency,
    round_half_up,
)
from boxoffice.etl.aggregation import (
    MetricsPayload,
    SourceGross,
    TopMovie,
    Totals,
    YearlyGross,
)


def _make_payload(**overrides: Any) -> MetricsPayload:
    base: dict[str, Any] = {
        "totals": Totals(movie_count=3, total_gross=600),
        "source_gross": [
            SourceGross(source="Box Office Mojo", total_gross=300, count=2),
            SourceGross(source="IMDb", total_gross=200, count=1),
            SourceGross(source="The Numbers", total_gross=100, count=1),
        ],
        "yearly_gross": [
            YearlyGross(year=2019, total_gross=250, count=1),
            YearlyGross(year=2023, total_gross=350, count=2),
        ],
        "peak_year": YearlyGross(year=2023, total_gross=350, count=2),
    }
    base.update(overrides)
    return MetricsPayload(**base)


def _top_movie(title: str, year: int | None = 2023, source: str = "IMDb", gross: int = 100) -> TopMovie:
    return TopMovie(title=title, source=source, year=year, total_gross=gross)


# -------------------------------------------------------------------------
# Formatting helpers
# -------------------------------------------------------------------------


class TestFormatting:
    @staticmethod
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, "$0"), (None, "$0"), (1234567, "$1,234,567"), (1500.0, "$1,500"), (1234.5, "$1,234.50")],
    )
    def test_format_currency(value: int | float | None, expected: str) -> None:
        assert format_currency(value) == expected

    @staticmethod
    def test_round_half_up() -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2
        assert round_half_up(49.4) == 49

    @staticmethod
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("Box Office Mojo - Detailed", "Box Office Mojo"),
            ("Box Office Mojo -detailed ", "Box Office Mojo"),
            ("Detailed Reports", "Detailed Reports"),
            (None, "Unknown"),
        ],
    )
    def test_clean_source(source: str | None, expected: str) -> None:
        assert clean_source(source) == expected


# -------------------------------------------------------------------------
# View
# -------------------------------------------------------------------------


class TestBuildDashboardView:
    @staticmethod
    def test_overview() -> None:
        view = build_dashboard_view(_make_payload())
        assert view.overview.total_gross_display == "$600"
        assert view.overview.movie_count == 3
        assert view.alert is None

    @staticmethod
    def test_top_source_delta_to_mean() -> None:
        view = build_dashboard_view(_make_payload())
        assert view.top_source.source == "Box Office Mojo"
        assert view.top_source.delta_percent == 50

    @staticmethod
    def test_single_source_delta_zero() -> None:
        payload = _make_payload(source_gross=[SourceGross(source="IMDb", total_gross=600, count=3)])
        assert build_dashboard_view(payload).top_source.delta_percent == 0

    @staticmethod
    def test_peak_year() -> None:
        view = build_dashboard_view(_make_payload())
        assert view.peak_year.year == 2023
        assert view.peak_year.total_gross_display == "$350"

    @staticmethod
    def test_charts() -> None:
        view = build_dashboard_view(_make_payload())
        assert view.source_chart.labels == ["Box Office Mojo", "IMDb", "The Numbers"]
        assert view.source_chart.values == [300, 200, 100]
        assert view.source_chart.shares == [50, 33, 17]
        assert view.trend_chart.labels == ["2019", "2023"]
        assert view.trend_chart.values == [250, 350]

    @staticmethod
    def test_no_data() -> None:
        view = build_dashboard_view(MetricsPayload())
        assert view.alert is not None
        assert view.alert.message == NO_DATA_MESSAGE
        assert view.top_source.source is None
        assert view.peak_year.year is None
        assert view.source_chart.labels == []
        assert view.overview.total_gross_display == "$0"

    @staticmethod
    def test_zero_total_gross_alerts() -> None:
        payload = _make_payload(
            totals=Totals(movie_count=1, total_gross=0),
            source_gross=[SourceGross(source="IMDb", total_gross=0, count=1)],
        )
        view = build_dashboard_view(payload)
        assert view.alert is not None
        assert view.top_source.delta_percent == 0


class TestTopMoviesList:
    @staticmethod
    def test_first_five_unique() -> None:
        movies = [
            _top_movie("Barbie", gross=900),
            _top_movie("Barbie", source="The Numbers", gross=800),
            *[_top_movie(f"Movie {i}", gross=700 - i) for i in range(6)],
        ]
        view = build_dashboard_view(_make_payload(top_movies=movies))
        assert [m.title for m in view.top_movies] == ["Barbie", "Movie 0", "Movie 1", "Movie 2", "Movie 3"]

    @staticmethod
    def test_entry_formatting() -> None:
        movies = [_top_movie("Wonka", year=None, source="Box Office Mojo - Detailed", gross=634_000_000)]
        entry = build_dashboard_view(_make_payload(top_movies=movies)).top_movies[0]
        assert entry.year == "-"
        assert entry.source == "Box Office Mojo"
        assert entry.total_gross_display == "$634,000,000"

    @staticmethod
    def test_untitled() -> None:
        entry = build_dashboard_view(_make_payload(top_movies=[_top_movie("")])).top_movies[0]
        assert entry.title == "Untitled"

    @staticmethod
    def test_camel_case_dump() -> None:
        data = build_dashboard_view(_make_payload()).model_dump(by_alias=True, mode="json")
        assert {"overview", "topSource", "peakYear", "sourceChart", "trendChart", "topMovies", "alert"} == set(data)
        assert data["topSource"]["deltaPercent"] == 50
