"""Unit tests for LoaderStats."""

from pytest import approx

from boxoffice.etl.loaders import LoaderStats


class TestLoaderStats:
    @staticmethod
    def test_defaults() -> None:
        stats = LoaderStats()
        assert stats.inserted == 0
        assert stats.skipped == 0
        assert stats.errors == 0
        assert stats.error_messages == []

    @staticmethod
    def test_total_processed() -> None:
        assert LoaderStats(inserted=5, skipped=2, errors=1).total_processed == 8

    @staticmethod
    def test_duplicates_count_as_written() -> None:
        assert LoaderStats(inserted=10, skipped=5).success_rate == approx(100.0)

    @staticmethod
    def test_failed_batch_lowers_success_rate() -> None:
        assert LoaderStats(inserted=8, errors=2).success_rate == approx(80.0)

    @staticmethod
    def test_nothing_written() -> None:
        assert LoaderStats().success_rate == approx(100.0)

    @staticmethod
    def test_merge() -> None:
        first = LoaderStats(inserted=5, skipped=3, errors=1, error_messages=["batch 1 failed"])
        second = LoaderStats(inserted=10, skipped=2, error_messages=["batch 4 failed"])
        merged = first.merge(second)
        assert merged.inserted == 15
        assert merged.skipped == 5
        assert merged.errors == 1
        assert merged.error_messages == ["batch 1 failed", "batch 4 failed"]
        assert first.inserted == 5
