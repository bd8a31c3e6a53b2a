"""Reader for collected YAML batches.

Collectors write one YAML document per source run:

    source: Box Office Mojo
    fetchedAt: 2024-05-01T10:00:00Z
    movies:
      - rank: 1
        title: Dune (2021)
        worldwideGross: $402,027,830

Unreadable or malformed files are logged and skipped.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from boxoffice.etl.types import SourceBatch
from boxoffice.etl.utils import setup_logger
from boxoffice.settings import settings

UNKNOWN_SOURCE = "Unknown"
YAML_SUFFIXES = (".yaml", ".yml")
BATCH_TIMESTAMP_KEYS = ("fetchedAt", "lastUpdated")


@dataclass
class YAMLReadStats:
    """Statistics for a directory scan."""

    files_read: int = 0
    files_skipped: int = 0
    movies: int = 0
    skipped_files: list[str] = field(default_factory=list)


class YAMLBatchReader:
    """Iterate over collected YAML batches in a directory."""

    def __init__(self, directory: Path | None = None) -> None:
        """Initialize the reader.

        Args:
            directory: Directory of YAML files (default: DATA_DIR).
        """
        self.logger = setup_logger("etl.yaml_reader")
        self.directory = directory or settings.paths.data_dir
        self.stats = YAMLReadStats()

    def list_files(self) -> list[Path]:
        """List YAML files in name order.

        Returns:
            Sorted YAML file paths, empty if the directory is missing.
        """
        if not self.directory.is_dir():
            self.logger.warning(f"Data directory not found: {self.directory}")
            return []
        return sorted(
            path
            for path in self.directory.iterdir()
            if path.is_file() and path.suffix.lower() in YAML_SUFFIXES
        )

    def iter_batches(self) -> Iterator[SourceBatch]:
        """Yield one batch per readable YAML file.

        Yields:
            SourceBatch with source, fetch timestamp and raw movies.
        """
        self.stats = YAMLReadStats()
        for path in self.list_files():
            batch = self.read_file(path)
            if batch is None:
                self.stats.files_skipped += 1
                self.stats.skipped_files.append(path.name)
                continue

            self.stats.files_read += 1
            self.stats.movies += len(batch["movies"])
            self.logger.info(f"Loaded {path.name}: {len(batch['movies'])} movies")
            yield batch

    def read_file(self, path: Path) -> SourceBatch | None:
        """Parse one YAML file into a batch.

        Args:
            path: YAML file path.

        Returns:
            Parsed batch, or None if the file cannot be used.
        """
        try:
            with path.open(encoding="utf-8") as f:
                document = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            self.logger.error(f"Cannot read {path.name}: {e}")
            return None

        if not isinstance(document, dict):
            self.logger.error(f"Cannot read {path.name}: expected a mapping at top level")
            return None

        return self._to_batch(document, path.name)

    @staticmethod
    def _to_batch(document: dict[str, Any], file_name: str) -> SourceBatch:
        source = document.get("source")
        movies = document.get("movies")
        fetched_at = next(
            (document[key] for key in BATCH_TIMESTAMP_KEYS if document.get(key)),
            None,
        )
        return SourceBatch(
            source=str(source).strip() if source else UNKNOWN_SOURCE,
            fetched_at=fetched_at,
            movies=movies if isinstance(movies, list) else [],
            file_name=file_name,
        )
