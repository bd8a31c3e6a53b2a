"""ETL type definitions."""

from boxoffice.etl.types.movie import MovieRecord, SourceBatch

__all__ = ["MovieRecord", "SourceBatch"]
