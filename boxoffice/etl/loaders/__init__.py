"""ETL loaders writing normalized records to the database."""

from boxoffice.etl.loaders.movie import MovieLoader
from boxoffice.etl.loaders.stats import LoaderStats

__all__ = ["LoaderStats", "MovieLoader"]
