"""ETL utilities package: logging and timestamp helpers."""

from boxoffice.etl.utils.logger import setup_logger
from boxoffice.etl.utils.timestamps import coerce_timestamp

__all__ = ["coerce_timestamp", "setup_logger"]
