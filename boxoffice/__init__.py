"""Box-office collection, normalization and dashboard metrics."""

__version__ = "1.0.0"
