"""ETL package: collection batches, normalization, loading, aggregation."""
