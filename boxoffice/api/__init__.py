"""HTTP API serving the dashboard metrics."""
