"""Console interaction helpers."""
