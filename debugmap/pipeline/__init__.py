"""Console output helpers for dmap commands."""
