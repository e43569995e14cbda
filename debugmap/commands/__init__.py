"""dmap CLI commands."""
