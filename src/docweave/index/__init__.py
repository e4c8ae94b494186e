"""Search index and queries."""
