"""Document composition."""
