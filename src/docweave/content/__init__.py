"""Slug-addressed content access."""
