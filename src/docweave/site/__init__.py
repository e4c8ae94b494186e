"""Static site artifacts."""
