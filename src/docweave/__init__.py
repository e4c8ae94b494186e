"""DocWeave: compose, browse and search MDX documentation trees."""

__version__ = "0.1.0"
