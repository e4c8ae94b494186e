"""Navigation trees."""
