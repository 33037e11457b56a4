"""Sports schedule and important-games API."""
