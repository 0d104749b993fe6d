"""Settings resolution and project layout helpers."""
