"""MySQL provider."""
