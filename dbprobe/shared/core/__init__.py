"""Core helpers: persistence and logging."""
