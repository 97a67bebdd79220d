"""SQLite provider."""
