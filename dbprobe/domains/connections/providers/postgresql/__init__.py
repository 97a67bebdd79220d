"""PostgreSQL provider."""
