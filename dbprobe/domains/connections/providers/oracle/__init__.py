"""Oracle provider."""
