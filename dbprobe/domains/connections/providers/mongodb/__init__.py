"""MongoDB provider."""
