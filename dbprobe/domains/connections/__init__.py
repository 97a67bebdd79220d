"""Connection probing domain."""
