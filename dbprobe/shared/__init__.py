"""Shared infrastructure used across domains."""
