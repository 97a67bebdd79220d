"""Application shell: settings and configuration."""
