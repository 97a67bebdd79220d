"""Feature domains for dbprobe."""
