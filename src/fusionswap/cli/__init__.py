"""Command-line swap scripts."""
