"""Command-line interface for rotacal."""
