"""Command line interface for rb-lint."""
