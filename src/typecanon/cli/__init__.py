"""Command-line interface for typecanon."""
