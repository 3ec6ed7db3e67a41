"""Command-line interface for the game token SDK."""
