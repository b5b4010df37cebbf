"""Command-line interface for Sprig."""
