"""Command-line interface for structkit."""
