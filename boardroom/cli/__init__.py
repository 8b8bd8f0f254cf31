"""Command-line interface for Boardroom."""
