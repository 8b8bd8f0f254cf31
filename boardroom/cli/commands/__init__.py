"""Subcommand implementations for the Boardroom CLI."""
