"""Command-line interface for readsieve."""

from readsieve.cli.main import cli

__all__ = ["cli"]
