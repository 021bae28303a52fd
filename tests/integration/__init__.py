"""Integration tests for readsieve."""
