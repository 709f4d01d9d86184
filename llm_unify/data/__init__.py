"""Bundled data files (price table snapshot)."""
