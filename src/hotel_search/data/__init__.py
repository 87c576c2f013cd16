"""Bundled reference data files."""
