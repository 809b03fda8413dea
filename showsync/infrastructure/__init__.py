"""Couche infrastructure : persistance SQLite."""
