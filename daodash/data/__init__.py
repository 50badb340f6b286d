"""Bundled snapshot documents."""
