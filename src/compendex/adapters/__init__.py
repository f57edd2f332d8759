"""Adapters between the catalogue and the filesystem."""
