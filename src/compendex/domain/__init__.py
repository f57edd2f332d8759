"""Compendium index and cross-reference resolution."""
