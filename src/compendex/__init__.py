"""Compendium index and cross-reference resolution for game-reference data."""

from __future__ import annotations

from importlib import metadata

from .app import Compendium, build_compendium
from .config import CompendiumConfig, load_compendium_config

try:
    __version__ = metadata.version("compendex")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+local"

__all__ = [
    "Compendium",
    "CompendiumConfig",
    "__version__",
    "build_compendium",
    "load_compendium_config",
]
