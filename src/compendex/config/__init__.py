"""Application configuration helpers."""

from __future__ import annotations

from .compendium import (
    CompendiumConfig,
    compile_exclude_pattern,
    escape_pattern_separators,
    load_compendium_config,
)
from .env import TOOLS_ROOT_ENV_VAR, require_env_var, require_env_vars, resolve_tools_root
from .errors import ConfigurationError, InvalidExcludePatternError, MissingConfigurationError
from .logging import configure_logging
from .paths import VaultPaths
from .user import UserConfig, load_user_config

__all__ = [
    "TOOLS_ROOT_ENV_VAR",
    "CompendiumConfig",
    "ConfigurationError",
    "InvalidExcludePatternError",
    "MissingConfigurationError",
    "UserConfig",
    "VaultPaths",
    "compile_exclude_pattern",
    "configure_logging",
    "escape_pattern_separators",
    "load_compendium_config",
    "load_user_config",
    "require_env_var",
    "require_env_vars",
    "resolve_tools_root",
]
