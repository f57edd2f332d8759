"""Environment lookups for settings that may live outside the config file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence

TOOLS_ROOT_ENV_VAR = "COMPENDEX_TOOLS_ROOT"


def _env_value(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return the named variables; blank values count as missing."""

    values = {name: value for name in names if (value := _env_value(name)) is not None}
    missing = sorted(set(names) - values.keys())
    if missing:
        raise MissingConfigurationError(f"Missing configuration for: {', '.join(missing)}")
    return values


def require_env_var(name: str) -> str:
    return require_env_vars([name])[name]


def resolve_tools_root(explicit: Path | None, configured: Path | None) -> Path:
    """Pick the tools root: command line, then config file, then environment."""

    if explicit is not None:
        return explicit
    if configured is not None:
        return configured
    value = _env_value(TOOLS_ROOT_ENV_VAR)
    if value is None:
        raise MissingConfigurationError(
            f"No tools root given; pass --tools-root, set sources.toolsRoot "
            f"or set {TOOLS_ROOT_ENV_VAR}"
        )
    return Path(value)
