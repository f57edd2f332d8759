"""Vault and filesystem roots for rendered output, per content type."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_RULES_ROOT = "rules/"
DEFAULT_COMPENDIUM_ROOT = "compendium/"

_REPEATED_SLASHES = re.compile(r"/+")


def to_root(value: str | None) -> str:
    """Normalize a configured directory to ``a/b/`` form (``""`` when unset)."""

    if not value:
        return ""
    return _REPEATED_SLASHES.sub("/", f"{value}/".replace("\\", "/"))


def to_filesystem_root(root: str) -> Path:
    if not root.strip() or root == "/":
        return Path()
    return Path(root.removeprefix("/"))


def to_vault_root(root: str) -> str:
    """Vault links are URL-like; spaces are escaped."""

    return root.replace(" ", "%20")


@dataclass(frozen=True, slots=True, kw_only=True)
class VaultPaths:
    rules_vault_root: str = DEFAULT_RULES_ROOT
    compendium_vault_root: str = DEFAULT_COMPENDIUM_ROOT
    rules_file_path: Path = Path(DEFAULT_RULES_ROOT)
    compendium_file_path: Path = Path(DEFAULT_COMPENDIUM_ROOT)
    type_vault_roots: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    type_file_paths: Mapping[str, Path] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_settings(
        cls,
        *,
        rules: str | None = None,
        compendium: str | None = None,
        types: Mapping[str, str | None] | None = None,
        base: VaultPaths | None = None,
    ) -> VaultPaths:
        """Overlay configured roots on ``base``; unset values keep the base ones."""

        current = base or cls()
        rules_vault, rules_file = current.rules_vault_root, current.rules_file_path
        if rules is not None:
            root = to_root(rules)
            rules_vault, rules_file = to_vault_root(root), to_filesystem_root(root)
        compendium_vault, compendium_file = (
            current.compendium_vault_root,
            current.compendium_file_path,
        )
        if compendium is not None:
            root = to_root(compendium)
            compendium_vault, compendium_file = to_vault_root(root), to_filesystem_root(root)

        vault_roots = dict(current.type_vault_roots)
        file_paths = dict(current.type_file_paths)
        for type_name, type_path in (types or {}).items():
            if type_path is None:
                continue
            root = to_root(type_path)
            vault_roots[type_name] = to_vault_root(root)
            file_paths[type_name] = to_filesystem_root(root)

        return cls(
            rules_vault_root=rules_vault,
            compendium_vault_root=compendium_vault,
            rules_file_path=rules_file,
            compendium_file_path=compendium_file,
            type_vault_roots=MappingProxyType(vault_roots),
            type_file_paths=MappingProxyType(file_paths),
        )

    def type_vault_root(self, type_name: str) -> str:
        return self.type_vault_roots.get(type_name, self.compendium_vault_root)

    def type_file_path(self, type_name: str) -> Path:
        return self.type_file_paths.get(type_name, self.compendium_file_path)

    def has_type_specific_path(self, type_name: str) -> bool:
        return type_name in self.type_file_paths
