"""Validated, immutable compendium configuration.

Built once from a :class:`~compendex.config.user.UserConfig` and then only
read. Errors surface at load time so an ingestion pass never starts with a
half-valid policy.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from compendex.domain.model import ReprintBehavior
from compendex.domain.policy import build_allow_list
from compendex.domain.sources import DEFAULT_SOURCE_ALIASES, SourceAliases

from .errors import InvalidExcludePatternError
from .paths import VaultPaths
from .user import load_user_config

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .user import UserConfig

log = logging.getLogger(__name__)

JSON_SUFFIX = ".json"
PATTERN_SEPARATOR = "|"

_SLUG_DROP = re.compile(r"[^\w\s-]")
_SLUG_SEPARATORS = re.compile(r"[\s_]+")


def escape_pattern_separators(raw: str) -> str:
    """Escape every ``|`` but the last one so it matches a literal key separator.

    ``a|b\\|c`` becomes ``a\\|b\\|c``. Trailing empty segments are dropped,
    so ``spell|.*|`` becomes ``spell\\|.*``.
    """

    segments = raw.split(PATTERN_SEPARATOR)
    while len(segments) > 1 and not segments[-1]:
        segments.pop()
    for index in range(len(segments) - 1):
        if not segments[index].endswith("\\"):
            segments[index] += "\\"
    return PATTERN_SEPARATOR.join(segments)


def compile_exclude_pattern(raw: str) -> re.Pattern[str]:
    lowered = raw.lower()
    try:
        return re.compile(escape_pattern_separators(lowered))
    except re.error as exc:
        raise InvalidExcludePatternError(raw, str(exc)) from exc


def slugify(text: str) -> str:
    slug = _SLUG_DROP.sub("", text.strip().lower())
    return _SLUG_SEPARATORS.sub("-", slug).strip("-")


def _normalize_prefix(tag_prefix: str) -> str:
    if tag_prefix and not tag_prefix.endswith("/"):
        return f"{tag_prefix}/"
    return tag_prefix


def _lowered(values: Iterable[str]) -> frozenset[str]:
    return frozenset(value.strip().lower() for value in values if value.strip())


def _resolve_named_files(
    names: Iterable[str],
    folder: str,
    aliases: SourceAliases,
) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Return ``(relative file paths, source ids to allow)`` for books or adventures."""

    files: list[str] = []
    sources: list[str] = []
    for name in names:
        if name.endswith(JSON_SUFFIX):
            files.append(name)
            continue
        source = name.strip().lower()
        file_id = aliases.file_id_for(source)
        sources.extend((source, file_id))
        files.append(f"{folder}/{folder}-{file_id}{JSON_SUFFIX}")
    return tuple(files), tuple(sources)


@dataclass(frozen=True, slots=True, kw_only=True)
class CompendiumConfig:
    allowed_sources: frozenset[str] = frozenset()
    allow_all: bool = False
    included_keys: frozenset[str] = frozenset()
    included_groups: frozenset[str] = frozenset()
    excluded_keys: frozenset[str] = frozenset()
    excluded_patterns: tuple[re.Pattern[str], ...] = ()
    reprint_behavior: ReprintBehavior = ReprintBehavior.NEWEST
    books: tuple[str, ...] = ()
    adventures: tuple[str, ...] = ()
    homebrew: tuple[str, ...] = ()
    default_sources: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    tools_root: Path | None = None
    tag_prefix: str = ""
    paths: VaultPaths = field(default_factory=VaultPaths)
    aliases: SourceAliases = field(default=DEFAULT_SOURCE_ALIASES)

    @classmethod
    def from_user_config(
        cls,
        user: UserConfig,
        *,
        aliases: SourceAliases = DEFAULT_SOURCE_ALIASES,
    ) -> CompendiumConfig:
        """Validate ``user`` settings; raises :class:`InvalidExcludePatternError`."""

        resolved_aliases = aliases.with_file_ids(user.source_id_alias)
        books, book_sources = _resolve_named_files(user.sources.book, "book", resolved_aliases)
        adventures, adventure_sources = _resolve_named_files(
            user.sources.adventure, "adventure", resolved_aliases
        )
        allowed, allow_all = build_allow_list(
            (*user.references(), *book_sources, *adventure_sources),
            aliases=resolved_aliases,
        )
        patterns = tuple(compile_exclude_pattern(raw) for raw in user.exclude_pattern)
        tools_root = Path(user.sources.tools_root) if user.sources.tools_root else None

        config = cls(
            allowed_sources=allowed,
            allow_all=allow_all,
            included_keys=_lowered(user.include),
            included_groups=_lowered(user.include_group),
            excluded_keys=_lowered(user.exclude),
            excluded_patterns=patterns,
            reprint_behavior=user.reprint_behavior,
            books=books,
            adventures=adventures,
            homebrew=tuple(user.sources.homebrew),
            default_sources=MappingProxyType(
                {
                    name.lower(): source.lower()
                    for name, source in user.sources.default_source.items()
                }
            ),
            tools_root=tools_root,
            tag_prefix=_normalize_prefix(user.tag_prefix),
            paths=VaultPaths.from_settings(
                rules=user.paths.rules,
                compendium=user.paths.compendium,
                types=user.paths.types,
            ),
            aliases=resolved_aliases,
        )
        if config.no_sources:
            log.warning("No sources configured; only explicitly included keys will be admitted")
        return config

    @property
    def no_sources(self) -> bool:
        return not self.allow_all and not self.allowed_sources

    def resolve_books(self) -> tuple[str, ...]:
        return self.books

    def resolve_adventures(self) -> tuple[str, ...]:
        return self.adventures

    def resolve_homebrew(self) -> tuple[str, ...]:
        return self.homebrew

    def default_source_for(self, type_name: str) -> str | None:
        return self.default_sources.get(type_name.lower())

    def tag_of(self, *parts: str) -> str:
        """Build a prefixed, slugified tag (``prefix/spell/level-3``)."""

        return self.tag_prefix + "/".join(slugify(part) for part in parts)


def load_compendium_config(
    path: Path | str,
    *,
    aliases: SourceAliases = DEFAULT_SOURCE_ALIASES,
) -> CompendiumConfig:
    """Read a user config file and validate it into a :class:`CompendiumConfig`."""

    user = load_user_config(path)
    log.debug("Loaded configuration from %s", path)
    return CompendiumConfig.from_user_config(user, aliases=aliases)
