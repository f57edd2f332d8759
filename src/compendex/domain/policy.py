"""Source policy: which sources and keys are in scope.

Evaluation is read-only against sets fixed at configuration time. Explicit
include/exclude rules always take precedence over source-level allow-lists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from .model import InclusionDecision
from .sources import DEFAULT_SOURCE_ALIASES, SourceAliases

if TYPE_CHECKING:
    import re
    from collections.abc import Iterable

    from compendex.config.compendium import CompendiumConfig

    from .model import EntityKey

ALL_SOURCES_MARKERS = frozenset({"*", "all"})

log = logging.getLogger(__name__)


def build_allow_list(
    tags: Iterable[str],
    *,
    aliases: SourceAliases = DEFAULT_SOURCE_ALIASES,
    allow_all: bool = False,
) -> tuple[frozenset[str], bool]:
    """Return ``(allowed_sources, allow_all)`` for the given source tags.

    Every allowed tag also allows its canonical rename and its abbreviation. A
    wildcard entry switches to allow-all for the rest of the session.
    """

    allowed: set[str] = {"*"} if allow_all else set()
    for tag in tags:
        normalized = tag.strip().lower()
        if not normalized:
            continue
        if normalized in ALL_SOURCES_MARKERS:
            allow_all = True
            allowed = {"*"}
            continue
        if not allow_all:
            allowed.update(aliases.expand(normalized))
    return frozenset(allowed), allow_all


@dataclass(frozen=True, slots=True, kw_only=True)
class SourcePolicy:
    allowed_sources: frozenset[str] = frozenset()
    allow_all: bool = False
    included_keys: frozenset[str] = frozenset()
    included_groups: frozenset[str] = frozenset()
    excluded_keys: frozenset[str] = frozenset()
    excluded_patterns: tuple[re.Pattern[str], ...] = ()
    aliases: SourceAliases = field(default=DEFAULT_SOURCE_ALIASES)

    @classmethod
    def from_config(cls, config: CompendiumConfig) -> SourcePolicy:
        return cls(
            allowed_sources=config.allowed_sources,
            allow_all=config.allow_all,
            included_keys=config.included_keys,
            included_groups=config.included_groups,
            excluded_keys=config.excluded_keys,
            excluded_patterns=config.excluded_patterns,
            aliases=config.aliases,
        )

    @property
    def no_sources(self) -> bool:
        return not self.allow_all and not self.allowed_sources

    def is_source_allowed(self, source: str | None) -> bool:
        if self.allow_all:
            return True
        if not source or not source.strip():
            return False
        normalized = source.strip().lower()
        return (
            normalized in self.allowed_sources
            or self.aliases.abbreviation_for(normalized) in self.allowed_sources
        )

    def sources_allowed(self, sources: Iterable[str]) -> bool:
        if self.allow_all:
            return True
        return any(self.is_source_allowed(source) for source in sources)

    def groups_included(self, groups: Iterable[str]) -> bool:
        return any(group.lower() in self.included_groups for group in groups)

    def is_key_included(self, key: EntityKey | str) -> InclusionDecision:
        """Apply explicit rules in order: include key, then exclude key or pattern."""

        text = str(key).lower()
        if text in self.included_keys:
            return InclusionDecision.INCLUDED
        if text in self.excluded_keys or any(
            pattern.fullmatch(text) for pattern in self.excluded_patterns
        ):
            return InclusionDecision.EXCLUDED
        return InclusionDecision.UNSPECIFIED

    def admits(
        self,
        key: EntityKey,
        sources: Iterable[str] = (),
        groups: Iterable[str] = (),
    ) -> bool:
        """Combined decision: explicit rules first, then include groups and allowed sources."""

        decision = self.is_key_included(key)
        if decision is InclusionDecision.UNSPECIFIED:
            if self.groups_included(groups):
                return True
            candidates = tuple(sources) or (key.source,)
            return self.sources_allowed(candidates)
        log.debug("Explicit %s for %s", decision.value, key)
        return decision is InclusionDecision.INCLUDED

    def with_sources(self, sources: Iterable[str]) -> SourcePolicy:
        """Return a copy that also allows ``sources`` (used for homebrew files)."""

        allowed, allow_all = build_allow_list(
            (*self.allowed_sources, *sources),
            aliases=self.aliases,
            allow_all=self.allow_all,
        )
        return replace(self, allowed_sources=allowed, allow_all=allow_all)
