"""Source identifiers: renames, abbreviations and publication order.

Sources are identified by lower-cased tags (``phb``, ``xphb``, ...). Some tags
have a long-form spelling, and a few were renamed upstream; every lookup
accepts any of these forms.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

SOURCE_RENAMES: Mapping[str, str] = MappingProxyType(
    {
        "freerules": "basicrules",
        "freerules2024": "basicrules2024",
    }
)

SOURCE_ABBREVIATIONS: Mapping[str, str] = MappingProxyType(
    {
        "players-handbook": "phb",
        "dungeon-masters-guide": "dmg",
        "monster-manual": "mm",
        "sword-coast-adventurers-guide": "scag",
        "volos-guide-to-monsters": "vgm",
        "xanathars-guide-to-everything": "xge",
        "mordenkainens-tome-of-foes": "mtf",
        "explorers-guide-to-wildemount": "egw",
        "tashas-cauldron-of-everything": "tce",
        "fizbans-treasury-of-dragons": "ftd",
        "mordenkainen-presents-monsters-of-the-multiverse": "mpmm",
        "players-handbook-2024": "xphb",
        "dungeon-masters-guide-2024": "xdmg",
        "monster-manual-2025": "xmm",
        "system-reference-document": "srd",
        "system-reference-document-5.2": "srd52",
    }
)

# Groups of sources in publication order; sources in one group share a rank.
SOURCE_RELEASE_ORDER: tuple[tuple[str, ...], ...] = (
    ("phb", "basicrules", "srd"),
    ("mm",),
    ("dmg",),
    ("scag",),
    ("vgm",),
    ("xge",),
    ("mtf",),
    ("ggr",),
    ("ai",),
    ("egw",),
    ("mot",),
    ("tce",),
    ("vrgr",),
    ("ftd",),
    ("scc",),
    ("mpmm",),
    ("bgg",),
    ("bmt",),
    ("xphb", "basicrules2024", "srd52"),
    ("xdmg",),
    ("xmm",),
)


def _release_ranks(order: tuple[tuple[str, ...], ...]) -> dict[str, int]:
    return {tag: rank for rank, group in enumerate(order) for tag in group}


@dataclass(frozen=True, slots=True)
class SourceAliases:
    """Resolve renamed and long-form source tags.

    All lookups lower-case their input and return unknown tags unchanged, so
    resolving an already-canonical tag is a no-op.
    """

    renames: Mapping[str, str] = field(default_factory=lambda: SOURCE_RENAMES)
    abbreviations: Mapping[str, str] = field(default_factory=lambda: SOURCE_ABBREVIATIONS)
    release_ranks: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType(_release_ranks(SOURCE_RELEASE_ORDER))
    )
    file_ids: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def canonical_for(self, tag: str) -> str:
        normalized = tag.strip().lower()
        return self.renames.get(normalized, normalized)

    def abbreviation_for(self, tag: str) -> str:
        canonical = self.canonical_for(tag)
        return self.abbreviations.get(canonical, canonical)

    def expand(self, tag: str) -> frozenset[str]:
        """Return every spelling that refers to ``tag``."""

        normalized = tag.strip().lower()
        return frozenset(
            {normalized, self.canonical_for(normalized), self.abbreviation_for(normalized)}
        )

    def release_rank(self, tag: str) -> int | None:
        """Publication position of ``tag``; ``None`` when the source is unranked."""

        return self.release_ranks.get(self.abbreviation_for(tag))

    def file_id_for(self, tag: str) -> str:
        """Return the id used in ``book-<id>.json`` style filenames."""

        normalized = tag.strip().lower()
        return self.file_ids.get(normalized, normalized)

    def with_file_ids(self, file_ids: Mapping[str, str]) -> SourceAliases:
        merged = {**self.file_ids, **{k.lower(): v.lower() for k, v in file_ids.items()}}
        return SourceAliases(
            renames=self.renames,
            abbreviations=self.abbreviations,
            release_ranks=self.release_ranks,
            file_ids=MappingProxyType(merged),
        )


DEFAULT_SOURCE_ALIASES = SourceAliases()
