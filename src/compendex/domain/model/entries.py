"""Catalogue entries, admission results and reference edges."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import AdmitOutcome, ReferenceRole

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .keys import EntityKey


@dataclass(frozen=True, slots=True, kw_only=True)
class CatalogueEntry:
    """One admitted record.

    Entries never change after admission. Whether an entry is the primary variant
    of its conceptual entity is tracked by the catalogue, not here.
    """

    entry_id: int
    key: EntityKey
    record: Mapping[str, object] = field(repr=False)
    source: str
    release_rank: int | None = None
    sources: tuple[str, ...] = ()
    groups: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True, kw_only=True)
class AdmitResult:
    outcome: AdmitOutcome
    entry: CatalogueEntry
    displaced: CatalogueEntry | None = None

    @property
    def is_primary(self) -> bool:
        return self.outcome is not AdmitOutcome.REJECTED_DUPLICATE


@dataclass(frozen=True, slots=True)
class ReferenceEdge:
    """Directed relation ``from_key -> to_key`` labelled with a role."""

    from_key: EntityKey
    to_key: EntityKey
    role: ReferenceRole

    @property
    def sort_key(self) -> tuple[str, str, str]:
        return (str(self.from_key), self.role.value, str(self.to_key))
