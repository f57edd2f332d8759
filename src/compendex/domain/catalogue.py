"""Entity catalogue with reprint-conflict resolution.

Entries live in an append-only arena indexed by ``entry_id``. For every
conceptual identity (type, name, discriminator) the catalogue keeps one primary
id plus the ids of every superseded variant, so reprints that lose a conflict
stay retrievable for diagnostics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeAlias

from .model import AdmitOutcome, AdmitResult, CatalogueEntry, ReprintBehavior
from .sources import DEFAULT_SOURCE_ALIASES, SourceAliases

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Mapping

    from .model import EntityIdentity, EntityKey

EntryPredicate: TypeAlias = "Callable[[CatalogueEntry], bool]"

log = logging.getLogger(__name__)


class CatalogueFrozenError(RuntimeError):
    """Raised when admitting into a catalogue that is read-only."""


def incoming_wins(
    incoming_rank: int | None,
    current_rank: int | None,
    behavior: ReprintBehavior,
) -> bool:
    """Decide whether an incoming reprint displaces the current primary.

    Only ranked, distinct sources can displace; everything else keeps the
    first-admitted entry.
    """

    if incoming_rank is None or current_rank is None or incoming_rank == current_rank:
        return False
    if behavior is ReprintBehavior.OLDEST:
        return incoming_rank < current_rank
    return incoming_rank > current_rank


class CatalogueView:
    """Restartable lazy sequence over primary entries.

    Each iteration snapshots the primary ids first, so one full pass is stable
    even if the catalogue changes underneath it.
    """

    __slots__ = ("_catalogue", "_predicate")

    def __init__(self, catalogue: EntityCatalogue, predicate: EntryPredicate | None) -> None:
        self._catalogue = catalogue
        self._predicate = predicate

    def __iter__(self) -> Iterator[CatalogueEntry]:
        for entry_id in self._catalogue.primary_ids():
            entry = self._catalogue.entry(entry_id)
            if self._predicate is None or self._predicate(entry):
                yield entry


@dataclass(slots=True)
class EntityCatalogue:
    reprint_behavior: ReprintBehavior = ReprintBehavior.NEWEST
    aliases: SourceAliases = field(default=DEFAULT_SOURCE_ALIASES)
    _entries: list[CatalogueEntry] = field(default_factory=list["CatalogueEntry"], repr=False)
    _id_by_key: dict[EntityKey, int] = field(default_factory=dict["EntityKey", int], repr=False)
    _primary_by_identity: dict[EntityIdentity, int] = field(
        default_factory=dict["EntityIdentity", int], repr=False
    )
    _superseded_by_identity: dict[EntityIdentity, list[int]] = field(
        default_factory=dict["EntityIdentity", list[int]], repr=False
    )
    _frozen: bool = field(default=False, repr=False)

    def __len__(self) -> int:
        return len(self._primary_by_identity)

    def __contains__(self, key: object) -> bool:
        return key in self._id_by_key

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def admit(
        self,
        key: EntityKey,
        record: Mapping[str, object],
        source: str | None = None,
        *,
        sources: Iterable[str] = (),
        groups: Iterable[str] = (),
    ) -> AdmitResult:
        """Admit ``record`` under ``key`` and resolve reprint conflicts."""

        if self._frozen:
            raise CatalogueFrozenError(f"Catalogue is frozen; cannot admit {key}")

        effective_source = (source or key.source).lower()
        entry = CatalogueEntry(
            entry_id=len(self._entries),
            key=key,
            record=MappingProxyType(dict(record)),
            source=effective_source,
            release_rank=self.aliases.release_rank(effective_source),
            sources=tuple(sources) or (effective_source,),
            groups=frozenset(groups),
        )
        self._entries.append(entry)
        self._id_by_key.setdefault(key, entry.entry_id)

        identity = key.identity
        current_id = self._primary_by_identity.get(identity)
        if current_id is None:
            self._primary_by_identity[identity] = entry.entry_id
            return AdmitResult(outcome=AdmitOutcome.ADMITTED, entry=entry)

        current = self._entries[current_id]
        superseded = self._superseded_by_identity.setdefault(identity, [])
        if incoming_wins(entry.release_rank, current.release_rank, self.reprint_behavior):
            self._primary_by_identity[identity] = entry.entry_id
            superseded.append(current_id)
            log.debug("%s supersedes %s (%s)", key, current.key, self.reprint_behavior.value)
            return AdmitResult(
                outcome=AdmitOutcome.SUPERSEDED_PRIOR,
                entry=entry,
                displaced=current,
            )

        superseded.append(entry.entry_id)
        log.debug("%s kept over %s (%s)", current.key, key, self.reprint_behavior.value)
        return AdmitResult(outcome=AdmitOutcome.REJECTED_DUPLICATE, entry=entry)

    def entry(self, entry_id: int) -> CatalogueEntry:
        return self._entries[entry_id]

    def lookup(self, key: EntityKey) -> CatalogueEntry | None:
        entry_id = self._id_by_key.get(key)
        if entry_id is None:
            return None
        return self._entries[entry_id]

    def primary_for(self, key: EntityKey) -> CatalogueEntry | None:
        """Return the primary variant of the conceptual entity behind ``key``."""

        entry_id = self._primary_by_identity.get(key.identity)
        if entry_id is None:
            return None
        return self._entries[entry_id]

    def is_primary(self, key: EntityKey) -> bool:
        primary = self.primary_for(key)
        return primary is not None and primary.key == key

    def variants_of(self, key: EntityKey) -> tuple[EntityKey, ...]:
        """Return every admitted key sharing ``key``'s identity, primary first."""

        identity = key.identity
        primary_id = self._primary_by_identity.get(identity)
        if primary_id is None:
            return ()
        ordered = [self._entries[primary_id].key]
        for entry_id in sorted(self._superseded_by_identity.get(identity, ())):
            variant = self._entries[entry_id].key
            if variant not in ordered:
                ordered.append(variant)
        return tuple(ordered)

    def superseded(self) -> tuple[CatalogueEntry, ...]:
        """Entries that lost a reprint conflict, in admission order."""

        entry_ids = sorted(
            entry_id for ids in self._superseded_by_identity.values() for entry_id in ids
        )
        return tuple(self._entries[entry_id] for entry_id in entry_ids)

    def primary_ids(self) -> tuple[int, ...]:
        return tuple(sorted(self._primary_by_identity.values()))

    def all_entries(self, predicate: EntryPredicate | None = None) -> CatalogueView:
        return CatalogueView(self, predicate)

    def every_entry(self) -> tuple[CatalogueEntry, ...]:
        """Every admitted entry, primary or not, in admission order."""

        return tuple(self._entries)
