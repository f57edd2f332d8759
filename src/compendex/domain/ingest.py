"""Single ingestion pass: records -> policy -> catalogue -> reference graph.

Documents are plain JSON trees whose top-level arrays are named after the
entity type they hold (``spell``, ``monster``, ``classFeature`` ...). Records
that fail policy are never admitted, so they cannot win a reprint conflict.
References are scanned only from admitted records.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .model import (
    AdmitOutcome,
    EntityKey,
    EntityType,
    InvalidEntityKeyError,
    RecordField,
    ReferenceRole,
    as_mapping,
    record_groups,
    record_sources,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .catalogue import EntityCatalogue
    from .policy import SourcePolicy
    from .references import ReferenceGraph

log = logging.getLogger(__name__)

_INLINE_REFERENCE = re.compile(r"\{@(\w+)\s+([^{}]+?)\}")
_SPELL_SUFFIX = re.compile(r"#\w+$")
_ADDITIONAL_SPELL_SKIP_KEYS = frozenset({"ability", "name", "resourceName", "choose", "all"})
_EXPANDED_SECTION = "expanded"


@dataclass(slots=True)
class IngestReport:
    """Counters for one ingestion pass."""

    admitted: int = 0
    superseded: int = 0
    rejected: int = 0
    excluded: int = 0
    skipped: int = 0
    references: int = 0
    failed_files: list[str] = field(default_factory=list[str])

    @property
    def ok(self) -> bool:
        return not self.failed_files

    def merge(self, other: IngestReport) -> None:
        self.admitted += other.admitted
        self.superseded += other.superseded
        self.rejected += other.rejected
        self.excluded += other.excluded
        self.skipped += other.skipped
        self.references += other.references
        self.failed_files.extend(other.failed_files)


def homebrew_sources(document: Mapping[str, object]) -> tuple[str, ...]:
    """Source ids a homebrew document declares under ``_meta.sources[].json``."""

    meta = RecordField.META.mapping_from(document)
    return tuple(
        source.lower()
        for item in RecordField.SOURCES.list_from(meta)
        if (source := RecordField.JSON.text_from(item))
    )


def _reference_key(
    entity_type: EntityType,
    text: str,
    default_source: str,
) -> EntityKey | None:
    """Build a key from ``name|source`` reference text (source optional)."""

    parts = [part.strip() for part in text.split("|")]
    name = parts[0]
    source = parts[1] if len(parts) > 1 and parts[1] else default_source
    try:
        return EntityKey(entity_type, name, source)
    except InvalidEntityKeyError:
        return None


def _strings_in(node: object, skip_keys: frozenset[str] = frozenset()) -> Iterator[str]:
    if isinstance(node, str):
        yield node
    elif isinstance(node, list):
        for item in node:
            yield from _strings_in(item, skip_keys)
    elif isinstance(node, Mapping):
        for name, value in node.items():
            if name not in skip_keys:
                yield from _strings_in(value, skip_keys)


@dataclass(slots=True)
class CompendiumIngestor:
    """Feed documents into a catalogue and reference graph under one policy."""

    policy: SourcePolicy
    catalogue: EntityCatalogue
    graph: ReferenceGraph
    default_sources: Mapping[str, str] = field(default_factory=dict[str, str])

    def default_source_for(self, entity_type: EntityType) -> str:
        return self.default_sources.get(entity_type.value, entity_type.default_source)

    def ingest_document(
        self,
        filename: str,
        document: Mapping[str, object],
        *,
        homebrew: bool = False,
    ) -> IngestReport:
        """Admit every typed record of ``document``; returns this document's counters."""

        report = IngestReport()
        policy = self.policy
        if homebrew:
            declared = homebrew_sources(document)
            if declared:
                log.debug("%s declares homebrew sources %s", filename, ", ".join(declared))
                policy = policy.with_sources(declared)

        for array_name, records in document.items():
            entity_type = EntityType.from_array_name(array_name)
            if entity_type is None or not isinstance(records, list):
                continue
            for record in records:
                mapping = as_mapping(record)
                if mapping is None:
                    report.skipped += 1
                    continue
                self._ingest(entity_type, mapping, policy=policy, filename=filename, report=report)

        log.info(
            "Ingested %s: %d admitted, %d superseded, %d rejected, %d excluded, %d skipped",
            filename,
            report.admitted,
            report.superseded,
            report.rejected,
            report.excluded,
            report.skipped,
        )
        return report

    def ingest_record(
        self,
        entity_type: EntityType,
        record: Mapping[str, object],
        *,
        filename: str = "<record>",
    ) -> IngestReport:
        report = IngestReport()
        self._ingest(entity_type, record, policy=self.policy, filename=filename, report=report)
        return report

    def _ingest(
        self,
        entity_type: EntityType,
        record: Mapping[str, object],
        *,
        policy: SourcePolicy,
        filename: str,
        report: IngestReport,
    ) -> None:
        try:
            key = EntityKey.for_record(
                entity_type, record, default_source=self.default_source_for(entity_type)
            )
        except InvalidEntityKeyError as exc:
            log.warning("Skipping %s record in %s: %s", entity_type.value, filename, exc)
            report.skipped += 1
            return

        sources = record_sources(record) or (key.source,)
        groups = record_groups(record)
        if not policy.admits(key, sources, groups):
            log.debug("Excluded %s", key)
            report.excluded += 1
            return

        result = self.catalogue.admit(key, record, key.source, sources=sources, groups=groups)
        match result.outcome:
            case AdmitOutcome.ADMITTED:
                report.admitted += 1
            case AdmitOutcome.SUPERSEDED_PRIOR:
                report.admitted += 1
                report.superseded += 1
            case AdmitOutcome.REJECTED_DUPLICATE:
                report.rejected += 1
        report.references += self.scan_references(key, record)

    def scan_references(self, key: EntityKey, record: Mapping[str, object]) -> int:
        """Record every outgoing reference of ``record``; returns the number of new edges."""

        added = 0
        for to_key, role in self._references_in(key, record):
            if to_key == key:
                continue
            if self.graph.add_reference(key, to_key, role):
                added += 1
        return added

    def _references_in(
        self,
        key: EntityKey,
        record: Mapping[str, object],
    ) -> Iterator[tuple[EntityKey, ReferenceRole]]:
        yield from self._additional_spells(record)
        yield from self._inline_mentions(record)
        yield from self._reprints(key, record)

    def _additional_spells(
        self, record: Mapping[str, object]
    ) -> Iterator[tuple[EntityKey, ReferenceRole]]:
        default_source = self.default_source_for(EntityType.SPELL)
        for block in RecordField.ADDITIONAL_SPELLS.list_from(record):
            mapping = as_mapping(block)
            if mapping is None:
                continue
            for section, spells in mapping.items():
                if section in _ADDITIONAL_SPELL_SKIP_KEYS:
                    continue
                role = (
                    ReferenceRole.EXPANDED if section == _EXPANDED_SECTION else ReferenceRole.GRANTS
                )
                for text in _strings_in(spells, _ADDITIONAL_SPELL_SKIP_KEYS):
                    spell = _reference_key(
                        EntityType.SPELL, _SPELL_SUFFIX.sub("", text.strip()), default_source
                    )
                    if spell is not None:
                        yield spell, role

    def _inline_mentions(
        self, record: Mapping[str, object]
    ) -> Iterator[tuple[EntityKey, ReferenceRole]]:
        for field_name in (RecordField.ENTRIES, RecordField.ENTRIES_HIGHER_LEVEL):
            for text in _strings_in(field_name.get_from(record)):
                for match in _INLINE_REFERENCE.finditer(text):
                    entity_type = EntityType.from_tag(match.group(1))
                    if entity_type is None:
                        continue
                    target = _reference_key(
                        entity_type, match.group(2), self.default_source_for(entity_type)
                    )
                    if target is not None:
                        yield target, ReferenceRole.MENTIONS

    def _reprints(
        self, key: EntityKey, record: Mapping[str, object]
    ) -> Iterator[tuple[EntityKey, ReferenceRole]]:
        for item in RecordField.REPRINTED_AS.list_from(record):
            if isinstance(item, str):
                uid, tag = item, None
            else:
                uid = RecordField.UID.text_from(item)
                tag = RecordField.TAG.text_from(item)
            if not uid:
                continue
            entity_type = (EntityType.from_tag(tag) if tag else None) or key.type
            target = _reprint_key(entity_type, uid, key)
            if target is not None:
                yield target, ReferenceRole.REPRINT


def _reprint_key(entity_type: EntityType, uid: str, origin: EntityKey) -> EntityKey | None:
    """Parse a ``reprintedAs`` uid.

    ``name|source`` keeps the discriminator of the reprinted record; longer
    forms carry ``name|discriminator|...|source``.
    """

    parts = [part.strip() for part in uid.split("|")]
    if len(parts) < 2:
        return None
    discriminator = origin.discriminator if len(parts) == 2 else parts[1]
    try:
        return EntityKey(entity_type, parts[0], parts[-1], discriminator)
    except InvalidEntityKeyError:
        return None
