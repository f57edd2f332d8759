"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from compendex.adapters.index_writer import write_filtered_index, write_full_index
from compendex.adapters.tools_data import ToolsDataSource, ingest_sources
from compendex.domain.catalogue import EntityCatalogue
from compendex.domain.extraction import derive_spell_attributes
from compendex.domain.ingest import CompendiumIngestor, IngestReport
from compendex.domain.model import EntityType
from compendex.domain.policy import SourcePolicy
from compendex.domain.references import ReferenceGraph

if TYPE_CHECKING:
    from pathlib import Path

    from compendex.config.compendium import CompendiumConfig
    from compendex.domain.catalogue import CatalogueView, EntryPredicate
    from compendex.domain.extraction import DerivedAttributes
    from compendex.domain.model import CatalogueEntry, EntityKey, ReferenceEdge

log = getLogger(__name__)


@dataclass(slots=True)
class Compendium:
    """Read-only surface over a finished ingestion pass."""

    config: CompendiumConfig
    policy: SourcePolicy
    catalogue: EntityCatalogue
    graph: ReferenceGraph
    report: IngestReport

    def lookup(self, key: EntityKey) -> CatalogueEntry | None:
        return self.catalogue.lookup(key)

    def all_entries(self, predicate: EntryPredicate | None = None) -> CatalogueView:
        return self.catalogue.all_entries(predicate)

    def references_to(self, key: EntityKey) -> tuple[ReferenceEdge, ...]:
        return self.graph.references_to(key)

    def expanded_references_to(self, key: EntityKey) -> tuple[ReferenceEdge, ...]:
        return self.graph.expanded_references_to(key, variants=self.catalogue)

    def referrers_of(self, key: EntityKey) -> tuple[EntityKey, ...]:
        return self.graph.referrers_of(key, variants=self.catalogue)

    def spell_attributes(self, key: EntityKey) -> DerivedAttributes | None:
        """Derived attributes of the primary variant of a spell."""

        if key.type is not EntityType.SPELL:
            return None
        entry = self.catalogue.primary_for(key)
        if entry is None:
            return None
        return derive_spell_attributes(entry.record)

    def write_indexes(
        self,
        *,
        full_index: Path | None = None,
        filtered_index: Path | None = None,
    ) -> None:
        if full_index is not None:
            write_full_index(full_index, self.catalogue, self.graph)
        if filtered_index is not None:
            write_filtered_index(filtered_index, self.catalogue)


def build_compendium(config: CompendiumConfig, tools_root: Path | str) -> Compendium:
    """Ingest every configured source under ``tools_root`` and freeze the result."""

    policy = SourcePolicy.from_config(config)
    catalogue = EntityCatalogue(reprint_behavior=config.reprint_behavior, aliases=config.aliases)
    graph = ReferenceGraph()
    ingestor = CompendiumIngestor(
        policy=policy,
        catalogue=catalogue,
        graph=graph,
        default_sources=config.default_sources,
    )
    source = ToolsDataSource.at(tools_root)
    log.info("Reading sources from %s (reprint behavior: %s)", source.root, config.reprint_behavior)

    report = ingest_sources(ingestor, source, config)
    catalogue.freeze()
    log.info(
        "Catalogue ready: entries=%d, superseded=%d, references=%d",
        len(catalogue),
        len(catalogue.superseded()),
        len(graph),
    )
    return Compendium(
        config=config,
        policy=policy,
        catalogue=catalogue,
        graph=graph,
        report=report,
    )
