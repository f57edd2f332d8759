"""JSON export of the catalogue index."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from compendex.domain.catalogue import EntityCatalogue
    from compendex.domain.references import ReferenceGraph

log = logging.getLogger(__name__)


def full_index(catalogue: EntityCatalogue, graph: ReferenceGraph) -> dict[str, object]:
    """Every admitted key, primary or superseded, with its variants and referrers."""

    index: dict[str, object] = {}
    for entry in catalogue.every_entry():
        index[str(entry.key)] = {
            "source": entry.source,
            "primary": catalogue.is_primary(entry.key),
            "variants": [str(key) for key in catalogue.variants_of(entry.key)],
            "referencedBy": [
                str(key) for key in graph.referrers_of(entry.key, variants=catalogue)
            ],
        }
    return index


def filtered_index(catalogue: EntityCatalogue) -> list[str]:
    return sorted(str(entry.key) for entry in catalogue.all_entries())


def _write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)
        handle.write("\n")


def write_full_index(path: Path, catalogue: EntityCatalogue, graph: ReferenceGraph) -> None:
    index = full_index(catalogue, graph)
    _write_json(path, index)
    log.info("Wrote full index (%d keys) to %s", len(index), path)


def write_filtered_index(path: Path, catalogue: EntityCatalogue) -> None:
    keys = filtered_index(catalogue)
    _write_json(path, keys)
    log.info("Wrote filtered index (%d keys) to %s", len(keys), path)
