"""Load source documents from a local tools data checkout.

Documents are read one at a time and handed to the ingestor. A file that
cannot be read or parsed is logged and recorded in the report; the remaining
files are still ingested.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from compendex.domain.ingest import IngestReport

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from compendex.config.compendium import CompendiumConfig
    from compendex.domain.ingest import CompendiumIngestor

log = logging.getLogger(__name__)

DATA_DIRECTORY = "data"

STANDARD_DOCUMENT_GLOBS: tuple[str, ...] = (
    "actions.json",
    "adventures.json",
    "backgrounds.json",
    "bastions.json",
    "books.json",
    "conditionsdiseases.json",
    "decks.json",
    "deities.json",
    "feats.json",
    "items-base.json",
    "items.json",
    "languages.json",
    "objects.json",
    "optionalfeatures.json",
    "psionics.json",
    "races.json",
    "rewards.json",
    "senses.json",
    "skills.json",
    "tables.json",
    "trapshazards.json",
    "variantrules.json",
    "vehicles.json",
    "bestiary/bestiary-*.json",
    "class/class-*.json",
    "spells/spells-*.json",
)


class SourceReadError(RuntimeError):
    """Raised when a source document cannot be read or is not a JSON object."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Unable to read {path}: {reason}")


def read_document(path: Path) -> Mapping[str, object]:
    try:
        with path.open(encoding="utf-8") as handle:
            payload = json.load(handle)
    except OSError as exc:
        raise SourceReadError(path, str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise SourceReadError(path, f"invalid JSON ({exc})") from exc
    if not isinstance(payload, dict):
        raise SourceReadError(path, "top-level value is not an object")
    return payload


@dataclass(frozen=True, slots=True)
class ToolsDataSource:
    root: Path

    @classmethod
    def at(cls, tools_root: Path | str) -> ToolsDataSource:
        """Use ``<tools_root>/data`` when it exists, else ``tools_root`` itself."""

        root = Path(tools_root)
        data = root / DATA_DIRECTORY
        if data.is_dir():
            root = data
        return cls(root=root)

    def standard_documents(self) -> tuple[Path, ...]:
        found: list[Path] = []
        for pattern in STANDARD_DOCUMENT_GLOBS:
            found.extend(sorted(self.root.glob(pattern)))
        return tuple(found)

    def resolve(self, relative: str) -> Path:
        return self.root / relative


def _ingest_paths(
    ingestor: CompendiumIngestor,
    paths: Iterable[Path],
    report: IngestReport,
    *,
    homebrew: bool = False,
) -> None:
    for path in paths:
        try:
            document = read_document(path)
        except SourceReadError as exc:
            log.error("%s", exc)
            report.failed_files.append(str(path))
            continue
        report.merge(ingestor.ingest_document(str(path), document, homebrew=homebrew))


def ingest_sources(
    ingestor: CompendiumIngestor,
    source: ToolsDataSource,
    config: CompendiumConfig,
) -> IngestReport:
    """Ingest standard documents, then adventures, books and homebrew files."""

    report = IngestReport()
    _ingest_paths(ingestor, source.standard_documents(), report)
    _ingest_paths(ingestor, (source.resolve(name) for name in config.resolve_adventures()), report)
    _ingest_paths(ingestor, (source.resolve(name) for name in config.resolve_books()), report)
    _ingest_paths(
        ingestor, (Path(name) for name in config.resolve_homebrew()), report, homebrew=True
    )
    log.info(
        "Ingestion finished: %d admitted, %d superseded, %d excluded, %d skipped, %d failed files",
        report.admitted,
        report.superseded,
        report.excluded,
        report.skipped,
        len(report.failed_files),
    )
    return report
