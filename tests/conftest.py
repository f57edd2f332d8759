from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, cast

import pytest

from compendex.domain.catalogue import EntityCatalogue
from compendex.domain.ingest import CompendiumIngestor
from compendex.domain.policy import SourcePolicy, build_allow_list
from compendex.domain.references import ReferenceGraph

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture(scope="session")
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture(scope="session")
def tools_root() -> Path:
    return DATA_DIR / "tools"


@pytest.fixture(scope="session")
def homebrew_path() -> Path:
    return DATA_DIR / "homebrew" / "glitter-brew.json"


@pytest.fixture(scope="session")
def spell_records() -> dict[tuple[str, str], Mapping[str, object]]:
    records: dict[tuple[str, str], Mapping[str, object]] = {}
    for path in sorted((DATA_DIR / "tools" / "data" / "spells").glob("spells-*.json")):
        with path.open(encoding="utf-8") as handle:
            document = cast(dict[str, list[dict[str, object]]], json.load(handle))
        for record in document["spell"]:
            records[(str(record["name"]).lower(), str(record["source"]).lower())] = record
    return records


@pytest.fixture
def fireball(spell_records: dict[tuple[str, str], Mapping[str, object]]) -> Mapping[str, object]:
    return spell_records[("fireball", "phb")]


@pytest.fixture
def make_policy() -> Callable[..., SourcePolicy]:
    def factory(*sources: str, **overrides: object) -> SourcePolicy:
        allowed, allow_all = build_allow_list(sources)
        return SourcePolicy(
            allowed_sources=allowed,
            allow_all=allow_all,
            **overrides,  # type: ignore[arg-type]
        )

    return factory


@pytest.fixture
def make_ingestor() -> Callable[..., CompendiumIngestor]:
    def factory(
        policy: SourcePolicy, catalogue: EntityCatalogue | None = None
    ) -> CompendiumIngestor:
        return CompendiumIngestor(
            policy=policy,
            catalogue=EntityCatalogue() if catalogue is None else catalogue,
            graph=ReferenceGraph(),
        )

    return factory
