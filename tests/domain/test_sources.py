from __future__ import annotations

import pytest

from compendex.domain.sources import DEFAULT_SOURCE_ALIASES, SourceAliases


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("freerules2024", "basicrules2024"),
        ("FreeRules", "basicrules"),
        ("phb", "phb"),
        ("homebrew-thing", "homebrew-thing"),
    ],
)
def test_canonical_for_applies_renames(tag: str, expected: str) -> None:
    assert DEFAULT_SOURCE_ALIASES.canonical_for(tag) == expected


def test_abbreviation_for_maps_long_forms() -> None:
    aliases = DEFAULT_SOURCE_ALIASES

    assert aliases.abbreviation_for("players-handbook") == "phb"
    assert aliases.abbreviation_for("Players-Handbook-2024") == "xphb"
    assert aliases.abbreviation_for("xge") == "xge"


@pytest.mark.parametrize("tag", ["players-handbook", "freerules2024", "PHB", "unknown-book"])
def test_alias_resolution_is_idempotent(tag: str) -> None:
    aliases = DEFAULT_SOURCE_ALIASES

    once = aliases.abbreviation_for(tag)

    assert aliases.abbreviation_for(once) == once
    assert aliases.canonical_for(aliases.canonical_for(tag)) == aliases.canonical_for(tag)


def test_expand_includes_every_spelling() -> None:
    expanded = DEFAULT_SOURCE_ALIASES.expand("Players-Handbook")

    assert expanded == frozenset({"players-handbook", "phb"})


def test_release_rank_orders_reprints() -> None:
    aliases = DEFAULT_SOURCE_ALIASES

    phb = aliases.release_rank("phb")
    xphb = aliases.release_rank("players-handbook-2024")

    assert phb is not None
    assert xphb is not None
    assert phb < xphb
    assert aliases.release_rank("basicrules") == phb
    assert aliases.release_rank("freerules2024") == xphb
    assert aliases.release_rank("my-homebrew") is None


def test_file_id_for_uses_configured_aliases() -> None:
    aliases = SourceAliases().with_file_ids({"XDMG": "DMG-2024"})

    assert aliases.file_id_for("xdmg") == "dmg-2024"
    assert aliases.file_id_for("phb") == "phb"
    assert DEFAULT_SOURCE_ALIASES.file_id_for("xdmg") == "xdmg"
