from __future__ import annotations

import pytest

from compendex.domain.model import EntityKey, EntityType, InvalidEntityKeyError


def test_key_is_lower_cased_and_stripped() -> None:
    key = EntityKey(EntityType.SPELL, "  Fireball ", "PHB")

    assert key.name == "fireball"
    assert key.source == "phb"
    assert str(key) == "spell|fireball|phb"


def test_key_with_discriminator_string_form() -> None:
    key = EntityKey(EntityType.SUBCLASS, "Evocation", "PHB", "Wizard")

    assert str(key) == "subclass|evocation|wizard|phb"
    assert key.identity == (EntityType.SUBCLASS, "evocation", "wizard")


@pytest.mark.parametrize(
    "text",
    ["spell|fireball|phb", "subclass|evocation|wizard|phb"],
)
def test_parse_round_trips(text: str) -> None:
    assert str(EntityKey.parse(text)) == text


@pytest.mark.parametrize("text", ["fireball", "spell|fireball", "nonsense|fireball|phb"])
def test_parse_rejects_malformed_keys(text: str) -> None:
    with pytest.raises(InvalidEntityKeyError):
        EntityKey.parse(text)


def test_missing_identity_fields_raise() -> None:
    with pytest.raises(InvalidEntityKeyError):
        EntityKey(EntityType.SPELL, "", "phb")
    with pytest.raises(InvalidEntityKeyError):
        EntityKey(EntityType.SPELL, "Fireball", "  ")


def test_reprints_share_identity() -> None:
    phb = EntityKey(EntityType.SPELL, "Fireball", "PHB")
    xphb = phb.with_source("XPHB")

    assert phb != xphb
    assert phb.identity == xphb.identity
    assert xphb.source == "xphb"


def test_for_record_reads_discriminator_field() -> None:
    record = {"name": "The Fiend", "source": "PHB", "className": "Warlock"}

    key = EntityKey.for_record(EntityType.SUBCLASS, record)

    assert str(key) == "subclass|the fiend|warlock|phb"


def test_for_record_uses_default_source() -> None:
    key = EntityKey.for_record(EntityType.SPELL, {"name": "Shield"}, default_source="xphb")

    assert key.source == "xphb"
    with pytest.raises(InvalidEntityKeyError):
        EntityKey.for_record(EntityType.SPELL, {"name": "Shield"})


def test_entity_type_lookups() -> None:
    assert EntityType.from_array_name("classFeature") is EntityType.CLASS_FEATURE
    assert EntityType.from_array_name("baseitem") is EntityType.ITEM
    assert EntityType.from_array_name("_meta") is None
    assert EntityType.from_tag("creature") is EntityType.MONSTER
    assert EntityType.from_tag("damage") is None
    assert EntityType.MONSTER.default_source == "mm"
    assert EntityType.SPELL.default_source == "phb"
