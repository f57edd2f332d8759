"""Derived spell attributes.

Each field is computed by its own extractor. A field the extractor does not
recognize is left as ``None``; the others are still filled in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from compendex.domain.model import RecordField

from .area import AreaOfEffect, extract_area_of_effect
from .components import damage_types, is_ritual, saving_throws, spell_components
from .damage import DamageInfo, extract_damage
from .ranges import spell_range
from .saves import extract_save_outcome
from .text import body_text, higher_level_text
from .timing import casting_time, spell_duration

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True, kw_only=True)
class DerivedAttributes:
    casting_time: str | None = None
    range: str | None = None
    duration: str | None = None
    components: str | None = None
    ritual: bool = False
    saving_throws: tuple[str, ...] = ()
    damage_types: tuple[str, ...] = ()
    damage: DamageInfo | None = None
    area_of_effect: AreaOfEffect | None = None
    save_outcome: str | None = None


def derive_spell_attributes(record: Mapping[str, object]) -> DerivedAttributes:
    body = body_text(record)
    saves = saving_throws(record)
    range_node = RecordField.RANGE.get_from(record)
    return DerivedAttributes(
        casting_time=casting_time(RecordField.TIME.get_from(record)),
        range=spell_range(range_node),
        duration=spell_duration(RecordField.DURATION.get_from(record)),
        components=spell_components(RecordField.COMPONENTS.get_from(record)),
        ritual=is_ritual(record),
        saving_throws=saves,
        damage_types=damage_types(record),
        damage=extract_damage(body, higher_level_text(record)),
        area_of_effect=extract_area_of_effect(range_node, body),
        save_outcome=extract_save_outcome(body, saves),
    )
