"""Heuristic extraction of structured fields from rule text."""

from __future__ import annotations

from .area import AreaOfEffect, extract_area_of_effect
from .attributes import DerivedAttributes, derive_spell_attributes
from .components import damage_types, is_ritual, saving_throws, spell_components
from .damage import DamageInfo, extract_damage
from .ranges import spell_range
from .saves import extract_save_outcome
from .text import body_text, flatten_entries, higher_level_text, pluralize, render_inline_tags
from .timing import UnknownDurationError, casting_time, duration_segment, spell_duration

__all__ = [
    "AreaOfEffect",
    "DamageInfo",
    "DerivedAttributes",
    "UnknownDurationError",
    "body_text",
    "casting_time",
    "damage_types",
    "derive_spell_attributes",
    "duration_segment",
    "extract_area_of_effect",
    "extract_damage",
    "extract_save_outcome",
    "flatten_entries",
    "higher_level_text",
    "is_ritual",
    "pluralize",
    "render_inline_tags",
    "saving_throws",
    "spell_components",
    "spell_duration",
    "spell_range",
]
