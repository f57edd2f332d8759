"""Damage dice and higher-level scaling.

Each helper handles one pattern so a miss in one does not affect the others.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_DICE = re.compile(r"\b(\d+d\d+(?:[+\-]\d+)?)\b")
_DICE_MARKER = re.compile(r"dice:(\d+d\d+)", re.IGNORECASE)
_SCALING_LEVEL = re.compile(r"\b(\d+)(?:st|nd|rd|th)\s+level\s+or\s+higher", re.IGNORECASE)
_HIGHER_LEVELS_HEADER = re.compile(
    r"^\s*\*\*at\s+higher\s+levels\.?\*\*\s*|^\s*at\s+higher\s+levels[.:]*\s*",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class DamageInfo:
    base_damage: str | None = None
    scaling: str | None = None
    scaling_level: int | None = None
    scaling_dice: str | None = None


def extract_base_damage(body: str) -> str | None:
    match = _DICE.search(body)
    return match.group(1) if match else None


def extract_scaling_description(higher_levels: str | None) -> str | None:
    """Higher-level text without its leading "At Higher Levels" header."""

    if not higher_levels:
        return None
    cleaned = _HIGHER_LEVELS_HEADER.sub("", higher_levels, count=1).strip()
    return cleaned or None


def extract_scaling_level(higher_levels: str | None) -> int | None:
    if not higher_levels:
        return None
    match = _SCALING_LEVEL.search(higher_levels)
    return int(match.group(1)) if match else None


def extract_scaling_dice(higher_levels: str | None) -> str | None:
    """Per-level dice: an explicit ``dice:NdM`` marker, else the first dice token."""

    if not higher_levels:
        return None
    marker = _DICE_MARKER.search(higher_levels)
    if marker is not None:
        return marker.group(1)
    return extract_base_damage(higher_levels)


def extract_damage(body: str, higher_levels: str | None = None) -> DamageInfo | None:
    info = DamageInfo(
        base_damage=extract_base_damage(body),
        scaling=extract_scaling_description(higher_levels),
        scaling_level=extract_scaling_level(higher_levels),
        scaling_dice=extract_scaling_dice(higher_levels),
    )
    if info == DamageInfo():
        return None
    return info
