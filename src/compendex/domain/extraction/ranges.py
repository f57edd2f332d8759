"""Spell range phrases."""

from __future__ import annotations

from compendex.domain.model import RecordField

from .text import pluralize, uppercase_first

AREA_SHAPES = frozenset({"cube", "cone", "emanation", "hemisphere", "line", "radius", "sphere"})
NAMED_DISTANCES = frozenset({"self", "sight", "touch", "unlimited"})


def spell_range(range_node: object) -> str | None:
    """Render a structured range (``Self (20-foot Sphere)``, ``150 feet``, ``Touch``)."""

    range_type = RecordField.TYPE.text_from(range_node)
    if range_type is None:
        return None
    distance = RecordField.DISTANCE.mapping_from(range_node)
    distance_type = RecordField.TYPE.text_from(distance)
    amount = RecordField.AMOUNT.text_from(distance)

    if range_type in AREA_SHAPES:
        if amount is None or distance_type is None:
            return None
        return f"Self ({amount}-{pluralize(distance_type, 1)} {uppercase_first(range_type)})"
    if range_type == "point":
        if distance_type in NAMED_DISTANCES:
            return uppercase_first(distance_type)
        if amount is None or distance_type is None:
            return None
        return f"{amount} {distance_type}"
    if range_type == "special":
        return "Special"
    return None
