"""Area-of-effect descriptor from structured range data or rule text."""

from __future__ import annotations

import re
from dataclasses import dataclass

from compendex.domain.model import RecordField

STRUCTURED_AREA_SHAPES = frozenset(
    {"cone", "sphere", "line", "cube", "cylinder", "emanation", "hemisphere", "radius"}
)
_AREA_PHRASE = re.compile(
    r"(\d+)[-\s]*foot[-\s]*(radius|cone|line|cube|sphere|cylinder)",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class AreaOfEffect:
    shape: str
    size: int | None = None


def structured_area(range_node: object) -> AreaOfEffect | None:
    """Area from a range whose type is itself a shape; size is ``None`` if not numeric."""

    shape = RecordField.TYPE.text_from(range_node)
    if shape is None or shape not in STRUCTURED_AREA_SHAPES:
        return None
    distance = RecordField.DISTANCE.mapping_from(range_node)
    return AreaOfEffect(shape=shape, size=RecordField.AMOUNT.int_from(distance))


def area_from_text(text: str) -> AreaOfEffect | None:
    """Find ``<N>-foot <shape>`` phrasing; ``radius`` is reported as ``sphere``."""

    match = _AREA_PHRASE.search(text)
    if match is None:
        return None
    shape = match.group(2).lower()
    if shape == "radius":
        shape = "sphere"
    return AreaOfEffect(shape=shape, size=int(match.group(1)))


def extract_area_of_effect(range_node: object, body: str) -> AreaOfEffect | None:
    return structured_area(range_node) or area_from_text(body)
