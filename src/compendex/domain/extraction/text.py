"""Plain-text rendering of entry trees for the extractors.

Rule text is stored as nested ``entries`` blocks with inline ``{@tag ...}``
markup. The extractors only need readable text, so this module flattens the
tree and replaces each tag with its display text.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from compendex.domain.model import RecordField

_INLINE_TAG = re.compile(r"\{@(\w+)\s*([^{}]*)\}")
_SCALING_TAGS = frozenset({"scaledamage", "scaledice"})
_DISPLAY_AT_THIRD = frozenset({"creature", "item", "spell", "condition", "feat", "race"})

_IRREGULAR_PLURALS = {"foot": "feet"}
_IRREGULAR_SINGULARS = {plural: singular for singular, plural in _IRREGULAR_PLURALS.items()}


def uppercase_first(text: str) -> str:
    if not text:
        return text
    return text[0].upper() + text[1:]


def _plural(word: str) -> str:
    lowered = word.lower()
    if lowered in _IRREGULAR_PLURALS:
        return _match_case(word, _IRREGULAR_PLURALS[lowered])
    if lowered in _IRREGULAR_SINGULARS or lowered.endswith("s"):
        return word
    return word + "s"


def _singular(word: str) -> str:
    lowered = word.lower()
    if lowered in _IRREGULAR_SINGULARS:
        return _match_case(word, _IRREGULAR_SINGULARS[lowered])
    if lowered.endswith("s") and not lowered.endswith("ss") and len(lowered) > 1:
        return word[:-1]
    return word


def _match_case(original: str, replacement: str) -> str:
    if original[:1].isupper():
        return uppercase_first(replacement)
    return replacement


def pluralize(text: str, count: int) -> str:
    """Inflect the last word of ``text`` for ``count`` (``1 foot``, ``2 feet``)."""

    head, _, last = text.rpartition(" ")
    if not last:
        return text
    inflected = _singular(last) if count == 1 else _plural(last)
    return f"{head} {inflected}" if head else inflected


def _render_tag(match: re.Match[str]) -> str:
    tag = match.group(1).lower()
    parts = match.group(2).split("|")
    if tag in _SCALING_TAGS and len(parts) >= 3:
        return parts[2].strip()
    if tag in _DISPLAY_AT_THIRD and len(parts) >= 3 and parts[2].strip():
        return parts[2].strip()
    return parts[0].strip()


def render_inline_tags(text: str) -> str:
    """Replace ``{@tag text|...}`` markup with its display text, innermost first."""

    previous = None
    rendered = text
    while previous != rendered:
        previous = rendered
        rendered = _INLINE_TAG.sub(_render_tag, rendered)
    return rendered


def flatten_entries(node: object) -> list[str]:
    """Flatten an entries tree into rendered text blocks."""

    blocks: list[str] = []
    _append_text(blocks, node)
    return blocks


def _append_text(blocks: list[str], node: object) -> None:
    if isinstance(node, str):
        rendered = render_inline_tags(node).strip()
        if rendered:
            blocks.append(rendered)
        return
    if isinstance(node, list):
        for item in node:
            _append_text(blocks, item)
        return
    if not isinstance(node, Mapping):
        return

    nested: list[str] = []
    for child_field in (
        RecordField.ENTRIES,
        RecordField.ENTRY,
        RecordField.ITEMS,
        RecordField.ROWS,
    ):
        _append_text(nested, child_field.get_from(node))
    name = RecordField.NAME.text_from(node)
    if name and nested:
        nested[0] = f"**{render_inline_tags(name)}.** {nested[0]}"
    blocks.extend(nested)


def body_text(record: object) -> str:
    """Main rule text of a record, space-joined."""

    return " ".join(flatten_entries(RecordField.ENTRIES.get_from(record)))


def higher_level_text(record: object) -> str | None:
    """Text of the "at higher levels" block, ``None`` when the record has none."""

    if not RecordField.ENTRIES_HIGHER_LEVEL.exists_in(record):
        return None
    text = " ".join(flatten_entries(RecordField.ENTRIES_HIGHER_LEVEL.get_from(record)))
    return text or None
