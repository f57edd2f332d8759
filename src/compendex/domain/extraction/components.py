"""Component, saving-throw and damage-type lists."""

from __future__ import annotations

from compendex.domain.model import RecordField, as_mapping

from .text import render_inline_tags, uppercase_first


def _material(value: object) -> str:
    if value is True:
        return "M"
    text = RecordField.TEXT.text_from(value) if as_mapping(value) is not None else value
    if not text:
        return "M"
    return f"M ({render_inline_tags(str(text)).strip()})"


def spell_components(components: object) -> str | None:
    """Render ``{"v": true, "s": true, "m": "..."}`` as ``V, S, M (...)``."""

    mapping = as_mapping(components)
    if not mapping:
        return None
    parts: list[str] = []
    for name, value in mapping.items():
        match name.lower():
            case "v":
                parts.append("V")
            case "s":
                parts.append("S")
            case "m":
                parts.append(_material(value))
            case "r":
                parts.append("R")
            case _:
                continue
    return ", ".join(parts) or None


def saving_throws(record: object) -> tuple[str, ...]:
    return tuple(
        uppercase_first(save.lower()) for save in RecordField.SAVING_THROW.strings_from(record)
    )


def damage_types(record: object) -> tuple[str, ...]:
    return tuple(
        uppercase_first(damage.lower())
        for damage in RecordField.DAMAGE_INFLICT.strings_from(record)
    )


def is_ritual(record: object) -> bool:
    return RecordField.RITUAL.bool_from(RecordField.SPELL_META.mapping_from(record))
