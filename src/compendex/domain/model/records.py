"""Typed accessors over loosely-typed JSON records.

Source books are parsed into plain ``dict``/``list`` trees. Every field the
domain reads is named in :class:`RecordField`; accessors check existence and
shape explicitly and return ``None`` (or an empty value) instead of raising.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import TypeAlias, cast

JsonValue: TypeAlias = object
JsonMapping: TypeAlias = Mapping[str, object]


def as_mapping(node: object) -> JsonMapping | None:
    if isinstance(node, Mapping):
        return cast(JsonMapping, node)
    return None


class RecordField(StrEnum):
    ADDITIONAL_SOURCES = "additionalSources"
    ADDITIONAL_SPELLS = "additionalSpells"
    AMOUNT = "amount"
    BASIC_RULES = "basicRules"
    BASIC_RULES_2024 = "basicRules2024"
    CLASS_NAME = "className"
    COMPONENTS = "components"
    CONCENTRATION = "concentration"
    CONDITION = "condition"
    DAMAGE_INFLICT = "damageInflict"
    DISTANCE = "distance"
    DURATION = "duration"
    ENDS = "ends"
    ENTRIES = "entries"
    ENTRIES_HIGHER_LEVEL = "entriesHigherLevel"
    ENTRY = "entry"
    ITEMS = "items"
    JSON = "json"
    META = "_meta"
    NAME = "name"
    NUMBER = "number"
    OTHER_SOURCES = "otherSources"
    PANTHEON = "pantheon"
    RACE_NAME = "raceName"
    RANGE = "range"
    REPRINTED_AS = "reprintedAs"
    RITUAL = "ritual"
    ROWS = "rows"
    SAVING_THROW = "savingThrow"
    SOURCE = "source"
    SOURCES = "sources"
    SPELL_META = "meta"
    SRD = "srd"
    SRD_52 = "srd52"
    SUBCLASS_SHORT_NAME = "subclassShortName"
    TAG = "tag"
    TEXT = "text"
    TIME = "time"
    TYPE = "type"
    UID = "uid"
    UNIT = "unit"

    def exists_in(self, node: object) -> bool:
        mapping = as_mapping(node)
        return mapping is not None and mapping.get(self.value) is not None

    def get_from(self, node: object) -> JsonValue | None:
        mapping = as_mapping(node)
        if mapping is None:
            return None
        return mapping.get(self.value)

    def mapping_from(self, node: object) -> JsonMapping | None:
        return as_mapping(self.get_from(node))

    def text_from(self, node: object) -> str | None:
        """Return a scalar field as text; blank strings count as missing."""

        value = self.get_from(node)
        if isinstance(value, bool) or value is None:
            return None
        if isinstance(value, int | float):
            return str(value)
        if isinstance(value, str):
            stripped = value.strip()
            return stripped or None
        return None

    def text_or_empty(self, node: object) -> str:
        return self.text_from(node) or ""

    def int_from(self, node: object) -> int | None:
        value = self.get_from(node)
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return None

    def bool_from(self, node: object, *, default: bool = False) -> bool:
        value = self.get_from(node)
        if isinstance(value, bool):
            return value
        return default

    def list_from(self, node: object) -> list[JsonValue]:
        """Return the field as a list, wrapping a lone value."""

        value = self.get_from(node)
        if value is None:
            return []
        if isinstance(value, list):
            return cast(list[JsonValue], value)
        return [value]

    def strings_from(self, node: object) -> tuple[str, ...]:
        return tuple(
            item.strip() for item in self.list_from(node) if isinstance(item, str) and item.strip()
        )


GROUP_FIELDS: tuple[RecordField, ...] = (
    RecordField.SRD,
    RecordField.SRD_52,
    RecordField.BASIC_RULES,
    RecordField.BASIC_RULES_2024,
)


def record_groups(record: object) -> frozenset[str]:
    """Return the include-groups (srd, basic rules, ...) a record belongs to."""

    groups: set[str] = set()
    for group_field in GROUP_FIELDS:
        value = group_field.get_from(record)
        if value is True or (isinstance(value, str) and value.strip()):
            groups.add(group_field.value.lower())
    return frozenset(groups)


def record_sources(record: object) -> tuple[str, ...]:
    """Return the primary source followed by every other source of a record."""

    sources: list[str] = []
    primary = RecordField.SOURCE.text_from(record)
    if primary:
        sources.append(primary.lower())
    for source_field in (RecordField.OTHER_SOURCES, RecordField.ADDITIONAL_SOURCES):
        for item in source_field.list_from(record):
            source = RecordField.SOURCE.text_from(item)
            if source and source.lower() not in sources:
                sources.append(source.lower())
    return tuple(sources)
