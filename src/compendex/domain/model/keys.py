"""Entity keys: the composite identity of one catalogue entry."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, TypeAlias

from .enums import EntityType
from .records import RecordField

if TYPE_CHECKING:
    from collections.abc import Mapping

EntityIdentity: TypeAlias = "tuple[EntityType, str, str | None]"

KEY_SEPARATOR = "|"

_DISCRIMINATOR_FIELDS: dict[EntityType, RecordField] = {
    EntityType.CLASS_FEATURE: RecordField.CLASS_NAME,
    EntityType.DEITY: RecordField.PANTHEON,
    EntityType.SUBCLASS: RecordField.CLASS_NAME,
    EntityType.SUBCLASS_FEATURE: RecordField.SUBCLASS_SHORT_NAME,
    EntityType.SUBRACE: RecordField.RACE_NAME,
}


class InvalidEntityKeyError(ValueError):
    """Raised when a key cannot be built from the given parts."""


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip().lower()
    return cleaned or None


@dataclass(frozen=True, slots=True)
class EntityKey:
    """Lower-cased ``(type, name, source[, discriminator])`` identifier.

    The string form is ``type|name|source`` or ``type|name|discriminator|source``.
    """

    type: EntityType
    name: str
    source: str
    discriminator: str | None = None

    def __post_init__(self) -> None:
        name = _clean(self.name)
        source = _clean(self.source)
        if name is None:
            raise InvalidEntityKeyError(f"Missing name for {self.type} key")
        if source is None:
            raise InvalidEntityKeyError(f"Missing source for {self.type} key {name!r}")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "source", source)
        object.__setattr__(self, "discriminator", _clean(self.discriminator))

    def __str__(self) -> str:
        parts = [self.type.value, self.name]
        if self.discriminator is not None:
            parts.append(self.discriminator)
        parts.append(self.source)
        return KEY_SEPARATOR.join(parts)

    @property
    def identity(self) -> EntityIdentity:
        """Conceptual identity shared by every reprint of the same entity."""

        return (self.type, self.name, self.discriminator)

    def with_source(self, source: str) -> EntityKey:
        return replace(self, source=source)

    @classmethod
    def parse(cls, text: str) -> EntityKey:
        parts = text.split(KEY_SEPARATOR)
        if len(parts) not in (3, 4):
            raise InvalidEntityKeyError(f"Malformed entity key: {text!r}")
        try:
            entity_type = EntityType(parts[0].strip().lower())
        except ValueError as exc:
            raise InvalidEntityKeyError(f"Unknown entity type in key: {text!r}") from exc
        discriminator = parts[2] if len(parts) == 4 else None
        return cls(entity_type, parts[1], parts[-1], discriminator)

    @classmethod
    def for_record(
        cls,
        entity_type: EntityType,
        record: Mapping[str, object],
        *,
        default_source: str | None = None,
    ) -> EntityKey:
        """Derive the key of a raw record, raising when identity fields are missing."""

        name = RecordField.NAME.text_from(record)
        source = RecordField.SOURCE.text_from(record) or default_source
        discriminator_field = _DISCRIMINATOR_FIELDS.get(entity_type)
        discriminator = (
            discriminator_field.text_from(record) if discriminator_field is not None else None
        )
        return cls(entity_type, name or "", source or "", discriminator)
