"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    """Content type discriminator; the value is the key prefix."""

    ACTION = "action"
    ADVENTURE = "adventure"
    BACKGROUND = "background"
    BOOK = "book"
    CLASS = "class"
    CLASS_FEATURE = "classfeature"
    CONDITION = "condition"
    DECK = "deck"
    DEITY = "deity"
    DISEASE = "disease"
    FACILITY = "facility"
    FEAT = "feat"
    HAZARD = "hazard"
    ITEM = "item"
    LANGUAGE = "language"
    MONSTER = "monster"
    OBJECT = "object"
    OPTIONAL_FEATURE = "optfeature"
    PSIONIC = "psionic"
    RACE = "race"
    REWARD = "reward"
    SENSE = "sense"
    SKILL = "skill"
    SPELL = "spell"
    STATUS = "status"
    SUBCLASS = "subclass"
    SUBCLASS_FEATURE = "subclassfeature"
    SUBRACE = "subrace"
    TABLE = "table"
    TRAP = "trap"
    VARIANT_RULE = "variantrule"
    VEHICLE = "vehicle"

    @classmethod
    def from_array_name(cls, name: str) -> EntityType | None:
        """Return the type stored under the JSON array ``name`` (if any)."""

        return _ARRAY_NAMES.get(name)

    @classmethod
    def from_tag(cls, tag: str) -> EntityType | None:
        """Return the type linked by an inline ``{@tag ...}`` reference."""

        return _INLINE_TAGS.get(tag.lower())

    @property
    def default_source(self) -> str:
        return _DEFAULT_SOURCES.get(self, "phb")


_ARRAY_NAMES: dict[str, EntityType] = {
    "action": EntityType.ACTION,
    "adventure": EntityType.ADVENTURE,
    "background": EntityType.BACKGROUND,
    "baseitem": EntityType.ITEM,
    "book": EntityType.BOOK,
    "class": EntityType.CLASS,
    "classFeature": EntityType.CLASS_FEATURE,
    "condition": EntityType.CONDITION,
    "deck": EntityType.DECK,
    "deity": EntityType.DEITY,
    "disease": EntityType.DISEASE,
    "facility": EntityType.FACILITY,
    "feat": EntityType.FEAT,
    "hazard": EntityType.HAZARD,
    "item": EntityType.ITEM,
    "itemGroup": EntityType.ITEM,
    "language": EntityType.LANGUAGE,
    "monster": EntityType.MONSTER,
    "object": EntityType.OBJECT,
    "optionalfeature": EntityType.OPTIONAL_FEATURE,
    "psionic": EntityType.PSIONIC,
    "race": EntityType.RACE,
    "reward": EntityType.REWARD,
    "sense": EntityType.SENSE,
    "skill": EntityType.SKILL,
    "spell": EntityType.SPELL,
    "status": EntityType.STATUS,
    "subclass": EntityType.SUBCLASS,
    "subclassFeature": EntityType.SUBCLASS_FEATURE,
    "subrace": EntityType.SUBRACE,
    "table": EntityType.TABLE,
    "trap": EntityType.TRAP,
    "variantrule": EntityType.VARIANT_RULE,
    "vehicle": EntityType.VEHICLE,
}

_INLINE_TAGS: dict[str, EntityType] = {
    "action": EntityType.ACTION,
    "background": EntityType.BACKGROUND,
    "class": EntityType.CLASS,
    "condition": EntityType.CONDITION,
    "creature": EntityType.MONSTER,
    "deck": EntityType.DECK,
    "deity": EntityType.DEITY,
    "disease": EntityType.DISEASE,
    "facility": EntityType.FACILITY,
    "feat": EntityType.FEAT,
    "hazard": EntityType.HAZARD,
    "item": EntityType.ITEM,
    "language": EntityType.LANGUAGE,
    "object": EntityType.OBJECT,
    "optfeature": EntityType.OPTIONAL_FEATURE,
    "psionic": EntityType.PSIONIC,
    "race": EntityType.RACE,
    "reward": EntityType.REWARD,
    "sense": EntityType.SENSE,
    "skill": EntityType.SKILL,
    "spell": EntityType.SPELL,
    "status": EntityType.STATUS,
    "table": EntityType.TABLE,
    "trap": EntityType.TRAP,
    "variantrule": EntityType.VARIANT_RULE,
    "vehicle": EntityType.VEHICLE,
}

_DEFAULT_SOURCES: dict[EntityType, str] = {
    EntityType.HAZARD: "dmg",
    EntityType.ITEM: "dmg",
    EntityType.MONSTER: "mm",
    EntityType.OBJECT: "dmg",
    EntityType.REWARD: "dmg",
    EntityType.TABLE: "dmg",
    EntityType.TRAP: "dmg",
    EntityType.VARIANT_RULE: "dmg",
    EntityType.PSIONIC: "ua2017mysticupdated",
    EntityType.VEHICLE: "gos",
}


class ReprintBehavior(StrEnum):
    """Which variant of a reprinted entity becomes primary."""

    NEWEST = "newest"
    OLDEST = "oldest"


class InclusionDecision(StrEnum):
    """Outcome of explicit include/exclude rules for one key."""

    INCLUDED = "included"
    EXCLUDED = "excluded"
    UNSPECIFIED = "unspecified"


class ReferenceRole(StrEnum):
    """Why one entity points at another."""

    GRANTS = "grants"
    EXPANDED = "expanded"
    MENTIONS = "mentions"
    REPRINT = "reprint"


class AdmitOutcome(StrEnum):
    ADMITTED = "admitted"
    SUPERSEDED_PRIOR = "superseded_prior"
    REJECTED_DUPLICATE = "rejected_duplicate"
