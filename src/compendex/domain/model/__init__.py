"""Domain model exports."""

from __future__ import annotations

from .entries import AdmitResult, CatalogueEntry, ReferenceEdge
from .enums import AdmitOutcome, EntityType, InclusionDecision, ReferenceRole, ReprintBehavior
from .keys import EntityIdentity, EntityKey, InvalidEntityKeyError
from .records import JsonMapping, RecordField, as_mapping, record_groups, record_sources

__all__ = [
    "AdmitOutcome",
    "AdmitResult",
    "CatalogueEntry",
    "EntityIdentity",
    "EntityKey",
    "EntityType",
    "InclusionDecision",
    "InvalidEntityKeyError",
    "JsonMapping",
    "RecordField",
    "ReferenceEdge",
    "ReferenceRole",
    "ReprintBehavior",
    "as_mapping",
    "record_groups",
    "record_sources",
]
