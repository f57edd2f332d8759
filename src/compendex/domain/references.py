"""Reference graph between catalogue entities.

Forward and reverse indexes are updated together; adding an edge twice is a
no-op. Edges always keep the exact variant key they were recorded with, and
reprint variants are only merged when reading through
:meth:`ReferenceGraph.expanded_references_to`.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from .model import ReferenceEdge, ReferenceRole

if TYPE_CHECKING:
    from .model import EntityKey


class VariantLookup(Protocol):
    """Anything that can list the reprint variants of a key (the catalogue)."""

    def variants_of(self, key: EntityKey) -> tuple[EntityKey, ...]: ...


def _sorted(edges: set[ReferenceEdge]) -> tuple[ReferenceEdge, ...]:
    return tuple(sorted(edges, key=lambda edge: edge.sort_key))


@dataclass(slots=True)
class ReferenceGraph:
    _forward: dict[EntityKey, set[ReferenceEdge]] = field(
        default_factory=dict["EntityKey", set[ReferenceEdge]], repr=False
    )
    _reverse: dict[EntityKey, set[ReferenceEdge]] = field(
        default_factory=dict["EntityKey", set[ReferenceEdge]], repr=False
    )

    def __len__(self) -> int:
        return sum(len(edges) for edges in self._forward.values())

    def add_reference(self, from_key: EntityKey, to_key: EntityKey, role: ReferenceRole) -> bool:
        """Record an edge; returns ``False`` when it already existed."""

        edge = ReferenceEdge(from_key, to_key, role)
        outgoing = self._forward.setdefault(from_key, set())
        if edge in outgoing:
            return False
        outgoing.add(edge)
        self._reverse.setdefault(to_key, set()).add(edge)
        return True

    def references_to(self, to_key: EntityKey) -> tuple[ReferenceEdge, ...]:
        return _sorted(self._reverse.get(to_key, set()))

    def references_from(self, from_key: EntityKey) -> tuple[ReferenceEdge, ...]:
        return _sorted(self._forward.get(from_key, set()))

    def variant_keys(
        self,
        key: EntityKey,
        *,
        variants: VariantLookup | None = None,
    ) -> frozenset[EntityKey]:
        """Transitive closure of ``key`` over catalogue variants and reprint edges."""

        seen: set[EntityKey] = {key}
        pending: deque[EntityKey] = deque([key])
        while pending:
            current = pending.popleft()
            linked: list[EntityKey] = []
            if variants is not None:
                linked.extend(variants.variants_of(current))
            linked.extend(
                edge.to_key
                for edge in self._forward.get(current, ())
                if edge.role is ReferenceRole.REPRINT
            )
            linked.extend(
                edge.from_key
                for edge in self._reverse.get(current, ())
                if edge.role is ReferenceRole.REPRINT
            )
            for candidate in linked:
                if candidate not in seen:
                    seen.add(candidate)
                    pending.append(candidate)
        return frozenset(seen)

    def expanded_references_to(
        self,
        to_key: EntityKey,
        *,
        variants: VariantLookup | None = None,
    ) -> tuple[ReferenceEdge, ...]:
        """References to ``to_key`` or any of its reprint variants.

        Reprint edges themselves and edges between two variants of the same
        entity are left out.
        """

        keys = self.variant_keys(to_key, variants=variants)
        edges: set[ReferenceEdge] = set()
        for key in keys:
            edges.update(
                edge
                for edge in self._reverse.get(key, ())
                if edge.role is not ReferenceRole.REPRINT and edge.from_key not in keys
            )
        return _sorted(edges)

    def referrers_of(
        self,
        to_key: EntityKey,
        *,
        variants: VariantLookup | None = None,
    ) -> tuple[EntityKey, ...]:
        """Distinct referring keys, merged across reprint variants, for display."""

        referrers: list[EntityKey] = []
        for edge in self.expanded_references_to(to_key, variants=variants):
            if edge.from_key not in referrers:
                referrers.append(edge.from_key)
        return tuple(referrers)
