from __future__ import annotations

from compendex.domain.catalogue import EntityCatalogue
from compendex.domain.model import EntityKey, EntityType, ReferenceRole
from compendex.domain.references import ReferenceGraph

PHB_FIREBALL = EntityKey(EntityType.SPELL, "Fireball", "PHB")
XPHB_FIREBALL = EntityKey(EntityType.SPELL, "Fireball", "XPHB")
FIEND = EntityKey(EntityType.SUBCLASS, "The Fiend", "PHB", "Warlock")
WAND = EntityKey(EntityType.ITEM, "Wand of Fireballs", "DMG")
INITIATE = EntityKey(EntityType.FEAT, "Magic Initiate", "PHB")


def test_add_reference_is_idempotent() -> None:
    graph = ReferenceGraph()

    assert graph.add_reference(FIEND, PHB_FIREBALL, ReferenceRole.EXPANDED)
    assert not graph.add_reference(FIEND, PHB_FIREBALL, ReferenceRole.EXPANDED)

    assert len(graph) == 1
    assert len(graph.references_to(PHB_FIREBALL)) == 1
    assert len(graph.references_from(FIEND)) == 1


def test_different_roles_are_distinct_edges() -> None:
    graph = ReferenceGraph()

    graph.add_reference(FIEND, PHB_FIREBALL, ReferenceRole.EXPANDED)
    graph.add_reference(FIEND, PHB_FIREBALL, ReferenceRole.MENTIONS)

    roles = [edge.role for edge in graph.references_to(PHB_FIREBALL)]
    assert roles == [ReferenceRole.EXPANDED, ReferenceRole.MENTIONS]


def test_references_to_sorted_by_referrer() -> None:
    graph = ReferenceGraph()
    graph.add_reference(WAND, PHB_FIREBALL, ReferenceRole.MENTIONS)
    graph.add_reference(FIEND, PHB_FIREBALL, ReferenceRole.EXPANDED)
    graph.add_reference(INITIATE, PHB_FIREBALL, ReferenceRole.GRANTS)

    referrers = [str(edge.from_key) for edge in graph.references_to(PHB_FIREBALL)]

    assert referrers == [
        "feat|magic initiate|phb",
        "item|wand of fireballs|dmg",
        "subclass|the fiend|warlock|phb",
    ]


def test_expanded_references_merge_catalogue_variants() -> None:
    catalogue = EntityCatalogue()
    catalogue.admit(PHB_FIREBALL, {"name": "Fireball"})
    catalogue.admit(XPHB_FIREBALL, {"name": "Fireball"})
    graph = ReferenceGraph()
    graph.add_reference(WAND, PHB_FIREBALL, ReferenceRole.MENTIONS)
    graph.add_reference(INITIATE, XPHB_FIREBALL, ReferenceRole.GRANTS)

    edges = graph.expanded_references_to(PHB_FIREBALL, variants=catalogue)

    assert [(str(edge.from_key), str(edge.to_key)) for edge in edges] == [
        ("feat|magic initiate|phb", "spell|fireball|xphb"),
        ("item|wand of fireballs|dmg", "spell|fireball|phb"),
    ]
    assert graph.references_to(PHB_FIREBALL) == graph.references_to(PHB_FIREBALL)
    assert len(graph.references_to(PHB_FIREBALL)) == 1


def test_expanded_references_follow_reprint_edges() -> None:
    graph = ReferenceGraph()
    graph.add_reference(PHB_FIREBALL, XPHB_FIREBALL, ReferenceRole.REPRINT)
    graph.add_reference(WAND, PHB_FIREBALL, ReferenceRole.MENTIONS)

    edges = graph.expanded_references_to(XPHB_FIREBALL)

    assert [edge.from_key for edge in edges] == [WAND]
    assert graph.variant_keys(XPHB_FIREBALL) == frozenset({PHB_FIREBALL, XPHB_FIREBALL})


def test_referrers_of_deduplicates() -> None:
    catalogue = EntityCatalogue()
    catalogue.admit(PHB_FIREBALL, {"name": "Fireball"})
    catalogue.admit(XPHB_FIREBALL, {"name": "Fireball"})
    graph = ReferenceGraph()
    graph.add_reference(FIEND, PHB_FIREBALL, ReferenceRole.EXPANDED)
    graph.add_reference(FIEND, XPHB_FIREBALL, ReferenceRole.MENTIONS)

    assert graph.referrers_of(XPHB_FIREBALL, variants=catalogue) == (FIEND,)
