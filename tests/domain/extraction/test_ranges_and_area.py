from __future__ import annotations

import pytest

from compendex.domain.extraction import AreaOfEffect, extract_area_of_effect, spell_range


@pytest.mark.parametrize(
    ("range_node", "expected"),
    [
        ({"type": "sphere", "distance": {"type": "feet", "amount": 20}}, "Self (20-foot Sphere)"),
        ({"type": "cone", "distance": {"type": "feet", "amount": 15}}, "Self (15-foot Cone)"),
        ({"type": "point", "distance": {"type": "feet", "amount": 150}}, "150 feet"),
        ({"type": "point", "distance": {"type": "touch"}}, "Touch"),
        ({"type": "point", "distance": {"type": "self"}}, "Self"),
        ({"type": "special"}, "Special"),
        ({"type": "sphere", "distance": {"type": "feet"}}, None),
        ({"type": "unheard-of"}, None),
        (None, None),
    ],
)
def test_spell_range(range_node: object, expected: str | None) -> None:
    assert spell_range(range_node) == expected


def test_structured_area_wins() -> None:
    range_node = {"type": "cone", "distance": {"type": "feet", "amount": 15}}

    area = extract_area_of_effect(range_node, "a 30-foot-radius sphere")

    assert area == AreaOfEffect(shape="cone", size=15)


def test_structured_area_without_numeric_size() -> None:
    range_node = {"type": "emanation", "distance": {"type": "feet", "amount": "varies"}}

    assert extract_area_of_effect(range_node, "") == AreaOfEffect(shape="emanation", size=None)


def test_area_falls_back_to_text() -> None:
    range_node = {"type": "point", "distance": {"type": "feet", "amount": 150}}

    area = extract_area_of_effect(range_node, "Each creature in a 20-foot-radius sphere centered")

    assert area == AreaOfEffect(shape="sphere", size=20)


def test_area_text_shapes() -> None:
    assert extract_area_of_effect(None, "a line 100 feet long") is None
    assert extract_area_of_effect(None, "a 60-foot line") == AreaOfEffect(shape="line", size=60)
    assert extract_area_of_effect(None, "a 10 foot cube") == AreaOfEffect(shape="cube", size=10)
