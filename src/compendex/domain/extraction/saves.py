"""Saving-throw outcome phrases."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

SAVE_OUTCOME_PHRASES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("half damage", ("half as much damage on a successful", "half damage on a success")),
    ("no damage", ("no damage on a successful", "takes no damage on a success")),
    ("reduced effect", ("reduced effect on a successful", "lesser effect on a success")),
    ("no effect", ("avoids the effect on a successful", "is unaffected on a success")),
)
GENERIC_SAVE_OUTCOME = "see spell description"


def extract_save_outcome(body: str, saving_throws: Sequence[str] = ()) -> str | None:
    lowered = body.lower()
    for outcome, phrases in SAVE_OUTCOME_PHRASES:
        if any(phrase in lowered for phrase in phrases):
            return outcome
    if saving_throws:
        return GENERIC_SAVE_OUTCOME
    return None
