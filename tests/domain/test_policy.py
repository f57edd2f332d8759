from __future__ import annotations

from typing import TYPE_CHECKING

from compendex.config.compendium import compile_exclude_pattern
from compendex.domain.model import EntityKey, EntityType, InclusionDecision
from compendex.domain.policy import SourcePolicy, build_allow_list

if TYPE_CHECKING:
    from collections.abc import Callable


def _spell(name: str, source: str) -> EntityKey:
    return EntityKey(EntityType.SPELL, name, source)


def test_build_allow_list_adds_abbreviations_and_renames() -> None:
    allowed, allow_all = build_allow_list(["Players-Handbook", "freerules2024"])

    assert not allow_all
    assert {"players-handbook", "phb", "freerules2024", "basicrules2024"} <= allowed


def test_wildcard_switches_to_allow_all() -> None:
    allowed, allow_all = build_allow_list(["phb", "*", "xge"])

    assert allow_all
    assert allowed == frozenset({"*"})


def test_is_source_allowed_checks_abbreviation(
    make_policy: Callable[..., SourcePolicy],
) -> None:
    policy = make_policy("phb")

    assert policy.is_source_allowed("PHB")
    assert policy.is_source_allowed("players-handbook")
    assert not policy.is_source_allowed("xge")
    assert not policy.is_source_allowed(None)
    assert not policy.is_source_allowed("  ")


def test_allow_all_policy_allows_everything(make_policy: Callable[..., SourcePolicy]) -> None:
    policy = make_policy("all")

    assert policy.is_source_allowed("anything")
    assert policy.admits(_spell("fireball", "whatever"))


def test_explicit_include_beats_exclude_and_source_policy(
    make_policy: Callable[..., SourcePolicy],
) -> None:
    key = _spell("fireball", "phb")
    policy = make_policy(
        included_keys=frozenset({str(key)}),
        excluded_keys=frozenset({str(key)}),
    )

    assert policy.no_sources
    assert policy.is_key_included(key) is InclusionDecision.INCLUDED
    assert policy.admits(key)


def test_explicit_exclude_beats_allowed_source(make_policy: Callable[..., SourcePolicy]) -> None:
    key = _spell("fireball", "phb")
    policy = make_policy("phb", excluded_keys=frozenset({"spell|fireball|phb"}))

    assert policy.is_key_included(key) is InclusionDecision.EXCLUDED
    assert not policy.admits(key)


def test_include_group_includes_record(make_policy: Callable[..., SourcePolicy]) -> None:
    key = EntityKey(EntityType.ITEM, "bag of holding", "dmg")
    policy = make_policy("phb", included_groups=frozenset({"srd"}))

    assert policy.groups_included(["SRD"])
    assert policy.is_key_included(key) is InclusionDecision.UNSPECIFIED
    assert policy.admits(key, ("dmg",), ("srd",))
    assert not policy.admits(key, ("dmg",))


def test_excluded_key_in_included_group_stays_excluded(
    make_policy: Callable[..., SourcePolicy],
) -> None:
    key = _spell("fireball", "phb")
    by_key = make_policy(
        "phb",
        included_groups=frozenset({"srd"}),
        excluded_keys=frozenset({"spell|fireball|phb"}),
    )
    by_pattern = make_policy(
        "phb",
        included_groups=frozenset({"srd"}),
        excluded_patterns=(compile_exclude_pattern("spell|.*|phb"),),
    )

    for policy in (by_key, by_pattern):
        assert policy.is_key_included(key) is InclusionDecision.EXCLUDED
        assert not policy.admits(key, ("phb",), ("srd",))


def test_escaped_pattern_matches_literal_key(make_policy: Callable[..., SourcePolicy]) -> None:
    policy = make_policy(excluded_patterns=(compile_exclude_pattern("a|b\\|c"),))

    assert policy.is_key_included("a|b|c") is InclusionDecision.EXCLUDED
    assert policy.is_key_included("a") is InclusionDecision.UNSPECIFIED
    assert policy.is_key_included("b|c") is InclusionDecision.UNSPECIFIED


def test_pattern_must_match_whole_key(make_policy: Callable[..., SourcePolicy]) -> None:
    policy = make_policy("phb", excluded_patterns=(compile_exclude_pattern("spell|.*|xge"),))

    assert policy.is_key_included(_spell("shadow blade", "xge")) is InclusionDecision.EXCLUDED
    assert policy.is_key_included(_spell("shadow blade", "xgex")) is InclusionDecision.UNSPECIFIED
    assert policy.is_key_included(_spell("fireball", "phb")) is InclusionDecision.UNSPECIFIED


def test_admits_uses_any_listed_source(make_policy: Callable[..., SourcePolicy]) -> None:
    key = _spell("fireball", "xge")
    policy = make_policy("phb")

    assert policy.admits(key, ("xge", "phb"))
    assert not policy.admits(key, ("xge",))


def test_with_sources_returns_extended_copy(make_policy: Callable[..., SourcePolicy]) -> None:
    policy = make_policy("phb")

    extended = policy.with_sources(["GlitterBrew"])

    assert extended.is_source_allowed("glitterbrew")
    assert extended.is_source_allowed("phb")
    assert not policy.is_source_allowed("glitterbrew")
