"""Tests for single-capsule improvement suggestions."""

from __future__ import annotations

import pytest

from capsule_lab.analytics.models import (
    CapsulePerformance,
    PairSynergy,
    SynergyType,
    pair_key,
)
from capsule_lab.builds.advisor import suggest_build_improvements
from capsule_lab.ir.capsules import Archetype, CapsuleDefinition
from capsule_lab.ir.ruleset import Ruleset


def _make_capsule(cid: str, cost: int) -> CapsuleDefinition:
    return CapsuleDefinition(id=cid, name=cid, cost=cost)


def _make_perf(cid: str, composite: float) -> CapsulePerformance:
    return CapsulePerformance(
        capsule_id=cid, name=cid, cost=0, primary_archetype=Archetype.UTILITY,
        appearances=10, total_matches=10, wins=5, win_rate=50,
        avg_damage_dealt=1000, avg_damage_taken=1000, damage_efficiency=1.0,
        composite_score=composite,
    )


def _make_pair(a: str, b: str, bonus: float) -> PairSynergy:
    a, b = pair_key(a, b)
    return PairSynergy(
        capsule_a=a, capsule_b=b, capsule_a_name=a, capsule_b_name=b, combined_cost=0,
        synergy_type=SynergyType.NEUTRAL, appearances=5, wins=0, pair_win_rate=0,
        avg_damage_dealt=0, avg_damage_taken=0, damage_efficiency=0, synergy_bonus=bonus,
    )


X = _make_capsule("X", 3)
Y = _make_capsule("Y", 2)
Z = _make_capsule("Z", 1)
W = _make_capsule("W", 20)
POOL = [X, Y, Z, W]
PERF = {"X": _make_perf("X", 90), "Y": _make_perf("Y", 10), "Z": _make_perf("Z", 50)}
PAIRS = {("X", "Y"): _make_pair("X", "Y", 100.0)}


class TestSuggestBuildImprovements:
    def test_ranked_by_impact(self) -> None:
        suggestions = suggest_build_improvements([X], POOL, PAIRS, PERF)
        assert [s.capsule.id for s in suggestions] == ["Y", "Z"]
        top = suggestions[0]
        assert top.impact_score == pytest.approx(10 + 0.5 * 100)
        assert top.synergy_count == 1
        assert top.avg_synergy_bonus == pytest.approx(100)
        assert top.new_total_cost == 5
        assert suggestions[1].synergy_count == 0
        assert suggestions[1].impact_score == pytest.approx(50)

    def test_excludes_equipped_and_over_budget(self) -> None:
        ids = {s.capsule.id for s in suggest_build_improvements([X], POOL, PAIRS, PERF)}
        assert "X" not in ids
        assert "W" not in ids

    def test_full_build_gets_nothing(self) -> None:
        ruleset = Ruleset(max_capsules=1)
        assert suggest_build_improvements([X], POOL, PAIRS, PERF, ruleset) == []

    def test_top_n(self) -> None:
        suggestions = suggest_build_improvements([X], POOL, PAIRS, PERF, top_n=1)
        assert [s.capsule.id for s in suggestions] == ["Y"]

    def test_unknown_performance_is_zero(self) -> None:
        suggestions = suggest_build_improvements([], [_make_capsule("Q", 1)], {}, {})
        assert suggestions[0].impact_score == 0
        assert suggestions[0].new_total_cost == 1
