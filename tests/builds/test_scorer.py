"""Tests for multi-factor build scoring."""

from __future__ import annotations

import pytest

from capsule_lab.analytics.models import (
    CapsulePerformance,
    PairSynergy,
    StrategyCapsuleStats,
    SynergyType,
    pair_key,
)
from capsule_lab.builds.scorer import score_build
from capsule_lab.config import ScoringWeights
from capsule_lab.ir.capsules import Archetype, CapsuleDefinition
from capsule_lab.ir.ruleset import Ruleset


def _make_capsule(cid: str, cost: int, archetype: Archetype) -> CapsuleDefinition:
    return CapsuleDefinition(id=cid, name=cid, cost=cost, primary_archetype=archetype)


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


def _make_stats(cid: str, strategy: str, composite: float) -> StrategyCapsuleStats:
    return StrategyCapsuleStats(
        capsule_id=cid, name=cid, ai_strategy=strategy, appearances=1, wins=1,
        total_matches=1, win_rate=100, avg_damage_dealt=1000, composite_score=composite,
    )


X = _make_capsule("X", 3, Archetype.AGGRESSIVE)
Y = _make_capsule("Y", 2, Archetype.DEFENSIVE)
Z = _make_capsule("Z", 1, Archetype.TECHNICAL)
PERF = {"X": _make_perf("X", 80), "Y": _make_perf("Y", 80)}
PAIRS = {("X", "Y"): _make_pair("X", "Y", 23.0)}


class TestScoreBuild:
    def test_empty_build(self) -> None:
        score = score_build([], PERF, PAIRS)
        assert score.total_score == 0
        assert score.cost_efficiency == 0

    def test_breakdown(self) -> None:
        score = score_build([X, Y, Z], PERF, PAIRS)
        assert score.individual_performance == pytest.approx(32)
        assert score.synergy_bonus == pytest.approx(6.9)
        assert score.ai_strategy_match == 0
        assert score.archetype_alignment == pytest.approx(100 / 3 * 0.1)
        assert score.cost_efficiency == pytest.approx(1.5)
        assert score.total_score == pytest.approx(32 + 6.9 + 100 / 3 * 0.1 + 1.5)

    def test_negative_bonus_floored(self) -> None:
        pairs = dict(PAIRS)
        pairs[("X", "Z")] = _make_pair("X", "Z", -10.0)
        score = score_build([X, Y, Z], PERF, pairs)
        assert score.synergy_bonus == pytest.approx((23 + 0) / 2 * 0.3)

    def test_strategy_term(self) -> None:
        compat = {"Rush": {"X": _make_stats("X", "Rush", 50.0)}}
        score = score_build([X, Y], PERF, PAIRS, compat, target_strategy="Rush")
        assert score.ai_strategy_match == pytest.approx(7.5)
        assert score_build([X, Y], PERF, PAIRS, compat, target_strategy="Zone").ai_strategy_match == 0

    def test_target_archetype(self) -> None:
        hit = score_build([X, Y, Z], PERF, PAIRS, target_archetype=Archetype.AGGRESSIVE)
        miss = score_build([X, Y, Z], PERF, PAIRS, target_archetype=Archetype.DEFENSIVE)
        assert hit.archetype_alignment == pytest.approx(10)
        assert miss.archetype_alignment == 0

    def test_cost_efficiency_rewards_utilisation(self) -> None:
        cheap = score_build([Z], {}, {})
        pricey = score_build([X], {}, {})
        assert pricey.cost_efficiency > cheap.cost_efficiency

    def test_zero_cost_cap(self) -> None:
        score = score_build([X], PERF, PAIRS, ruleset=Ruleset(max_cost=0))
        assert score.cost_efficiency == 0

    def test_unknown_capsules_contribute_zero(self) -> None:
        score = score_build([Z], PERF, PAIRS)
        assert score.individual_performance == 0
        assert score.synergy_bonus == 0

    def test_duplicates_ignored(self) -> None:
        assert score_build([X, X], PERF, PAIRS) == score_build([X], PERF, PAIRS)

    def test_custom_weights(self) -> None:
        weights = ScoringWeights(individual_performance=1.0, synergy_bonus=0,
                                 ai_strategy_match=0, archetype_alignment=0, cost_efficiency=0)
        assert score_build([X, Y], PERF, PAIRS, weights=weights).total_score == pytest.approx(80)
