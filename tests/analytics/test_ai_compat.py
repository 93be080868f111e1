"""Tests for AI strategy / capsule compatibility."""

from __future__ import annotations

import pytest

from capsule_lab.analytics.ai_compat import (
    compute_ai_strategy_compatibility,
    match_performance_score,
    strategy_score,
)
from capsule_lab.ir.capsules import CapsuleDefinition
from capsule_lab.ir.catalog import CapsuleCatalog
from capsule_lab.ir.matches import CharacterRecord, MatchRecord


def _make_match(
    capsules: list[str],
    strategy: str | None = "Aggressive",
    won: bool = False,
    dealt: float = 1000,
    taken: float = 500,
    battle_time: float = 100,
    hp: float = 50,
    hp_max: float = 100,
) -> MatchRecord:
    return MatchRecord(
        equipped_capsules=capsules, ai_strategy=strategy, won=won,
        damage_dealt=dealt, damage_taken=taken, battle_time=battle_time,
        hp_remaining=hp, hp_max=hp_max,
    )


class TestMatchPerformanceScore:
    def test_formula(self) -> None:
        match = _make_match(["a"], dealt=100_000, taken=50_000, battle_time=100)
        # 35 + 2 * 25 + 1 * 25 + 0.5 * 15
        assert match_performance_score(match) == pytest.approx(117.5)

    def test_zero_denominators(self) -> None:
        match = _make_match(["a"], dealt=0, taken=0, battle_time=0, hp=0, hp_max=0)
        assert match_performance_score(match) == 0.0


class TestComputeCompatibility:
    def test_grouped_by_strategy(self) -> None:
        corpus = [CharacterRecord(name="Goku", matches=[
            _make_match(["a", "b"], strategy="Aggressive", won=True),
            _make_match(["a"], strategy="Defensive"),
            _make_match(["b"], strategy=None),
        ])]
        compat = compute_ai_strategy_compatibility(corpus)
        assert list(compat) == ["Aggressive", "Defensive"]
        assert set(compat["Aggressive"]) == {"a", "b"}
        assert set(compat["Defensive"]) == {"a"}
        assert compat["Aggressive"]["a"].win_rate == pytest.approx(100)

    def test_benched_matches_skipped(self) -> None:
        corpus = [CharacterRecord(name="Goku", matches=[
            _make_match(["a"], won=True, battle_time=0),
        ])]
        assert compute_ai_strategy_compatibility(corpus) == {}

    def test_rounding(self) -> None:
        corpus = [CharacterRecord(name="Goku", matches=[
            _make_match(["a"], dealt=1001),
            _make_match(["a"], dealt=1000),
        ])]
        stats = compute_ai_strategy_compatibility(corpus)["Aggressive"]["a"]
        assert stats.avg_damage_dealt == 1001
        assert isinstance(stats.avg_damage_dealt, int)
        assert stats.composite_score == round(stats.composite_score, 1)

    def test_catalog_name(self) -> None:
        catalog = CapsuleCatalog(items=[CapsuleDefinition(id="a", name="Attack Up")])
        corpus = [CharacterRecord(name="Goku", matches=[_make_match(["a"])])]
        stats = compute_ai_strategy_compatibility(corpus, catalog)["Aggressive"]["a"]
        assert stats.name == "Attack Up"
        assert stats.ai_strategy == "Aggressive"


class TestStrategyScore:
    def test_lookup(self) -> None:
        corpus = [CharacterRecord(name="Goku", matches=[_make_match(["a"])])]
        compat = compute_ai_strategy_compatibility(corpus)
        assert strategy_score(compat, "Aggressive", "a") == compat["Aggressive"]["a"].composite_score
        assert strategy_score(compat, "Aggressive", "zzz") is None
        assert strategy_score(compat, "Unknown", "a") is None
        assert strategy_score(compat, None, "a") is None
