"""Tests for single-build analysis."""

from __future__ import annotations

import pytest

from capsule_lab.analytics.pipeline import run_analysis
from capsule_lab.builds.analysis import analyze_build
from capsule_lab.ir.capsules import Archetype, CapsuleDefinition
from capsule_lab.ir.catalog import CapsuleCatalog
from capsule_lab.ir.matches import CharacterRecord, MatchRecord
from capsule_lab.ir.ruleset import Ruleset


def _result():
    catalog = CapsuleCatalog(items=[
        CapsuleDefinition(id="X", name="Attack Up", cost=3, effect="Increases damage dealt"),
        CapsuleDefinition(id="Y", name="Defense Up", cost=2, effect="Reduces damage taken"),
    ])
    matches = [
        MatchRecord(equipped_capsules=["X", "Y"], won=i < 6, damage_dealt=1200,
                    damage_taken=600, battle_time=60)
        for i in range(10)
    ]
    return run_analysis(catalog, [CharacterRecord(name="Goku", matches=matches)])


class TestAnalyzeBuild:
    def test_full_view(self) -> None:
        result = _result()
        analysis = analyze_build(result.catalog.capsules, result)
        assert analysis.validation.valid
        assert analysis.total_cost == 5
        assert analysis.capsule_count == 2
        assert analysis.composition.counts["aggressive"] == 1
        assert analysis.composition.counts["defensive"] == 1
        assert analysis.score.individual_performance == pytest.approx(32)
        assert analysis.score.synergy_bonus == pytest.approx(0)
        assert analysis.score.archetype_alignment == pytest.approx(5)
        assert analysis.score.cost_efficiency == pytest.approx(1.25)
        assert analysis.score.total_score == pytest.approx(38.25)

    def test_invalid_under_ruleset(self) -> None:
        result = _result()
        analysis = analyze_build(result.catalog.capsules, result, Ruleset(max_cost=4))
        assert not analysis.validation.valid
        assert analysis.validation.remaining_cost == -1

    def test_target_archetype(self) -> None:
        result = _result()
        analysis = analyze_build(
            result.catalog.capsules, result, target_archetype=Archetype.AGGRESSIVE,
        )
        assert analysis.score.archetype_alignment == pytest.approx(10)
