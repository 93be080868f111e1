"""Pydantic models for build scoring, search, and advice output."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel

from capsule_lab.builds.composition import BuildComposition
from capsule_lab.builds.validator import BuildValidation
from capsule_lab.ir.capsules import CapsuleDefinition


def unique_capsules(capsules: Iterable[CapsuleDefinition]) -> list[CapsuleDefinition]:
    """Drop repeated ids, keeping the first occurrence."""
    seen: set[str] = set()
    out: list[CapsuleDefinition] = []
    for capsule in capsules:
        if capsule.id not in seen:
            seen.add(capsule.id)
            out.append(capsule)
    return out


class ScoreBreakdown(BaseModel):
    """Weighted score terms of one build.  Each term is already weighted."""

    individual_performance: float = 0.0
    synergy_bonus: float = 0.0
    ai_strategy_match: float = 0.0
    archetype_alignment: float = 0.0
    cost_efficiency: float = 0.0
    total_score: float = 0.0


class BuildCandidate(BaseModel):
    """A scored, validated set of capsules produced by the generator."""

    capsules: list[CapsuleDefinition]
    score: ScoreBreakdown
    composition: BuildComposition
    validation: BuildValidation

    @property
    def capsule_ids(self) -> list[str]:
        return [c.id for c in self.capsules]

    @property
    def key(self) -> tuple[str, ...]:
        """Order-independent identity used for deduplication."""
        return tuple(sorted(self.capsule_ids))

    @property
    def total_cost(self) -> int:
        return sum(c.cost for c in self.capsules)

    @property
    def capsule_count(self) -> int:
        return len(self.capsules)

    @property
    def valid(self) -> bool:
        return self.validation.valid


class BuildAnalysis(BaseModel):
    """Validation, composition, and score of one caller-supplied build."""

    capsules: list[CapsuleDefinition]
    validation: BuildValidation
    composition: BuildComposition
    score: ScoreBreakdown

    @property
    def total_cost(self) -> int:
        return sum(c.cost for c in self.capsules)

    @property
    def capsule_count(self) -> int:
        return len(self.capsules)


class ImprovementSuggestion(BaseModel):
    """One candidate addition to an existing build."""

    capsule: CapsuleDefinition
    impact_score: float
    synergy_count: int
    """Pairs with current members that have recorded synergy data."""
    avg_synergy_bonus: float
    new_total_cost: int
