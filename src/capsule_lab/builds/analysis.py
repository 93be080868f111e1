"""Full analysis of a single caller-supplied build."""

from __future__ import annotations

from collections.abc import Sequence

from capsule_lab.analytics.pipeline import AnalysisResult
from capsule_lab.builds.composition import analyze_build_composition
from capsule_lab.builds.models import BuildAnalysis, unique_capsules
from capsule_lab.builds.scorer import score_build
from capsule_lab.builds.validator import validate_build
from capsule_lab.config import DEFAULT_SCORING_WEIGHTS, ScoringWeights
from capsule_lab.ir.capsules import Archetype, CapsuleDefinition
from capsule_lab.ir.ruleset import DEFAULT_RULESET, Ruleset


def analyze_build(
    capsules: Sequence[CapsuleDefinition],
    result: AnalysisResult,
    ruleset: Ruleset = DEFAULT_RULESET,
    target_strategy: str | None = None,
    target_archetype: Archetype | None = None,
    weights: ScoringWeights = DEFAULT_SCORING_WEIGHTS,
) -> BuildAnalysis:
    """Validate, decompose, and score *capsules* against one analysis pass."""
    build = unique_capsules(capsules)
    return BuildAnalysis(
        capsules=build,
        validation=validate_build(build, ruleset),
        composition=analyze_build_composition(build),
        score=score_build(
            build,
            result.performance,
            result.pairs,
            result.ai_compatibility,
            target_strategy=target_strategy,
            target_archetype=target_archetype,
            ruleset=ruleset,
            weights=weights,
        ),
    )
