"""Multi-factor build scoring.

Five weighted terms (default weights in parentheses):

- individual performance (0.4): mean capsule composite score
- synergy (0.3): mean non-negative pair bonus
- AI strategy match (0.15): mean composite under the target strategy
- archetype alignment (0.1): target match, or cohesion without a target
- cost efficiency (0.05): share of the cost cap used

Cost efficiency rewards spending closer to the cap, not thrift.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from itertools import combinations

from capsule_lab.analytics.ai_compat import strategy_score
from capsule_lab.analytics.models import (
    CapsulePerformance,
    PairKey,
    PairSynergy,
    StrategyCapsuleStats,
)
from capsule_lab.analytics.synergy import get_pair_synergy
from capsule_lab.builds.composition import analyze_build_composition
from capsule_lab.builds.models import ScoreBreakdown, unique_capsules
from capsule_lab.config import DEFAULT_SCORING_WEIGHTS, ScoringWeights
from capsule_lab.ir.capsules import Archetype, CapsuleDefinition
from capsule_lab.ir.ruleset import DEFAULT_RULESET, Ruleset


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def score_build(
    capsules: Sequence[CapsuleDefinition],
    performance: Mapping[str, CapsulePerformance],
    pairs: Mapping[PairKey, PairSynergy],
    ai_compatibility: Mapping[str, Mapping[str, StrategyCapsuleStats]] | None = None,
    target_strategy: str | None = None,
    target_archetype: Archetype | None = None,
    ruleset: Ruleset = DEFAULT_RULESET,
    weights: ScoringWeights = DEFAULT_SCORING_WEIGHTS,
) -> ScoreBreakdown:
    """Score an arbitrary set of capsules.  Unknown ids contribute zero."""
    capsules = unique_capsules(capsules)
    if not capsules:
        return ScoreBreakdown()

    composites = [
        performance[c.id].composite_score for c in capsules if c.id in performance
    ]
    individual = _mean(composites) * weights.individual_performance

    bonuses = []
    for a, b in combinations(capsules, 2):
        pair = get_pair_synergy(pairs, a.id, b.id)
        if pair is not None:
            bonuses.append(max(0.0, pair.synergy_bonus))
    synergy = _mean(bonuses) * weights.synergy_bonus

    strategy = 0.0
    if target_strategy and ai_compatibility:
        found = [
            s for s in (strategy_score(ai_compatibility, target_strategy, c.id) for c in capsules)
            if s is not None
        ]
        strategy = _mean(found) * weights.ai_strategy_match

    composition = analyze_build_composition(capsules)
    alignment = 0.0
    if target_archetype is not None:
        if composition.dominant_archetype == target_archetype:
            alignment = 100 * weights.archetype_alignment
    elif composition.dominant_archetype is not None:
        focus = composition.dominant_count / len(capsules) * 100
        alignment = focus * weights.archetype_alignment

    total_cost = sum(c.cost for c in capsules)
    utilisation = total_cost / ruleset.max_cost * 100 if ruleset.max_cost > 0 else 0.0
    cost = utilisation * weights.cost_efficiency

    return ScoreBreakdown(
        individual_performance=individual,
        synergy_bonus=synergy,
        ai_strategy_match=strategy,
        archetype_alignment=alignment,
        cost_efficiency=cost,
        total_score=individual + synergy + strategy + alignment + cost,
    )
