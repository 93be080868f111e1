"""Suggest the next capsule to add to an existing build."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from capsule_lab.analytics.models import CapsulePerformance, PairKey, PairSynergy
from capsule_lab.analytics.synergy import synergy_against
from capsule_lab.builds.models import ImprovementSuggestion, unique_capsules
from capsule_lab.config import DEFAULT_SELECTION_WEIGHTS, SelectionWeights
from capsule_lab.ir.capsules import CapsuleDefinition
from capsule_lab.ir.ruleset import DEFAULT_RULESET, Ruleset


def suggest_build_improvements(
    current_build: Sequence[CapsuleDefinition],
    pool: Sequence[CapsuleDefinition],
    pairs: Mapping[PairKey, PairSynergy],
    performance: Mapping[str, CapsulePerformance],
    ruleset: Ruleset = DEFAULT_RULESET,
    top_n: int | None = None,
    weights: SelectionWeights = DEFAULT_SELECTION_WEIGHTS,
) -> list[ImprovementSuggestion]:
    """Rank single-capsule additions to *current_build* by impact.

    impact = composite score + 0.5 x mean synergy bonus against current
    members.  Capsules already equipped or over the cost cap are skipped;
    a build already at the slot cap gets no suggestions.
    """
    current = unique_capsules(current_build)
    if len(current) >= ruleset.max_capsules:
        return []

    current_ids = [c.id for c in current]
    current_cost = sum(c.cost for c in current)

    suggestions: list[ImprovementSuggestion] = []
    for capsule in unique_capsules(pool):
        if capsule.id in current_ids:
            continue
        if current_cost + capsule.cost > ruleset.max_cost:
            continue

        perf = performance.get(capsule.id)
        mean_bonus, found = synergy_against(capsule.id, current_ids, pairs)
        impact = (perf.composite_score if perf is not None else 0.0) + mean_bonus * weights.synergy

        suggestions.append(ImprovementSuggestion(
            capsule=capsule,
            impact_score=impact,
            synergy_count=found,
            avg_synergy_bonus=mean_bonus,
            new_total_cost=current_cost + capsule.cost,
        ))

    suggestions.sort(key=lambda s: s.impact_score, reverse=True)
    return suggestions[:top_n] if top_n is not None else suggestions
