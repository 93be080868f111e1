"""Per-capsule performance aggregation.

Pure function over the match corpus: no side effects, no I/O.  The
output is deterministic for a given input (keys and distinct-value lists
are sorted) so repeated runs serialise identically.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from capsule_lab.analytics.corpus import iter_counted_matches
from capsule_lab.analytics.models import CapsulePerformance, PerformanceMap
from capsule_lab.ir.capsules import Archetype, CapsuleDefinition
from capsule_lab.ir.catalog import CapsuleCatalog
from capsule_lab.ir.matches import CharacterRecord

logger = logging.getLogger(__name__)


@dataclass
class _CapsuleTally:
    matches: int = 0
    wins: int = 0
    damage_dealt: float = 0.0
    damage_taken: float = 0.0
    characters: set[str] = field(default_factory=set)
    teams: set[str] = field(default_factory=set)
    strategies: set[str] = field(default_factory=set)


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def composite_score(win_rate: float, damage_efficiency: float) -> float:
    """50 baseline, shifted by win rate around 50% and efficiency around 1.0."""
    return clamp(50 + (win_rate - 50) + (damage_efficiency - 1) * 20)


def compute_capsule_performance(
    characters: Iterable[CharacterRecord],
    catalog: CapsuleCatalog | None = None,
) -> PerformanceMap:
    """Compute per-capsule statistics from every counted match.

    Capsules that never appear in a counted match are absent from the
    result rather than present with zero values.
    """
    tallies: dict[str, _CapsuleTally] = {}

    for character, match in iter_counted_matches(characters):
        for capsule_id in match.equipped_capsules:
            tally = tallies.setdefault(capsule_id, _CapsuleTally())
            tally.matches += 1
            if match.won:
                tally.wins += 1
            tally.damage_dealt += match.damage_dealt
            tally.damage_taken += match.damage_taken
            tally.characters.add(character.name)
            if match.team:
                tally.teams.add(match.team)
            if match.ai_strategy:
                tally.strategies.add(match.ai_strategy)

    lookup = catalog.by_id() if catalog is not None else {}
    results: PerformanceMap = {}
    for capsule_id in sorted(tallies):
        results[capsule_id] = _finalise(capsule_id, tallies[capsule_id], lookup.get(capsule_id))
    return results


def _finalise(
    capsule_id: str,
    tally: _CapsuleTally,
    capsule: CapsuleDefinition | None,
) -> CapsulePerformance:
    if capsule is None:
        logger.debug("Capsule %s used in matches but missing from catalog", capsule_id)

    n = tally.matches
    win_rate = clamp(tally.wins / n * 100) if n else 0.0
    efficiency = tally.damage_dealt / tally.damage_taken if tally.damage_taken > 0 else 0.0

    return CapsulePerformance(
        capsule_id=capsule_id,
        name=capsule.name if capsule else capsule_id,
        cost=capsule.cost if capsule else 0,
        primary_archetype=capsule.primary_archetype if capsule else Archetype.UTILITY,
        archetype_tags=list(capsule.archetype_tags) if capsule else [],
        appearances=n,
        total_matches=n,
        wins=tally.wins,
        win_rate=win_rate,
        avg_damage_dealt=tally.damage_dealt / n if n else 0.0,
        avg_damage_taken=tally.damage_taken / n if n else 0.0,
        damage_efficiency=efficiency,
        composite_score=composite_score(win_rate, efficiency),
        characters=sorted(tally.characters),
        teams=sorted(tally.teams),
        ai_strategies=sorted(tally.strategies),
    )
