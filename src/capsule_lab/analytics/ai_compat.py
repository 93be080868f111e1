"""AI strategy / capsule compatibility.

Groups counted matches by the AI behaviour label active in the match and
scores each capsule within each group using a per-match performance
score.  The per-strategy composite feeds the build scorer's AI-match
term.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from capsule_lab.analytics.corpus import iter_counted_matches
from capsule_lab.analytics.models import StrategyCapsuleStats, StrategyCompatibilityMap
from capsule_lab.ir.catalog import CapsuleCatalog
from capsule_lab.ir.matches import CharacterRecord, MatchRecord


@dataclass
class _StrategyTally:
    matches: int = 0
    wins: int = 0
    damage_dealt: float = 0.0
    performance: float = 0.0


def _round_half_up(value: float, digits: int = 0) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def match_performance_score(match: MatchRecord) -> float:
    """Blend raw damage, efficiency, damage rate, and HP retention.

    35% damage volume (per 100k), 25% dealt/taken, 25% damage per second
    (per 1k), 15% remaining HP fraction.
    """
    dealt = match.damage_dealt
    taken = max(match.damage_taken, 1)
    battle_time = max(match.battle_time, 1)
    retention = match.hp_remaining / match.hp_max if match.hp_max > 0 else 0.0

    return (
        (dealt / 100_000) * 35
        + (dealt / taken) * 25
        + (dealt / battle_time / 1000) * 25
        + retention * 15
    )


def compute_ai_strategy_compatibility(
    characters: Iterable[CharacterRecord],
    catalog: CapsuleCatalog | None = None,
) -> StrategyCompatibilityMap:
    """Return ``{ai_strategy: {capsule_id: StrategyCapsuleStats}}``.

    Matches without an AI strategy label are ignored.
    """
    groups: dict[str, dict[str, _StrategyTally]] = {}

    for _character, match in iter_counted_matches(characters):
        if not match.ai_strategy:
            continue
        score = match_performance_score(match)
        group = groups.setdefault(match.ai_strategy, {})
        for capsule_id in match.equipped_capsules:
            tally = group.setdefault(capsule_id, _StrategyTally())
            tally.matches += 1
            if match.won:
                tally.wins += 1
            tally.damage_dealt += match.damage_dealt
            tally.performance += score

    lookup = catalog.by_id() if catalog is not None else {}
    results: StrategyCompatibilityMap = {}
    for strategy in sorted(groups):
        per_capsule: dict[str, StrategyCapsuleStats] = {}
        for capsule_id in sorted(groups[strategy]):
            tally = groups[strategy][capsule_id]
            n = tally.matches
            capsule = lookup.get(capsule_id)
            per_capsule[capsule_id] = StrategyCapsuleStats(
                capsule_id=capsule_id,
                name=capsule.name if capsule else capsule_id,
                ai_strategy=strategy,
                appearances=n,
                wins=tally.wins,
                total_matches=n,
                win_rate=tally.wins / n * 100 if n else 0.0,
                avg_damage_dealt=int(_round_half_up(tally.damage_dealt / n)) if n else 0,
                composite_score=_round_half_up(tally.performance / n, 1) if n else 0.0,
            )
        results[strategy] = per_capsule
    return results


def strategy_score(
    compatibility: Mapping[str, Mapping[str, StrategyCapsuleStats]],
    strategy: str | None,
    capsule_id: str,
) -> float | None:
    """Composite score of *capsule_id* under *strategy*, or None if unknown."""
    if not strategy:
        return None
    stats = compatibility.get(strategy, {}).get(capsule_id)
    return stats.composite_score if stats is not None else None
