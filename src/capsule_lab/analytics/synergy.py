"""Capsule pair synergy analysis.

Two strictly ordered phases:

1. :func:`compute_pair_statistics` -- co-occurrence counts, win rates and
   damage for every pair equipped together, plus an archetype-level
   synergy type.
2. :func:`enrich_pair_synergies` -- compares each pair against the
   individual performance of its members.  Needs the output of
   :func:`~capsule_lab.analytics.performance.compute_capsule_performance`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from itertools import combinations

from capsule_lab.analytics.corpus import iter_counted_matches
from capsule_lab.analytics.models import (
    PairKey,
    PairSynergy,
    PairSynergyMap,
    PerformanceMap,
    SynergyType,
    pair_key,
)
from capsule_lab.ir.capsules import Archetype, CapsuleDefinition
from capsule_lab.ir.catalog import CapsuleCatalog
from capsule_lab.ir.matches import CharacterRecord

_COMPLEMENTARY: frozenset[frozenset[Archetype]] = frozenset({
    frozenset({Archetype.AGGRESSIVE, Archetype.TECHNICAL}),  # damage + ki management
    frozenset({Archetype.DEFENSIVE, Archetype.TECHNICAL}),   # survival + resources
})

_HEALING_WORDS = ("health", "recovery", "hp")

WIN_RATE_BONUS_WEIGHT = 0.4
DAMAGE_BONUS_WEIGHT = 0.6


@dataclass
class _PairTally:
    appearances: int = 0
    wins: int = 0
    damage_dealt: float = 0.0
    damage_taken: float = 0.0
    characters: set[str] = field(default_factory=set)


def _reduces_defense(text: str) -> bool:
    return "reduces" in text and ("defense" in text or "armor" in text)


def _mentions_healing(text: str) -> bool:
    return any(w in text for w in _HEALING_WORDS)


def detect_synergy_type(
    first: CapsuleDefinition | None,
    second: CapsuleDefinition | None,
) -> SynergyType:
    """Classify the archetype-level relationship of two capsules.

    The anti-synergy check is one-directional: *first* must reduce
    defense or armor, *second* must also reduce it without mentioning any
    healing.  Swapping the arguments can therefore change the result;
    :func:`compute_pair_statistics` always passes the members in sorted id
    order, so a pair's type depends on how its ids sort.
    """
    if first is None or second is None:
        return SynergyType.NEUTRAL

    arch_a, arch_b = first.primary_archetype, second.primary_archetype
    if arch_a == arch_b and arch_a != Archetype.UTILITY:
        return SynergyType.MULTIPLICATIVE

    if frozenset({arch_a, arch_b}) in _COMPLEMENTARY:
        return SynergyType.COMPLEMENTARY

    effect_a = first.effect.lower()
    effect_b = second.effect.lower()
    if (
        _reduces_defense(effect_a)
        and not _mentions_healing(effect_b)
        and _reduces_defense(effect_b)
    ):
        return SynergyType.ANTI_SYNERGY

    return SynergyType.NEUTRAL


def compute_pair_statistics(
    characters: Iterable[CharacterRecord],
    catalog: CapsuleCatalog | None = None,
) -> PairSynergyMap:
    """Aggregate every unordered capsule pair seen in counted matches.

    ``synergy_bonus`` is left at 0; run :func:`enrich_pair_synergies`
    once capsule performance is available.
    """
    tallies: dict[PairKey, _PairTally] = {}

    for character, match in iter_counted_matches(characters):
        if len(match.equipped_capsules) < 2:
            continue
        for a, b in combinations(match.equipped_capsules, 2):
            tally = tallies.setdefault(pair_key(a, b), _PairTally())
            tally.appearances += 1
            if match.won:
                tally.wins += 1
            tally.damage_dealt += match.damage_dealt
            tally.damage_taken += match.damage_taken
            tally.characters.add(character.name)

    lookup = catalog.by_id() if catalog is not None else {}
    results: PairSynergyMap = {}
    for key in sorted(tallies):
        a, b = key
        tally = tallies[key]
        cap_a, cap_b = lookup.get(a), lookup.get(b)
        n = tally.appearances
        results[key] = PairSynergy(
            capsule_a=a,
            capsule_b=b,
            capsule_a_name=cap_a.name if cap_a else a,
            capsule_b_name=cap_b.name if cap_b else b,
            combined_cost=(cap_a.cost if cap_a else 0) + (cap_b.cost if cap_b else 0),
            synergy_type=detect_synergy_type(cap_a, cap_b),
            appearances=n,
            wins=tally.wins,
            pair_win_rate=tally.wins / n * 100 if n else 0.0,
            avg_damage_dealt=tally.damage_dealt / n if n else 0.0,
            avg_damage_taken=tally.damage_taken / n if n else 0.0,
            damage_efficiency=(
                tally.damage_dealt / tally.damage_taken if tally.damage_taken > 0 else 0.0
            ),
            characters=sorted(tally.characters),
        )
    return results


def enrich_pair_synergies(
    pairs: PairSynergyMap,
    performance: PerformanceMap,
) -> PairSynergyMap:
    """Return a new pair map with ``synergy_bonus`` filled in.

    bonus = 0.4 x (pair win rate - mean member win rate)
          + 0.6 x (pair avg damage - mean member avg damage) / 100

    Pairs with a member missing from *performance* keep a bonus of 0.
    """
    enriched: PairSynergyMap = {}
    for key, pair in pairs.items():
        perf_a = performance.get(pair.capsule_a)
        perf_b = performance.get(pair.capsule_b)
        if perf_a is None or perf_b is None:
            enriched[key] = pair.model_copy(update={"synergy_bonus": 0.0})
            continue

        expected_wr = (perf_a.win_rate + perf_b.win_rate) / 2
        expected_dmg = (perf_a.avg_damage_dealt + perf_b.avg_damage_dealt) / 2
        expected_composite = (perf_a.composite_score + perf_b.composite_score) / 2

        bonus = (
            WIN_RATE_BONUS_WEIGHT * (pair.pair_win_rate - expected_wr)
            + DAMAGE_BONUS_WEIGHT * ((pair.avg_damage_dealt - expected_dmg) / 100)
        )
        enriched[key] = pair.model_copy(update={
            "synergy_bonus": bonus,
            "expected_win_rate": expected_wr,
            "expected_damage": expected_dmg,
            "expected_composite": expected_composite,
        })
    return enriched


def get_pair_synergy(
    pairs: Mapping[PairKey, PairSynergy],
    a: str,
    b: str,
) -> PairSynergy | None:
    """Look up a pair in either order."""
    return pairs.get(pair_key(a, b))


def synergy_against(
    capsule_id: str,
    member_ids: Iterable[str],
    pairs: Mapping[PairKey, PairSynergy],
) -> tuple[float, int]:
    """Mean synergy bonus of *capsule_id* against *member_ids*.

    Returns ``(mean_bonus, pairs_found)``; ``(0.0, 0)`` when no pair has
    been recorded.
    """
    total = 0.0
    found = 0
    for other in member_ids:
        if other == capsule_id:
            continue
        pair = get_pair_synergy(pairs, capsule_id, other)
        if pair is not None:
            total += pair.synergy_bonus
            found += 1
    return (total / found if found else 0.0), found


def find_optimal_pairs(
    pairs: Mapping[PairKey, PairSynergy],
    catalog: CapsuleCatalog,
    target_archetype: Archetype | None = None,
    target_synergy_type: SynergyType | None = None,
    min_appearances: int = 3,
    top_n: int = 20,
) -> list[PairSynergy]:
    """Rank recorded pairs by synergy bonus.

    Pairs with fewer than *min_appearances* or with a member missing from
    the catalog are ignored.  *target_archetype* keeps pairs where either
    member has that primary archetype.
    """
    lookup = catalog.by_id()
    ranked: list[PairSynergy] = []
    for pair in pairs.values():
        if pair.appearances < min_appearances:
            continue
        cap_a, cap_b = lookup.get(pair.capsule_a), lookup.get(pair.capsule_b)
        if cap_a is None or cap_b is None:
            continue
        if target_archetype is not None and target_archetype not in (
            cap_a.primary_archetype, cap_b.primary_archetype,
        ):
            continue
        if target_synergy_type is not None and pair.synergy_type != target_synergy_type:
            continue
        ranked.append(pair)

    ranked.sort(key=lambda p: p.synergy_bonus, reverse=True)
    return ranked[:top_n]
