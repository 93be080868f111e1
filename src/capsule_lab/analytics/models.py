"""Pydantic v2 models for capsule analytics output.

Per-capsule performance, per-pair synergy, and per-strategy capsule
statistics.  All are serializable to JSON via ``model_dump``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from capsule_lab.ir.capsules import Archetype

PairKey = tuple[str, str]


def pair_key(a: str, b: str) -> PairKey:
    """Canonical, order-independent key for a capsule pair."""
    return (a, b) if a <= b else (b, a)


class SynergyType(str, Enum):
    """Archetype-level relationship between the two members of a pair."""

    MULTIPLICATIVE = "multiplicative"
    COMPLEMENTARY = "complementary"
    ANTI_SYNERGY = "anti-synergy"
    NEUTRAL = "neutral"


class CapsulePerformance(BaseModel):
    """Per-capsule statistics over all counted matches."""

    model_config = ConfigDict(frozen=True)


    capsule_id: str
    name: str
    cost: int
    primary_archetype: Archetype
    archetype_tags: list[Archetype] = []
    # Appearance
    appearances: int
    """Counted matches with this capsule equipped."""
    total_matches: int
    # Outcome
    wins: int
    win_rate: float
    """wins / total_matches x 100."""
    # Damage
    avg_damage_dealt: float
    avg_damage_taken: float
    damage_efficiency: float
    """total dealt / total taken (0 when nothing was taken)."""
    composite_score: float
    """Win rate and efficiency blended onto a 0-100 scale."""
    # Usage diversity (sorted)
    characters: list[str] = []
    teams: list[str] = []
    ai_strategies: list[str] = []

    @property
    def character_count(self) -> int:
        return len(self.characters)

    @property
    def team_count(self) -> int:
        return len(self.teams)

    @property
    def ai_strategy_count(self) -> int:
        return len(self.ai_strategies)


class PairSynergy(BaseModel):
    """Co-occurrence statistics for two capsules equipped together."""

    model_config = ConfigDict(frozen=True)


    capsule_a: str
    capsule_b: str
    """``capsule_a <= capsule_b`` always holds."""
    capsule_a_name: str
    capsule_b_name: str
    combined_cost: int
    synergy_type: SynergyType
    appearances: int
    wins: int
    pair_win_rate: float
    avg_damage_dealt: float
    avg_damage_taken: float
    damage_efficiency: float
    characters: list[str] = []
    synergy_bonus: float = 0.0
    """Observed minus expected performance.  Zero until enrichment."""
    expected_win_rate: float | None = None
    expected_damage: float | None = None
    expected_composite: float | None = None

    @property
    def key(self) -> PairKey:
        return (self.capsule_a, self.capsule_b)

    @property
    def enriched(self) -> bool:
        return self.expected_win_rate is not None

    def other(self, capsule_id: str) -> str:
        """Return the member that is not *capsule_id*."""
        return self.capsule_b if capsule_id == self.capsule_a else self.capsule_a


class StrategyCapsuleStats(BaseModel):
    """Capsule statistics restricted to matches under one AI strategy."""

    model_config = ConfigDict(frozen=True)


    capsule_id: str
    name: str
    ai_strategy: str
    appearances: int
    wins: int
    total_matches: int
    win_rate: float
    avg_damage_dealt: int
    composite_score: float
    """Mean per-match performance score, rounded to one decimal."""


PerformanceMap = dict[str, CapsulePerformance]
PairSynergyMap = dict[PairKey, PairSynergy]
StrategyCompatibilityMap = dict[str, dict[str, StrategyCapsuleStats]]
