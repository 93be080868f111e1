"""Tunable weights for build scoring and greedy selection.

Passed explicitly into the scorer, generator, and advisor so callers can
experiment without touching module state.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ScoringWeights(BaseModel):
    """Weights of the five build score terms (sum to 1.0 by default)."""

    model_config = ConfigDict(frozen=True)

    individual_performance: float = 0.4
    synergy_bonus: float = 0.3
    ai_strategy_match: float = 0.15
    archetype_alignment: float = 0.1
    cost_efficiency: float = 0.05


class SelectionWeights(BaseModel):
    """Weights for ranking a single capsule addition."""

    model_config = ConfigDict(frozen=True)

    synergy: float = 0.5
    """Multiplier on the mean synergy bonus against current members."""

    strategy: float = 0.3
    """Multiplier on the capsule's composite under the target AI strategy."""

    archetype_bonus: float = 10.0
    """Flat bonus when the capsule matches the target archetype."""


DEFAULT_SCORING_WEIGHTS = ScoringWeights()
DEFAULT_SELECTION_WEIGHTS = SelectionWeights()
