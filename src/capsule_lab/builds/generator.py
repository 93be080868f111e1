"""Randomized-greedy build search.

Each attempt shuffles the pool with its own forked RNG stream, then fills
slots greedily: at every step the best-scoring capsule that still fits the
cost cap is added.  Valid, distinct results are kept and ranked by their
full build score.  The search stops after ``max_builds * 10`` attempts
whether or not enough builds were found.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence

from pydantic import BaseModel, Field

from capsule_lab.analytics.ai_compat import strategy_score
from capsule_lab.analytics.models import (
    CapsulePerformance,
    PairKey,
    PairSynergy,
    StrategyCapsuleStats,
)
from capsule_lab.analytics.pipeline import AnalysisResult
from capsule_lab.analytics.synergy import synergy_against
from capsule_lab.builds.composition import analyze_build_composition
from capsule_lab.builds.models import BuildCandidate, unique_capsules
from capsule_lab.builds.scorer import score_build
from capsule_lab.builds.validator import validate_build
from capsule_lab.config import (
    DEFAULT_SCORING_WEIGHTS,
    DEFAULT_SELECTION_WEIGHTS,
    ScoringWeights,
    SelectionWeights,
)
from capsule_lab.core.rng import BuildRNG
from capsule_lab.ir.capsules import Archetype, CapsuleDefinition
from capsule_lab.ir.ruleset import DEFAULT_RULESET, Ruleset

logger = logging.getLogger(__name__)

ATTEMPTS_PER_BUILD = 10


class GenerationOptions(BaseModel):
    """Per-call knobs for :meth:`BuildGenerator.generate`."""

    target_strategy: str | None = None
    target_archetype: Archetype | None = None
    max_builds: int = Field(default=5, ge=0)
    min_capsules: int = Field(default=3, ge=0)
    prefer_high_synergy: bool = True


class BuildGenerator:
    """Propose several distinct high-scoring builds from a capsule pool.

    Parameters
    ----------
    performance, pairs, ai_compatibility:
        Aggregate maps from one analysis pass.
    ruleset:
        Constraints every returned build satisfies.
    rng:
        Source of shuffles.  Pass a seeded :class:`BuildRNG` for
        reproducible output.
    """

    def __init__(
        self,
        performance: Mapping[str, CapsulePerformance],
        pairs: Mapping[PairKey, PairSynergy],
        ai_compatibility: Mapping[str, Mapping[str, StrategyCapsuleStats]] | None = None,
        ruleset: Ruleset = DEFAULT_RULESET,
        rng: BuildRNG | None = None,
        scoring: ScoringWeights = DEFAULT_SCORING_WEIGHTS,
        selection: SelectionWeights = DEFAULT_SELECTION_WEIGHTS,
    ) -> None:
        self._performance = performance
        self._pairs = pairs
        self._ai_compat = ai_compatibility or {}
        self._ruleset = ruleset
        self._rng = rng if rng is not None else BuildRNG()
        self._scoring = scoring
        self._selection = selection
        self._runs = 0

    @classmethod
    def from_analysis(
        cls,
        result: AnalysisResult,
        ruleset: Ruleset = DEFAULT_RULESET,
        rng: BuildRNG | None = None,
        **kwargs: object,
    ) -> BuildGenerator:
        return cls(
            result.performance, result.pairs, result.ai_compatibility,
            ruleset=ruleset, rng=rng, **kwargs,  # type: ignore[arg-type]
        )

    @property
    def ruleset(self) -> Ruleset:
        return self._ruleset

    # -- search -------------------------------------------------------------

    def generate(
        self,
        pool: Sequence[CapsuleDefinition],
        options: GenerationOptions | None = None,
    ) -> list[BuildCandidate]:
        """Return up to ``options.max_builds`` valid builds, best first."""
        options = options or GenerationOptions()
        banned = set(self._ruleset.banned_capsules)
        candidates = [c for c in unique_capsules(pool) if c.id not in banned]

        run = self._runs
        self._runs += 1

        accepted: list[BuildCandidate] = []
        seen: set[tuple[str, ...]] = set()
        max_attempts = options.max_builds * ATTEMPTS_PER_BUILD
        attempts = 0
        while len(accepted) < options.max_builds and attempts < max_attempts:
            rng = self._rng.fork(f"run:{run}:attempt:{attempts}")
            attempts += 1
            build = self._build_once(candidates, options, rng)
            if build is None or build.key in seen:
                continue
            seen.add(build.key)
            accepted.append(build)

        if len(accepted) < options.max_builds:
            logger.info(
                "Build search returned %d/%d builds after %d attempts (pool=%d)",
                len(accepted), options.max_builds, attempts, len(candidates),
            )

        accepted.sort(key=lambda b: b.score.total_score, reverse=True)
        return accepted

    def _build_once(
        self,
        pool: list[CapsuleDefinition],
        options: GenerationOptions,
        rng: BuildRNG,
    ) -> BuildCandidate | None:
        ruleset = self._ruleset
        required = set(ruleset.required_capsules)
        chosen = [c for c in pool if c.id in required]
        chosen_ids = [c.id for c in chosen]
        total_cost = sum(c.cost for c in chosen)
        remaining = [c for c in rng.shuffled(pool) if c.id not in required]

        while len(chosen) < ruleset.max_capsules and remaining:
            best_index = -1
            best_score = -math.inf
            for i, capsule in enumerate(remaining):
                if total_cost + capsule.cost > ruleset.max_cost:
                    continue
                score = self._selection_score(capsule, chosen_ids, options)
                if score > best_score:
                    best_score = score
                    best_index = i
            if best_index < 0:
                break
            pick = remaining.pop(best_index)
            chosen.append(pick)
            chosen_ids.append(pick.id)
            total_cost += pick.cost

        if len(chosen) < options.min_capsules:
            return None

        validation = validate_build(chosen, ruleset)
        if not validation.valid:
            logger.debug("Rejected candidate %s: %s", chosen_ids, validation.violations)
            return None

        score = score_build(
            chosen,
            self._performance,
            self._pairs,
            self._ai_compat,
            target_strategy=options.target_strategy,
            target_archetype=options.target_archetype,
            ruleset=ruleset,
            weights=self._scoring,
        )
        return BuildCandidate(
            capsules=chosen,
            score=score,
            composition=analyze_build_composition(chosen),
            validation=validation,
        )

    def _selection_score(
        self,
        capsule: CapsuleDefinition,
        chosen_ids: list[str],
        options: GenerationOptions,
    ) -> float:
        w = self._selection
        perf = self._performance.get(capsule.id)
        score = perf.composite_score if perf is not None else 0.0

        if options.prefer_high_synergy and chosen_ids:
            mean_bonus, _ = synergy_against(capsule.id, chosen_ids, self._pairs)
            score += mean_bonus * w.synergy

        if options.target_strategy:
            s = strategy_score(self._ai_compat, options.target_strategy, capsule.id)
            if s is not None:
                score += s * w.strategy

        if (
            options.target_archetype is not None
            and capsule.primary_archetype == options.target_archetype
        ):
            score += w.archetype_bonus

        return score
