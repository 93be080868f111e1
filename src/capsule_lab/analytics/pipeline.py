"""Analysis pass: tagged catalog + match corpus -> read-only aggregate maps.

Stages run in a fixed order:

1. classify the catalog (once per pipeline)
2. restrict the corpus to the selected characters
3. per-capsule performance
4. raw pair statistics
5. pair enrichment (consumes stage 3)
6. AI strategy compatibility

Every map is recomputed from scratch on each :meth:`AnalysisPipeline.run`;
change the corpus or the character filter by running again.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from capsule_lab.analytics.ai_compat import compute_ai_strategy_compatibility
from capsule_lab.analytics.corpus import filter_characters
from capsule_lab.analytics.models import (
    CapsulePerformance,
    PairKey,
    PairSynergy,
    StrategyCapsuleStats,
)
from capsule_lab.analytics.performance import compute_capsule_performance
from capsule_lab.analytics.synergy import compute_pair_statistics, enrich_pair_synergies
from capsule_lab.ir.catalog import CapsuleCatalog
from capsule_lab.ir.matches import CharacterRecord
from capsule_lab.taxonomy.archetypes import ARCHETYPE_CLASSIFIER
from capsule_lab.taxonomy.build_types import BUILD_TYPE_CLASSIFIER
from capsule_lab.taxonomy.classifier import RuleTableClassifier
from capsule_lab.taxonomy.tagging import classify_catalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Output of one analysis pass.  All maps are read-only views."""

    catalog: CapsuleCatalog
    """Classified catalog the maps were computed against."""
    performance: Mapping[str, CapsulePerformance]
    pairs: Mapping[PairKey, PairSynergy]
    ai_compatibility: Mapping[str, Mapping[str, StrategyCapsuleStats]]
    characters: tuple[str, ...] = ()
    """Character filter applied (empty = whole corpus)."""
    matches_counted: int = 0

    @property
    def ai_strategies(self) -> list[str]:
        return sorted(self.ai_compatibility)


class AnalysisPipeline:
    """Classifies a catalog once and computes aggregate maps on demand.

    Parameters
    ----------
    catalog:
        Raw (unclassified) capsule catalog.
    archetypes, build_types:
        Classifiers to tag the catalog with.  Defaults are the standard
        rule tables.
    """

    def __init__(
        self,
        catalog: CapsuleCatalog,
        archetypes: RuleTableClassifier = ARCHETYPE_CLASSIFIER,
        build_types: RuleTableClassifier = BUILD_TYPE_CLASSIFIER,
    ) -> None:
        self._catalog = classify_catalog(catalog, archetypes, build_types)

    @property
    def catalog(self) -> CapsuleCatalog:
        return self._catalog

    def run(
        self,
        corpus: Iterable[CharacterRecord],
        characters: Iterable[str] | None = None,
    ) -> AnalysisResult:
        names = tuple(sorted(set(characters))) if characters else ()
        selected = filter_characters(corpus, names)

        performance = compute_capsule_performance(selected, self._catalog)
        raw_pairs = compute_pair_statistics(selected, self._catalog)
        pairs = enrich_pair_synergies(raw_pairs, performance)
        ai_compat = compute_ai_strategy_compatibility(selected, self._catalog)

        counted = sum(
            1 for c in selected for m in c.matches if m.counted
        )
        logger.info(
            "Analysed %d counted matches across %d characters: "
            "%d capsules, %d pairs, %d AI strategies",
            counted, len(selected), len(performance), len(pairs), len(ai_compat),
        )

        return AnalysisResult(
            catalog=self._catalog,
            performance=MappingProxyType(performance),
            pairs=MappingProxyType(pairs),
            ai_compatibility=MappingProxyType(
                {k: MappingProxyType(v) for k, v in ai_compat.items()}
            ),
            characters=names,
            matches_counted=counted,
        )


def run_analysis(
    catalog: CapsuleCatalog,
    corpus: Iterable[CharacterRecord],
    characters: Iterable[str] | None = None,
) -> AnalysisResult:
    """Classify *catalog* and run one full analysis pass over *corpus*."""
    return AnalysisPipeline(catalog).run(corpus, characters)
