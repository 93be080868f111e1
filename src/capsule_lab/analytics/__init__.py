"""Capsule analytics: performance, pair synergy, and AI strategy compatibility."""

from capsule_lab.analytics.ai_compat import (
    compute_ai_strategy_compatibility,
    match_performance_score,
    strategy_score,
)
from capsule_lab.analytics.models import (
    CapsulePerformance,
    PairKey,
    PairSynergy,
    StrategyCapsuleStats,
    SynergyType,
    pair_key,
)
from capsule_lab.analytics.performance import compute_capsule_performance
from capsule_lab.analytics.pipeline import AnalysisPipeline, AnalysisResult, run_analysis
from capsule_lab.analytics.report import generate_text_report
from capsule_lab.analytics.synergy import (
    compute_pair_statistics,
    detect_synergy_type,
    enrich_pair_synergies,
    find_optimal_pairs,
    get_pair_synergy,
    synergy_against,
)

__all__ = [
    "AnalysisPipeline",
    "AnalysisResult",
    "CapsulePerformance",
    "PairKey",
    "PairSynergy",
    "StrategyCapsuleStats",
    "SynergyType",
    "compute_ai_strategy_compatibility",
    "compute_capsule_performance",
    "compute_pair_statistics",
    "detect_synergy_type",
    "enrich_pair_synergies",
    "find_optimal_pairs",
    "generate_text_report",
    "get_pair_synergy",
    "match_performance_score",
    "pair_key",
    "run_analysis",
    "strategy_score",
    "synergy_against",
]
