"""Build validation, scoring, search, and advice."""

from capsule_lab.builds.advisor import suggest_build_improvements
from capsule_lab.builds.analysis import analyze_build
from capsule_lab.builds.composition import BuildComposition, analyze_build_composition
from capsule_lab.builds.generator import BuildGenerator, GenerationOptions
from capsule_lab.builds.models import (
    BuildAnalysis,
    BuildCandidate,
    ImprovementSuggestion,
    ScoreBreakdown,
)
from capsule_lab.builds.scorer import score_build
from capsule_lab.builds.validator import (
    BuildValidation,
    BuildViolations,
    validate_build,
    validation_message,
)

__all__ = [
    "BuildAnalysis",
    "BuildCandidate",
    "BuildComposition",
    "BuildGenerator",
    "BuildValidation",
    "BuildViolations",
    "GenerationOptions",
    "ImprovementSuggestion",
    "ScoreBreakdown",
    "analyze_build",
    "analyze_build_composition",
    "score_build",
    "suggest_build_improvements",
    "validate_build",
    "validation_message",
]
