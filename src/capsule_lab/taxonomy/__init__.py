"""Capsule taxonomies: archetypes, build types, and effect tags."""

from capsule_lab.taxonomy.archetypes import (
    ARCHETYPE_CLASSIFIER,
    ARCHETYPE_TABLE,
    ArchetypeSummary,
    archetype_summary,
    filter_by_archetype,
)
from capsule_lab.taxonomy.build_types import (
    BUILD_TYPE_CLASSIFIER,
    BUILD_TYPE_TABLE,
    EFFECT_TAG_PATTERNS,
    extract_effect_tags,
)
from capsule_lab.taxonomy.classifier import (
    CategoryRule,
    Classification,
    RuleTable,
    RuleTableClassifier,
    TieBreakOverride,
)
from capsule_lab.taxonomy.tagging import classify_capsule, classify_catalog

__all__ = [
    "ARCHETYPE_CLASSIFIER",
    "ARCHETYPE_TABLE",
    "ArchetypeSummary",
    "BUILD_TYPE_CLASSIFIER",
    "BUILD_TYPE_TABLE",
    "CategoryRule",
    "Classification",
    "EFFECT_TAG_PATTERNS",
    "RuleTable",
    "RuleTableClassifier",
    "TieBreakOverride",
    "archetype_summary",
    "classify_capsule",
    "classify_catalog",
    "extract_effect_tags",
    "filter_by_archetype",
]
