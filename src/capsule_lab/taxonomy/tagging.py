"""Attach taxonomy labels to catalog entries."""

from __future__ import annotations

from capsule_lab.ir.capsules import Archetype, CapsuleDefinition
from capsule_lab.ir.catalog import CapsuleCatalog
from capsule_lab.taxonomy.archetypes import ARCHETYPE_CLASSIFIER
from capsule_lab.taxonomy.build_types import BUILD_TYPE_CLASSIFIER, extract_effect_tags
from capsule_lab.taxonomy.classifier import RuleTableClassifier


def classify_capsule(
    capsule: CapsuleDefinition,
    archetypes: RuleTableClassifier = ARCHETYPE_CLASSIFIER,
    build_types: RuleTableClassifier = BUILD_TYPE_CLASSIFIER,
) -> CapsuleDefinition:
    """Return a copy of *capsule* with archetype, build type, and effect tags set."""
    arch = archetypes.classify(capsule.effect, capsule.name)
    build = build_types.classify(capsule.effect, capsule.name)
    return capsule.model_copy(update={
        "primary_archetype": Archetype(arch.primary),
        "archetype_tags": tuple(Archetype(t) for t in arch.tags),
        "archetype_weights": dict(arch.weights),
        "build_type": build.primary,
        "effect_tags": tuple(extract_effect_tags(capsule.effect)),
    })


def classify_catalog(
    catalog: CapsuleCatalog,
    archetypes: RuleTableClassifier = ARCHETYPE_CLASSIFIER,
    build_types: RuleTableClassifier = BUILD_TYPE_CLASSIFIER,
) -> CapsuleCatalog:
    """Return a new catalog whose capsule rows are classified.

    Non-capsule rows are carried over untouched.
    """
    items = [
        classify_capsule(item, archetypes, build_types) if item.is_capsule else item
        for item in catalog.items
    ]
    return CapsuleCatalog(items=items)
