"""Archetype taxonomy -- aggressive, defensive, technical, utility.

- Aggressive: damage increases.
- Defensive: damage reduction, armor, health, guards, counters, tagging.
- Technical: ki management, movement, skill gauge, transformations.
- Utility: fallback when nothing matches.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel

from capsule_lab.ir.capsules import Archetype, CapsuleDefinition
from capsule_lab.taxonomy.classifier import (
    CategoryRule,
    RuleTable,
    RuleTableClassifier,
    TieBreakOverride,
    pattern,
)

ARCHETYPE_TABLE = RuleTable(
    categories=(
        CategoryRule(
            name=Archetype.AGGRESSIVE.value,
            patterns=(
                pattern(r"increases.*damage"),
                pattern(r"increases.*attack"),
                pattern(r"blast.*damage"),
                pattern(r"ultimate.*damage"),
                pattern(r"burst.*damage"),
                pattern(r"power(?!.*body)"),  # not "power body"
                pattern(r"combo.*damage"),
                pattern(r"smash.*damage"),
                pattern(r"rush.*damage"),
            ),
        ),
        CategoryRule(
            name=Archetype.DEFENSIVE.value,
            patterns=(
                pattern(r"reduces.*damage taken"),
                pattern(r"armor"),
                pattern(r"guard"),
                pattern(r"defense"),
                pattern(r"health.*recovery"),
                pattern(r"HP.*recovery|recovers.*HP"),
                pattern(r"maximum health|max.*HP|increases.*health"),
                pattern(r"counter"),
                pattern(r"switch"),
                pattern(r"tag"),
                pattern(r"standby"),
                pattern(r"damage resistance"),
                pattern(r"flinch"),
                pattern(r"body"),  # Power Body, Light Body, ...
            ),
        ),
        CategoryRule(
            name=Archetype.TECHNICAL.value,
            patterns=(
                pattern(r"ki.*cost"),
                pattern(r"ki.*recovery|ki.*gain"),
                pattern(r"ki gauge"),
                pattern(r"dash"),
                pattern(r"movement"),
                pattern(r"skill.*gauge|skill count"),
                pattern(r"transformation|fusion"),
                pattern(r"sparking mode|sparking gauge"),
                pattern(r"charging time|charge"),
                pattern(r"speed(?!.*impact)"),  # not "speed impact"
                pattern(r"energy"),
            ),
        ),
    ),
    fallback=Archetype.UTILITY.value,
    priority=(
        Archetype.AGGRESSIVE.value,
        Archetype.DEFENSIVE.value,
        Archetype.TECHNICAL.value,
    ),
    overrides=(
        TieBreakOverride(
            keywords=("counter",),
            prefer=Archetype.DEFENSIVE.value,
            search_name=True,
        ),
        TieBreakOverride(
            keywords=("sparking",),
            prefer=Archetype.TECHNICAL.value,
            search_name=True,
            unless=pattern(r"increases.*damage.*sparking"),
        ),
        TieBreakOverride(
            keywords=("standby", "switch", "tag"),
            prefer=Archetype.DEFENSIVE.value,
        ),
    ),
)

ARCHETYPE_CLASSIFIER = RuleTableClassifier(ARCHETYPE_TABLE)


class ArchetypeSummary(BaseModel):
    """Archetype distribution across a set of capsules."""

    total: int
    by_archetype: dict[str, int]
    multi_category: int
    """Capsules tagged with more than one archetype."""


def archetype_summary(capsules: Iterable[CapsuleDefinition]) -> ArchetypeSummary:
    """Count capsules per primary archetype."""
    by_archetype = {a.value: 0 for a in Archetype}
    total = 0
    multi = 0
    for capsule in capsules:
        total += 1
        by_archetype[capsule.primary_archetype.value] += 1
        if len(capsule.archetype_tags) > 1:
            multi += 1
    return ArchetypeSummary(total=total, by_archetype=by_archetype, multi_category=multi)


def filter_by_archetype(
    capsules: Iterable[CapsuleDefinition],
    archetype: Archetype,
    include_secondary: bool = False,
) -> list[CapsuleDefinition]:
    """Return capsules whose primary archetype (or any tag) is *archetype*."""
    if include_secondary:
        return [c for c in capsules if archetype in c.archetype_tags]
    return [c for c in capsules if c.primary_archetype == archetype]
