"""Archetype composition of a build."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel

from capsule_lab.ir.capsules import Archetype, CapsuleDefinition

_ROLE_ARCHETYPES = (Archetype.AGGRESSIVE, Archetype.DEFENSIVE, Archetype.TECHNICAL)


class BuildComposition(BaseModel):
    counts: dict[str, int]
    percentages: dict[str, int]
    dominant_archetype: Archetype | None
    """Most common non-utility archetype; None when the build has none."""
    dominant_count: int
    build_label: str
    """"Pure X", "X (Y Support)", or "Balanced"."""


def analyze_build_composition(capsules: Sequence[CapsuleDefinition]) -> BuildComposition:
    """Count primary archetypes and label the build's overall shape."""
    counts = {a.value: 0 for a in Archetype}
    for capsule in capsules:
        counts[capsule.primary_archetype.value] += 1

    total = len(capsules)
    percentages = {
        k: int(v / total * 100 + 0.5) if total else 0 for k, v in counts.items()
    }

    # max() keeps the first of equal counts, so ties follow _ROLE_ARCHETYPES order.
    ranked = max(_ROLE_ARCHETYPES, key=lambda a: counts[a.value])
    dominant = ranked if counts[ranked.value] > 0 else None
    dominant_count = counts[ranked.value] if dominant else 0

    label = "Balanced"
    if dominant is not None:
        name = dominant.value.capitalize()
        if dominant_count >= 5:
            label = f"Pure {name}"
        elif dominant_count >= 4:
            rest = [a for a in _ROLE_ARCHETYPES if a != dominant]
            secondary = max(rest, key=lambda a: counts[a.value])
            if counts[secondary.value] > 0:
                label = f"{name} ({secondary.value.capitalize()} Support)"

    return BuildComposition(
        counts=counts,
        percentages=percentages,
        dominant_archetype=dominant,
        dominant_count=dominant_count,
        build_label=label,
    )
