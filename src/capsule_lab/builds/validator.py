"""Build validation against a league ruleset.

Pure function.  A failing build is reported through flags and numeric
remainders so callers can show actionable feedback; nothing is raised.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel

from capsule_lab.ir.capsules import CapsuleDefinition
from capsule_lab.ir.ruleset import DEFAULT_RULESET, Ruleset


class BuildViolations(BaseModel):
    cost_exceeded: bool = False
    too_many_capsules: bool = False
    below_min_cost: bool = False
    has_banned_capsules: bool = False
    missing_required_capsules: bool = False


class BuildValidation(BaseModel):
    """Result of checking one build against a ruleset."""

    valid: bool
    violations: BuildViolations
    total_cost: int
    capsule_count: int
    remaining_cost: int
    """Negative when over budget."""
    remaining_slots: int
    max_cost: int
    max_capsules: int


def validate_build(
    capsules: Sequence[CapsuleDefinition],
    ruleset: Ruleset = DEFAULT_RULESET,
) -> BuildValidation:
    """Check *capsules* against every constraint in *ruleset*."""
    total_cost = sum(c.cost for c in capsules)
    count = len(capsules)
    ids = {c.id for c in capsules}

    cost_ok = total_cost <= ruleset.max_cost
    count_ok = count <= ruleset.max_capsules
    min_cost_ok = ruleset.min_cost is None or total_cost >= ruleset.min_cost
    no_banned = not any(b in ids for b in ruleset.banned_capsules)
    has_required = all(r in ids for r in ruleset.required_capsules)

    return BuildValidation(
        valid=cost_ok and count_ok and min_cost_ok and no_banned and has_required,
        violations=BuildViolations(
            cost_exceeded=not cost_ok,
            too_many_capsules=not count_ok,
            below_min_cost=not min_cost_ok,
            has_banned_capsules=not no_banned,
            missing_required_capsules=not has_required,
        ),
        total_cost=total_cost,
        capsule_count=count,
        remaining_cost=ruleset.max_cost - total_cost,
        remaining_slots=ruleset.max_capsules - count,
        max_cost=ruleset.max_cost,
        max_capsules=ruleset.max_capsules,
    )


def validation_message(validation: BuildValidation) -> str:
    """One-line summary of a validation result."""
    if validation.valid:
        return (
            f"Valid build ({validation.capsule_count}/{validation.max_capsules} slots, "
            f"{validation.total_cost}/{validation.max_cost} cost)"
        )

    v = validation.violations
    errors: list[str] = []
    if v.cost_exceeded:
        errors.append(f"cost exceeds limit ({validation.total_cost}/{validation.max_cost})")
    if v.too_many_capsules:
        errors.append(
            f"too many capsules ({validation.capsule_count}/{validation.max_capsules})"
        )
    if v.below_min_cost:
        errors.append("below minimum cost requirement")
    if v.has_banned_capsules:
        errors.append("contains banned capsules")
    if v.missing_required_capsules:
        errors.append("missing required capsules")
    return "Invalid build: " + ", ".join(errors)
