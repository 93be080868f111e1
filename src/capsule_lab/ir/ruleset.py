"""League build rules -- the constraints every build must satisfy.

Rules change seasonally; load a new ruleset from JSON rather than editing
:data:`DEFAULT_RULESET`.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Ruleset(BaseModel):
    """Cost cap, slot cap, and ban/require lists for one season."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = "default"
    season: str | None = None

    max_cost: int = Field(
        default=20, ge=0, validation_alias=AliasChoices("max_cost", "maxCost"),
    )
    """Maximum total capsule cost."""

    max_capsules: int = Field(
        default=7, ge=0,
        validation_alias=AliasChoices("max_capsules", "maxCapsules"),
    )
    """Maximum number of capsule slots."""

    min_cost: int | None = Field(
        default=None, validation_alias=AliasChoices("min_cost", "minCost"),
    )
    """Minimum total cost, or None for no minimum (not zero)."""

    banned_capsules: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("banned_capsules", "bannedCapsules"),
    )
    required_capsules: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("required_capsules", "requiredCapsules"),
    )


DEFAULT_RULESET = Ruleset(name="default", season="Season 0")
