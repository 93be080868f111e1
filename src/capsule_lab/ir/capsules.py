"""Capsule definitions -- the equippable modifiers builds are made of."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Archetype(str, Enum):
    """Coarse role category assigned to a capsule from its effect text."""

    AGGRESSIVE = "aggressive"
    DEFENSIVE = "defensive"
    TECHNICAL = "technical"
    UTILITY = "utility"


CAPSULE_ITEM_TYPE = "Capsule"


class CapsuleDefinition(BaseModel):
    """Complete definition of a single capsule.

    Instances are frozen: classification produces a tagged copy via
    ``model_copy`` instead of mutating the catalog entry.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    """Unique identifier used for cross-references (e.g. '00_0_0061')."""

    name: str
    """Display name."""

    cost: int = Field(default=0, ge=0)
    """Capsule points consumed when equipped."""

    effect: str = ""
    """Free-text effect description."""

    exclusive_to: str | None = Field(
        default=None,
        validation_alias=AliasChoices("exclusive_to", "exclusiveTo"),
    )
    """Character this capsule is bound to, or None when anyone may equip it."""

    item_type: str = Field(
        default=CAPSULE_ITEM_TYPE,
        validation_alias=AliasChoices("item_type", "type"),
    )
    """Catalog row type.  Only ``Capsule`` rows feed analytics."""

    # -- derived by classification --------------------------------------

    primary_archetype: Archetype = Archetype.UTILITY
    archetype_tags: tuple[Archetype, ...] = ()
    """Every archetype with at least one matching pattern, in table order."""

    archetype_weights: dict[str, int] = {}
    build_type: str = "utility"
    """Reporting taxonomy label (melee, blast, ki-blast, ...)."""

    effect_tags: tuple[str, ...] = ()

    @field_validator("cost", mode="before")
    @classmethod
    def _coerce_cost(cls, v: Any) -> Any:
        if v is None or v == "":
            return 0
        return v

    @field_validator("effect", mode="before")
    @classmethod
    def _coerce_effect(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("exclusive_to", mode="before")
    @classmethod
    def _blank_is_unbound(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_capsule(self) -> bool:
        return self.item_type == CAPSULE_ITEM_TYPE

    def equippable_by(self, character: str) -> bool:
        """Return True if *character* may equip this capsule."""
        return self.exclusive_to is None or self.exclusive_to == character
