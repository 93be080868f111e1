"""Top-level container for the capsule catalog handed to the analytics layer."""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from .capsules import Archetype, CapsuleDefinition


class CapsuleCatalog(BaseModel):
    """Every catalog row of an analysis pass.

    The catalog may hold non-capsule rows (costumes, AI strategy items,
    BGM); :attr:`capsules` narrows to the rows that feed analytics.
    """

    items: list[CapsuleDefinition] = []

    # -- convenience lookups ------------------------------------------------

    @property
    def capsules(self) -> list[CapsuleDefinition]:
        """Return only rows of the ``Capsule`` item type, in catalog order."""
        return [c for c in self.items if c.is_capsule]

    def get(self, capsule_id: str) -> CapsuleDefinition | None:
        """Return the capsule with the given id, or ``None``."""
        return self.by_id().get(capsule_id)

    def by_id(self) -> dict[str, CapsuleDefinition]:
        """Return a ``capsule_id -> CapsuleDefinition`` map of capsule rows."""
        return {c.id: c for c in self.capsules}

    def resolve(self, capsule_ids: list[str]) -> list[CapsuleDefinition]:
        """Map ids to definitions, silently dropping unknown ids."""
        lookup = self.by_id()
        return [lookup[cid] for cid in capsule_ids if cid in lookup]

    def available_for(self, character: str | None) -> list[CapsuleDefinition]:
        """Return capsules *character* may equip (all when ``None``)."""
        if character is None:
            return self.capsules
        return [c for c in self.capsules if c.equippable_by(character)]

    def by_archetype(self, archetype: Archetype) -> list[CapsuleDefinition]:
        return [c for c in self.capsules if c.primary_archetype == archetype]

    # -- validation ---------------------------------------------------------

    @model_validator(mode="after")
    def _validate_unique_ids(self) -> "CapsuleCatalog":
        """Ensure no two rows share an id."""
        seen: set[str] = set()
        duplicates: set[str] = set()
        for item in self.items:
            if item.id in seen:
                duplicates.add(item.id)
            seen.add(item.id)
        if duplicates:
            raise ValueError(
                f"Duplicate catalog id(s): {', '.join(sorted(duplicates))}"
            )
        return self
