"""Match telemetry models -- one record per character per recorded match.

The upstream exporter writes camelCase keys (``damageDone``,
``hPGaugeValue``, ...); both those and the snake_case field names are
accepted on validation.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _alias(*names: str) -> Any:
    return Field(default=0.0, validation_alias=AliasChoices(*names))


class MatchRecord(BaseModel):
    """A single character's participation in a single match."""

    model_config = ConfigDict(populate_by_name=True)

    equipped_capsules: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("equipped_capsules", "equippedCapsules"),
    )
    """Ids of equipped capsules; unique, in equip order."""

    won: bool = False
    damage_dealt: float = _alias("damage_dealt", "damageDone")
    damage_taken: float = _alias("damage_taken", "damageTaken")
    hp_remaining: float = _alias("hp_remaining", "hPGaugeValue")
    hp_max: float = _alias("hp_max", "hPGaugeValueMax")
    battle_time: float = _alias("battle_time", "battleTime")
    """Seconds on the field.  Zero means the character never left the bench."""

    team: str | None = None
    ai_strategy: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ai_strategy", "aiStrategy"),
    )
    """Behaviour label of the AI profile active in this match."""

    @field_validator("equipped_capsules", mode="before")
    @classmethod
    def _normalise_equipped(cls, v: Any) -> Any:
        """Accept ids or ``{"id": ...}`` objects; drop blanks and repeats."""
        if v is None:
            return []
        ids: list[str] = []
        for entry in v:
            cid = entry.get("id") if isinstance(entry, dict) else entry
            if cid and cid not in ids:
                ids.append(cid)
        return ids

    @field_validator(
        "damage_dealt", "damage_taken", "hp_remaining", "hp_max", "battle_time",
        mode="before",
    )
    @classmethod
    def _missing_is_zero(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    @property
    def participated(self) -> bool:
        """True when the character actually fought (positive battle time)."""
        return self.battle_time > 0

    @property
    def counted(self) -> bool:
        """True when this match feeds capsule analytics."""
        return self.participated and bool(self.equipped_capsules)


class CharacterRecord(BaseModel):
    """All recorded matches for one character."""

    name: str
    matches: list[MatchRecord] = []
