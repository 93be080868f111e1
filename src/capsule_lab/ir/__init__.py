"""Input data models: capsule catalog, match telemetry, and league rules.

All inputs are Pydantic models that validate cleanly from the JSON the
upstream exporter writes.  Analytics treat them as read-only.
"""

from .capsules import CAPSULE_ITEM_TYPE, Archetype, CapsuleDefinition
from .catalog import CapsuleCatalog
from .matches import CharacterRecord, MatchRecord
from .ruleset import DEFAULT_RULESET, Ruleset

__all__ = [
    # capsules
    "Archetype",
    "CAPSULE_ITEM_TYPE",
    "CapsuleDefinition",
    # catalog
    "CapsuleCatalog",
    # matches
    "CharacterRecord",
    "MatchRecord",
    # ruleset
    "DEFAULT_RULESET",
    "Ruleset",
]
