"""JSON ingestion for catalogs, match corpora, and rulesets.

Documents are validated with pydantic; malformed input surfaces as
``pydantic.ValidationError``.  Both the exporter's camelCase keys and the
snake_case field names are accepted.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from capsule_lab.ir.catalog import CapsuleCatalog
from capsule_lab.ir.matches import CharacterRecord
from capsule_lab.ir.ruleset import Ruleset

logger = logging.getLogger(__name__)


def _read(path: Path) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def parse_catalog(data: Any) -> CapsuleCatalog:
    """Build a catalog from a list of rows or an ``{"items": [...]}`` object."""
    if isinstance(data, dict):
        data = data.get("items", data.get("capsules", []))
    return CapsuleCatalog.model_validate({"items": data})


def parse_corpus(data: Any) -> list[CharacterRecord]:
    """Build character records from a list or a ``{name: record}`` mapping.

    In the mapping form each value is either a character object or a bare
    list of matches; the key supplies the name when the value has none.
    """
    if isinstance(data, dict) and "characters" in data:
        data = data["characters"]

    if isinstance(data, dict):
        entries = []
        for name, value in data.items():
            if isinstance(value, list):
                value = {"matches": value}
            entries.append({"name": name, **value})
        data = entries

    records = [CharacterRecord.model_validate(entry) for entry in data]
    empty = [r.name for r in records if not r.matches]
    if empty:
        logger.warning("%d character(s) have no matches: %s", len(empty), ", ".join(empty))
    return records


def load_catalog(path: Path) -> CapsuleCatalog:
    """Load a capsule catalog from a JSON file."""
    return parse_catalog(_read(path))


def load_corpus(path: Path) -> list[CharacterRecord]:
    """Load a match corpus from a JSON file."""
    return parse_corpus(_read(path))


def load_ruleset(path: Path) -> Ruleset:
    """Load a league ruleset from a JSON file."""
    return Ruleset.model_validate(_read(path))


def save_ruleset(ruleset: Ruleset, path: Path) -> None:
    """Save a ruleset to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(ruleset.model_dump(mode="json"), indent=2))
