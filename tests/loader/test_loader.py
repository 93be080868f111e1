"""Tests for JSON ingestion."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from capsule_lab.ir.ruleset import Ruleset
from capsule_lab.loader import (
    load_catalog,
    load_corpus,
    load_ruleset,
    parse_catalog,
    parse_corpus,
    save_ruleset,
)


def _write(path: Path, data) -> Path:
    path.write_text(json.dumps(data))
    return path


class TestCatalog:
    def test_list_of_rows(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "capsules.json", [
            {"id": "a", "name": "A", "cost": 2, "effect": "Increases damage",
             "exclusiveTo": "", "type": "Capsule"},
            {"id": "costume", "name": "Gi", "cost": None, "type": "Costume"},
        ])
        catalog = load_catalog(path)
        assert [c.id for c in catalog.capsules] == ["a"]
        assert catalog.items[1].cost == 0

    def test_items_object(self) -> None:
        catalog = parse_catalog({"items": [{"id": "a", "name": "A"}]})
        assert catalog.get("a") is not None

    def test_duplicate_ids(self) -> None:
        with pytest.raises(ValueError):
            parse_catalog([{"id": "a", "name": "A"}, {"id": "a", "name": "B"}])


class TestCorpus:
    def test_list_form(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "matches.json", [{
            "name": "Goku",
            "matches": [{"equippedCapsules": [{"id": "a"}], "won": True,
                         "damageDone": 1000, "battleTime": 30}],
        }])
        corpus = load_corpus(path)
        assert corpus[0].name == "Goku"
        assert corpus[0].matches[0].counted

    def test_mapping_form(self) -> None:
        corpus = parse_corpus({
            "Goku": [{"equipped_capsules": ["a"], "battle_time": 5}],
            "Vegeta": {"matches": []},
        })
        assert [c.name for c in corpus] == ["Goku", "Vegeta"]
        assert corpus[0].matches[0].equipped_capsules == ["a"]

    def test_empty_character_warns(self, caplog) -> None:
        parse_corpus([{"name": "Vegeta", "matches": []}])
        assert "Vegeta" in caplog.text

    def test_bad_types_raise(self) -> None:
        with pytest.raises(ValidationError):
            parse_corpus([{"name": "Goku", "matches": [{"damageDone": "lots"}]}])


class TestRuleset:
    def test_camel_case_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "rules.json", {
            "name": "World Tour", "maxCost": 15, "maxCapsules": 6,
            "bannedCapsules": ["x"],
        })
        ruleset = load_ruleset(path)
        assert ruleset.max_cost == 15
        assert ruleset.banned_capsules == ("x",)

    def test_save_and_load(self, tmp_path: Path) -> None:
        original = Ruleset(name="league", max_cost=12, required_capsules=("a",))
        path = tmp_path / "out" / "rules.json"
        save_ruleset(original, path)
        assert load_ruleset(path) == original
