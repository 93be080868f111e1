"""Tests for build validation against a ruleset."""

from __future__ import annotations

from capsule_lab.builds.validator import validate_build, validation_message
from capsule_lab.ir.capsules import CapsuleDefinition
from capsule_lab.ir.ruleset import Ruleset


def _make_capsule(cid: str, cost: int = 1) -> CapsuleDefinition:
    return CapsuleDefinition(id=cid, name=cid.upper(), cost=cost)


X = _make_capsule("X", 3)
Y = _make_capsule("Y", 2)
Z = _make_capsule("Z", 1)


class TestValidateBuild:
    def test_scenario_c_cost_exceeded(self) -> None:
        v = validate_build([X, Y, Z], Ruleset(max_cost=5, max_capsules=7))
        assert not v.valid
        assert v.violations.cost_exceeded
        assert not v.violations.too_many_capsules
        assert v.total_cost == 6
        assert v.remaining_cost == -1
        assert v.remaining_slots == 4

    def test_valid(self) -> None:
        v = validate_build([Y, Z], Ruleset(max_cost=5))
        assert v.valid
        assert v.remaining_cost == 2
        assert v.capsule_count == 2

    def test_too_many_capsules(self) -> None:
        v = validate_build([X, Y, Z], Ruleset(max_capsules=2))
        assert not v.valid
        assert v.violations.too_many_capsules

    def test_min_cost(self) -> None:
        assert not validate_build([Z], Ruleset(min_cost=2)).valid
        assert validate_build([Z], Ruleset(min_cost=None)).valid
        assert validate_build([], Ruleset(min_cost=0)).valid
        assert not validate_build([], Ruleset(min_cost=1)).valid

    def test_banned_and_required(self) -> None:
        ruleset = Ruleset(banned_capsules=("X",), required_capsules=("Z",))
        v = validate_build([X, Y], ruleset)
        assert v.violations.has_banned_capsules
        assert v.violations.missing_required_capsules
        assert validate_build([Y, Z], ruleset).valid

    def test_equivalence_with_constraints(self) -> None:
        ruleset = Ruleset(max_cost=4, max_capsules=2)
        builds = [[], [X], [Y, Z], [X, Z], [X, Y], [X, Y, Z]]
        for build in builds:
            cost = sum(c.cost for c in build)
            expected = cost <= ruleset.max_cost and len(build) <= ruleset.max_capsules
            assert validate_build(build, ruleset).valid == expected


class TestValidationMessage:
    def test_valid(self) -> None:
        msg = validation_message(validate_build([Y, Z], Ruleset(max_cost=5)))
        assert msg == "Valid build (2/7 slots, 3/5 cost)"

    def test_invalid(self) -> None:
        msg = validation_message(validate_build([X, Y, Z], Ruleset(max_cost=5)))
        assert msg.startswith("Invalid build")
        assert "cost exceeds limit (6/5)" in msg
