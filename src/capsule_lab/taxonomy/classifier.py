"""Generic rule-table text classifier.

A :class:`RuleTable` is plain data: ordered categories, each with a list
of regex patterns, plus tie-break and exclusivity rules.  The same
:class:`RuleTableClassifier` drives both the archetype taxonomy and the
build-type taxonomy; only the injected table differs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pydantic import BaseModel


def keyword(text: str) -> re.Pattern[str]:
    """Compile a case-insensitive literal substring pattern."""
    return re.compile(re.escape(text), re.IGNORECASE)


def pattern(regex: str) -> re.Pattern[str]:
    """Compile a case-insensitive regex pattern."""
    return re.compile(regex, re.IGNORECASE)


@dataclass(frozen=True)
class CategoryRule:
    """One category of a rule table.

    Attributes
    ----------
    name:
        Category label returned by the classifier.
    patterns:
        Each pattern that matches the subject text adds 1 to the weight.
    require_any:
        If non-empty, the category only scores when one of these lower-case
        substrings is present.
    exclude_if:
        The category never scores when one of these lower-case substrings
        is present.
    """

    name: str
    patterns: tuple[re.Pattern[str], ...]
    require_any: tuple[str, ...] = ()
    exclude_if: tuple[str, ...] = ()

    def weigh(self, subject: str, lowered: str) -> int:
        if self.exclude_if and any(k in lowered for k in self.exclude_if):
            return 0
        if self.require_any and not any(k in lowered for k in self.require_any):
            return 0
        return sum(1 for p in self.patterns if p.search(subject))


@dataclass(frozen=True)
class TieBreakOverride:
    """Prefer *prefer* among tied categories when a keyword appears.

    ``unless`` vetoes the override when it matches the effect text.
    """

    keywords: tuple[str, ...]
    prefer: str
    search_name: bool = False
    unless: re.Pattern[str] | None = None

    def applies(self, effect: str, name: str) -> bool:
        haystacks = [effect.lower()]
        if self.search_name:
            haystacks.append(name.lower())
        if not any(k in h for k in self.keywords for h in haystacks):
            return False
        return self.unless is None or not self.unless.search(effect)


@dataclass(frozen=True)
class RuleTable:
    """Complete configuration for one taxonomy."""

    categories: tuple[CategoryRule, ...]
    fallback: str
    """Category returned when nothing matches or the text is empty."""

    priority: tuple[str, ...] = ()
    """Final tie-break order.  Empty means table order."""

    overrides: tuple[TieBreakOverride, ...] = ()
    forced: tuple[tuple[str, str], ...] = ()
    """``(substring, category)`` pairs that decide the result outright."""

    include_name: bool = False
    """Match against ``"<effect> <name>"`` instead of the effect alone."""


class Classification(BaseModel):
    """Result of classifying one piece of effect text."""

    primary: str
    tags: list[str]
    """Categories with a positive weight, in table order."""
    weights: dict[str, int]


class RuleTableClassifier:
    """Classify free text against an injected :class:`RuleTable`.

    Classification is a pure function of the table and the input text.
    """

    def __init__(self, table: RuleTable) -> None:
        self._table = table

    @property
    def table(self) -> RuleTable:
        return self._table

    def classify(self, effect: str | None, name: str | None = "") -> Classification:
        table = self._table
        weights = {rule.name: 0 for rule in table.categories}
        if not effect or not isinstance(effect, str):
            return Classification(primary=table.fallback, tags=[], weights=weights)

        name = name or ""
        subject = f"{effect} {name}" if table.include_name else effect
        lowered = subject.lower()

        for rule in table.categories:
            weights[rule.name] = rule.weigh(subject, lowered)
        tags = [n for n, w in weights.items() if w > 0]

        for needle, category in table.forced:
            if needle in lowered:
                return Classification(primary=category, tags=tags, weights=weights)

        if not tags:
            return Classification(primary=table.fallback, tags=tags, weights=weights)

        top = max(weights.values())
        tied = [n for n in tags if weights[n] == top]
        primary = tied[0] if len(tied) == 1 else self._break_tie(effect, name, tied)
        return Classification(primary=primary, tags=tags, weights=weights)

    def _break_tie(self, effect: str, name: str, tied: list[str]) -> str:
        for override in self._table.overrides:
            if override.prefer in tied and override.applies(effect, name):
                return override.prefer
        order = self._table.priority or tuple(r.name for r in self._table.categories)
        for category in order:
            if category in tied:
                return category
        return tied[0]
