"""Helpers for walking a match corpus."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from capsule_lab.ir.matches import CharacterRecord, MatchRecord


def iter_counted_matches(
    characters: Iterable[CharacterRecord],
) -> Iterator[tuple[CharacterRecord, MatchRecord]]:
    """Yield ``(character, match)`` for every match that feeds analytics.

    Benched appearances (no positive battle time) and matches without
    equipped capsules are skipped.
    """
    for character in characters:
        for match in character.matches:
            if match.counted:
                yield character, match


def filter_characters(
    characters: Iterable[CharacterRecord],
    names: Iterable[str] | None,
) -> list[CharacterRecord]:
    """Restrict the corpus to *names*; ``None`` or empty keeps everyone."""
    characters = list(characters)
    if not names:
        return characters
    wanted = set(names)
    return [c for c in characters if c.name in wanted]
