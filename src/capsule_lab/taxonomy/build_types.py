"""Build-type taxonomy used for reporting, plus fine-grained effect tags.

Build types are matched against ``"<effect> <name>"``.  "ki blast" is the
most specific signal: it forces ``ki-blast`` and suppresses the generic
``blast`` category.
"""

from __future__ import annotations

import re

from capsule_lab.taxonomy.classifier import (
    CategoryRule,
    RuleTable,
    RuleTableClassifier,
    keyword,
    pattern,
)


def _keywords(*words: str) -> tuple[re.Pattern[str], ...]:
    return tuple(keyword(w) for w in words)


BUILD_TYPE_TABLE = RuleTable(
    categories=(
        CategoryRule(
            name="melee",
            patterns=_keywords(
                "rush attack", "smash attack", "combo", "melee", "vanishing",
                "throw", "dragon assault", "vanishing assault", "rush chain",
                "burst rush", "burst meteor",
            ),
        ),
        CategoryRule(
            name="blast",
            patterns=(
                keyword("blast damage"),
                keyword("ultimate blast"),
                keyword("burst"),
                pattern(r"\bblast\b"),
            ),
            exclude_if=("ki blast",),
        ),
        CategoryRule(
            name="ki-blast",
            patterns=_keywords("ki blast", "energy bullet", "smash ki blast", "rush ki blast"),
            require_any=("ki blast",),
        ),
        CategoryRule(
            name="defense",
            patterns=_keywords(
                "defense", "armor", "guard", "health", "hp", "damage resistance",
                "recovery", "dodge", "evade", "flinch", "body",
            ),
        ),
        CategoryRule(
            name="skill",
            patterns=_keywords(
                "skill", "transformation", "fusion", "sparking mode",
                "sparking gauge", "super z-counter",
            ),
        ),
        CategoryRule(
            name="ki-efficiency",
            patterns=_keywords(
                "ki cost", "ki recovery", "ki gain", "ki gauge", "energy saver",
                "dash", "ki gained",
            ),
        ),
    ),
    fallback="utility",
    forced=(("ki blast", "ki-blast"),),
    include_name=True,
)

BUILD_TYPE_CLASSIFIER = RuleTableClassifier(BUILD_TYPE_TABLE)


EFFECT_TAG_PATTERNS: dict[str, re.Pattern[str]] = {
    # Melee
    "rush-damage": pattern(r"rush attack.*damage"),
    "smash-damage": pattern(r"smash attack.*damage"),
    "combo-damage": pattern(r"combo.*damage|chain.*damage"),
    "melee-charge": pattern(r"(charging time|charge).*smash attack|rush chain"),
    "armor-break": pattern(r"armor break|beats.*body"),
    "vanishing": pattern(r"vanishing"),
    "throw": pattern(r"throw"),
    # Blast
    "blast-damage": pattern(r"blast damage|blast combo damage"),
    "ultimate-damage": pattern(r"ultimate blast damage"),
    "blast-cost": pattern(r"ki cost.*blast"),
    # Ki blast
    "ki-blast-damage": pattern(r"ki blast.*damage"),
    "ki-blast-cost": pattern(r"ki cost.*ki blast"),
    "ki-blast-charge": pattern(r"charging time.*ki blast"),
    "energy-bullet": pattern(r"energy bullet"),
    # Defense
    "damage-reduction": pattern(r"reduces.*damage taken|damage resistance"),
    "armor": pattern(r"armor|flinch"),
    "health-boost": pattern(r"maximum health|max.*HP|increases.*health"),
    "health-regen": pattern(r"HP recovery|recovers.*HP|regenerates.*HP"),
    "guard": pattern(r"guard"),
    "counter": pattern(r"counter"),
    "standby-recovery": pattern(r"standby"),
    "dodge": pattern(r"dodge"),
    "auto-dodge": pattern(r"automatically dodge"),
    # Skill
    "skill-gauge": pattern(r"skill count|skill gauge"),
    "transformation": pattern(r"transformation|fusion"),
    "sparking-gauge": pattern(r"sparking.*gauge|sparking mode"),
    "sparking-damage": pattern(r"damage.*sparking mode"),
    # Ki efficiency
    "ki-cost-reduction": pattern(r"reduces ki cost"),
    "ki-generation": pattern(r"ki gain|increases ki"),
    "ki-starting": pattern(r"ki gauge starts"),
    "ki-regen": pattern(r"recovers.*ki"),
    "dash": pattern(r"dash"),
    # Cross-category
    "movement-speed": pattern(r"movement"),
    "switch-gauge": pattern(r"switch gauge"),
    "conditional": pattern(r"at \d+% HP|per DP"),
    "environmental": pattern(r"namek|earth|universe|water"),
    "special-mechanic": pattern(r"unique|special"),
}


def extract_effect_tags(
    effect: str | None,
    patterns: dict[str, re.Pattern[str]] = EFFECT_TAG_PATTERNS,
) -> list[str]:
    """Return every effect tag whose pattern matches, in table order."""
    if not effect:
        return []
    return [tag for tag, p in patterns.items() if p.search(effect)]
