"""Human-readable text report for one analysis pass."""

from __future__ import annotations

from capsule_lab.analytics.models import SynergyType
from capsule_lab.analytics.pipeline import AnalysisResult


def generate_text_report(
    result: AnalysisResult,
    top_n: int = 10,
    min_appearances: int = 3,
) -> str:
    """Generate a terminal/markdown summary of capsule analytics."""
    lines: list[str] = []

    scope = ", ".join(result.characters) if result.characters else "all characters"
    lines.append("=" * 60)
    lines.append(f"Capsule Analytics Report — {scope}")
    lines.append(
        f"Matches: {result.matches_counted:,} | Capsules used: {len(result.performance)}"
        f" | Pairs: {len(result.pairs)} | AI strategies: {len(result.ai_compatibility)}"
    )
    lines.append("=" * 60)

    frequent = [
        p for p in result.performance.values() if p.appearances >= min_appearances
    ]
    by_score = sorted(frequent, key=lambda p: p.composite_score, reverse=True)

    lines.append("")
    lines.append(f"## Top {top_n} Capsules by Composite Score")
    for p in by_score[:top_n]:
        lines.append(
            f"  {p.name:30s}  score={p.composite_score:5.1f}"
            f"  wr={p.win_rate:5.1f}%  eff={p.damage_efficiency:.2f}"
            f"  n={p.appearances}  [{p.primary_archetype.value}]"
        )

    pairs = [p for p in result.pairs.values() if p.appearances >= min_appearances]
    best = sorted(
        (p for p in pairs if p.synergy_bonus > 0),
        key=lambda p: p.synergy_bonus,
        reverse=True,
    )
    if best:
        lines.append("")
        lines.append("## Top Synergy Pairs")
        for s in best[:top_n]:
            lines.append(
                f"  {s.capsule_a_name} + {s.capsule_b_name}"
                f"  bonus={s.synergy_bonus:+.2f}"
                f"  wr={s.pair_win_rate:.1f}%"
                f"  n={s.appearances}  ({s.synergy_type.value})"
            )

    flagged = [p for p in pairs if p.synergy_type == SynergyType.ANTI_SYNERGY]
    worst = sorted(
        (p for p in pairs if p.synergy_bonus < 0),
        key=lambda p: p.synergy_bonus,
    )
    if worst or flagged:
        lines.append("")
        lines.append("## Anti-Synergy Pairs")
        seen: set[tuple[str, str]] = set()
        for s in flagged + worst[:top_n]:
            if s.key in seen:
                continue
            seen.add(s.key)
            lines.append(
                f"  {s.capsule_a_name} + {s.capsule_b_name}"
                f"  bonus={s.synergy_bonus:+.2f}"
                f"  n={s.appearances}  ({s.synergy_type.value})"
            )

    if result.ai_compatibility:
        lines.append("")
        lines.append("## Best Capsule per AI Strategy")
        for strategy in result.ai_strategies:
            stats = result.ai_compatibility[strategy]
            if not stats:
                continue
            top = max(stats.values(), key=lambda s: s.composite_score)
            lines.append(
                f"  {strategy:24s}  {top.name}"
                f"  score={top.composite_score:.1f}  n={top.appearances}"
            )

    lines.append("")
    return "\n".join(lines)
