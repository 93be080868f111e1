"""Run capsule analytics over a match corpus and print recommended builds.

Usage:
    python scripts/recommend_builds.py --catalog data/capsules.json \
        --corpus data/matches.json [--ruleset data/ruleset.json] \
        [--character Goku] [--strategy Aggressive] [--archetype aggressive]
"""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from capsule_lab.analytics.pipeline import AnalysisPipeline
from capsule_lab.analytics.report import generate_text_report
from capsule_lab.builds.generator import BuildGenerator, GenerationOptions
from capsule_lab.builds.validator import validation_message
from capsule_lab.core.rng import BuildRNG
from capsule_lab.ir.capsules import Archetype
from capsule_lab.ir.ruleset import DEFAULT_RULESET
from capsule_lab.loader import load_catalog, load_corpus, load_ruleset


def main() -> None:
    parser = argparse.ArgumentParser(description="Recommend capsule builds")
    parser.add_argument("--catalog", type=Path, required=True, help="Capsule catalog JSON")
    parser.add_argument("--corpus", type=Path, required=True, help="Match corpus JSON")
    parser.add_argument("--ruleset", type=Path, default=None, help="League ruleset JSON")
    parser.add_argument(
        "--character", action="append", default=None,
        help="Restrict analysis (and the capsule pool) to a character; repeatable",
    )
    parser.add_argument("--strategy", type=str, default=None, help="Target AI strategy")
    parser.add_argument(
        "--archetype", type=str, default=None,
        choices=[a.value for a in Archetype], help="Target archetype",
    )
    parser.add_argument("--builds", type=int, default=5, help="Number of builds")
    parser.add_argument("--seed", type=int, default=42, help="Search seed")
    parser.add_argument("--report", action="store_true", help="Also print the analytics report")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    print("Loading data...")
    catalog = load_catalog(args.catalog)
    corpus = load_corpus(args.corpus)
    ruleset = load_ruleset(args.ruleset) if args.ruleset else DEFAULT_RULESET

    t0 = time.perf_counter()
    pipeline = AnalysisPipeline(catalog)
    result = pipeline.run(corpus, args.character)
    print(f"Analysed {result.matches_counted:,} matches in {time.perf_counter() - t0:.1f}s")

    if args.report:
        print()
        print(generate_text_report(result))

    pool = result.catalog.capsules
    if args.character and len(args.character) == 1:
        pool = result.catalog.available_for(args.character[0])

    generator = BuildGenerator.from_analysis(result, ruleset=ruleset, rng=BuildRNG(args.seed))
    builds = generator.generate(pool, GenerationOptions(
        target_strategy=args.strategy,
        target_archetype=Archetype(args.archetype) if args.archetype else None,
        max_builds=args.builds,
    ))

    print()
    print(f"## Recommended builds ({ruleset.name}, {len(builds)} found)")
    for i, build in enumerate(builds, 1):
        print(
            f"{i}. score={build.score.total_score:.1f}  {build.composition.build_label}"
            f"  -- {validation_message(build.validation)}"
        )
        for capsule in build.capsules:
            print(f"     {capsule.name:30s}  cost={capsule.cost}  [{capsule.primary_archetype.value}]")


if __name__ == "__main__":
    main()
