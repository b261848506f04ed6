"""
CLI usage:
python -m scripts.run_demo [--size N] [--seed S] [--top N] [--workers W] [--repeat R]

Generates a random sample, maps it with every registered strategy, checks the
strategies agree, then prints the top-N labels, the full summary and a timing
comparison.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Sequence

from romancache.core.config import get_settings
from romancache.core.logging import configure_logging, get_logger, run_context
from romancache.core.metrics import get_metrics
from romancache.data.generator import generate_values
from romancache.engine.cache import full_domain_cache
from romancache.engine.mapping import map_all
from romancache.engine.ranking import top_n, top_n_labels
from romancache.engine.strategy_registry import list_strategies
from romancache.engine.summary import summarize
from romancache.services.report import format_summary, format_timings

logger = get_logger(__name__, component="demo")


def _parser() -> argparse.ArgumentParser:
    cfg = get_settings()
    parser = argparse.ArgumentParser(prog="run_demo", description="Compare numeral mapping strategies.")
    parser.add_argument("--size", type=int, default=cfg.demo_sample_size, help="number of values to generate")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible samples")
    parser.add_argument("--top", type=int, default=cfg.top_n, help="how many frequent values to report")
    parser.add_argument("--workers", type=int, default=cfg.parallel_workers, help="threads for partitioned counting")
    parser.add_argument("--repeat", type=int, default=3, help="timed runs per strategy")
    return parser


def run(size: int, *, seed: int | None, top: int, workers: int, repeat: int) -> int:
    source = generate_values(size, seed=seed)
    cache = full_domain_cache()

    reference: List[str] | None = None
    for code in list_strategies():
        for _ in range(max(1, repeat)):
            labels = map_all(source, cache, strategy=code)
        if reference is None:
            reference = labels
        elif labels != reference:
            logger.error("strategy_mismatch", extra={"strategy": code})
            print(f"Strategy '{code}' disagrees with the others", file=sys.stderr)
            return 1
        logger.info("strategy_checked", extra={"strategy": code, "size": len(labels)})

    # Snapshot now: top_n_labels below maps again under the default strategy.
    timings = get_metrics()

    ranked = top_n(source, top, workers=workers)
    print(f"Top {top} values: {', '.join(str(v) for v in ranked)}")
    print(f"Top {top} labels: {', '.join(top_n_labels(source, top, workers=workers))}")

    print("\nSummary (value - label - count):")
    for line in format_summary(summarize(source, cache, workers=workers)):
        print(line)

    print("\nMapping strategy timings:")
    for line in format_timings(timings):
        print(line)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    if args.size < 0 or args.top < 1 or args.workers < 1:
        print("--size must be >= 0, --top and --workers must be >= 1", file=sys.stderr)
        return 2
    cfg = get_settings()
    configure_logging(level=getattr(logging, cfg.log_level), environment=cfg.environment)
    with run_context():
        logger.info("demo_started", extra={"size": args.size, "seed": args.seed})
        return run(args.size, seed=args.seed, top=args.top, workers=args.workers, repeat=args.repeat)


if __name__ == "__main__":
    sys.exit(main())
