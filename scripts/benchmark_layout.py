"""
LAYOUT QUALITY AND SPEED BENCHMARK
===================================

Lays out random and slowly decreasing size sequences and reports:

1. OVERLAP TEST - Do any two rectangles overlap?
2. DENSITY TEST - Summed area vs. area of the enclosing circle
3. SPEED TEST   - Wall time per cloud size against the time budget

Usage:
    python scripts/benchmark_layout.py
    python scripts/benchmark_layout.py --counts 100 1000 10000
"""

import argparse
import sys
import time
from pathlib import Path
from typing import Tuple

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tags_cloud import CircularCloudLayouter, Point, generate_sizes, measure_cloud


# Seconds allowed per rectangle; 10,000 random rectangles (10-50 x 10-30)
# get 10 s, 1,000 get 1 s
TIME_BUDGET_PER_RECT = 0.001


def run_case(generator: str, count: int, seed: int) -> Tuple[bool, bool]:
    sizes = list(generate_sizes(generator, count, seed))
    layouter = CircularCloudLayouter(Point(0, 0))

    started = time.perf_counter()
    for size in sizes:
        layouter.place_next(size)
    elapsed = time.perf_counter() - started

    metrics = measure_cloud(layouter.rectangles, layouter.center)
    stats = layouter.stats
    budget = TIME_BUDGET_PER_RECT * count

    print(f"\n  {generator.upper()} x {count}")
    overlap_status = 'PASS' if metrics.overlaps == 0 else 'FAIL'
    print(f"    [{overlap_status}] OVERLAP TEST: {metrics.overlaps} overlapping pairs")
    print(f"    [INFO] DENSITY: {metrics.density:.3f} (radius {metrics.enclosing_radius:.1f})")
    speed_status = 'PASS' if elapsed <= budget else 'SLOW'
    print(f"    [{speed_status}] SPEED TEST: {elapsed:.3f}s (budget {budget:.2f}s), "
          f"{stats.candidates_examined / max(count, 1):.0f} candidates/rect, "
          f"{stats.compaction_moves / max(count, 1):.1f} compaction moves/rect")
    return metrics.overlaps == 0, elapsed <= budget


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument('--counts', type=int, nargs='+', default=[100, 1000, 10000])
    parser.add_argument('--seed', type=int, default=42)
    args = parser.parse_args()

    print("=" * 70)
    print("TAGS CLOUD LAYOUT BENCHMARK")
    print("=" * 70)

    no_overlaps = True
    in_budget = True
    for count in args.counts:
        for generator in ('random', 'slow'):
            clean, fast = run_case(generator, count, args.seed)
            no_overlaps = no_overlaps and clean
            in_budget = in_budget and fast

    print(f"\n{'=' * 70}")
    print("VERDICT: " + ("all clouds overlap-free" if no_overlaps else "OVERLAPS FOUND") +
          ", " + ("within time budget" if in_budget else "OVER TIME BUDGET"))
    print("=" * 70)
    return 0 if no_overlaps and in_budget else 1


if __name__ == '__main__':
    sys.exit(main())
