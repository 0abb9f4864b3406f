#!/usr/bin/env python3
"""
TAGS CLOUD - Command Line Entry Point
======================================

Lays out a sequence of tag rectangles and reports how dense the cloud is.

INTERACTION MODES:
==================

1. GENERATED SIZES
   python -m tags_cloud --sizes slow --count 300
   python -m tags_cloud --sizes random --count 1000 --seed 7

2. FROM FILE (JSON list of [width, height])
   python -m tags_cloud --sizes-file sizes.json --output cloud.json

3. PYTHON API
   from tags_cloud import CircularCloudLayouter
"""

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from .cloud_layouter import CircularCloudLayouter, LayouterConfig, load_config
from .cloud_metrics import measure_cloud
from .common_types import InvalidSizeError, Point, Size, normalize_size
from .logging_config import setup_logging
from .size_generators import SIZE_GENERATORS, generate_sizes


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2


class Colors:
    """ANSI color codes for terminal output"""
    HEADER = '\033[95m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    RED = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'

    @classmethod
    def disable(cls):
        """Disable colors (for non-terminal output)"""
        cls.HEADER = cls.CYAN = cls.GREEN = cls.RED = cls.ENDC = cls.BOLD = ''


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='tags-cloud',
        description='Place tag rectangles in a dense circular cloud.'
    )
    parser.add_argument('--center', type=int, nargs=2, metavar=('X', 'Y'), default=[0, 0],
                        help='cloud center (default: 0 0)')
    parser.add_argument('--count', type=int, default=200,
                        help='number of generated sizes (default: 200)')
    parser.add_argument('--sizes', choices=sorted(SIZE_GENERATORS), default='slow',
                        help='size generator (default: slow)')
    parser.add_argument('--sizes-file', metavar='PATH',
                        help='JSON list of [width, height] pairs; overrides --sizes')
    parser.add_argument('--seed', type=int, default=42,
                        help='seed for the random generator (default: 42)')
    parser.add_argument('--config', metavar='PATH',
                        help='JSON file with layouter settings')
    parser.add_argument('--no-compaction', action='store_true',
                        help='skip the compaction step')
    parser.add_argument('--output', metavar='PATH',
                        help='write center, rectangles and metrics as JSON')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='debug logging')
    parser.add_argument('--log-file', metavar='PATH',
                        help='also write logs to this file')
    return parser


def read_sizes_file(path: str) -> List[Size]:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Sizes file {path} must contain a JSON list")
    return [normalize_size(item) for item in data]


def write_output(path: str, center: Point, rectangles: List[Any], metrics: dict):
    payload = {
        'center': {'x': center.x, 'y': center.y},
        'rectangles': [
            {'x': r.x, 'y': r.y, 'width': r.width, 'height': r.height}
            for r in rectangles
        ],
        'metrics': metrics,
    }
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(payload, f, indent=2)


def print_summary(metrics, elapsed: float):
    box = metrics.bounding_box
    extent = f"{box.width}x{box.height}" if box is not None else "-"
    overlap_color = Colors.GREEN if metrics.overlaps == 0 else Colors.RED
    print(f"{Colors.BOLD}{Colors.CYAN}TAGS CLOUD LAYOUT{Colors.ENDC}")
    print(f"  Rectangles:       {metrics.count}")
    print(f"  Total area:       {metrics.total_area}")
    print(f"  Bounding box:     {extent}")
    print(f"  Enclosing radius: {metrics.enclosing_radius:.1f}")
    print(f"  Density:          {metrics.density:.3f}")
    print(f"  Overlaps:         {overlap_color}{metrics.overlaps}{Colors.ENDC}")
    print(f"  Elapsed:          {elapsed:.3f}s")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)
    if not sys.stdout.isatty():
        Colors.disable()

    try:
        config = load_config(args.config) if args.config else LayouterConfig()
        if args.no_compaction:
            config.compaction = False

        if args.sizes_file:
            sizes = read_sizes_file(args.sizes_file)
        else:
            if args.count < 0:
                raise ValueError(f"--count must be non-negative, got {args.count}")
            sizes = list(generate_sizes(args.sizes, args.count, args.seed))

        center = Point(*args.center)
        layouter = CircularCloudLayouter(center, config)
        logger.info("Placing %d rectangles around (%d, %d)", len(sizes), center.x, center.y)
        rectangles = list(layouter.place_all(sizes))
    except (OSError, ValueError, TypeError) as e:
        # InvalidSizeError is a ValueError
        kind = 'Invalid size' if isinstance(e, InvalidSizeError) else 'Error'
        logger.error("%s: %s", kind, e)
        return EXIT_USAGE

    metrics = measure_cloud(rectangles, center)
    print_summary(metrics, layouter.stats.elapsed)

    if args.output:
        try:
            write_output(args.output, center, rectangles, metrics.to_dict())
        except OSError as e:
            logger.error("Cannot write %s: %s", args.output, e)
            return EXIT_USAGE
        logger.info("Wrote %s", args.output)

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
