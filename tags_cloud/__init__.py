"""
Tags Cloud - Circular Tag Cloud Layout Engine
==============================================

Places tag bounding boxes around a fixed center so that no two overlap and
the cloud stays dense and round.

Pieces:
    ArchimedeanSpiral      - deterministic outward walk of candidate points
    OccupancyGrid          - bucket index that keeps overlap tests cheap
    CircularCloudLayouter  - spiral search + compaction towards the center

Usage:
    from tags_cloud import CircularCloudLayouter, Point, Size

    layouter = CircularCloudLayouter(Point(0, 0))
    rect = layouter.place_next(Size(120, 40))
    rects = list(layouter.place_all([Size(60, 20), Size(40, 16)]))
"""

__version__ = '1.0.0'

from .common_types import (
    Point, Size, Rectangle, InvalidSizeError, NON_POSITIVE_SIZE_MESSAGE,
    bounds_overlap, normalize_point, normalize_size, validate_size
)
from .spiral import ArchimedeanSpiral
from .occupancy_grid import OccupancyGrid
from .cloud_layouter import (
    CircularCloudLayouter, LayouterConfig, LayoutStats, load_config, run_layout
)
from .cloud_metrics import (
    CloudMetrics, measure_cloud, total_area, bounding_box, cloud_size,
    enclosing_radius, density, count_overlaps, has_overlaps, common_intersection
)
from .size_generators import (
    slow_decreasing_sizes, random_sizes, generate_sizes, SIZE_GENERATORS
)
from .logging_config import setup_logging

__all__ = [
    'Point', 'Size', 'Rectangle', 'InvalidSizeError', 'NON_POSITIVE_SIZE_MESSAGE',
    'bounds_overlap', 'normalize_point', 'normalize_size', 'validate_size',
    'ArchimedeanSpiral', 'OccupancyGrid',
    'CircularCloudLayouter', 'LayouterConfig', 'LayoutStats', 'load_config', 'run_layout',
    'CloudMetrics', 'measure_cloud', 'total_area', 'bounding_box', 'cloud_size',
    'enclosing_radius', 'density', 'count_overlaps', 'has_overlaps', 'common_intersection',
    'slow_decreasing_sizes', 'random_sizes', 'generate_sizes', 'SIZE_GENERATORS',
    'setup_logging',
]
