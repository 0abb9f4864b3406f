"""
Cloud Metrics - Layout Quality Measurement
===========================================

Measures a placed cloud with precise metrics:

1. OVERLAP - Do any two rectangles overlap? (pairwise, vectorized)
2. BOUNDING BOX - Extent of the whole cloud
3. DENSITY - Summed rectangle area / area of the enclosing circle
4. ENCLOSING RADIUS - Farthest rectangle corner from the center

All functions operate on flat NumPy arrays of (left, top, right, bottom).
"""

import math
from dataclasses import dataclass
from functools import reduce
from typing import Any, Iterable, Optional, Sequence

import numpy as np

from .common_types import Point, Rectangle, Size, normalize_point


# Rows compared per block in count_overlaps (bounds the N x N mask memory)
OVERLAP_BLOCK_ROWS = 1024


def rectangles_to_array(rectangles: Iterable[Rectangle]) -> np.ndarray:
    """(N, 4) int64 array of [left, top, right, bottom]."""
    rows = [r.bounds for r in rectangles]
    if not rows:
        return np.zeros((0, 4), dtype=np.int64)
    return np.asarray(rows, dtype=np.int64)


def total_area(rectangles: Iterable[Rectangle]) -> int:
    arr = rectangles_to_array(rectangles)
    return int(((arr[:, 2] - arr[:, 0]) * (arr[:, 3] - arr[:, 1])).sum())


def bounding_box(rectangles: Iterable[Rectangle]) -> Optional[Rectangle]:
    """Smallest rectangle containing the whole cloud, or None if empty."""
    arr = rectangles_to_array(rectangles)
    if len(arr) == 0:
        return None
    left = int(arr[:, 0].min())
    top = int(arr[:, 1].min())
    right = int(arr[:, 2].max())
    bottom = int(arr[:, 3].max())
    return Rectangle(left, top, right - left, bottom - top)


def cloud_size(rectangles: Iterable[Rectangle]) -> Size:
    box = bounding_box(rectangles)
    if box is None:
        return Size(0, 0)
    return box.size


def enclosing_radius(rectangles: Iterable[Rectangle], center: Any) -> float:
    """Distance from ``center`` to the farthest rectangle corner."""
    arr = rectangles_to_array(rectangles)
    if len(arr) == 0:
        return 0.0
    cx, cy = normalize_point(center)
    far_x = np.maximum(np.abs(arr[:, 0] - cx), np.abs(arr[:, 2] - cx))
    far_y = np.maximum(np.abs(arr[:, 1] - cy), np.abs(arr[:, 3] - cy))
    return float(np.sqrt(far_x.astype(np.float64) ** 2 + far_y.astype(np.float64) ** 2).max())


def density(rectangles: Iterable[Rectangle], center: Any) -> float:
    """Summed area divided by the area of the circle enclosing the cloud."""
    rectangles = list(rectangles)
    radius = enclosing_radius(rectangles, center)
    if radius == 0:
        return 0.0
    return total_area(rectangles) / (math.pi * radius * radius)


def count_overlaps(rectangles: Iterable[Rectangle]) -> int:
    """Number of unordered pairs whose interiors intersect."""
    arr = rectangles_to_array(rectangles)
    n = len(arr)
    count = 0
    for start in range(0, n, OVERLAP_BLOCK_ROWS):
        block = arr[start:start + OVERLAP_BLOCK_ROWS]
        # block[:, None] vs every rectangle: (B, N)
        separated = ((block[:, None, 2] <= arr[None, :, 0]) |
                     (arr[None, :, 2] <= block[:, None, 0]) |
                     (block[:, None, 3] <= arr[None, :, 1]) |
                     (arr[None, :, 3] <= block[:, None, 1]))
        overlapping = ~separated
        rows = np.arange(start, start + len(block))[:, None]
        cols = np.arange(n)[None, :]
        count += int((overlapping & (cols > rows)).sum())
    return count


def has_overlaps(rectangles: Iterable[Rectangle]) -> bool:
    return count_overlaps(rectangles) > 0


def common_intersection(rectangles: Sequence[Rectangle]) -> Optional[Rectangle]:
    """
    Intersection of all rectangles, reduced pairwise.

    None when the cloud is empty or any step of the reduction is empty.
    """
    if not rectangles:
        return None

    def _intersect(acc, rect):
        if acc is None:
            return None
        return acc.intersection(rect)

    return reduce(_intersect, rectangles[1:], rectangles[0])


@dataclass
class CloudMetrics:
    """Summary of a placed cloud"""
    count: int
    total_area: int
    bounding_box: Optional[Rectangle]
    enclosing_radius: float
    density: float
    overlaps: int

    def to_dict(self) -> dict:
        box = self.bounding_box
        return {
            'count': self.count,
            'total_area': self.total_area,
            'bounding_box': None if box is None else {
                'x': box.x, 'y': box.y, 'width': box.width, 'height': box.height
            },
            'enclosing_radius': self.enclosing_radius,
            'density': self.density,
            'overlaps': self.overlaps,
        }


def measure_cloud(rectangles: Iterable[Rectangle], center: Any = Point(0, 0)) -> CloudMetrics:
    rectangles = list(rectangles)
    return CloudMetrics(
        count=len(rectangles),
        total_area=total_area(rectangles),
        bounding_box=bounding_box(rectangles),
        enclosing_radius=enclosing_radius(rectangles, center),
        density=density(rectangles, center),
        overlaps=count_overlaps(rectangles),
    )
