"""
Circular Cloud Layouter - Incremental Tag Rectangle Placement
==============================================================

Places rectangles one at a time around a fixed center so that none overlap
and the cloud stays round and dense.

Each placement runs two phases:

1. Spiral search - walk a fresh Archimedean spiral outward from the center
   and take the first candidate point whose centered rectangle overlaps
   nothing already placed. Steps known to be blocked for the size are
   skipped, and candidates are screened a chunk at a time against the
   occupancy raster before the exact test.

2. Compaction - slide the rectangle along the straight line towards the
   center in small steps, keeping every step that stays overlap-free and
   stopping at the first one that does not. The spiral only samples points,
   so the line back to the center is often still free.

Usage:
    from tags_cloud import CircularCloudLayouter, Point, Size

    layouter = CircularCloudLayouter(Point(0, 0))
    first = layouter.place_next(Size(120, 40))      # centered on (0, 0)
    for rect in layouter.place_all([(80, 30), (60, 20)]):
        print(rect)
"""

import json
import logging
import math
import time
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .common_types import Point, Rectangle, bounds_overlap, normalize_point, validate_size
from .occupancy_grid import DEFAULT_CELL_SIZE, Bounds, OccupancyGrid
from .spiral import DEFAULT_ANGLE_STEP, DEFAULT_RADIUS_STEP, ArchimedeanSpiral


logger = logging.getLogger(__name__)


@dataclass
class LayouterConfig:
    """Configuration for the cloud layouter"""
    # Spiral search
    angle_step: float = DEFAULT_ANGLE_STEP    # Radians per spiral step
    radius_step: float = DEFAULT_RADIUS_STEP  # Pixels of radius gained per step

    # Compaction towards the center
    compaction: bool = True
    compaction_step: float = 1.0              # Pixels moved per compaction step

    # Spatial index
    cell_size: int = DEFAULT_CELL_SIZE        # Occupancy grid bucket size (pixels)

    def __post_init__(self):
        for name in ('angle_step', 'radius_step', 'compaction_step', 'cell_size'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if not isinstance(self.cell_size, int):
            raise ValueError(f"cell_size must be an integer, got {self.cell_size!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LayouterConfig':
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown layouter config keys: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def load_config(path: str) -> LayouterConfig:
    """Read a LayouterConfig from a JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    return LayouterConfig.from_dict(data)


@dataclass
class LayoutStats:
    """Running counters for one layouter"""
    placed: int = 0
    candidates_examined: int = 0   # Spiral points tested past the search floor
    compaction_moves: int = 0      # Accepted compaction steps
    elapsed: float = 0.0           # Seconds spent in place_next


class SearchFloor:
    """
    Lowest spiral step at which a rectangle of a given size can still fit.

    Placed rectangles are never moved or removed, so the first free spiral
    step for a size never decreases. A centered rectangle contains every
    smaller rectangle centered on the same point, so a size cannot fit
    before the first free step of any size it covers on both axes.
    """

    def __init__(self):
        self._index: Dict[Tuple[int, int], int] = {}
        self._widths = np.zeros(0, dtype=np.int64)
        self._heights = np.zeros(0, dtype=np.int64)
        self._steps = np.zeros(0, dtype=np.int64)

    def __len__(self) -> int:
        return len(self._index)

    def lowest_step(self, width: int, height: int) -> int:
        """Largest recorded first-free step among sizes within width x height."""
        if not len(self._steps):
            return 0
        covered = (self._widths <= width) & (self._heights <= height)
        if not covered.any():
            return 0
        return int(self._steps[covered].max())

    def record(self, width: int, height: int, step: int):
        """Remember that ``step`` was the first free step for this size."""
        i = self._index.get((width, height))
        if i is None:
            self._index[(width, height)] = len(self._steps)
            self._widths = np.append(self._widths, width)
            self._heights = np.append(self._heights, height)
            self._steps = np.append(self._steps, step)
        elif step > self._steps[i]:
            self._steps[i] = step


class CircularCloudLayouter:
    """
    Stateful accumulator of placed rectangles around a fixed center.

    Placed rectangles are never moved or removed. Not thread-safe.
    """

    def __init__(self, center: Any, config: LayouterConfig = None):
        self.config = config or LayouterConfig()
        self._center = normalize_point(center)
        self._rectangles: List[Rectangle] = []
        self._grid = OccupancyGrid(self.config.cell_size)
        self._stats = LayoutStats()
        self._floor = SearchFloor()

        # Most recent rectangle that rejected a candidate; tested first
        self._last_blocker: Optional[Bounds] = None

    # =========================================================================
    # READ ACCESSORS
    # =========================================================================

    @property
    def center(self) -> Point:
        return self._center

    @property
    def rectangles(self) -> List[Rectangle]:
        """Snapshot of placed rectangles in placement order."""
        return list(self._rectangles)

    @property
    def stats(self) -> LayoutStats:
        return replace(self._stats)

    def __len__(self) -> int:
        return len(self._rectangles)

    def __iter__(self) -> Iterator[Rectangle]:
        return iter(list(self._rectangles))

    # =========================================================================
    # PLACEMENT
    # =========================================================================

    def place_next(self, size: Any) -> Rectangle:
        """
        Place one rectangle of ``size`` and return it.

        Raises:
            InvalidSizeError: If width or height is zero or negative
            TypeError: If ``size`` is not a recognized size format
        """
        size = validate_size(size)
        started = time.perf_counter()

        bounds, examined = self._spiral_search(size.width, size.height)
        moves = 0
        if self.config.compaction:
            bounds, moves = self._compact(bounds)

        rect = Rectangle(bounds[0], bounds[1], size.width, size.height)
        self._rectangles.append(rect)
        self._grid.insert(bounds)

        elapsed = time.perf_counter() - started
        self._stats.placed += 1
        self._stats.candidates_examined += examined
        self._stats.compaction_moves += moves
        self._stats.elapsed += elapsed

        logger.debug("[LAYOUT] #%d %dx%d at (%d, %d) after %d candidates, %d compaction moves",
                     len(self._rectangles), size.width, size.height,
                     rect.x, rect.y, examined, moves)
        return rect

    def place_all(self, sizes: Iterable[Any]) -> Iterator[Rectangle]:
        """
        Lazily place every size in order, one per consumed element.

        Rectangles already placed stay committed if a later size is invalid.
        """
        for size in sizes:
            yield self.place_next(size)

    def _is_free(self, bounds: Bounds) -> bool:
        blocker = self._last_blocker
        if blocker is not None and bounds_overlap(bounds, blocker):
            return False
        blocker = self._grid.find_overlap(bounds)
        if blocker is not None:
            self._last_blocker = blocker
            return False
        return True

    def _spiral_search(self, width: int, height: int) -> Tuple[Bounds, int]:
        """
        Walk a fresh spiral until the centered rectangle fits.

        The walk starts at the search floor for this size; every earlier step
        is known to be blocked. Each chunk of candidates is screened at once
        against the occupancy raster by sampling nine pixels of the centered
        rectangle (corners, edge midpoints, center). A covered sample proves
        an overlap; survivors get the exact test in step order, so the first
        free step wins as in a plain one-by-one walk.
        """
        start = self._floor.lowest_step(width, height)
        spiral = ArchimedeanSpiral(self._center,
                                   angle_step=self.config.angle_step,
                                   radius_step=self.config.radius_step,
                                   start=start)
        half_w = width // 2
        half_h = height // 2
        offsets_x = np.array([-half_w, 0, width - half_w - 1] * 3, dtype=np.int64)
        offsets_y = np.repeat(np.array([-half_h, 0, height - half_h - 1], dtype=np.int64), 3)

        examined = 0
        for steps, xs, ys in spiral.chunks():
            n = len(steps)
            hit = self._grid.covered((xs + offsets_x[:, None]).ravel(),
                                     (ys + offsets_y[:, None]).ravel())
            open_idx = np.flatnonzero(~hit.reshape(len(offsets_x), n).any(axis=0))
            for i in open_idx.tolist():
                left = int(xs[i]) - half_w
                top = int(ys[i]) - half_h
                bounds = (left, top, left + width, top + height)
                if self._is_free(bounds):
                    self._floor.record(width, height, int(steps[i]))
                    return bounds, examined + i + 1
            examined += n
        raise RuntimeError("spiral walk ended")  # unreachable: the spiral is infinite

    def _compact(self, bounds: Bounds) -> Tuple[Bounds, int]:
        """Slide towards the center while the path stays free."""
        left, top, right, bottom = bounds
        width = right - left
        height = bottom - top
        start_x = left + width // 2
        start_y = top + height // 2
        target_x, target_y = self._center

        dx = target_x - start_x
        dy = target_y - start_y
        distance = math.hypot(dx, dy)
        if distance == 0:
            return bounds, 0

        step = self.config.compaction_step
        n_steps = int(distance // step)
        current = (start_x, start_y)
        moves = 0

        for i in range(1, n_steps + 2):
            if i > n_steps:
                nxt = (target_x, target_y)
            else:
                t = i * step / distance
                nxt = (start_x + int(round(dx * t)), start_y + int(round(dy * t)))
            if nxt == current:
                continue
            new_left = nxt[0] - width // 2
            new_top = nxt[1] - height // 2
            candidate = (new_left, new_top, new_left + width, new_top + height)
            if not self._is_free(candidate):
                break
            current = nxt
            bounds = candidate
            moves += 1

        return bounds, moves


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================

def run_layout(sizes: Iterable[Any], center: Any = (0, 0),
               config: LayouterConfig = None) -> List[Rectangle]:
    """
    Lay out a whole batch of sizes around ``center``.

    Returns:
        Placed rectangles in input order
    """
    layouter = CircularCloudLayouter(center, config)
    rectangles = list(layouter.place_all(sizes))
    stats = layouter.stats
    logger.info("Placed %d rectangles in %.3fs (%d candidates, %d compaction moves)",
                stats.placed, stats.elapsed, stats.candidates_examined,
                stats.compaction_moves)
    return rectangles
