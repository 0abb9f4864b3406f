"""
Occupancy Grid - Spatial Index for Overlap Queries
===================================================

Two views of the same placed rectangles:

1. Buckets - an unbounded dict of cells remembering which placed
   rectangles touch each cell. An exact overlap query only looks at the
   rectangles registered in the cells the candidate covers, so its cost
   does not grow with the size of the cloud.

2. Raster - a 2D boolean pixel grid over the covered area. ``covered()``
   looks up many pixels in one vectorized call, which lets a caller drop
   most blocked candidates before asking the exact query.

Whether a query finds an overlap never differs from a linear scan over
every placed rectangle.
"""

import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from .common_types import bounds_overlap


logger = logging.getLogger(__name__)

Bounds = Tuple[int, int, int, int]  # (left, top, right, bottom)

DEFAULT_CELL_SIZE = 32
RASTER_MARGIN = 64                  # Minimum free border (pixels) after growing
MAX_RASTER_PIXELS = 1 << 26         # 64 MiB of bool; the raster stops growing past this


class OccupancyGrid:
    """
    Dict-of-cells index over placed rectangle bounds, plus a pixel raster.

    A rectangle is registered in every cell its half-open box
    [left, right) x [top, bottom) touches, and marks the pixels
    left..right-1 x top..bottom-1 that fall inside the raster.
    """

    def __init__(self, cell_size: int = DEFAULT_CELL_SIZE,
                 max_raster_pixels: int = MAX_RASTER_PIXELS):
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell_size = int(cell_size)
        self.max_raster_pixels = int(max_raster_pixels)
        self.cells: Dict[Tuple[int, int], List[Bounds]] = {}
        self._count = 0

        # raster[row, col] is pixel (origin_x + col, origin_y + row)
        self._raster = np.zeros((0, 0), dtype=bool)
        self._origin = (0, 0)
        self._raster_capped = False

    def _rect_cells(self, bounds: Bounds) -> Tuple[int, int, int, int]:
        """Convert bounds to the inclusive cell range (c_min, c_max, r_min, r_max)."""
        left, top, right, bottom = bounds
        cs = self.cell_size
        return left // cs, (right - 1) // cs, top // cs, (bottom - 1) // cs

    def insert(self, bounds: Bounds):
        """Register placed bounds in every covered cell and raster pixel."""
        c_min, c_max, r_min, r_max = self._rect_cells(bounds)
        cells = self.cells
        for r in range(r_min, r_max + 1):
            for c in range(c_min, c_max + 1):
                bucket = cells.get((c, r))
                if bucket is None:
                    cells[(c, r)] = [bounds]
                else:
                    bucket.append(bounds)
        self._count += 1

        self._grow_raster(bounds)
        left, top, right, bottom = bounds
        x0, y0 = self._origin
        rows, cols = self._raster.shape
        c_lo, c_hi = max(left - x0, 0), min(right - x0, cols)
        r_lo, r_hi = max(top - y0, 0), min(bottom - y0, rows)
        if c_lo < c_hi and r_lo < r_hi:
            self._raster[r_lo:r_hi, c_lo:c_hi] = True

    def _grow_raster(self, bounds: Bounds):
        """Reallocate the raster so it contains ``bounds``, doubling its extent."""
        left, top, right, bottom = bounds
        raster = self._raster
        x0, y0 = self._origin
        rows, cols = raster.shape
        if raster.size:
            if x0 <= left and y0 <= top and right <= x0 + cols and bottom <= y0 + rows:
                return
            left, top = min(left, x0), min(top, y0)
            right, bottom = max(right, x0 + cols), max(bottom, y0 + rows)

        pad_x = max(RASTER_MARGIN, (right - left) // 2)
        pad_y = max(RASTER_MARGIN, (bottom - top) // 2)
        new_x0, new_y0 = left - pad_x, top - pad_y
        new_cols = right - left + 2 * pad_x
        new_rows = bottom - top + 2 * pad_y
        if new_cols * new_rows > self.max_raster_pixels:
            if not self._raster_capped:
                logger.debug("[GRID] raster would need %dx%d pixels, keeping %dx%d",
                             new_cols, new_rows, cols, rows)
                self._raster_capped = True
            return

        grown = np.zeros((new_rows, new_cols), dtype=bool)
        if raster.size:
            grown[y0 - new_y0:y0 - new_y0 + rows, x0 - new_x0:x0 - new_x0 + cols] = raster
        self._raster = grown
        self._origin = (new_x0, new_y0)

    def covered(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """
        Per point, whether pixel (x, y) lies inside an inserted rectangle.

        Pixels outside the raster report False, so a True is proof of
        overlap but a False proves nothing.
        """
        xs = np.asarray(xs, dtype=np.int64)
        ys = np.asarray(ys, dtype=np.int64)
        hit = np.zeros(xs.shape, dtype=bool)
        raster = self._raster
        if not raster.size:
            return hit
        x0, y0 = self._origin
        rows, cols = raster.shape
        col = xs - x0
        row = ys - y0
        inside = (col >= 0) & (col < cols) & (row >= 0) & (row < rows)
        hit[inside] = raster[row[inside], col[inside]]
        return hit

    def find_overlap(self, bounds: Bounds) -> Optional[Bounds]:
        """Return the first placed bounds overlapping ``bounds``, or None."""
        c_min, c_max, r_min, r_max = self._rect_cells(bounds)
        cells = self.cells
        for r in range(r_min, r_max + 1):
            for c in range(c_min, c_max + 1):
                bucket = cells.get((c, r))
                if not bucket:
                    continue
                for other in bucket:
                    if bounds_overlap(bounds, other):
                        return other
        return None

    def overlaps(self, bounds: Bounds) -> bool:
        return self.find_overlap(bounds) is not None

    def __len__(self) -> int:
        return self._count

    def clear(self):
        """Reset the grid to empty."""
        self.cells.clear()
        self._count = 0
        self._raster = np.zeros((0, 0), dtype=bool)
        self._origin = (0, 0)
        self._raster_capped = False


def brute_force_overlap(bounds: Bounds, placed: List[Bounds]) -> Optional[Bounds]:
    """Linear-scan reference for ``OccupancyGrid.find_overlap``."""
    for other in placed:
        if bounds_overlap(bounds, other):
            return other
    return None
