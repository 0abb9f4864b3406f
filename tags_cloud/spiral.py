"""
Archimedean Spiral - Candidate Point Generator
===============================================

Walks outward from an origin along r = k * radius_step, theta = k * angle_step
and yields the integer grid point nearest to each step. The walk is
deterministic and infinite; the layouter creates a fresh spiral for every
rectangle it places.

Points are produced in vectorized chunks (flat NumPy arrays). They can be
handed out one at a time (``next()``, ``coordinates()``) or a whole chunk
at a time (``chunks()``) for callers that test many candidates at once.

Usage:
    spiral = ArchimedeanSpiral(Point(0, 0))
    first = next(spiral)            # Point(0, 0)
    for x, y in spiral.coordinates():
        ...
"""

import math
from typing import Any, Iterator, List, Optional, Tuple

import numpy as np

from .common_types import Point, normalize_point


DEFAULT_ANGLE_STEP = 0.1     # radians per step (~5.7 degrees)
DEFAULT_RADIUS_STEP = 0.1    # pixels per step (~6.3 px per revolution)
DEFAULT_CHUNK_SIZE = 512

# (steps, xs, ys) int64 arrays of equal length
Chunk = Tuple[np.ndarray, np.ndarray, np.ndarray]


class ArchimedeanSpiral:
    """
    Lazy outward spiral of integer points around ``origin``.

    Consecutive steps that round to the same grid point are emitted once.
    ``next()``, ``coordinates()`` and ``chunks()`` share state: mixing them
    continues the same walk. ``start`` skips the first steps of the walk.
    """

    def __init__(self, origin: Any,
                 angle_step: float = DEFAULT_ANGLE_STEP,
                 radius_step: float = DEFAULT_RADIUS_STEP,
                 chunk_size: int = DEFAULT_CHUNK_SIZE,
                 start: int = 0):
        if angle_step <= 0:
            raise ValueError(f"angle_step must be positive, got {angle_step}")
        if radius_step <= 0:
            raise ValueError(f"radius_step must be positive, got {radius_step}")
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if isinstance(start, bool) or not isinstance(start, int) or start < 0:
            raise ValueError(f"start must be a non-negative integer, got {start!r}")

        self.origin = normalize_point(origin)
        self.angle_step = float(angle_step)
        self.radius_step = float(radius_step)
        self.chunk_size = int(chunk_size)

        # Index of the next step to be computed
        self._step = start
        # Step of the point most recently handed out
        self._current = start
        self._buffer: List[Tuple[int, int]] = []
        self._buffer_steps: List[int] = []
        self._cursor = 0
        self._last: Optional[Tuple[int, int]] = None

    @property
    def step(self) -> int:
        """Step index of the most recently handed out point."""
        return self._current

    @property
    def angle(self) -> float:
        """Angle (radians) of the most recently handed out point."""
        return self._current * self.angle_step

    @property
    def radius(self) -> float:
        """Radius of the most recently handed out point."""
        return self._current * self.radius_step

    @property
    def radius_per_turn(self) -> float:
        """Distance gained per full revolution."""
        return 2 * math.pi * self.radius_step / self.angle_step

    def _compute_chunk(self) -> Chunk:
        steps = np.arange(self._step, self._step + self.chunk_size, dtype=np.int64)
        self._step += self.chunk_size

        angles = steps * self.angle_step
        radii = steps * self.radius_step
        xs = np.rint(radii * np.cos(angles)).astype(np.int64) + self.origin.x
        ys = np.rint(radii * np.sin(angles)).astype(np.int64) + self.origin.y

        keep = np.ones(len(xs), dtype=bool)
        keep[1:] = (xs[1:] != xs[:-1]) | (ys[1:] != ys[:-1])
        if self._last is not None and xs[0] == self._last[0] and ys[0] == self._last[1]:
            keep[0] = False

        steps, xs, ys = steps[keep], xs[keep], ys[keep]
        if len(xs):
            self._last = (int(xs[-1]), int(ys[-1]))
        return steps, xs, ys

    def _take(self) -> Tuple[int, int]:
        while self._cursor >= len(self._buffer):
            steps, xs, ys = self._compute_chunk()
            self._buffer = list(zip(xs.tolist(), ys.tolist()))
            self._buffer_steps = steps.tolist()
            self._cursor = 0
        point = self._buffer[self._cursor]
        self._current = self._buffer_steps[self._cursor]
        self._cursor += 1
        return point

    def coordinates(self) -> Iterator[Tuple[int, int]]:
        """Yield the remaining walk as raw (x, y) int tuples."""
        while True:
            yield self._take()

    def chunks(self) -> Iterator[Chunk]:
        """
        Yield the remaining walk as (steps, xs, ys) arrays.

        A chunk counts as handed out once it is yielded.
        """
        if self._cursor < len(self._buffer):
            rest = self._buffer[self._cursor:]
            steps = np.array(self._buffer_steps[self._cursor:], dtype=np.int64)
            xs = np.array([p[0] for p in rest], dtype=np.int64)
            ys = np.array([p[1] for p in rest], dtype=np.int64)
            self._cursor = len(self._buffer)
            self._current = int(steps[-1])
            yield steps, xs, ys
        while True:
            steps, xs, ys = self._compute_chunk()
            if len(steps):
                self._current = int(steps[-1])
                yield steps, xs, ys

    def __iter__(self) -> 'ArchimedeanSpiral':
        return self

    def __next__(self) -> Point:
        return Point(*self._take())
