"""
Size Generators - Demo and Test Input
======================================

Pure producers of Size sequences. They know nothing about the layouter.

    slow   - deterministic, slowly shrinking sizes (like word frequencies)
    random - uniform random sizes from a seeded NumPy generator
"""

from typing import Callable, Dict, Iterator, Optional, Tuple

import numpy as np

from .common_types import Size, validate_size


def slow_decreasing_sizes(count: int = 200,
                          start: Size = Size(120, 48),
                          minimum: Size = Size(8, 4),
                          ratio: float = 0.985) -> Iterator[Size]:
    """
    Yield ``count`` sizes shrinking geometrically from ``start`` to ``minimum``.

    Every size is no larger than the one before it.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if not 0 < ratio <= 1:
        raise ValueError(f"ratio must be in (0, 1], got {ratio}")
    start = validate_size(start)
    minimum = validate_size(minimum)

    scale = 1.0
    for _ in range(count):
        yield Size(max(minimum.width, int(start.width * scale)),
                   max(minimum.height, int(start.height * scale)))
        scale *= ratio


def random_sizes(count: int,
                 width_range: Tuple[int, int] = (10, 50),
                 height_range: Tuple[int, int] = (10, 30),
                 seed: Optional[int] = 42) -> Iterator[Size]:
    """
    Yield ``count`` uniformly random sizes; upper bounds are exclusive.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    for lo, hi in (width_range, height_range):
        if lo <= 0 or hi <= lo:
            raise ValueError(f"invalid size range: ({lo}, {hi})")

    rng = np.random.default_rng(seed)
    widths = rng.integers(width_range[0], width_range[1], size=count)
    heights = rng.integers(height_range[0], height_range[1], size=count)
    for w, h in zip(widths.tolist(), heights.tolist()):
        yield Size(w, h)


def _slow(count: int, seed: Optional[int]) -> Iterator[Size]:
    return slow_decreasing_sizes(count)


def _random(count: int, seed: Optional[int]) -> Iterator[Size]:
    return random_sizes(count, seed=seed)


SIZE_GENERATORS: Dict[str, Callable[[int, Optional[int]], Iterator[Size]]] = {
    'slow': _slow,
    'random': _random,
}


def generate_sizes(name: str, count: int, seed: Optional[int] = 42) -> Iterator[Size]:
    """Look up a generator by name and run it."""
    try:
        generator = SIZE_GENERATORS[name]
    except KeyError:
        raise ValueError(f"Unknown size generator: {name} "
                         f"(choose from {', '.join(sorted(SIZE_GENERATORS))})") from None
    return generator(count, seed)
