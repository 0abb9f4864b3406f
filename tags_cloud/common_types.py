"""
Tags Cloud - Common Types
==========================

Shared geometry types used across the layout engine.

Coordinates follow the screen convention: x grows to the right, y grows
downward, so a rectangle's ``top`` is its smallest y and ``bottom`` its
largest.
"""

import math
import numbers
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple


NON_POSITIVE_SIZE_MESSAGE = "size has non positive parts"


class InvalidSizeError(ValueError):
    """Raised when a rectangle size has a zero or negative width/height."""

    def __init__(self, message: str = NON_POSITIVE_SIZE_MESSAGE):
        super().__init__(message)


@dataclass(frozen=True)
class Point:
    """
    Integer point that supports BOTH attribute and index access.

        p = Point(3, 4)
        x, y = p        # Unpacking works
        x = p[0]        # Index access works
        x = p.x         # Attribute access works
    """
    x: int
    y: int

    def __getitem__(self, idx: int) -> int:
        if idx == 0:
            return self.x
        elif idx == 1:
            return self.y
        else:
            raise IndexError(f"Point index out of range: {idx}")

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y

    def __len__(self) -> int:
        return 2

    def distance_to(self, other: 'Point') -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Size:
    """Integer width/height pair."""
    width: int
    height: int

    def __iter__(self) -> Iterator[int]:
        yield self.width
        yield self.height

    def __len__(self) -> int:
        return 2

    @property
    def has_positive_parts(self) -> bool:
        return self.width > 0 and self.height > 0

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned integer rectangle anchored at its top-left corner.

    The interior is the open box (left, right) x (top, bottom); rectangles
    that only share an edge or a corner do not intersect.
    """
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_center(cls, center: Any, size: Any) -> 'Rectangle':
        """Build the rectangle whose integer ``center`` equals the given point."""
        cx, cy = normalize_point(center)
        w, h = normalize_size(size)
        return cls(cx - w // 2, cy - h // 2, w, h)

    @property
    def left(self) -> int:
        return self.x

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def top(self) -> int:
        return self.y

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def location(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Point:
        """Center rounded down to the integer grid."""
        return Point(self.x + self.width // 2, self.y + self.height // 2)

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """(left, top, right, bottom)"""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def intersects_with(self, other: 'Rectangle') -> bool:
        return bounds_overlap(self.bounds, other.bounds)

    def intersection(self, other: 'Rectangle') -> Optional['Rectangle']:
        """Positive-area intersection of two rectangles, or None."""
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right <= left or bottom <= top:
            return None
        return Rectangle(left, top, right - left, bottom - top)

    def contains_point(self, point: Any) -> bool:
        px, py = normalize_point(point)
        return self.left <= px < self.right and self.top <= py < self.bottom


def bounds_overlap(a: Tuple[int, int, int, int], b: Tuple[int, int, int, int]) -> bool:
    """
    Overlap test on raw (left, top, right, bottom) tuples.

    Ranges must intersect with positive measure on both axes, so touching
    rectangles are not overlapping.
    """
    return not (a[2] <= b[0] or b[2] <= a[0] or a[3] <= b[1] or b[3] <= a[1])


# =============================================================================
# NORMALIZATION
# =============================================================================

def _as_int(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"{what} must be an integer, got {type(value).__name__}: {value!r}")
    return int(value)


def normalize_point(value: Any) -> Point:
    """
    Convert any point format to a Point.

    Handles:
    - Point objects (returned as-is)
    - Tuples/lists: (x, y)
    - Dicts: {'x': ..., 'y': ...}
    - Objects with .x and .y attributes

    Raises:
        TypeError: If the format is not recognized or coordinates are not integers
    """
    if value is None:
        raise TypeError("Cannot convert None to Point")

    if isinstance(value, Point):
        return value

    if isinstance(value, (list, tuple)) and len(value) == 2:
        return Point(_as_int(value[0], 'x'), _as_int(value[1], 'y'))

    if isinstance(value, dict) and 'x' in value and 'y' in value:
        return Point(_as_int(value['x'], 'x'), _as_int(value['y'], 'y'))

    if hasattr(value, 'x') and hasattr(value, 'y'):
        return Point(_as_int(value.x, 'x'), _as_int(value.y, 'y'))

    raise TypeError(f"Cannot convert {type(value).__name__} to Point: {value!r}")


def normalize_size(value: Any) -> Size:
    """
    Convert any size format to a Size.

    Handles Size objects, (width, height) sequences, dicts with
    'width'/'height' keys and objects with .width and .height attributes.
    The sign of the parts is not checked here.
    """
    if value is None:
        raise TypeError("Cannot convert None to Size")

    if isinstance(value, Size):
        return value

    if isinstance(value, (list, tuple)) and len(value) == 2:
        return Size(_as_int(value[0], 'width'), _as_int(value[1], 'height'))

    if isinstance(value, dict) and 'width' in value and 'height' in value:
        return Size(_as_int(value['width'], 'width'), _as_int(value['height'], 'height'))

    if hasattr(value, 'width') and hasattr(value, 'height'):
        return Size(_as_int(value.width, 'width'), _as_int(value.height, 'height'))

    raise TypeError(f"Cannot convert {type(value).__name__} to Size: {value!r}")


def validate_size(value: Any) -> Size:
    """Normalize a size and reject zero or negative parts."""
    size = normalize_size(value)
    if not size.has_positive_parts:
        raise InvalidSizeError()
    return size
