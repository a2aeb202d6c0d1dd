"""
2D geometry primitives shared by the resolvers, the extractor and the
image transformer.

Coordinates are doubles with the y axis pointing down, matching image
and screen space. Rects are axis-aligned and never have negative size.

Classes:
    Point: A 2D point
    Size: A width/height pair
    Rect: An axis-aligned rectangle (origin + size)

Functions:
    rotate_point: Rotate a point around a center (clockwise on screen)
    bounding_rect: Smallest Rect containing a set of points
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple
import math


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0

    def offset(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Size:
    width: float = 0.0
    height: float = 0.0

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Size must not be negative, got {self.width}x{self.height}")

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def scaled(self, sx: float, sy: Optional[float] = None) -> "Size":
        return Size(self.width * sx, self.height * (sx if sy is None else sy))

    def as_tuple(self) -> Tuple[float, float]:
        return (self.width, self.height)

    @classmethod
    def of_image(cls, image) -> "Size":
        """Size of a PIL Image."""
        width, height = image.size
        return cls(float(width), float(height))


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle.

    Attributes:
        x: Left edge
        y: Top edge
        width: Width (>= 0)
        height: Height (>= 0)
    """
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rect must not have negative size, got {self.width}x{self.height}")

    @classmethod
    def from_size(cls, size: Size, origin: Point = Point()) -> "Rect":
        return cls(origin.x, origin.y, size.width, size.height)

    @classmethod
    def from_edges(cls, left: float, top: float, right: float, bottom: float) -> "Rect":
        return cls(left, top, max(0.0, right - left), max(0.0, bottom - top))

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width * 0.5, self.y + self.height * 0.5)

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def corners(self) -> Tuple[Point, Point, Point, Point]:
        """Corners in clockwise order starting at the top-left."""
        return (
            Point(self.min_x, self.min_y),
            Point(self.max_x, self.min_y),
            Point(self.max_x, self.max_y),
            Point(self.min_x, self.max_y),
        )

    def contains_rect(self, other: "Rect", tolerance: float = 1e-9) -> bool:
        """True if `other` lies entirely inside this rect (edges may touch)."""
        return (
            other.min_x >= self.min_x - tolerance
            and other.min_y >= self.min_y - tolerance
            and other.max_x <= self.max_x + tolerance
            and other.max_y <= self.max_y + tolerance
        )

    def intersection(self, other: "Rect") -> "Rect":
        """
        Overlap of two rects.

        Returns a zero-size rect clamped onto this rect's edges when the
        rects do not overlap.
        """
        left = min(max(self.min_x, other.min_x), self.max_x)
        top = min(max(self.min_y, other.min_y), self.max_y)
        right = max(min(self.max_x, other.max_x), left)
        bottom = max(min(self.max_y, other.max_y), top)
        return Rect.from_edges(left, top, right, bottom)

    def inset(self, dx: float, dy: Optional[float] = None) -> "Rect":
        dy = dx if dy is None else dy
        return Rect.from_edges(self.min_x + dx, self.min_y + dy, self.max_x - dx, self.max_y - dy)

    def offset(self, dx: float, dy: float) -> "Rect":
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


def rotate_point(point: Point, center: Point, angle: float) -> Point:
    """Rotate `point` around `center` by `angle` radians (clockwise with y down)."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    dx = point.x - center.x
    dy = point.y - center.y
    return Point(center.x + dx * cos_a - dy * sin_a, center.y + dx * sin_a + dy * cos_a)


def bounding_rect(points: Iterable[Point]) -> Rect:
    """Smallest axis-aligned Rect containing all points."""
    points = list(points)
    if not points:
        raise ValueError("bounding_rect requires at least one point")
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return Rect.from_edges(min(xs), min(ys), max(xs), max(ys))
