"""
Outline paths for crop masks.

An OutlinePath is an ordered set of closed sub-paths made of line and
Bezier segments. It describes the circle, square and custom mask shapes and
can be rasterised into an alpha mask for clipping cropped images.

Sub-paths are filled with the even-odd rule, so a sub-path drawn inside
another one cuts a hole.

Example:
    >>> path = OutlinePath.ellipse(Rect(0, 0, 100, 100))
    >>> path.bounds()
    Rect(x=0.0, y=0.0, width=100.0, height=100.0)
    >>> alpha = path.render_mask((100, 100))
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np
from PIL import Image, ImageChops, ImageDraw

from MC_Libs.constants import BEZIER_CIRCLE_KAPPA, DEFAULT_CURVE_SAMPLES, DEFAULT_MASK_SUPERSAMPLING
from MC_Libs.GeometryLib.primitives import Point, Rect


@dataclass(frozen=True)
class LineSegment:
    end: Point


@dataclass(frozen=True)
class QuadSegment:
    control: Point
    end: Point


@dataclass(frozen=True)
class CubicSegment:
    control1: Point
    control2: Point
    end: Point


Segment = Union[LineSegment, QuadSegment, CubicSegment]


def _map_point(point: Point, sx: float, sy: float, tx: float, ty: float) -> Point:
    return Point(point.x * sx + tx, point.y * sy + ty)


def _map_segment(segment: Segment, sx: float, sy: float, tx: float, ty: float) -> Segment:
    if isinstance(segment, LineSegment):
        return LineSegment(_map_point(segment.end, sx, sy, tx, ty))
    if isinstance(segment, QuadSegment):
        return QuadSegment(
            _map_point(segment.control, sx, sy, tx, ty),
            _map_point(segment.end, sx, sy, tx, ty),
        )
    return CubicSegment(
        _map_point(segment.control1, sx, sy, tx, ty),
        _map_point(segment.control2, sx, sy, tx, ty),
        _map_point(segment.end, sx, sy, tx, ty),
    )


def _sample_segment(start: np.ndarray, segment: Segment, samples: int) -> np.ndarray:
    """Points along a segment, excluding its start point."""
    end = np.array(segment.end.as_tuple())
    if isinstance(segment, LineSegment):
        return end.reshape(1, 2)

    t = np.linspace(0.0, 1.0, samples + 1)[1:].reshape(-1, 1)
    mt = 1.0 - t
    if isinstance(segment, QuadSegment):
        control = np.array(segment.control.as_tuple())
        return mt ** 2 * start + 2 * mt * t * control + t ** 2 * end

    c1 = np.array(segment.control1.as_tuple())
    c2 = np.array(segment.control2.as_tuple())
    return mt ** 3 * start + 3 * mt ** 2 * t * c1 + 3 * mt * t ** 2 * c2 + t ** 3 * end


@dataclass(frozen=True)
class SubPath:
    """A closed sub-path: a start point followed by segments."""
    start: Point
    segments: Tuple[Segment, ...] = field(default_factory=tuple)

    def flatten(self, samples: int = DEFAULT_CURVE_SAMPLES) -> np.ndarray:
        """Polyline approximation as an (N, 2) float array."""
        points = [np.array(self.start.as_tuple()).reshape(1, 2)]
        current = points[0][0]
        for segment in self.segments:
            sampled = _sample_segment(current, segment, samples)
            points.append(sampled)
            current = sampled[-1]
        return np.vstack(points)

    def transformed(self, sx: float, sy: float, tx: float, ty: float) -> "SubPath":
        return SubPath(
            _map_point(self.start, sx, sy, tx, ty),
            tuple(_map_segment(segment, sx, sy, tx, ty) for segment in self.segments),
        )


@dataclass(frozen=True)
class OutlinePath:
    """
    Fillable region built from closed sub-paths.

    Attributes:
        subpaths: Closed sub-paths in drawing order
    """
    subpaths: Tuple[SubPath, ...] = field(default_factory=tuple)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def rectangle(cls, rect: Rect) -> "OutlinePath":
        top_left, top_right, bottom_right, bottom_left = rect.corners()
        return cls((
            SubPath(top_left, (
                LineSegment(top_right),
                LineSegment(bottom_right),
                LineSegment(bottom_left),
            )),
        ))

    @classmethod
    def polygon(cls, points: Sequence[Point]) -> "OutlinePath":
        if len(points) < 3:
            raise ValueError(f"A polygon needs at least 3 points, got {len(points)}")
        return cls((SubPath(points[0], tuple(LineSegment(p) for p in points[1:])),))

    @classmethod
    def ellipse(cls, rect: Rect) -> "OutlinePath":
        """Ellipse inscribed in `rect`, built from four cubic arcs."""
        cx, cy = rect.center.as_tuple()
        rx = rect.width * 0.5
        ry = rect.height * 0.5
        kx = rx * BEZIER_CIRCLE_KAPPA
        ky = ry * BEZIER_CIRCLE_KAPPA
        return cls((
            SubPath(Point(cx + rx, cy), (
                CubicSegment(Point(cx + rx, cy + ky), Point(cx + kx, cy + ry), Point(cx, cy + ry)),
                CubicSegment(Point(cx - kx, cy + ry), Point(cx - rx, cy + ky), Point(cx - rx, cy)),
                CubicSegment(Point(cx - rx, cy - ky), Point(cx - kx, cy - ry), Point(cx, cy - ry)),
                CubicSegment(Point(cx + kx, cy - ry), Point(cx + rx, cy - ky), Point(cx + rx, cy)),
            )),
        ))

    @classmethod
    def rounded_rectangle(cls, rect: Rect, radius: float) -> "OutlinePath":
        """Rectangle with circular corners; radius 0 gives a plain rectangle."""
        radius = max(0.0, min(radius, rect.width * 0.5, rect.height * 0.5))
        if radius == 0:
            return cls.rectangle(rect)

        left, top, right, bottom = rect.min_x, rect.min_y, rect.max_x, rect.max_y
        k = radius * (1.0 - BEZIER_CIRCLE_KAPPA)
        return cls((
            SubPath(Point(left + radius, top), (
                LineSegment(Point(right - radius, top)),
                CubicSegment(Point(right - k, top), Point(right, top + k), Point(right, top + radius)),
                LineSegment(Point(right, bottom - radius)),
                CubicSegment(Point(right, bottom - k), Point(right - k, bottom), Point(right - radius, bottom)),
                LineSegment(Point(left + radius, bottom)),
                CubicSegment(Point(left + k, bottom), Point(left, bottom - k), Point(left, bottom - radius)),
                LineSegment(Point(left, top + radius)),
                CubicSegment(Point(left, top + k), Point(left + k, top), Point(left + radius, top)),
            )),
        ))

    @classmethod
    def combined(cls, paths: Iterable["OutlinePath"]) -> "OutlinePath":
        """Concatenate the sub-paths of several paths."""
        subpaths: List[SubPath] = []
        for path in paths:
            subpaths.extend(path.subpaths)
        return cls(tuple(subpaths))

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.subpaths or self.bounds().is_empty

    def flatten(self, samples: int = DEFAULT_CURVE_SAMPLES) -> List[np.ndarray]:
        """Polyline approximation of every sub-path."""
        return [subpath.flatten(samples) for subpath in self.subpaths]

    def bounds(self) -> Rect:
        """Bounding rect of the flattened outline."""
        if not self.subpaths:
            return Rect()
        points = np.vstack(self.flatten())
        left, top = points.min(axis=0)
        right, bottom = points.max(axis=0)
        return Rect.from_edges(float(left), float(top), float(right), float(bottom))

    def transformed(self, sx: float, sy: float, tx: float = 0.0, ty: float = 0.0) -> "OutlinePath":
        """Scale by (sx, sy) about the origin, then translate by (tx, ty)."""
        return OutlinePath(tuple(subpath.transformed(sx, sy, tx, ty) for subpath in self.subpaths))

    def fitted_to(self, target: Rect) -> "OutlinePath":
        """Scale and translate so the path bounds coincide with `target`."""
        bounds = self.bounds()
        if bounds.is_empty:
            raise ValueError("Cannot fit an empty outline path")
        sx = target.width / bounds.width
        sy = target.height / bounds.height
        return self.transformed(sx, sy, target.x - bounds.x * sx, target.y - bounds.y * sy)

    # ------------------------------------------------------------------
    # Rasterisation
    # ------------------------------------------------------------------

    def render_mask(
        self,
        size: Tuple[int, int],
        supersample: int = DEFAULT_MASK_SUPERSAMPLING,
    ) -> Image.Image:
        """
        Rasterise the path into an "L" mask of the given size.

        Inside pixels are 255, outside pixels 0. Edges are anti-aliased by
        drawing at `supersample` times the resolution and box-filtering down.

        Args:
            size: (width, height) of the mask in pixels
            supersample: Supersampling factor (1 = aliased)

        Returns:
            PIL Image in mode "L"
        """
        width, height = int(size[0]), int(size[1])
        if width <= 0 or height <= 0:
            raise ValueError(f"Mask size must be positive, got {width}x{height}")

        scale = max(1, int(supersample))
        big_size = (width * scale, height * scale)
        mask = Image.new("L", big_size, 0)

        for polyline in self.flatten():
            layer = Image.new("L", big_size, 0)
            coords = [(float(x) * scale, float(y) * scale) for x, y in polyline]
            ImageDraw.Draw(layer).polygon(coords, fill=255)
            # even-odd: overlapping sub-paths cancel out
            mask = ImageChops.difference(mask, layer)

        if scale > 1:
            mask = mask.resize((width, height), Image.Resampling.BOX)
        return mask
