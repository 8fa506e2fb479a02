"""Geometry primitives for glyph composition.

Rectangles are axis-aligned and always normalized (non-negative width and
height). Point maps are plain callables ``(x, y) -> (x, y)``; the affine
ones are backed by a 3x3 homogeneous matrix so they can be composed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

import numpy as np

Point = tuple[float, float]
Polygon = tuple[Point, ...]
PointFunc = Callable[[Point], Point]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle.

    Attributes:
        x: Left edge.
        y: Top edge.
        w: Width (>= 0).
        h: Height (>= 0).
    """

    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @classmethod
    def from_corners(cls, a: Point, b: Point) -> Rect:
        """Build a normalized rectangle from two opposite corners."""
        return cls(
            x=min(a[0], b[0]),
            y=min(a[1], b[1]),
            w=abs(b[0] - a[0]),
            h=abs(b[1] - a[1]),
        )


class Affine:
    """Affine point map ``p -> M @ [x, y, 1]``.

    Instances are callable on a single point, so they can be passed
    anywhere a plain point function is accepted.
    """

    __slots__ = ("matrix",)

    def __init__(self, matrix: np.ndarray | Iterable[Iterable[float]]):
        m = np.asarray(matrix, dtype=float)
        if m.shape == (2, 3):
            m = np.vstack([m, [0.0, 0.0, 1.0]])
        if m.shape != (3, 3):
            raise ValueError(f"Affine matrix must be 2x3 or 3x3, got {m.shape}")
        self.matrix = m

    @classmethod
    def identity(cls) -> Affine:
        return cls(np.eye(3))

    @classmethod
    def translation(cls, dx: float, dy: float) -> Affine:
        return cls([[1.0, 0.0, dx], [0.0, 1.0, dy]])

    @classmethod
    def scaling(cls, sx: float, sy: float | None = None) -> Affine:
        return cls([[sx, 0.0, 0.0], [0.0, sx if sy is None else sy, 0.0]])

    def then(self, other: Affine) -> Affine:
        """Return the map that applies ``self`` first, then ``other``."""
        return Affine(other.matrix @ self.matrix)

    def __call__(self, point: Point) -> Point:
        x, y, _ = self.matrix @ np.array([point[0], point[1], 1.0])
        return (float(x), float(y))

    def apply(self, points: Iterable[Point]) -> Polygon:
        """Map a sequence of points in one matrix product."""
        pts = np.asarray(list(points), dtype=float).reshape(-1, 2)
        if len(pts) == 0:
            return ()
        homogeneous = np.hstack([pts, np.ones((len(pts), 1))])
        mapped = homogeneous @ self.matrix.T
        return tuple((float(x), float(y)) for x, y, _ in mapped)

    def __repr__(self) -> str:
        rows = self.matrix[:2].tolist()
        return f"Affine({rows})"


def transform_rect(rect: Rect, func: PointFunc) -> Rect:
    """Map a rectangle through ``func`` by its top-left and bottom-right corners.

    Exact for translations, axis scalings and quarter-turn rotations, which
    are the only maps glyph composition applies.
    """
    return Rect.from_corners(func((rect.x, rect.y)), func((rect.right, rect.bottom)))


def fit_transform(source: Rect, target: Rect) -> Affine:
    """Affine map taking ``source`` onto ``target``.

    A degenerate source axis keeps unit scale on that axis.
    """
    sx = target.w / source.w if source.w else 1.0
    sy = target.h / source.h if source.h else 1.0
    return Affine(
        [
            [sx, 0.0, target.x - source.x * sx],
            [0.0, sy, target.y - source.y * sy],
        ]
    )


def union_rects(rects: Iterable[Rect]) -> Rect | None:
    """Smallest rectangle enclosing every rectangle, or None if there are none."""
    min_x = min_y = float("inf")
    max_x = max_y = float("-inf")
    seen = False
    for rect in rects:
        seen = True
        min_x = min(min_x, rect.x)
        min_y = min(min_y, rect.y)
        max_x = max(max_x, rect.right)
        max_y = max(max_y, rect.bottom)
    if not seen:
        return None
    return Rect(min_x, min_y, max_x - min_x, max_y - min_y)
