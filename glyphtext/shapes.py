"""Glyph shapes.

A shape is an immutable set of polygons plus its bounding rectangle.
There are two kinds:

- PRIMARY ("block") glyphs fill a whole grid cell and carry a child
  rectangle into which a nested primary glyph is fitted.
- DECAL glyphs are small marks stacked around an anchor; they carry a
  stacking height in grid units.

Shapes are never mutated: every transform returns a new shape.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum

from .geometry import Affine, Point, PointFunc, Polygon, Rect, fit_transform, transform_rect


class ShapeKind(Enum):
    """Glyph family; the value is the SVG class prefix."""

    PRIMARY = "block-glyph"
    DECAL = "decal-glyph"


@dataclass(frozen=True)
class Shape:
    """A positioned glyph.

    Attributes:
        kind: PRIMARY or DECAL.
        name: Catalog key the shape was resolved from.
        polygons: Polygons as tuples of (x, y) points.
        rect: Bounding rectangle.
        child_rect: Attachment rectangle for a nested glyph (PRIMARY only).
        stack_height: Height in grid units along the stacking axis (DECAL only).
    """

    kind: ShapeKind
    name: str
    polygons: tuple[Polygon, ...]
    rect: Rect
    child_rect: Rect | None = None
    stack_height: int | None = None

    def __post_init__(self) -> None:
        if self.kind is ShapeKind.PRIMARY and self.child_rect is None:
            raise ValueError(f"Primary shape '{self.name}' needs a child_rect")
        if self.kind is ShapeKind.DECAL and self.stack_height is None:
            raise ValueError(f"Decal shape '{self.name}' needs a stack_height")

    @classmethod
    def primary(
        cls,
        name: str,
        polygons: Iterable[Iterable[Point]],
        rect: Rect,
        child_rect: Rect,
    ) -> Shape:
        return cls(
            kind=ShapeKind.PRIMARY,
            name=name,
            polygons=_freeze(polygons),
            rect=rect,
            child_rect=child_rect,
        )

    @classmethod
    def decal(
        cls,
        name: str,
        polygons: Iterable[Iterable[Point]],
        rect: Rect,
        stack_height: int,
    ) -> Shape:
        return cls(
            kind=ShapeKind.DECAL,
            name=name,
            polygons=_freeze(polygons),
            rect=rect,
            stack_height=stack_height,
        )

    @property
    def class_name(self) -> str:
        """SVG class attribute, e.g. ``"block-glyph t"``."""
        return f"{self.kind.value} {self.name}"

    def transform(self, func: PointFunc) -> Shape:
        """Return a copy with every point (and rectangle) mapped through ``func``."""
        if isinstance(func, Affine):
            polygons = tuple(func.apply(polygon) for polygon in self.polygons)
        else:
            polygons = tuple(tuple(func(p) for p in polygon) for polygon in self.polygons)
        child_rect = None if self.child_rect is None else transform_rect(self.child_rect, func)
        return replace(
            self,
            polygons=polygons,
            rect=transform_rect(self.rect, func),
            child_rect=child_rect,
        )

    def translate(self, dx: float, dy: float) -> Shape:
        return self.transform(Affine.translation(dx, dy))

    def fit_to_rect(self, rect: Rect) -> Shape:
        """Rescale so the bounding rectangle lands exactly on ``rect``."""
        return self.transform(fit_transform(self.rect, rect))


def _freeze(polygons: Iterable[Iterable[Point]]) -> tuple[Polygon, ...]:
    return tuple(tuple((float(x), float(y)) for x, y in polygon) for polygon in polygons)
