"""Bounding and emission of a composed document."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .geometry import Affine, Polygon, Rect, union_rects
from .shapes import Shape


@dataclass(frozen=True)
class PositionedShape:
    """One glyph in output space, ready for serialization."""

    polygons: tuple[Polygon, ...]
    rect: Rect
    class_name: str


@dataclass(frozen=True)
class ComposedDocument:
    """Final ordered glyphs plus the overall output size."""

    shapes: tuple[PositionedShape, ...]
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return not self.shapes


def bounding_rect(shapes: Sequence[Shape]) -> Rect:
    """Minimal rectangle enclosing every shape; zero-sized for no shapes."""
    return union_rects(s.rect for s in shapes) or Rect(0, 0, 0, 0)


def emit(shapes: Sequence[Shape], scale: float = 1.0) -> ComposedDocument:
    """Move the bounding box to the origin, scale uniformly, and freeze the result.

    Args:
        shapes: Accumulated glyphs in world space, in drawing order.
        scale: Uniform output scale (> 0).

    Returns:
        ComposedDocument whose width and height are the scaled bounding box.
    """
    if scale <= 0:
        raise ValueError(f"scale must be > 0, got {scale}")

    bbox = bounding_rect(shapes)
    to_output = Affine.translation(-bbox.x, -bbox.y).then(Affine.scaling(scale))

    positioned = []
    for shape in shapes:
        moved = shape.transform(to_output)
        positioned.append(
            PositionedShape(polygons=moved.polygons, rect=moved.rect, class_name=moved.class_name)
        )

    return ComposedDocument(
        shapes=tuple(positioned),
        width=bbox.w * scale,
        height=bbox.h * scale,
    )
