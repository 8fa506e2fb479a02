"""Tests for glyph shapes."""

import pytest

from glyphtext.geometry import Affine, Rect
from glyphtext.shapes import Shape, ShapeKind


def _block(name="t"):
    return Shape.primary(
        name,
        [[(0, 0), (10, 0), (10, 2), (0, 2)], [(4, 2), (6, 2), (6, 10), (4, 10)]],
        Rect(0, 0, 10, 10),
        Rect(0, 4, 4, 4),
    )


def _decal(name="a", height=2):
    return Shape.decal(name, [[(0, -height), (10, -height), (10, 0), (0, 0)]], Rect(0, -height, 10, height), height)


def _flat(shape):
    return [c for polygon in shape.polygons for p in polygon for c in p]


class TestShapeKinds:
    def test_primary_needs_child_rect(self):
        with pytest.raises(ValueError, match="child_rect"):
            Shape(kind=ShapeKind.PRIMARY, name="x", polygons=(), rect=Rect(0, 0, 10, 10))

    def test_decal_needs_stack_height(self):
        with pytest.raises(ValueError, match="stack_height"):
            Shape(kind=ShapeKind.DECAL, name="x", polygons=(), rect=Rect(0, -1, 10, 1))

    def test_class_names(self):
        assert _block("t").class_name == "block-glyph t"
        assert _decal("ditto").class_name == "decal-glyph ditto"

    def test_polygons_are_frozen_tuples(self):
        shape = _block()
        assert isinstance(shape.polygons, tuple)
        assert all(isinstance(p, tuple) for p in shape.polygons)


class TestTransform:
    def test_returns_new_shape(self):
        shape = _block()
        moved = shape.translate(11, 0)
        assert moved is not shape
        assert shape.rect == Rect(0, 0, 10, 10)
        assert moved.rect == Rect(11, 0, 10, 10)

    def test_primary_child_rect_follows_transform(self):
        moved = _block().translate(22, 11)
        assert moved.child_rect == Rect(22, 15, 4, 4)

    def test_decal_keeps_stack_height(self):
        rotated = _decal(height=3).transform(Affine([[0, -1, 10], [1, 0, 0]]))
        assert rotated.stack_height == 3
        assert rotated.kind is ShapeKind.DECAL
        assert rotated.child_rect is None

    def test_plain_function_and_affine_agree(self):
        shape = _block()
        by_func = shape.transform(lambda p: (10 - p[1], p[0]))
        by_affine = shape.transform(Affine([[0, -1, 10], [1, 0, 0]]))
        assert _flat(by_func) == pytest.approx(_flat(by_affine))
        assert by_func.rect == by_affine.rect

    def test_composed_transform_matches_stepwise(self):
        a = Affine([[-1, 0, 10], [0, -1, 10]])
        b = Affine.translation(-3, 8).then(Affine.scaling(1.5))
        shape = _decal()
        assert _flat(shape.transform(a).transform(b)) == pytest.approx(_flat(shape.transform(a.then(b))))


class TestFitToRect:
    def test_rect_lands_on_target(self):
        target = Rect(3, 3, 4, 4)
        fitted = _block().fit_to_rect(target)
        assert fitted.rect.x == pytest.approx(3)
        assert fitted.rect.w == pytest.approx(4)
        assert fitted.child_rect.y == pytest.approx(3 + 4 * 0.4)
        assert fitted.child_rect.w == pytest.approx(1.6)

    def test_fit_is_idempotent(self):
        target = Rect(5.2, 1.6, 1.6, 1.6)
        once = _block().fit_to_rect(target)
        twice = once.fit_to_rect(target)
        assert _flat(twice) == pytest.approx(_flat(once))
        assert twice.child_rect.x == pytest.approx(once.child_rect.x)
