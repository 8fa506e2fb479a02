"""Tests for the symbol catalog."""

import json
import string

import pytest

from glyphtext.catalog import REPEAT_MARKER, SymbolCatalog, load_catalog, parse_points
from glyphtext.errors import CatalogError
from glyphtext.geometry import Rect
from glyphtext.shapes import ShapeKind


class TestBundledCatalog:
    def test_every_letter_has_both_glyph_kinds(self):
        catalog = load_catalog()
        for letter in string.ascii_lowercase:
            assert catalog.resolve_primary(letter) is not None, letter
            assert catalog.resolve_decal(letter) is not None, letter

    def test_special_glyphs_present(self):
        catalog = load_catalog()
        for key in ["first_person", "the", ":", ".", ","]:
            assert catalog.resolve_primary(key) is not None, key
        assert catalog.resolve_decal(REPEAT_MARKER) is not None

    def test_block_geometry(self):
        glyph = load_catalog().resolve_primary("t")
        assert glyph.kind is ShapeKind.PRIMARY
        assert glyph.rect == Rect(0, 0, 10, 10)
        assert glyph.child_rect == Rect(0, 4, 4, 4)

    def test_decal_geometry(self):
        glyph = load_catalog().resolve_decal("w")
        assert glyph.kind is ShapeKind.DECAL
        assert glyph.stack_height == 3
        assert glyph.rect == Rect(0, -3, 10, 3)

    def test_child_rects_inside_cell(self):
        catalog = load_catalog()
        for key, glyph in catalog.primary.items():
            child = glyph.child_rect
            assert 0 <= child.x and child.right <= 10, key
            assert 0 <= child.y and child.bottom <= 10, key

    def test_decals_drawn_within_height(self):
        catalog = load_catalog()
        for key, glyph in catalog.decal.items():
            for polygon in glyph.polygons:
                for x, y in polygon:
                    assert 0 <= x <= 10, key
                    assert -glyph.stack_height <= y <= 0, key

    def test_unknown_key_resolves_to_none(self):
        catalog = load_catalog()
        assert catalog.resolve_primary("!") is None
        assert catalog.resolve_decal("!") is None


class TestSymbolCatalog:
    def test_from_dict(self, synthetic_catalog):
        assert synthetic_catalog.resolve_primary("a").name == "a"
        assert synthetic_catalog.repeat_marker.name == REPEAT_MARKER

    def test_is_read_only(self, synthetic_catalog):
        with pytest.raises(TypeError):
            synthetic_catalog.primary["z"] = synthetic_catalog.primary["a"]

    def test_missing_repeat_marker(self, catalog_data):
        data = catalog_data
        del data["decal_glyphs"][REPEAT_MARKER]
        with pytest.raises(CatalogError, match="ditto"):
            SymbolCatalog.from_dict(data)

    def test_schema_violation(self, catalog_data):
        data = catalog_data
        data["decal_glyphs"]["a"]["height"] = 0
        with pytest.raises(CatalogError, match="Invalid glyph catalog"):
            SymbolCatalog.from_dict(data)

    def test_missing_section(self):
        with pytest.raises(CatalogError):
            SymbolCatalog.from_dict({"block_glyphs": {}})


class TestLoadCatalog:
    def test_load_from_path(self, tmp_path, catalog_data):
        path = tmp_path / "glyphs.json"
        path.write_text(json.dumps(catalog_data), encoding="utf-8")
        catalog = load_catalog(path)
        assert set(catalog.primary) == set("abcdpqst")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogError, match="not valid JSON"):
            load_catalog(path)


class TestParsePoints:
    def test_parses_pairs(self):
        assert parse_points("0,0 10,0 5,-2") == ((0.0, 0.0), (10.0, 0.0), (5.0, -2.0))

    def test_rejects_bad_pair(self):
        with pytest.raises(CatalogError, match="Bad point"):
            parse_points("0,0 10 5,5")

    def test_rejects_too_few_points(self):
        with pytest.raises(CatalogError, match="at least 3"):
            parse_points("0,0 1,1")
