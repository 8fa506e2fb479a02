"""Shared fixtures: a small synthetic catalog with predictable geometry."""

import pytest

from glyphtext.catalog import SymbolCatalog

SQUARE = "0,0 10,0 10,10 0,10"


def _block(child_pos=(3, 3)):
    return {"shape": [SQUARE], "child_pos": list(child_pos)}


def _decal(height=1):
    return {"shape": [f"0,-{height} 10,-{height} 10,0 0,0"], "height": height}


@pytest.fixture
def catalog_data() -> dict:
    """Raw catalog JSON: square blocks, 1-unit decals ('q' is 2 units tall)."""
    letters = "abcdpqst"
    decals = {k: _decal() for k in letters}
    decals["q"] = _decal(2)
    decals["ditto"] = _decal()
    return {
        "block_glyphs": {k: _block() for k in letters},
        "decal_glyphs": decals,
    }


@pytest.fixture
def synthetic_catalog(catalog_data) -> SymbolCatalog:
    return SymbolCatalog.from_dict(catalog_data)
