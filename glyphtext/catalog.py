"""Symbol catalog: glyph outlines keyed by letter.

The catalog is read from a JSON resource with two sections:

- ``block_glyphs``: primary glyphs drawn in a 10x10 cell, each with a
  ``child_pos`` giving the top-left corner of the 4x4 attachment
  rectangle for a nested glyph.
- ``decal_glyphs``: marks 10 units wide drawn upward from y=0, each with
  a ``height`` in grid units.

Polygons are written as SVG-style point strings: ``"x,y x,y ..."``.

A catalog is immutable once built and is passed explicitly to the
composer, so any number of compositions can share one instance.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType

import structlog
from pydantic import BaseModel, Field, ValidationError

from .config import settings
from .errors import CatalogError
from .geometry import Polygon, Rect
from .shapes import Shape

logger = structlog.get_logger(__name__)

# Decal substituted for a letter repeated on the same arm
REPEAT_MARKER = "ditto"

# Block glyph cell and attachment sizes, in world units
GLYPH_SIZE = 10
CHILD_SIZE = 4


class BlockGlyphEntry(BaseModel):
    shape: list[str] = Field(min_length=1)
    child_pos: tuple[float, float]


class DecalGlyphEntry(BaseModel):
    shape: list[str] = Field(min_length=1)
    height: int = Field(ge=1)


class CatalogFile(BaseModel):
    """Schema of the catalog JSON resource."""

    block_glyphs: dict[str, BlockGlyphEntry]
    decal_glyphs: dict[str, DecalGlyphEntry]


def parse_points(points: str) -> Polygon:
    """Parse ``"x,y x,y ..."`` into a polygon.

    Raises:
        CatalogError: If a point is not a pair of numbers.
    """
    polygon = []
    for pair in points.split():
        try:
            x, y = pair.split(",")
            polygon.append((float(x), float(y)))
        except ValueError as e:
            raise CatalogError(f"Bad point {pair!r} in {points!r}") from e
    if len(polygon) < 3:
        raise CatalogError(f"Polygon needs at least 3 points: {points!r}")
    return tuple(polygon)


@dataclass(frozen=True, eq=False)
class SymbolCatalog:
    """Read-only mapping from symbol key to glyph shape.

    Attributes:
        primary: Block glyphs by key.
        decal: Decal glyphs by key. Always contains REPEAT_MARKER.
    """

    primary: Mapping[str, Shape]
    decal: Mapping[str, Shape]

    def __post_init__(self) -> None:
        if REPEAT_MARKER not in self.decal:
            raise CatalogError(f"Catalog is missing the '{REPEAT_MARKER}' decal")
        object.__setattr__(self, "primary", MappingProxyType(dict(self.primary)))
        object.__setattr__(self, "decal", MappingProxyType(dict(self.decal)))

    def resolve_primary(self, key: str) -> Shape | None:
        return self.primary.get(key)

    def resolve_decal(self, key: str) -> Shape | None:
        return self.decal.get(key)

    @property
    def repeat_marker(self) -> Shape:
        return self.decal[REPEAT_MARKER]

    @classmethod
    def from_dict(cls, data: dict) -> SymbolCatalog:
        """Build a catalog from parsed catalog JSON.

        Raises:
            CatalogError: If the data does not match the catalog schema.
        """
        try:
            parsed = CatalogFile.model_validate(data)
        except ValidationError as e:
            raise CatalogError(f"Invalid glyph catalog: {e}") from e

        primary = {}
        for key, entry in parsed.block_glyphs.items():
            cx, cy = entry.child_pos
            primary[key] = Shape.primary(
                key,
                [parse_points(p) for p in entry.shape],
                Rect(0, 0, GLYPH_SIZE, GLYPH_SIZE),
                Rect(cx, cy, CHILD_SIZE, CHILD_SIZE),
            )

        decal = {}
        for key, entry in parsed.decal_glyphs.items():
            decal[key] = Shape.decal(
                key,
                [parse_points(p) for p in entry.shape],
                Rect(0, -entry.height, GLYPH_SIZE, entry.height),
                entry.height,
            )

        return cls(primary=primary, decal=decal)


def load_catalog(path: str | Path | None = None) -> SymbolCatalog:
    """Load a catalog from ``path``, or the bundled one when omitted."""
    if path is None:
        text = resources.files("glyphtext").joinpath("resources/glyphs.json").read_text("utf-8")
        source = "bundled"
    else:
        text = Path(path).read_text(encoding="utf-8")
        source = str(path)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Glyph catalog {source} is not valid JSON: {e}") from e

    catalog = SymbolCatalog.from_dict(data)
    logger.debug(
        "catalog_loaded",
        source=source,
        primary=len(catalog.primary),
        decal=len(catalog.decal),
    )
    return catalog


@lru_cache(maxsize=1)
def default_catalog() -> SymbolCatalog:
    """Process-wide catalog, honoring ``GLYPHTEXT_CATALOG_PATH``."""
    return load_catalog(settings.catalog_path)
