"""Composition errors.

Every error here is fatal for the document being composed. They derive
from ValueError so callers that already map bad input to a client error
(the HTTP service, the CLI) handle them without special cases.
"""

from __future__ import annotations


class GlyphTextError(ValueError):
    """Base class for glyph composition failures."""


class CatalogError(GlyphTextError):
    """The symbol catalog resource is malformed or incomplete."""


class UnknownSymbolError(GlyphTextError):
    """A letter has no catalog entry of the kind required."""

    def __init__(self, letter: str, phase: str):
        self.letter = letter
        self.phase = phase
        super().__init__(f"Unknown {phase} symbol: {letter!r}")


class CellCollisionError(GlyphTextError):
    """An anchor cell was already occupied."""

    def __init__(self, cell: tuple[int, int]):
        self.cell = cell
        super().__init__(f"Glyph collision at cell x={cell[0]}, y={cell[1]}")


class NoSpaceForDecalError(GlyphTextError):
    """Every arm around an anchor rejected the next decal."""

    def __init__(self, position: tuple[float, float], attempts: int):
        self.position = position
        self.attempts = attempts
        super().__init__(
            f"No space for decal at x={position[0]:g}, y={position[1]:g} "
            f"after {attempts} rejected arms"
        )
