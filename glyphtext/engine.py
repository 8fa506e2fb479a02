"""Glyph composition and placement engine.

Text is turned into glyphs one word at a time:

1. The word is split into a primary (consonant) stream and a secondary
   (vowel) stream, and cells around its anchors are reserved.
2. Each non-empty stream gets its own anchor cell from the grid position
   function. The first letter is drawn as a block glyph in that cell; up
   to ``nesting_depth`` further letters are fitted, one inside the other,
   into the child rectangle of the glyph before them.
3. Any letters left over become decals stacked around the anchor (see
   ``decals.DecalArms``).

All placement state lives in a PlacementContext owned by one composer
for one document. Errors propagate immediately; the document is only
emitted by ``compose()`` once every word has been placed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from .catalog import SymbolCatalog, default_catalog
from .config import ComposerOptions
from .decals import CELL_UNIT, DecalArms
from .decompose import decompose_word
from .document import ComposedDocument, emit
from .errors import CellCollisionError, GlyphTextError, UnknownSymbolError
from .grid import Cell, GridPositionFunc, cell_key, linear_positions
from .shapes import Shape

logger = structlog.get_logger(__name__)

# Characters that end the current word and are drawn as their own glyph
PUNCTUATION = frozenset(":.,")


@dataclass
class PlacementContext:
    """Mutable per-document placement state.

    Attributes:
        position_func: Maps anchor index to grid cell.
        nesting_depth: Maximum number of glyphs nested inside an anchor glyph.
        index: Next anchor index.
        occupied: Keys of cells holding an anchor or a decal corner.
        reserved: Keys of cells decals must not touch.
        shapes: Accumulated world-space glyphs, in drawing order.
        anchors: Anchor cells in allocation order.
    """

    position_func: GridPositionFunc = linear_positions
    nesting_depth: int = 1
    index: int = 0
    occupied: set[str] = field(default_factory=set)
    reserved: set[str] = field(default_factory=set)
    shapes: list[Shape] = field(default_factory=list)
    anchors: list[Cell] = field(default_factory=list)

    def reserve(self, offset: int) -> None:
        self.reserved.add(cell_key(self.position_func(self.index + offset)))

    def allocate_anchor(self) -> Cell:
        """Take the next anchor cell.

        Raises:
            CellCollisionError: If the cell is already occupied.
        """
        cell = self.position_func(self.index)
        self.index += 1
        key = cell_key(cell)
        if key in self.occupied:
            raise CellCollisionError(cell)
        self.occupied.add(key)
        self.anchors.append(cell)
        return cell

    def checkpoint(self) -> tuple:
        """Snapshot of the state a word can change."""
        return (
            self.index,
            frozenset(self.occupied),
            frozenset(self.reserved),
            len(self.shapes),
            len(self.anchors),
        )

    def rollback(self, snapshot: tuple) -> None:
        """Restore a ``checkpoint()`` in place.

        The cell sets are shared with in-flight decal searches, so they are
        refilled rather than replaced.
        """
        index, occupied, reserved, shape_count, anchor_count = snapshot
        self.index = index
        self.occupied.clear()
        self.occupied.update(occupied)
        self.reserved.clear()
        self.reserved.update(reserved)
        del self.shapes[shape_count:]
        del self.anchors[anchor_count:]


class GlyphComposer:
    """Builds one document from text.

    Example:
        >>> doc = GlyphComposer().add_sentence("this is rude.").compose()
    """

    def __init__(
        self,
        catalog: SymbolCatalog | None = None,
        options: ComposerOptions | None = None,
        position_func: GridPositionFunc = linear_positions,
    ):
        self.catalog = catalog or default_catalog()
        self.options = options or ComposerOptions()
        self.position_func = position_func
        self.context = self._new_context()

    def _new_context(self) -> PlacementContext:
        return PlacementContext(
            position_func=self.position_func,
            nesting_depth=self.options.nesting_depth,
        )

    def reset(self) -> GlyphComposer:
        """Discard all placement state and start a new document."""
        self.context = self._new_context()
        return self

    def add_sentence(self, text: str) -> GlyphComposer:
        """Tokenize ``text`` and compose every word and punctuation mark.

        Whitespace separates words; ``:``, ``.`` and ``,`` end the current
        word and add their own glyph. Only the word that ends the text is
        treated as the last word.
        """
        word = ""
        for char in text.lower():
            if char.isspace():
                if word:
                    self.add_word(word)
                    word = ""
            elif char in PUNCTUATION:
                if word:
                    self.add_word(word)
                    word = ""
                self.add_punctuation(char)
            else:
                word += char
        if word:
            self.add_word(word, last=True)
        return self

    def add_word(self, word: str, last: bool = False) -> GlyphComposer:
        """Compose one lower-cased word.

        The word is placed as a unit: if either stream fails, everything it
        added to the context is rolled back before the error propagates.
        """
        decomposition = decompose_word(word, last, self.options.use_overrides)
        snapshot = self.context.checkpoint()
        before = len(self.context.shapes)
        try:
            for offset in decomposition.reserve_offsets:
                self.context.reserve(offset)
            self._compose_stream(decomposition.primary)
            self._compose_stream(decomposition.secondary)
        except GlyphTextError:
            self.context.rollback(snapshot)
            raise

        logger.debug(
            "word_composed",
            word=word,
            primary="".join(decomposition.primary),
            secondary="".join(decomposition.secondary),
            shapes=len(self.context.shapes) - before,
            next_index=self.context.index,
        )
        return self

    def add_punctuation(self, mark: str) -> GlyphComposer:
        """Add a single anchor-only glyph for a punctuation mark."""
        self._place_anchor(mark)
        return self

    def compose(self) -> ComposedDocument:
        """Emit the document for everything added so far."""
        document = emit(self.context.shapes, self.options.scale)
        logger.info(
            "document_composed",
            anchors=len(self.context.anchors),
            shapes=len(document.shapes),
            width=document.width,
            height=document.height,
        )
        return document

    def _resolve_primary(self, letter: str) -> Shape:
        shape = self.catalog.resolve_primary(letter)
        if shape is None:
            raise UnknownSymbolError(letter, "primary")
        return shape

    def _place_anchor(self, letter: str) -> tuple[Shape, tuple[float, float]]:
        """Draw ``letter`` as a block glyph in the next anchor cell."""
        glyph = self._resolve_primary(letter)
        cell = self.context.allocate_anchor()
        position = (float(cell[0] * CELL_UNIT), float(cell[1] * CELL_UNIT))
        anchor = glyph.translate(*position)
        self.context.shapes.append(anchor)
        return anchor, position

    def _compose_stream(self, letters: tuple[str, ...]) -> None:
        """Anchor, nest and decorate one letter stream."""
        if not letters:
            return

        anchor, position = self._place_anchor(letters[0])

        rest = letters[1:]
        depth = min(self.context.nesting_depth, len(rest))
        rect = anchor.child_rect
        for letter in rest[:depth]:
            child = self._resolve_primary(letter).fit_to_rect(rect)
            self.context.shapes.append(child)
            rect = child.child_rect

        overflow = rest[depth:]
        if overflow:
            arms = DecalArms(self.catalog, position, self.context.reserved, self.context.occupied)
            arms.extend(overflow)
            self.context.shapes.extend(arms.shapes())


def compose_text(
    text: str,
    catalog: SymbolCatalog | None = None,
    options: ComposerOptions | None = None,
    position_func: GridPositionFunc = linear_positions,
) -> ComposedDocument:
    """Compose ``text`` into a document in one call."""
    composer = GlyphComposer(catalog=catalog, options=options, position_func=position_func)
    return composer.add_sentence(text).compose()
