"""Decal placement around an anchor glyph.

Letters that do not fit into the nested primary glyph are drawn as decals
stacked outward along four arms:

    arm 0: above the anchor   (x, y) -> (x, y)
    arm 1: right of it        (x, y) -> (10 - y, x)
    arm 2: below it           (x, y) -> (10 - x, 10 - y)
    arm 3: left of it         (x, y) -> (y, 10 - x)

Letters are dealt to the arms round-robin. A placement whose corner cells
are reserved or occupied is rejected and the next arm is tried with the
same letter; four rejections in a row mean no arm has room and the
composition fails.
"""

from __future__ import annotations

import math

import structlog

from .catalog import SymbolCatalog
from .errors import NoSpaceForDecalError, UnknownSymbolError
from .geometry import Affine, Point
from .grid import Cell, cell_key
from .shapes import Shape

logger = structlog.get_logger(__name__)

# World units per grid cell: a 10-unit glyph plus a 1-unit gutter
CELL_UNIT = 11

ARM_COUNT = 4

ARM_TRANSFORMS: tuple[Affine, ...] = (
    Affine.identity(),
    Affine([[0.0, -1.0, 10.0], [1.0, 0.0, 0.0]]),
    Affine([[-1.0, 0.0, 10.0], [0.0, -1.0, 10.0]]),
    Affine([[0.0, 1.0, 0.0], [-1.0, 0.0, 10.0]]),
)


def corner_cells(shape: Shape) -> tuple[Cell, Cell]:
    """Grid cells holding the top-left and bottom-right corners of ``shape``."""
    rect = shape.rect
    return (
        (math.floor(rect.x / CELL_UNIT), math.floor(rect.y / CELL_UNIT)),
        (math.floor(rect.right / CELL_UNIT), math.floor(rect.bottom / CELL_UNIT)),
    )


def arm_transform(arm: int, height: float, anchor: Point) -> Affine:
    """Map from decal-local space to world space for one arm at a stack height."""
    return (
        Affine.translation(0.0, -height)
        .then(ARM_TRANSFORMS[arm])
        .then(Affine.translation(anchor[0], anchor[1]))
    )


class DecalArms:
    """Round-robin backtracking over the four arms of one anchor.

    State:
        arm: Arm the next letter is offered to.
        failures: Consecutive rejected offers.
        heights: Running stack height per arm (starts at 1).
        letters: Letters accepted per arm.
        placed: Positioned decal shapes accepted per arm.

    ``reserved`` and ``occupied`` are the document-wide cell sets; accepted
    placements are added to ``occupied``. Cells claimed by an arm do not
    block further decals on that same arm, so an arm can keep stacking
    within a cell.
    """

    def __init__(
        self,
        catalog: SymbolCatalog,
        anchor: Point,
        reserved: set[str],
        occupied: set[str],
    ):
        self.catalog = catalog
        self.anchor = anchor
        self.reserved = reserved
        self.occupied = occupied
        self.arm = 0
        self.failures = 0
        self.heights: list[float] = [1.0] * ARM_COUNT
        self.letters: list[list[str]] = [[] for _ in range(ARM_COUNT)]
        self.placed: list[list[Shape]] = [[] for _ in range(ARM_COUNT)]
        self._claimed: list[set[str]] = [set() for _ in range(ARM_COUNT)]

    def resolve(self, letter: str, arm: int) -> Shape:
        """Decal for ``letter`` on ``arm``, using the repeat marker for repeats."""
        accepted = self.letters[arm]
        if accepted and accepted[-1] == letter:
            return self.catalog.repeat_marker
        shape = self.catalog.resolve_decal(letter)
        if shape is None:
            raise UnknownSymbolError(letter, "decal")
        return shape

    def candidate(self, letter: str, arm: int) -> Shape:
        """World-space placement ``letter`` would get on ``arm``."""
        shape = self.resolve(letter, arm)
        return shape.transform(arm_transform(arm, self.heights[arm], self.anchor))

    def offer(self, letter: str) -> bool:
        """Try ``letter`` on the current arm.

        Returns:
            True if the letter was accepted.

        Raises:
            NoSpaceForDecalError: On the fourth consecutive rejection.
        """
        arm = self.arm
        placed = self.candidate(letter, arm)
        keys = [cell_key(c) for c in corner_cells(placed)]
        self.arm = (arm + 1) % ARM_COUNT

        if any(self._blocked(key, arm) for key in keys):
            self.failures += 1
            logger.debug("decal_rejected", letter=letter, arm=arm, cells=keys)
            if self.failures >= ARM_COUNT:
                logger.warning(
                    "decal_search_exhausted",
                    letter=letter,
                    anchor=self.anchor,
                    attempts=self.failures,
                )
                raise NoSpaceForDecalError(self.anchor, self.failures)
            return False

        self.failures = 0
        self.letters[arm].append(letter)
        self.placed[arm].append(placed)
        self.heights[arm] += placed.stack_height + 1
        self.occupied.update(keys)
        self._claimed[arm].update(keys)
        return True

    def extend(self, letters: list[str] | tuple[str, ...]) -> None:
        """Place every letter in order, retrying each on the following arms."""
        for letter in letters:
            while not self.offer(letter):
                pass

    def shapes(self) -> list[Shape]:
        """Accepted decals, arm 0 first, each arm in stacking order."""
        return [shape for arm in self.placed for shape in arm]

    def _blocked(self, key: str, arm: int) -> bool:
        if key in self.reserved:
            return True
        return key in self.occupied and key not in self._claimed[arm]
