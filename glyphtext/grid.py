"""Grid position functions.

A grid position function maps the n-th anchor index to an integer cell
coordinate. The composer calls it once per anchor (plus lookahead calls
for reservations), so any total function works; the helpers here cover
the common layouts.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

Cell = tuple[int, int]
GridPositionFunc = Callable[[int], Cell]


def cell_key(cell: Cell) -> str:
    """Canonical key for occupancy and reservation sets."""
    return f"{cell[0]} {cell[1]}"


def linear_positions(index: int) -> Cell:
    """Default layout: one left-to-right line."""
    return (index, 0)


def rows(width: int, spacing: int = 2) -> GridPositionFunc:
    """Wrap onto a new line every ``width`` anchors.

    Lines are ``spacing`` cells apart so decals stacked above and below
    an anchor do not run into the neighbouring line.
    """
    if width < 1:
        raise ValueError(f"Row width must be >= 1, got {width}")
    if spacing < 1:
        raise ValueError(f"Row spacing must be >= 1, got {spacing}")

    def position(index: int) -> Cell:
        row, col = divmod(index, width)
        return (col, row * spacing)

    return position


@dataclass(frozen=True)
class ChangeDirection:
    """From this index on, advance by ``direction`` each step."""

    direction: Cell

    def apply(self, path: PathPositions) -> None:
        path.direction = self.direction


@dataclass(frozen=True)
class ChangePosition:
    """Jump to ``position`` at this index."""

    position: Cell

    def apply(self, path: PathPositions) -> None:
        path.position = self.position


PathAction = ChangeDirection | ChangePosition


class PathPositions:
    """A walk across the grid, steered by actions registered at indices.

    The walk starts at (0, 0) heading right. Before the cell for index n
    is emitted, every action registered at n is applied in order. Visited
    cells are memoized, so repeated lookups of the same index are stable.
    Actions registered for an index that was already visited have no effect.
    """

    def __init__(self, actions: dict[int, list[PathAction]] | None = None):
        self.direction: Cell = (1, 0)
        self.position: Cell = (0, 0)
        self._actions: dict[int, list[PathAction]] = {
            index: list(items) for index, items in (actions or {}).items()
        }
        self._cells: list[Cell] = []

    def add_action(self, index: int, action: PathAction) -> PathPositions:
        self._actions.setdefault(index, []).append(action)
        return self

    def __call__(self, index: int) -> Cell:
        if index < 0:
            raise ValueError(f"Anchor index must be >= 0, got {index}")
        while len(self._cells) <= index:
            for action in self._actions.get(len(self._cells), ()):
                action.apply(self)
            self._cells.append(self.position)
            self.position = (
                self.position[0] + self.direction[0],
                self.position[1] + self.direction[1],
            )
        return self._cells[index]
