from __future__ import annotations

import dataclasses
from typing import Iterator, List, Optional, Sequence

from .types import COLS, ROWS, Cell, GridPos


class Grid:
    def __init__(self, cells: Optional[Sequence[Sequence[Cell]]] = None) -> None:
        # cells[r][c]; a removed cell keeps its last value and face state
        if cells is None:
            cells = [[Cell(0) for _ in range(COLS)] for _ in range(ROWS)]
        assert len(cells) == ROWS and all(len(row) == COLS for row in cells), "Grid must be 3x4"
        self.cells: List[List[Cell]] = [list(row) for row in cells]

    @classmethod
    def from_values(cls, values: Sequence[Sequence[int]], face_up: bool = False) -> "Grid":
        return cls([[Cell(v, face_up=face_up) for v in row] for row in values])

    def clone(self) -> "Grid":
        # Cells are frozen, copying the rows is enough
        return Grid(self.cells)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Grid) and self.cells == other.cells

    @staticmethod
    def in_bounds(r: int, c: int) -> bool:
        return 0 <= r < ROWS and 0 <= c < COLS

    def cell(self, r: int, c: int) -> Cell:
        return self.cells[r][c]

    def positions(self) -> Iterator[GridPos]:
        for r in range(ROWS):
            for c in range(COLS):
                yield (r, c)

    def count_face_down(self) -> int:
        cnt = 0
        for r, c in self.positions():
            cell = self.cells[r][c]
            if not cell.face_up and not cell.removed:
                cnt += 1
        return cnt

    def all_revealed_or_removed(self) -> bool:
        return self.count_face_down() == 0

    def can_flip(self, r: int, c: int) -> bool:
        if not Grid.in_bounds(r, c):
            return False
        cell = self.cells[r][c]
        return not cell.face_up and not cell.removed

    def flip(self, r: int, c: int) -> None:
        assert self.can_flip(r, c), f"Cell ({r},{c}) cannot be flipped"
        self.cells[r][c] = dataclasses.replace(self.cells[r][c], face_up=True)

    def replace(self, r: int, c: int, value: int) -> int:
        old = self.cells[r][c]
        assert not old.removed, f"Cell ({r},{c}) was cleared"
        self.cells[r][c] = Cell(value=value, face_up=True)
        return old.value

    def column_values(self, c: int) -> List[int]:
        vals: List[int] = []
        for r in range(ROWS):
            cell = self.cells[r][c]
            if cell.removed or not cell.face_up:
                return []
            vals.append(cell.value)
        return vals

    def find_clear_columns(self) -> List[int]:
        cols: List[int] = []
        for c in range(COLS):
            vals = self.column_values(c)
            if len(vals) == ROWS and len(set(vals)) == 1:
                cols.append(c)
        return cols

    def clear_columns(self) -> List[int]:
        """Remove every column of three face-up equal values.

        Returns the cleared column indices; running it again on the same grid
        clears nothing more since removed cells never match.
        """
        cleared = self.find_clear_columns()
        for c in cleared:
            for r in range(ROWS):
                self.cells[r][c] = dataclasses.replace(self.cells[r][c], removed=True)
        return cleared

    def values(self) -> List[int]:
        # Every cell, removed or not: used for card bookkeeping
        return [self.cells[r][c].value for r, c in self.positions()]

    def face_up_values(self) -> List[int]:
        return [
            self.cells[r][c].value
            for r, c in self.positions()
            if self.cells[r][c].face_up or self.cells[r][c].removed
        ]

    def full_sum(self) -> int:
        # Round-end score: face-down cells count at full value
        s = 0
        for r, c in self.positions():
            cell = self.cells[r][c]
            if not cell.removed:
                s += cell.value
        return s

    def visible_sum(self) -> int:
        s = 0
        for r, c in self.positions():
            cell = self.cells[r][c]
            if not cell.removed and cell.face_up:
                s += cell.value
        return s
