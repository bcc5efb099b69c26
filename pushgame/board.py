from __future__ import annotations
import string
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Tuple

from .config import BLANK, EMPTY, PLAYERS

Player = str  # "O" or "X"
Pos = Tuple[int, int]


def opponent(player: Player) -> Player:
    return "X" if player == "O" else "O"


class Direction(str, Enum):
    """Which way a push shoves the stones of its line."""
    DOWN = "down"
    LEFT = "left"
    UP = "up"
    RIGHT = "right"

    @property
    def step(self) -> Pos:
        return _STEPS[self]


_STEPS: Dict[Direction, Pos] = {
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.UP: (-1, 0),
    Direction.RIGHT: (0, 1),
}


class Region(str, Enum):
    CORNER = "corner"
    BORDER = "border"
    INTERIOR = "interior"
    OUTSIDE = "outside"


@dataclass
class Board:
    """Weights and stones of a bordered grid.

    ``weights`` and ``stones`` are row-major and cover every logical cell,
    border included. Corners hold ``BLANK`` stones and a weight of 0; they are
    only kept so the two grids stay rectangular.
    """
    rows: int
    columns: int
    weights: List[List[int]]
    stones: List[List[str]]

    @classmethod
    def from_rows(cls, lines: List[str]) -> "Board":
        """Build a board from rows in the file encoding (already validated)."""
        weights: List[List[int]] = []
        stones: List[List[str]] = []
        for line in lines:
            pairs = [line[i:i + 2] for i in range(0, len(line), 2)]
            weights.append([int(p[0]) if p[0] in string.digits else 0 for p in pairs])
            stones.append([p[1] for p in pairs])
        return cls(len(lines), len(stones[0]) if stones else 0, weights, stones)

    # ---- geometry ----
    def region(self, row: int, col: int) -> Region:
        if not (0 <= row < self.rows and 0 <= col < self.columns):
            return Region.OUTSIDE
        on_row_edge = row in (0, self.rows - 1)
        on_col_edge = col in (0, self.columns - 1)
        if on_row_edge and on_col_edge:
            return Region.CORNER
        if on_row_edge or on_col_edge:
            return Region.BORDER
        return Region.INTERIOR

    def interior(self, reverse: bool = False) -> Iterator[Pos]:
        """Interior positions in row-major order (or its exact reverse)."""
        rows = range(1, self.rows - 1)
        cols = range(1, self.columns - 1)
        if reverse:
            rows, cols = rows[::-1], cols[::-1]
        for r in rows:
            for c in cols:
                yield r, c

    def push_direction(self, row: int, col: int) -> Direction:
        """Direction of a push triggered from a non-corner border slot."""
        if row == 0:
            return Direction.DOWN
        if row == self.rows - 1:
            return Direction.UP
        if col == self.columns - 1:
            return Direction.LEFT
        return Direction.RIGHT

    def line(self, row: int, col: int) -> List[Pos]:
        """Positions from a border slot straight across to the opposite border slot."""
        dr, dc = self.push_direction(row, col).step
        cells = []
        while 0 <= row < self.rows and 0 <= col < self.columns:
            cells.append((row, col))
            row, col = row + dr, col + dc
        return cells

    # ---- cells ----
    def stone(self, row: int, col: int) -> str:
        return self.stones[row][col]

    def weight(self, row: int, col: int) -> int:
        return self.weights[row][col]

    def is_empty(self, row: int, col: int) -> bool:
        return self.stones[row][col] == EMPTY

    def set_stone(self, row: int, col: int, stone: str) -> None:
        self.stones[row][col] = stone

    def empty_cells(self) -> List[Pos]:
        return [(r, c) for r, c in self.interior() if self.is_empty(r, c)]

    def is_full(self) -> bool:
        return all(not self.is_empty(r, c) for r, c in self.interior())

    def stone_count(self) -> int:
        return sum(row.count(p) for row in self.stones for p in PLAYERS)

    # ---- scoring ----
    def scores(self) -> Dict[Player, int]:
        """Sum of weights under each player's stones. Border cells weigh 0."""
        totals = {p: 0 for p in PLAYERS}
        for r in range(self.rows):
            for c in range(self.columns):
                s = self.stones[r][c]
                if s in totals:
                    totals[s] += self.weights[r][c]
        return totals

    # ---- encoding ----
    def row_text(self, row: int) -> str:
        out = []
        for c in range(self.columns):
            if self.region(row, c) is Region.CORNER:
                out.append(BLANK * 2)
            else:
                out.append(f"{self.weights[row][c]}{self.stones[row][c]}")
        return "".join(out)

    def lines(self) -> List[str]:
        return [self.row_text(r) for r in range(self.rows)]

    def pretty(self) -> str:
        return "\n".join(self.lines())
