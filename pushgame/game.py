from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

from .board import Board, Direction, Player, Region, opponent
from .config import PLAYERS, SAVE_MARKER

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"[0-9]+")


class PlayerKind(str, Enum):
    HUMAN = "H"
    SCAN = "0"
    GREEDY = "1"

    @property
    def automated(self) -> bool:
        return self is not PlayerKind.HUMAN


# ---- requests a move source can hand to the turn loop ----

@dataclass(frozen=True)
class Move:
    row: int
    col: int


@dataclass(frozen=True)
class SaveRequest:
    path: str


@dataclass(frozen=True)
class Malformed:
    text: str
    reason: str


@dataclass(frozen=True)
class EndOfInput:
    # True when the "End of file" notice was already written with the prompt
    announced: bool = False


Request = Union[Move, SaveRequest, Malformed, EndOfInput]


def parse_request(text: str) -> Request:
    """Turn one line of human input into a request.

    Accepts ``"<row> <col>"`` (one space, digits only, nothing around it) or
    ``"s<path>"``. Everything else comes back as ``Malformed``.
    """
    if not text:
        return Malformed(text, "blank line")
    if text[0] == SAVE_MARKER:
        return SaveRequest(text[1:])
    if text[0] in " \t" or "\t" in text:
        return Malformed(text, "stray whitespace")
    if text.count(" ") != 1 or not text[-1].isdigit():
        return Malformed(text, "expected 'row col'")
    row, col = text.split(" ")
    if not (_NUMBER.fullmatch(row) and _NUMBER.fullmatch(col)):
        return Malformed(text, "non-numeric coordinate")
    return Move(int(row), int(col))


# ---- resolver outcome ----

class Outcome(str, Enum):
    PLACED = "placed"
    PUSHED = "pushed"
    INVALID = "invalid"


@dataclass(frozen=True)
class MoveResult:
    outcome: Outcome
    player: Player
    move: Move
    direction: Optional[Direction] = None
    reason: str = ""

    @property
    def applied(self) -> bool:
        return self.outcome is not Outcome.INVALID


def _default_kinds() -> Dict[Player, PlayerKind]:
    return {p: PlayerKind.HUMAN for p in PLAYERS}


@dataclass
class Game:
    board: Board
    turn: Player = "O"
    kinds: Dict[Player, PlayerKind] = field(default_factory=_default_kinds)

    @property
    def kind(self) -> PlayerKind:
        return self.kinds[self.turn]

    def terminal(self) -> bool:
        return self.board.is_full()

    def play(self, row: int, col: int) -> MoveResult:
        """Classify and apply a move for the current player.

        Interior targets are placements, non-corner border targets are pushes.
        The turn passes only when the move is applied.
        """
        move = Move(row, col)
        region = self.board.region(row, col)
        if region is Region.INTERIOR:
            result = self._place(move)
        elif region is Region.BORDER:
            result = self._push(move)
        else:
            result = self._reject(move, f"{region.value} cell")
        if result.applied:
            logger.debug("%s %s at %d %d", self.turn, result.outcome.value, row, col)
            self.turn = opponent(self.turn)
        return result

    def _reject(self, move: Move, reason: str,
                direction: Optional[Direction] = None) -> MoveResult:
        logger.info("rejected %s move %d %d: %s", self.turn, move.row, move.col, reason)
        return MoveResult(Outcome.INVALID, self.turn, move, direction, reason)

    def _place(self, move: Move) -> MoveResult:
        if not self.board.is_empty(move.row, move.col):
            return self._reject(move, "cell occupied")
        self.board.set_stone(move.row, move.col, self.turn)
        return MoveResult(Outcome.PLACED, self.turn, move)

    def _push(self, move: Move) -> MoveResult:
        b = self.board
        direction = b.push_direction(move.row, move.col)
        line = b.line(move.row, move.col)
        if not b.is_empty(*line[0]):
            return self._reject(move, "edge slot occupied", direction)
        if b.is_empty(*line[1]):
            return self._reject(move, "nothing to push", direction)
        if not b.is_empty(*line[-1]):
            return self._reject(move, "opposite edge occupied", direction)

        gap = next((i for i in range(2, len(line)) if b.is_empty(*line[i])), None)
        if gap is None:
            return self._reject(move, "line is full", direction)
        for i in range(gap, 1, -1):
            b.set_stone(*line[i], b.stone(*line[i - 1]))
        b.set_stone(*line[1], self.turn)
        return MoveResult(Outcome.PUSHED, self.turn, move, direction)

    def scores(self) -> Dict[Player, int]:
        return self.board.scores()

    def winners(self) -> List[Player]:
        """Highest scorer, or both players on a tie."""
        s = self.scores()
        if s["O"] == s["X"]:
            return list(PLAYERS)
        return ["O" if s["O"] > s["X"] else "X"]

    def pretty(self) -> str:
        return self.board.pretty()

