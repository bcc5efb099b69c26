"""Board file loading and validation.

The whole file is read before anything is checked: a bad header never stops
the read, it only poisons the dimensions so validation fails afterwards.
"""
from __future__ import annotations
import logging
import re
import string
from dataclasses import dataclass, field
from typing import Dict, List, Optional, TextIO, Tuple

from .board import Board
from .config import BLANK, EMPTY, PLAYERS
from .errors import FileContentsError, FileReadError, FullBoardError
from .game import Game, PlayerKind

logger = logging.getLogger(__name__)

BAD_DIMENSION = 1
BAD_PLAYER = "f"

_LEADING_INT = re.compile(r"\s*[+-]?[0-9]+")
_STONES = frozenset((EMPTY,) + PLAYERS)
_DIGITS = frozenset(string.digits)


def read_line(stream: TextIO) -> Optional[str]:
    """Next line without its newline, or None when the stream is already dry."""
    line = stream.readline()
    if not line:
        return None
    return line[:-1] if line.endswith("\n") else line


def parse_dimension(token: Optional[str]) -> Tuple[int, str]:
    """Leading integer of ``token`` and whatever follows it."""
    if token is None:
        return BAD_DIMENSION, ""
    m = _LEADING_INT.match(token)
    if not m:
        return 0, token
    return int(m.group()), token[m.end():]


@dataclass
class BoardText:
    """Raw file contents, before validation."""
    rows: int
    columns: int
    player: str
    lines: List[str]
    leftover: List[str] = field(default_factory=list)


def read_board(stream: TextIO) -> BoardText:
    header = read_line(stream) or ""
    leftover: List[str] = []
    if header.count(" ") != 1:
        rows = columns = BAD_DIMENSION
    else:
        tokens = [t for t in header.split(" ") if t]
        rows, rest_r = parse_dimension(tokens[0] if tokens else None)
        columns, rest_c = parse_dimension(tokens[1] if len(tokens) > 1 else None)
        leftover = [rest for rest in (rest_r, rest_c) if rest]

    player_line = read_line(stream)
    player = player_line if player_line is not None and len(player_line) == 1 else BAD_PLAYER

    lines: List[str] = []
    for _ in range(max(rows, 0)):
        line = read_line(stream)
        if line is None:
            # stream is dry, the row count check reports the rest
            break
        lines.append(line)
    return BoardText(rows, columns, player, lines, leftover)


@dataclass
class Tally:
    border_zeros: int = 0
    interior_zeros: int = 0
    invalid_chars: int = 0
    blank_corners: bool = True
    short_rows: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "border_zeros": self.border_zeros,
            "interior_zeros": self.interior_zeros,
            "invalid_chars": self.invalid_chars,
            "blank_corners": int(self.blank_corners),
            "short_rows": self.short_rows,
        }


def _check_pair(weight: str, stone: str, tally: Tally, interior: bool) -> None:
    if weight == "0":
        if interior:
            tally.interior_zeros += 1
        else:
            tally.border_zeros += 1
    elif weight not in _DIGITS:
        tally.invalid_chars += 1
    if stone not in _STONES:
        tally.invalid_chars += 1


def tally_board(text: BoardText) -> Tally:
    """Scan every logical cell once, counting what the invariants care about."""
    tally = Tally()
    last_row, last_col = text.rows - 1, text.columns - 1
    for r, line in enumerate(text.lines):
        if len(line) != 2 * text.columns:
            tally.short_rows += 1
            continue
        for c in range(text.columns):
            weight, stone = line[2 * c], line[2 * c + 1]
            edge_row, edge_col = r in (0, last_row), c in (0, last_col)
            if edge_row and edge_col:
                if weight != BLANK or stone != BLANK:
                    tally.blank_corners = False
            else:
                _check_pair(weight, stone, tally, interior=not (edge_row or edge_col))
    return tally


def validate(text: BoardText) -> Board:
    """Raise FileContentsError unless ``text`` is a well-formed board."""
    tally = tally_board(text)
    rows, columns = text.rows, text.columns
    problems = []
    if rows < 3 or columns < 3:
        problems.append("dimensions")
    if text.leftover:
        problems.append("dimension garbage")
    if not (text.player.isupper() and text.player in PLAYERS):
        problems.append("player")
    if tally.border_zeros != 2 * (rows + columns) - 8 or not tally.blank_corners:
        problems.append("border")
    if tally.interior_zeros or tally.invalid_chars:
        problems.append("cells")
    if tally.short_rows or len(text.lines) != rows:
        problems.append("shape")
    if problems:
        logger.debug("board rejected: %s %s", problems, tally.as_dict())
        raise FileContentsError(context={"problems": ",".join(problems)})
    return Board.from_rows(text.lines)


def parse_game(stream: TextIO, kinds: Optional[Dict[str, PlayerKind]] = None) -> Game:
    """Validated game from an open board stream.

    Raises FileContentsError, or FullBoardError when the board has nothing
    left to play.
    """
    text = read_board(stream)
    board = validate(text)
    game = Game(board, text.player)
    if kinds:
        game.kinds.update(kinds)
    if game.terminal():
        raise FullBoardError()
    return game


def load_game(path: str, kinds: Dict[str, PlayerKind]) -> Game:
    try:
        f = open(path, "r", newline="\n", errors="replace")
    except OSError as e:
        raise FileReadError(context={"path": path, "error": e.strerror}) from e
    with f:
        game = parse_game(f, kinds)
    logger.debug("loaded %dx%d board from %s, %s to play",
                 game.board.rows, game.board.columns, path, game.turn)
    return game
