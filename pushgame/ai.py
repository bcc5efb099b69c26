from __future__ import annotations
from typing import Callable, Dict, Iterable, Optional, Tuple

from .board import Board, Direction, Pos, opponent
from .game import Game, Move, PlayerKind

# Deterministic strategies for automated players. Each one is a pure function
# of the game and is only called while the interior still has an empty cell.

Strategy = Callable[[Game], Move]


def scan_move(game: Game) -> Move:
    """First empty interior cell: O reads top-left onwards, X bottom-right backwards."""
    reverse = game.turn == "X"
    for r, c in game.board.interior(reverse=reverse):
        if game.board.is_empty(r, c):
            return Move(r, c)
    raise ValueError("no empty interior cell")


# ---- greedy: pushes first, in this exact order ----

def _push_triggers(board: Board, direction: Direction) -> Iterable[Pos]:
    last_row, last_col = board.rows - 1, board.columns - 1
    cols = range(1, last_col)
    rows = range(1, last_row)
    if direction is Direction.DOWN:
        return ((0, c) for c in cols)
    if direction is Direction.LEFT:
        return ((r, last_col) for r in rows)
    if direction is Direction.UP:
        return ((last_row, c) for c in reversed(cols))
    return ((r, 0) for r in reversed(rows))


def push_gain(board: Board, trigger: Pos, player: str) -> Optional[Tuple[int, int]]:
    """(score_if_pushed, score_if_not_pushed) of the opponent's stones for a push.

    Returns None when the line does not meet the push precondition. The walk
    starts next to the triggering edge and stops at the first cell that is not
    an opponent stone.
    """
    line = board.line(*trigger)
    if not board.is_empty(*line[0]) or board.is_empty(*line[1]) \
       or not board.is_empty(*line[-1]):
        return None
    other = opponent(player)
    pushed = not_pushed = 0
    for i in range(1, len(line) - 1):
        # own stones end the walk too, not only gaps
        if board.stone(*line[i]) != other:
            break
        not_pushed += board.weight(*line[i])
        pushed += board.weight(*line[i + 1])
    return pushed, not_pushed


def _push_evaluator(direction: Direction) -> Callable[[Game], Optional[Move]]:
    def evaluate(game: Game) -> Optional[Move]:
        for trigger in _push_triggers(game.board, direction):
            gain = push_gain(game.board, trigger, game.turn)
            if gain is not None and gain[0] < gain[1]:
                return Move(*trigger)
        return None
    evaluate.__name__ = f"push_{direction.value}"
    return evaluate


PUSH_ORDER = (Direction.DOWN, Direction.LEFT, Direction.UP, Direction.RIGHT)
PUSH_EVALUATORS = tuple(_push_evaluator(d) for d in PUSH_ORDER)


def highest_cell(game: Game) -> Move:
    """Greedy placement on the heaviest empty interior cell.

    With the scores level, the first empty cell heavier than the running
    maximum is taken at once, the running maximum starting at the first
    interior cell's weight when that cell is empty. If nothing beats it, the
    first empty cell is taken. Otherwise the heaviest empty cell wins, earliest
    in row-major order on equal weights.
    """
    board = game.board
    scores = game.scores()
    tied = scores["O"] == scores["X"]

    best: Optional[Pos] = None
    best_weight = board.weight(1, 1) if board.is_empty(1, 1) else 0
    for r, c in board.interior():
        if not board.is_empty(r, c):
            continue
        w = board.weight(r, c)
        if tied:
            if w > best_weight:
                return Move(r, c)
        elif best is None or w > best_weight:
            best, best_weight = (r, c), w
    if best is None:
        # tied and nothing beat the starting maximum
        return Move(*board.empty_cells()[0])
    return Move(*best)


def greedy_move(game: Game) -> Move:
    for evaluate in PUSH_EVALUATORS:
        move = evaluate(game)
        if move is not None:
            return move
    return highest_cell(game)


STRATEGIES: Dict[PlayerKind, Strategy] = {
    PlayerKind.SCAN: scan_move,
    PlayerKind.GREEDY: greedy_move,
}


def best_move(game: Game) -> Move:
    """Move for the current player, who must be automated."""
    assert game.kind in STRATEGIES, f"{game.turn} is not an automated player"
    return STRATEGIES[game.kind](game)
