import io

from .game import PlayerKind
from .ai import best_move
from .loader import parse_game

BOARD = "\n".join([
    "4 4",
    "O",
    "  0.0.  ",
    "0.3.5.0.",
    "0.4.1.0.",
    "  0.0.  ",
]) + "\n"

def _assert(cond, msg):
    if not cond:
        raise AssertionError(msg)

def run():
    # 1) Basic move legality
    g = parse_game(io.StringIO(BOARD))
    _assert(g.play(1, 1).applied, "First move should be legal")
    _assert(not g.play(1, 1).applied, "Cell already taken should be illegal")
    _assert(g.turn == "X", "Rejected move must not pass the turn")

    # 2) Push from the top edge shoves the column down
    _assert(g.play(0, 1).applied, "Push down should be legal")
    _assert(g.board.stone(1, 1) == "X" and g.board.stone(2, 1) == "O", "Push did not shift")

    # 3) Automated players fill the board without looping
    g = parse_game(io.StringIO(BOARD), {"O": PlayerKind.GREEDY, "X": PlayerKind.SCAN})
    seen = set()
    for _ in range(50):
        if g.terminal():
            break
        m = best_move(g)
        _assert(g.play(m.row, m.col).applied, f"Automated move {m} rejected")
        state = (g.turn, g.board.pretty())
        _assert(state not in seen, "Loop detected")
        seen.add(state)
    _assert(g.terminal(), "Board should be full")
    _assert(g.winners() in (["O"], ["X"], ["O", "X"]), "Invalid winner")
    print("All tests passed.")

if __name__ == "__main__":
    run()
