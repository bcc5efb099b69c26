from __future__ import annotations
import logging

from .errors import SaveError
from .game import Game

logger = logging.getLogger(__name__)


def dumps(game: Game) -> str:
    """Game in the board file format, ready to load again."""
    b = game.board
    lines = [f"{b.rows} {b.columns}", game.turn] + b.lines()
    return "\n".join(lines) + "\n"


def save_game(game: Game, path: str) -> bool:
    """Write ``game`` to ``path``. Returns False for an empty path (nothing written).

    Raises SaveError when the destination cannot be written; the game itself is
    left untouched either way.
    """
    if not path:
        logger.debug("save requested without a file name, ignored")
        return False
    try:
        with open(path, "w") as f:
            f.write(dumps(game))
    except OSError as e:
        raise SaveError(context={"path": path, "error": e.strerror}) from e
    logger.info("saved game to %s", path)
    return True
