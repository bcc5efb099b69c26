"""
Shared pytest fixtures for the push game tests.

Boards are described by their interior rows only (two characters per cell,
weight then stone); the fixtures wrap them in an empty border.
"""

import io
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from pushgame.game import Game, PlayerKind
from pushgame.loader import parse_game


def board_text(interior: List[str], player: str = "O") -> str:
    rows = len(interior) + 2
    cols = len(interior[0]) // 2 + 2
    edge = "  " + "0." * (cols - 2) + "  "
    lines = [f"{rows} {cols}", player, edge]
    lines += [f"0.{row}0." for row in interior]
    lines.append(edge)
    return "\n".join(lines) + "\n"


# 3x3 interior, weights 1..9 row-major, nothing played yet
PLAIN = ["1.2.3.", "4.5.6.", "7.8.9."]


@pytest.fixture
def make_text() -> Callable[..., str]:
    return board_text


@pytest.fixture
def make_game() -> Callable[..., Game]:
    def _make(interior: List[str], player: str = "O",
              kinds: Optional[Dict[str, PlayerKind]] = None) -> Game:
        return parse_game(io.StringIO(board_text(interior, player)), kinds)
    return _make


@pytest.fixture
def plain_game(make_game) -> Game:
    return make_game(PLAIN)


@pytest.fixture
def board_file(tmp_path) -> Callable[[str], Path]:
    def _write(text: str, name: str = "board.txt") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path
    return _write
