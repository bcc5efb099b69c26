"""Tests for board file loading and validation."""

import io

import pytest

from pushgame.errors import ExitStatus, FileContentsError, FileReadError, FullBoardError
from pushgame.game import PlayerKind
from pushgame.loader import load_game, parse_dimension, parse_game, read_board, read_line, tally_board

VALID = "4 4\nO\n  0.0.  \n0.3.5.0.\n0.4.1.0.\n  0.0.  \n"


def _load(text):
    return parse_game(io.StringIO(text))


class TestReadLine:
    def test_dry_stream_is_none(self) -> None:
        assert read_line(io.StringIO("")) is None

    def test_strips_newline(self) -> None:
        s = io.StringIO("abc\n\n")
        assert read_line(s) == "abc"
        assert read_line(s) == ""
        assert read_line(s) is None

    def test_partial_last_line(self) -> None:
        assert read_line(io.StringIO("xyz")) == "xyz"


class TestParseDimension:
    @pytest.mark.parametrize("token,expected", [
        ("7", (7, "")),
        ("12x", (12, "x")),
        ("+3", (3, "")),
        ("abc", (0, "abc")),
        (None, (1, "")),
    ])
    def test_leading_integer(self, token, expected) -> None:
        assert parse_dimension(token) == expected


class TestValidBoards:
    def test_loads(self) -> None:
        game = _load(VALID)
        assert game.turn == "O"
        assert (game.board.rows, game.board.columns) == (4, 4)
        assert game.board.weight(1, 2) == 5

    def test_border_zero_invariant(self, make_text) -> None:
        text = read_board(io.StringIO(make_text(["1.2.3.4.", "5.6.7.8."])))
        tally = tally_board(text)
        assert tally.border_zeros == 2 * (text.rows + text.columns) - 8
        assert tally.interior_zeros == 0

    def test_kinds_applied(self, make_text) -> None:
        game = parse_game(io.StringIO(make_text(["1.2."])), {"O": PlayerKind.SCAN, "X": PlayerKind.GREEDY})
        assert game.kinds == {"O": PlayerKind.SCAN, "X": PlayerKind.GREEDY}

    def test_border_stone_from_a_save_is_accepted(self) -> None:
        text = "4 4\nX\n  0.0.  \n0.3O5.0.\n0.4X1.0.\n  0X0.  \n"
        game = _load(text)
        assert game.board.stone(3, 1) == "X"

    def test_trailing_content_is_ignored(self) -> None:
        assert _load(VALID + "garbage\n").board.rows == 4

    def test_missing_final_newline(self) -> None:
        assert _load(VALID[:-1]).board.rows == 4

    def test_load_game_from_file(self, board_file) -> None:
        path = board_file(VALID)
        game = load_game(str(path), {"O": PlayerKind.HUMAN, "X": PlayerKind.SCAN})
        assert game.kinds["X"] is PlayerKind.SCAN


class TestInvalidBoards:
    @pytest.mark.parametrize("text", [
        "",                                                          # empty file
        "4  4\nO\n  0.0.  \n0.3.5.0.\n0.4.1.0.\n  0.0.  \n",         # two spaces
        "4 4 \nO\n  0.0.  \n0.3.5.0.\n0.4.1.0.\n  0.0.  \n",         # trailing space
        "4x 4\nO\n  0.0.  \n0.3.5.0.\n0.4.1.0.\n  0.0.  \n",         # garbage after rows
        "4 4x\nO\n  0.0.  \n0.3.5.0.\n0.4.1.0.\n  0.0.  \n",         # garbage after columns
        "4 4\no\n  0.0.  \n0.3.5.0.\n0.4.1.0.\n  0.0.  \n",          # lowercase player
        "4 4\nOX\n  0.0.  \n0.3.5.0.\n0.4.1.0.\n  0.0.  \n",         # two players
        "4 4\nZ\n  0.0.  \n0.3.5.0.\n0.4.1.0.\n  0.0.  \n",          # unknown player
        "4 4\nO\n  0.0.  \n0.3.0.0.\n0.4.1.0.\n  0.0.  \n",          # interior zero
        "4 4\nO\n  0.0.  \n1.3.5.0.\n0.4.1.0.\n  0.0.  \n",          # border weight
        "4 4\nO\n 00.0.  \n0.3.5.0.\n0.4.1.0.\n  0.0.  \n",          # corner not blank
        "4 4\nO\n  0.0.  \n0.3.5Y0.\n0.4.1.0.\n  0.0.  \n",          # bad stone
        "4 4\nO\n  0.0.  \n0.3.a.0.\n0.4.1.0.\n  0.0.  \n",          # bad weight
        "4 4\nO\n  0.0.  \n0.3.5.0.\n0.4.1.0.\n",                    # missing row
        "4 4\nO\n  0.0.  \n0.3.5.0.0.\n0.4.1.0.\n  0.0.  \n",        # long row
        "4 4\nO\n  0.0.  \n0.3.5.\n0.4.1.0.\n  0.0.  \n",            # short row
        "2 4\nO\n  0.0.  \n  0.0.  \n",                              # too few rows
        "4\nO\n  0.0.  \n0.3.5.0.\n0.4.1.0.\n  0.0.  \n",            # one dimension
    ])
    def test_rejected(self, text) -> None:
        with pytest.raises(FileContentsError) as exc_info:
            _load(text)
        assert exc_info.value.exit_status == ExitStatus.FILE_CONTENTS
        assert exc_info.value.message == "Invalid file contents"

    def test_full_board(self) -> None:
        text = "4 4\nO\n  0.0.  \n0.3O5X0.\n0.4X1O0.\n  0.0.  \n"
        with pytest.raises(FullBoardError) as exc_info:
            _load(text)
        assert exc_info.value.exit_status == ExitStatus.FULL_BOARD

    def test_contents_checked_before_fullness(self) -> None:
        text = "4 4\no\n  0.0.  \n0.3O5X0.\n0.4X1O0.\n  0.0.  \n"
        with pytest.raises(FileContentsError):
            _load(text)

    @pytest.mark.parametrize("data", [
        b"3 4\r\nO\r\n  0.0.  \r\n0.5.6.0.\r\n  0.0.  \r\n",
        b"3 4\rO\r  0.0.  \r0.5.6.0.\r  0.0.  \r",
        b"3 4\nO\n  0.0.  \n0.5.6.0.\r\n  0.0.  \n",
    ])
    def test_carriage_returns_are_content(self, tmp_path, data) -> None:
        path = tmp_path / "crlf.txt"
        path.write_bytes(data)
        with pytest.raises(FileContentsError):
            load_game(str(path), {})

    def test_unreadable_file(self, tmp_path) -> None:
        with pytest.raises(FileReadError) as exc_info:
            load_game(str(tmp_path / "missing.txt"), {})
        assert exc_info.value.exit_status == ExitStatus.FILE_READ
