"""
Error hierarchy for the push game.

Startup failures map onto a process exit status; the command line catches
``PushGameError`` once and reports ``message`` on stderr.

Usage:
    from .errors import FileContentsError

    try:
        game = load_game(path, kinds)
    except FileContentsError as e:
        print(e.message, file=sys.stderr)
        return e.exit_status
"""
from __future__ import annotations
from enum import IntEnum
from typing import Any, Dict, Optional

from .config import PROG

__all__ = [
    "ExitStatus",
    "PushGameError",
    "UsageError",
    "PlayerTypeError",
    "FileReadError",
    "FileContentsError",
    "FullBoardError",
    "SaveError",
    "InvalidStateError",
]


class ExitStatus(IntEnum):
    NORMAL = 0
    ARGS = 1
    PLAYER_TYPE = 2
    FILE_READ = 3
    FILE_CONTENTS = 4
    FULL_BOARD = 5
    END_OF_INPUT = 6


class PushGameError(Exception):
    """Base exception for all push game errors.

    Attributes:
        code: Machine-readable error code
        message: Human-readable description, printed on stderr
        context: Extra details for logging
        exit_status: Process status when the error ends the program
    """
    code: str = "PUSHGAME_ERROR"
    default_message: str = "Unexpected error"
    exit_status: ExitStatus = ExitStatus.NORMAL

    def __init__(
        self,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"


# =============================================================================
# Startup errors
# =============================================================================


class UsageError(PushGameError):
    """Wrong number of command line arguments."""
    code = "USAGE"
    default_message = f"Usage: {PROG} typeO typeX fname"
    exit_status = ExitStatus.ARGS


class PlayerTypeError(PushGameError):
    """A player type token is not one of 0, 1 or H."""
    code = "PLAYER_TYPE"
    default_message = "Invalid player type"
    exit_status = ExitStatus.PLAYER_TYPE


class FileReadError(PushGameError):
    code = "FILE_READ"
    default_message = "No file to load from"
    exit_status = ExitStatus.FILE_READ


class FileContentsError(PushGameError):
    """The board file broke the format or the board invariants.

    ``context`` carries the tallies the validator collected.
    """
    code = "FILE_CONTENTS"
    default_message = "Invalid file contents"
    exit_status = ExitStatus.FILE_CONTENTS


class FullBoardError(PushGameError):
    """The loaded board has no empty interior cell, so there is nothing to play."""
    code = "FULL_BOARD"
    default_message = "Full board in load"
    exit_status = ExitStatus.FULL_BOARD


# =============================================================================
# In-game errors
# =============================================================================


class SaveError(PushGameError):
    """The save destination could not be written. The game carries on."""
    code = "SAVE_FAILED"
    default_message = "Save failed"


class InvalidStateError(PushGameError):
    """An automated player produced a move the resolver refused."""
    code = "INVALID_STATE"
    default_message = "Automated player produced an illegal move"
