import argparse
import logging
import sys
from typing import List, Optional, TextIO

from .ai import best_move
from .config import LOG_FORMAT, LOG_LEVEL, PLACED, PROG, PROMPT
from .errors import ExitStatus, InvalidStateError, PlayerTypeError, PushGameError, SaveError, UsageError
from .game import EndOfInput, Game, Malformed, PlayerKind, Request, SaveRequest, parse_request
from .loader import load_game
from .persistence import save_game

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(context={"detail": message})


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 3:
        raise UsageError(context={"argc": len(argv)})
    p = _ArgumentParser(prog=PROG, add_help=False, description="Push stones grid game")
    p.add_argument("type_o", help="player O type: 0, 1 or H")
    p.add_argument("type_x", help="player X type: 0, 1 or H")
    p.add_argument("fname", help="board file to load")
    args = p.parse_args(argv)
    try:
        args.kinds = {"O": PlayerKind(args.type_o), "X": PlayerKind(args.type_x)}
    except ValueError as e:
        raise PlayerTypeError(context={"types": f"{args.type_o} {args.type_x}"}) from e
    return args


class HumanSource:
    """Reads human moves one line at a time.

    A line cut off by end of input still counts; the prompt after it reports
    the end of input on stderr instead of waiting.
    """

    def __init__(self, stdin: TextIO, stdout: TextIO, stderr: TextIO):
        self.stdin, self.stdout, self.stderr = stdin, stdout, stderr
        self._dry = False

    def request(self, player: str) -> Request:
        prompt = PROMPT.format(player=player)
        if self._dry:
            print(f"{prompt}End of file", file=self.stderr)
            return EndOfInput(announced=True)
        print(prompt, end="", file=self.stdout, flush=True)
        line = self.stdin.readline()
        if not line:
            return EndOfInput()
        if line.endswith("\n"):
            line = line[:-1]
        else:
            self._dry = True
        request = parse_request(line)
        if self._dry and not isinstance(request, SaveRequest):
            print(file=self.stdout)
        return request


def _save(game: Game, path: str, stderr: TextIO) -> None:
    try:
        save_game(game, path)
    except SaveError as e:
        logger.info("%s", e)
        print(e.message, file=stderr)


def play_game(game: Game, stdin: Optional[TextIO] = None,
              stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> ExitStatus:
    """Run turns until the interior is full or human input runs out."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    human = HumanSource(stdin, stdout, stderr)

    print(game.pretty(), file=stdout)
    while not game.terminal():
        player, kind = game.turn, game.kind
        request = best_move(game) if kind.automated else human.request(player)

        if isinstance(request, EndOfInput):
            if not request.announced:
                print("End of file", file=stderr)
            return ExitStatus.END_OF_INPUT
        if isinstance(request, SaveRequest):
            _save(game, request.path, stderr)
            continue
        if isinstance(request, Malformed):
            logger.info("malformed move from %s: %r (%s)", player, request.text, request.reason)
            continue

        result = game.play(request.row, request.col)
        if not result.applied:
            if kind.automated:
                raise InvalidStateError(context={"player": player, "reason": result.reason})
            continue
        if kind.automated:
            print(PLACED.format(player=player, row=request.row, col=request.col), file=stdout)
        print(game.pretty(), file=stdout)
    return ExitStatus.NORMAL


def report_winners(game: Game, stdout: TextIO) -> None:
    print("Winners: " + " ".join(game.winners()), file=stdout)


def run_cli(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None,
            stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> int:
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    try:
        args = parse_args(argv)
        game = load_game(args.fname, args.kinds)
    except PushGameError as e:
        logger.debug("startup failed: %s", e)
        print(e.message, file=stderr)
        return int(e.exit_status)

    status = play_game(game, stdin, stdout, stderr)
    if status is ExitStatus.NORMAL:
        report_winners(game, stdout)
    return int(status)


def setup_logging() -> None:
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.WARNING), format=LOG_FORMAT)


def main() -> None:
    setup_logging()
    # a carriage return is part of the move text, not a line ending
    sys.stdin.reconfigure(newline="\n")
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
