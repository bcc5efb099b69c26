import os

PROG = "pushgame"

# cell encoding, two characters per logical cell
EMPTY = "."
BLANK = " "
PLAYERS = ("O", "X")

PLAYER_TYPES = ("0", "1", "H")

PROMPT = "{player}:(R C)> "
PLACED = "Player {player} placed at {row} {col}"
SAVE_MARKER = "s"

LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
LOG_LEVEL = os.environ.get("PUSHGAME_LOG_LEVEL", "WARNING").upper()
