"""
Cell module for Minesweeper game.

Defines the ground-truth content of a board cell (mine or empty) and the
status a player sees for each cell (unknown, flagged, a number, or a mine).
"""
from enum import Enum, IntEnum, auto


# ============================================================================
# Ground Truth
# ============================================================================

class Cell(Enum):
    """Content of a single board cell."""

    MINE = auto()
    EMPTY = auto()


# ============================================================================
# Player-Visible Status
# ============================================================================

class Status(IntEnum):
    """
    What the player sees at a cell.

    The integer values double as the observation encoding:
        -2: Flagged cell
        -1: Unknown (covered) cell
        0-8: Revealed cell with adjacent mine count
        9: Revealed mine (game over state)
    """

    FLAG = -2
    UNKNOWN = -1
    ZERO = 0
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    MINE = 9

    @property
    def is_number(self) -> bool:
        """Check if status is a revealed count between 1 and 8."""
        return Status.ONE <= self <= Status.EIGHT

    @property
    def is_revealed(self) -> bool:
        """Check if the cell has been uncovered."""
        return self >= Status.ZERO


_SYMBOLS = {
    Status.FLAG: "F",
    Status.UNKNOWN: ".",
    Status.ZERO: " ",
    Status.MINE: "*",
}


def symbol(status: Status) -> str:
    """Single character used to draw a status in text mode."""
    return _SYMBOLS.get(status, str(int(status)))
