"""
Errors raised by the Minesweeper core.

Caller mistakes such as out-of-range coordinates are not errors: game
actions simply report that nothing happened.
"""


class MinesError(Exception):
    """Base class for all Minesweeper errors."""


class InvalidConfiguration(MinesError, ValueError):
    """Board dimensions or mine count cannot form a playable board."""


class AllocationFailure(MinesError, MemoryError):
    """Grid storage for a board or game could not be obtained."""
