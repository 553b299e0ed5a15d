"""
Game module for Minesweeper.

Tracks what the player has uncovered on top of a Board: reveal with
flood-fill through zero cells, the "reveal adjacent" chord, flag toggling,
and win/lose detection.
"""
import logging
from collections import deque
from enum import Enum, auto
from typing import Iterable, List, Tuple

import numpy as np

from .board import Board, allocate_grid
from .cell import Status

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    UNDECIDED = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    Player-visible state of one Minesweeper game.

    Every cell starts UNKNOWN. The game holds a reference to its board for
    ground-truth lookups but never changes it. Once the game is WON or LOST
    all actions become no-ops.
    """

    def __init__(self, board: Board) -> None:
        """
        Start a game on the given board.

        Raises:
            AllocationFailure: If the status grid cannot be allocated.
        """
        self._board = board
        self._width = board.width
        self._height = board.height
        self._open_remaining = board.width * board.height
        self._state = GameState.UNDECIDED
        self._cells = allocate_grid((board.height, board.width), np.int8)
        self._cells.fill(Status.UNKNOWN)

    # ========================================================================
    # Game Actions
    # ========================================================================

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Toggle flag on a covered cell.

        Returns:
            True if the flag was toggled, False otherwise.
        """
        if not self._accepts_actions_at(x, y):
            return False
        status = self._cells[y, x]
        if status == Status.UNKNOWN:
            self._cells[y, x] = Status.FLAG
        elif status == Status.FLAG:
            self._cells[y, x] = Status.UNKNOWN
        else:
            return False
        return True

    def reveal(self, x: int, y: int) -> bool:
        """
        Uncover a cell.

        Only UNKNOWN cells can be uncovered; flags must be toggled off
        first. A mine loses the game. A zero cell uncovers its neighbors,
        spreading until the open region is bordered by numbered cells.

        Returns:
            True if the cell was uncovered, False otherwise.
        """
        if not self._accepts_actions_at(x, y):
            return False
        if self._cells[y, x] != Status.UNKNOWN:
            return False
        self._cascade([(x, y)])
        return True

    def reveal_adjacent(self, x: int, y: int) -> bool:
        """
        Uncover every UNKNOWN neighbor of a numbered cell.

        Flagged neighbors are left alone. Available only on cells showing
        1 to 8. Each neighbor's reveal, cascade included, completes before
        the next neighbor is considered.

        Returns:
            True if the action was available, False otherwise.
        """
        if not self.can_reveal_adjacent(x, y):
            return False
        for nx, ny in self._board.neighbors(x, y):
            if not self.is_playing:
                break
            self.reveal(nx, ny)
        return True

    # ========================================================================
    # Reveal Propagation (Low-level)
    # ========================================================================

    def _cascade(self, positions: Iterable[Tuple[int, int]]) -> None:
        """Uncover positions breadth-first, queueing neighbors of zeros."""
        queue = deque(positions)
        while queue and self._state is GameState.UNDECIDED:
            x, y = queue.popleft()
            if self._cells[y, x] != Status.UNKNOWN:
                continue
            if self._uncover(x, y) == Status.ZERO:
                queue.extend(self._unknown_neighbors(x, y))

    def _uncover(self, x: int, y: int) -> Status:
        """Uncover a single UNKNOWN cell and apply win/lose rules."""
        status = self._board.status_at(x, y)
        if status == Status.MINE:
            self._open_remaining = 0
            self._state = GameState.LOST
            self._set_all_mines(Status.MINE)
            logger.info("Game lost: mine uncovered at (%d, %d)", x, y)
            return status

        self._cells[y, x] = status
        self._open_remaining -= 1
        if self._open_remaining == self._board.num_mines:
            self._state = GameState.WON
            self._set_all_mines(Status.FLAG)
            logger.info("Game won")
        return status

    def _unknown_neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        return [
            (nx, ny) for nx, ny in self._board.neighbors(x, y)
            if self._cells[ny, nx] == Status.UNKNOWN
        ]

    def _set_all_mines(self, status: Status) -> None:
        """Show every mine on the board with the given status."""
        self._cells[self._board.mine_mask] = status

    def _accepts_actions_at(self, x: int, y: int) -> bool:
        return (
            self._state is GameState.UNDECIDED
            and self._board.is_valid_position(x, y)
        )

    # ========================================================================
    # State Accessors
    # ========================================================================

    def status_at(self, x: int, y: int) -> Status:
        """Get the status the player sees at (x, y)."""
        return Status(int(self._cells[y, x]))

    def can_reveal_adjacent(self, x: int, y: int) -> bool:
        """Check if the reveal-adjacent action is available at (x, y)."""
        if not self._accepts_actions_at(x, y):
            return False
        return self.status_at(x, y).is_number

    @property
    def board(self) -> Board:
        return self._board

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self._state

    @property
    def open_remaining(self) -> int:
        """Cells not yet uncovered, mines included; 0 after a loss."""
        return self._open_remaining

    @property
    def is_first_move(self) -> bool:
        """Check if nothing has been uncovered yet."""
        return self._open_remaining == self._width * self._height

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._state is GameState.UNDECIDED

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._state is GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._state is GameState.LOST

    def get_observation(self) -> np.ndarray:
        """
        Get game state as numpy array.

        Returns:
            int8 array of shape (height, width) holding Status values:
                -2 = flagged
                -1 = unknown
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        return self._cells.copy()

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can still be uncovered.

        Returns:
            List of (x, y) positions whose status is UNKNOWN.
        """
        ys, xs = np.nonzero(self._cells == Status.UNKNOWN)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]
