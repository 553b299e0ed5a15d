"""
Board module for Minesweeper game.

Owns the ground-truth minefield: random mine placement, the one-off mine
relocation that makes the first move safe, and adjacent mine counts.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .cell import Cell, Status
from .errors import AllocationFailure, InvalidConfiguration

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int
    height: int
    num_mines: int

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values can form a playable board."""
        if self.width < 1 or self.height < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.num_mines < 1:
            raise InvalidConfiguration("Board needs at least one mine")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise InvalidConfiguration(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.width * self.height


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Minesweeper minefield.

    The mine grid is fixed at construction. The only later mutation is
    relocate_mine_away_from, which swaps a mine with an empty cell and so
    keeps the mine count unchanged.
    """

    def __init__(
        self,
        config: BoardConfig,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Create a board and distribute its mines.

        Args:
            config: Board dimensions and mine count.
            rng: Random generator for placement and relocation.

        Raises:
            AllocationFailure: If the mine grid cannot be allocated.
        """
        self._config = config
        self._rng = rng if rng is not None else np.random.default_rng()
        self._mines = allocate_grid((config.height, config.width), bool)
        self._place_mines()

    @classmethod
    def from_layout(
        cls,
        rows: Sequence[str],
        rng: Optional[np.random.Generator] = None,
    ) -> "Board":
        """
        Build a board from a drawn layout.

        Each string is one row; '*' marks a mine, any other character an
        empty cell.

        Raises:
            InvalidConfiguration: If rows are ragged or the mine count is
                out of range.
        """
        widths = {len(row) for row in rows}
        if len(widths) > 1:
            raise InvalidConfiguration("Layout rows must have equal length")
        width = widths.pop() if widths else 0
        num_mines = sum(row.count("*") for row in rows)
        config = BoardConfig(width, len(rows), num_mines)

        board = cls.__new__(cls)
        board._config = config
        board._rng = rng if rng is not None else np.random.default_rng()
        board._mines = np.array(
            [[ch == "*" for ch in row] for row in rows], dtype=bool
        )
        return board

    # ========================================================================
    # Mine Placement (Low-level)
    # ========================================================================

    def _place_mines(self) -> None:
        """Mark the first num_mines cells of a random permutation as mines."""
        order = self._rng.permutation(self._config.total_cells)
        self._mines.flat[order[:self._config.num_mines]] = True
        logger.debug(
            "Placed %d mines on %dx%d board",
            self._config.num_mines, self._config.width, self._config.height,
        )

    def relocate_mine_away_from(self, x: int, y: int) -> bool:
        """
        Move the mine at (x, y), if any, to some empty cell.

        Empty cells are scanned in a fresh random order and the first one
        found takes the mine.

        Returns:
            True if a mine was moved, False if (x, y) was already empty.
        """
        if not self._mines[y, x]:
            return False
        for index in self._rng.permutation(self._config.total_cells):
            if not self._mines.flat[index]:
                self._mines.flat[index] = True
                self._mines[y, x] = False
                target_y, target_x = divmod(int(index), self._config.width)
                logger.debug(
                    "Relocated mine from (%d, %d) to (%d, %d)",
                    x, y, target_x, target_y,
                )
                return True
        return False

    # ========================================================================
    # Neighbor Utilities
    # ========================================================================

    def is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self._config.width and 0 <= y < self._config.height

    def neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            x: Column of center cell.
            y: Row of center cell.

        Returns:
            List of (x, y) tuples for in-bounds neighbors.
        """
        result = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                if self.is_valid_position(x + delta_x, y + delta_y):
                    result.append((x + delta_x, y + delta_y))
        return result

    # ========================================================================
    # Queries
    # ========================================================================

    def status_at(self, x: int, y: int) -> Status:
        """
        Status a player would see on uncovering (x, y).

        Returns:
            Status.MINE for a mine, otherwise the number of mines among
            the up to eight surrounding cells.
        """
        if self._mines[y, x]:
            return Status.MINE
        window = self._mines[max(y - 1, 0):y + 2, max(x - 1, 0):x + 2]
        return Status(int(np.count_nonzero(window)))

    def cell_at(self, x: int, y: int) -> Cell:
        """Get the ground-truth content of (x, y)."""
        return Cell.MINE if self._mines[y, x] else Cell.EMPTY

    def is_mine(self, x: int, y: int) -> bool:
        """Check if (x, y) holds a mine."""
        return bool(self._mines[y, x])

    def mine_positions(self) -> List[Tuple[int, int]]:
        """All mine coordinates as (x, y) tuples, row by row."""
        ys, xs = np.nonzero(self._mines)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def mine_count(self) -> int:
        """Count mines currently on the grid."""
        return int(np.count_nonzero(self._mines))

    @property
    def config(self) -> BoardConfig:
        """Board configuration."""
        return self._config

    @property
    def width(self) -> int:
        return self._config.width

    @property
    def height(self) -> int:
        return self._config.height

    @property
    def num_mines(self) -> int:
        return self._config.num_mines

    @property
    def mine_mask(self) -> np.ndarray:
        """Read-only view of the mine grid, indexed [y, x]."""
        view = self._mines.view()
        view.flags.writeable = False
        return view

    def __repr__(self) -> str:
        return (
            f"Board(width={self.width}, height={self.height}, "
            f"num_mines={self.num_mines})"
        )


def allocate_grid(shape: Tuple[int, int], dtype: type) -> np.ndarray:
    """Allocate a zeroed grid, reporting failure as AllocationFailure."""
    try:
        return np.zeros(shape, dtype=dtype)
    except (MemoryError, ValueError) as exc:
        raise AllocationFailure(
            f"Cannot allocate {shape[1]}x{shape[0]} grid"
        ) from exc
