"""
Session module for Minesweeper.

A session is one player's game: the board, the game on top of it, and the
cursor the player moves around. Front ends drive play through a session so
that the first move is always made safe.
"""
from enum import Enum
from typing import Optional

import numpy as np

from .board import Board, BoardConfig
from .cell import Status
from .game import Game


class Direction(Enum):
    """Cursor movement directions as (dx, dy) steps."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)


class Session:
    """One board, its game and a cursor."""

    def __init__(self, board: Board, game: Optional[Game] = None) -> None:
        self.board = board
        self.game = game if game is not None else Game(board)
        self.cursor_x = 0
        self.cursor_y = 0

    @classmethod
    def new(
        cls,
        width: int,
        height: int,
        num_mines: int,
        rng: Optional[np.random.Generator] = None,
    ) -> "Session":
        """
        Create a session on a freshly generated board.

        Raises:
            InvalidConfiguration: If the board parameters are invalid.
            AllocationFailure: If grid storage cannot be allocated.
        """
        return cls(Board(BoardConfig(width, height, num_mines), rng))

    def move(self, direction: Direction, skipping: bool = False) -> None:
        """
        Move the cursor one cell, stopping at the edge.

        With skipping, keep going until a cell that is not an uncovered
        zero, or the edge, is reached.
        """
        dx, dy = direction.value
        while self.board.is_valid_position(
            self.cursor_x + dx, self.cursor_y + dy
        ):
            self.cursor_x += dx
            self.cursor_y += dy
            if not skipping or self.cursor_status != Status.ZERO:
                break

    def act(self) -> bool:
        """
        Primary action at the cursor.

        The first action of a session moves any mine away from the cursor
        before uncovering. Numbered cells uncover their unflagged
        neighbors; other cells are uncovered themselves.

        Returns:
            True if the game changed.
        """
        x, y = self.cursor_x, self.cursor_y
        if self.game.is_first_move and self.game.is_playing:
            self.board.relocate_mine_away_from(x, y)
        if self.game.can_reveal_adjacent(x, y):
            return self.game.reveal_adjacent(x, y)
        return self.game.reveal(x, y)

    def toggle_flag(self) -> bool:
        """Toggle the flag under the cursor."""
        return self.game.toggle_flag(self.cursor_x, self.cursor_y)

    @property
    def cursor_status(self) -> Status:
        return self.game.status_at(self.cursor_x, self.cursor_y)

    @property
    def extended_action_available(self) -> bool:
        """Check if acting at the cursor would reveal its neighbors."""
        return self.game.can_reveal_adjacent(self.cursor_x, self.cursor_y)

    @property
    def is_over(self) -> bool:
        return not self.game.is_playing
