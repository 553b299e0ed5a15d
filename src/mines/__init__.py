"""
Minesweeper game module.

Provides the minefield (Board), the player-visible game state machine
(Game), sessions with a cursor, and the front ends built on them.
"""
from .cell import Cell, Status, symbol
from .errors import MinesError, InvalidConfiguration, AllocationFailure
from .board import Board, BoardConfig
from .game import Game, GameState
from .session import Direction, Session
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "Status",
    "symbol",
    "MinesError",
    "InvalidConfiguration",
    "AllocationFailure",
    "Board",
    "BoardConfig",
    "Game",
    "GameState",
    "Direction",
    "Session",
    "MinesweeperEnv",
]
