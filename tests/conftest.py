"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mines import Board, BoardConfig, Game, Session


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator for reproducible boards."""
    return np.random.default_rng(1234)


@pytest.fixture
def default_board(rng: np.random.Generator) -> Board:
    """Create a 9x9 board with 10 mines."""
    return Board(BoardConfig(9, 9, 10), rng)


@pytest.fixture
def corner_board() -> Board:
    """3x3 board with mines at (0, 0) and (2, 2)."""
    return Board.from_layout([
        "*..",
        "...",
        "..*",
    ])


@pytest.fixture
def wall_board() -> Board:
    """4x4 board with a full row of mines at y=2."""
    return Board.from_layout([
        "....",
        "....",
        "****",
        "....",
    ])


@pytest.fixture
def single_safe_board() -> Board:
    """2x1 board whose only safe cell is (1, 0)."""
    return Board.from_layout(["*."])


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def corner_game(corner_board: Board) -> Game:
    """Fresh game on the corner board."""
    return Game(corner_board)


@pytest.fixture
def wall_game(wall_board: Board) -> Game:
    """Fresh game on the wall board."""
    return Game(wall_board)


@pytest.fixture
def corner_session(corner_board: Board) -> Session:
    """Session on the corner board with the cursor at (0, 0)."""
    return Session(corner_board)
