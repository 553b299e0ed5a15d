"""
Gymnasium environment wrapper for Minesweeper.

Lets automated players drive a session through a standard step/reset
interface.
"""
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig
from .cell import Status
from .session import Session
from .terminal import render_text


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D int8 array of Status values:
        - -2 = flagged cell
        - -1 = unknown cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine (after a loss)

    Actions:
        Discrete action space of size width * height.
        Action i acts on the cell at (i % width, i // width): the first
        action is always safe, and acting on a numbered cell uncovers its
        unflagged neighbors.

    Rewards:
        - +1 for uncovering at least one safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action that changed nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig(9, 9, 10)
        self.render_mode = render_mode
        self.session: Optional[Session] = None

        self.observation_space = spaces.Box(
            low=int(Status.FLAG),
            high=int(Status.MINE),
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game on a fresh board.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.session = Session(Board(self.config, self.np_random))
        self._steps = 0
        return self.session.game.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Act on one cell.

        Args:
            action: Cell index (y * width + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if self.session is None:
            raise RuntimeError("Call reset() before step()")

        game = self.session.game
        self.session.cursor_y, self.session.cursor_x = divmod(
            int(action), self.config.width
        )
        self._steps += 1

        opened_before = game.open_remaining
        self.session.act()
        reward = self._calculate_reward(game.open_remaining != opened_before)
        terminated = not game.is_playing

        return game.get_observation(), reward, terminated, False, self._get_info()

    def _calculate_reward(self, changed: bool) -> float:
        """Reward for the outcome of the last action."""
        game = self.session.game
        if game.is_won:
            return 10.0
        if game.is_lost:
            return -10.0
        if changed:
            return 1.0
        return -0.1

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        game = self.session.game
        return {
            "steps": self._steps,
            "open_remaining": game.open_remaining,
            "total_safe": self.config.total_cells - self.config.num_mines,
            "game_state": game.state.name,
            "valid_actions": len(game.get_valid_actions()),
        }

    def render(self) -> Optional[str]:
        """Render the current game state."""
        if self.session is None:
            return None
        text = render_text(self.session.game)
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that can change the game.

        Returns:
            Boolean array where True = unknown cell or numbered cell with
            the reveal-adjacent action available.
        """
        game = self.session.game
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not game.is_playing:
            return mask
        for x, y in game.get_valid_actions():
            mask[y * self.config.width + x] = True
        obs = game.get_observation()
        numbered = (obs >= Status.ONE) & (obs <= Status.EIGHT)
        mask |= numbered.reshape(-1)
        return mask

