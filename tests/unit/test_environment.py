"""
Unit tests for the Gymnasium environment.
"""
import pytest
import numpy as np
from mines import Board, BoardConfig, MinesweeperEnv, Session, Status


@pytest.fixture
def env() -> MinesweeperEnv:
    """9x9 environment with 10 mines."""
    return MinesweeperEnv(BoardConfig(9, 9, 10), render_mode="ansi")


class TestReset:
    """Test environment reset."""

    def test_observation_all_unknown(self, env: MinesweeperEnv) -> None:
        obs, info = env.reset(seed=0)
        assert obs.shape == (9, 9)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)
        assert info["game_state"] == "UNDECIDED"
        assert info["open_remaining"] == 81

    def test_observation_in_space(self, env: MinesweeperEnv) -> None:
        obs, _ = env.reset(seed=0)
        assert env.observation_space.contains(obs)

    def test_same_seed_same_board(self, env: MinesweeperEnv) -> None:
        env.reset(seed=11)
        first = env.session.board.mine_positions()
        env.reset(seed=11)
        assert env.session.board.mine_positions() == first

    def test_step_before_reset_raises(self) -> None:
        with pytest.raises(RuntimeError):
            MinesweeperEnv().step(0)


class TestStep:
    """Test environment steps."""

    def test_first_step_is_safe(self, env: MinesweeperEnv) -> None:
        """The first action never lands on a mine."""
        for seed in range(20):
            env.reset(seed=seed)
            obs, reward, terminated, truncated, info = env.step(40)
            assert info["game_state"] != "LOST"
            assert obs[4, 4] != -1
            assert truncated is False

    def test_observation_matches_game(self, env: MinesweeperEnv) -> None:
        env.reset(seed=2)
        obs, *_ = env.step(0)
        assert np.array_equal(obs, env.session.game.get_observation())

    def test_noop_action_penalized(self) -> None:
        """Acting on an already open zero cell changes nothing."""
        env = MinesweeperEnv(BoardConfig(5, 1, 1))
        env.reset(seed=0)
        env.session = Session(Board.from_layout(["..*.."]))

        _, reward, terminated, _, info = env.step(0)
        assert reward == 1.0
        assert terminated is False
        assert info["open_remaining"] == 3

        _, reward, terminated, _, info = env.step(0)
        assert reward == pytest.approx(-0.1)
        assert terminated is False
        assert info["open_remaining"] == 3

    def test_chord_without_unknown_neighbors_penalized(self) -> None:
        """A chord that finds nothing to open is not progress."""
        env = MinesweeperEnv(BoardConfig(5, 1, 2))
        env.reset(seed=0)
        env.session = Session(Board.from_layout(["*..*."]))
        env.session.game.toggle_flag(0, 0)

        _, reward, _, _, _ = env.step(1)
        assert reward == 1.0
        _, reward, _, _, _ = env.step(1)
        assert reward == 1.0
        assert env.session.game.status_at(2, 0) == Status.ONE

        _, reward, terminated, _, _ = env.step(1)
        assert reward == pytest.approx(-0.1)
        assert terminated is False

    def test_win_rewarded(self) -> None:
        """Opening the only safe cell wins."""
        env = MinesweeperEnv(BoardConfig(2, 1, 1))
        env.reset(seed=0)
        _, reward, terminated, _, info = env.step(0)
        assert reward == 10.0
        assert terminated is True
        assert info["game_state"] == "WON"

    def test_action_mask(self, env: MinesweeperEnv) -> None:
        env.reset(seed=0)
        assert env.get_action_mask().all()
        env.step(0)
        mask = env.get_action_mask()
        obs = env.session.game.get_observation().reshape(-1)
        assert not mask[obs == 0].any()


class TestRender:
    """Test rendering."""

    def test_ansi_render(self, env: MinesweeperEnv) -> None:
        env.reset(seed=0)
        text = env.render()
        assert len(text.splitlines()) == 9
