"""Tests pour l'environnement Gymnasium autour de l'arène."""

import numpy as np
import pytest

from vindibot.engine.board import CELL_CODES
from vindibot.sim.gym_env import VindiniumEnv
from vindibot.sim.runner import HeadlessArena

TILES_3X3 = "##$-##" + "  @1[]" + "##  ##"


def _env(max_turns: int = 3, render_mode: str | None = None) -> VindiniumEnv:
    arena = HeadlessArena(size=3, tiles=TILES_3X3, max_turns=max_turns)
    return VindiniumEnv(arena, render_mode=render_mode)


def _indices(*codes: str) -> list[int]:
    return [CELL_CODES.index(code) for code in codes]


class TestVindiniumEnv:
    def test_reset_returns_neighbor_observation(self):
        env = _env()

        observation, info = env.reset(seed=0)

        assert env.observation_space.contains(observation)
        assert observation.tolist() == _indices("$-", "  ", "[]", "  ")
        assert info == {"turn": 0}

    def test_step_rewards_target_cell(self):
        env = _env()
        env.reset(seed=0)

        observation, reward, terminated, truncated, info = env.step(0)  # nord

        assert reward == 100.0
        assert terminated is False
        assert truncated is False
        assert info["outcome"] == "captured"
        assert info["gold"] == 1
        assert observation.tolist() == _indices("$1", "  ", "[]", "  ")

    def test_truncates_at_max_turns(self):
        env = _env(max_turns=2)
        env.reset(seed=0)

        assert env.step(2)[3] is False
        assert env.step(0)[3] is True

    def test_action_space(self):
        env = _env()

        assert env.action_space.n == 4
        assert isinstance(env.action_space.sample(), (int, np.integer))

    def test_ansi_render(self):
        env = _env(render_mode="ansi")
        env.reset(seed=0)

        assert env.render().startswith("\tThe Map (3x3)")
        assert _env().render() is None

    def test_unsupported_render_mode(self):
        with pytest.raises(ValueError):
            _env(render_mode="human")
