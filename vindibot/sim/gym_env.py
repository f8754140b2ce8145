"""Gymnasium environment for the headless Vindinium arena.

Wrapper autour de `HeadlessArena` pour brancher des outils RL standards.

Observations:
- vecteur de 4 entiers : index dans `CELL_CODES` des voisins N, S, E, W
  (même substitution que la clé d'état du bot)

Actions:
- `Discrete(4)` dans l'ordre de `DIRECTIONS` (n, e, s, w)

Rewards:
- récompense de la case visée, selon la `RewardTable` du héros
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from vindibot.engine.board import CELL_CODES, DIRECTIONS, format_board
from vindibot.rl.environment import Environment
from vindibot.rl.features import NEIGHBOR_ORDER, decode_state
from vindibot.sim.runner import HeadlessArena

_CODE_TO_INDEX: Dict[str, int] = {code: index for index, code in enumerate(CELL_CODES)}


class VindiniumEnv(gym.Env):
    """Environnement Vindinium compatible Gymnasium."""

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        arena: Optional[HeadlessArena] = None,
        render_mode: Optional[str] = None,
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"render_mode non supporté: {render_mode!r}")

        self.arena = arena or HeadlessArena()
        self.render_mode = render_mode
        self._environment = Environment()

        self.observation_space = spaces.Box(
            low=0,
            high=len(CELL_CODES) - 1,
            shape=(len(NEIGHBOR_ORDER),),
            dtype=np.int64,
        )
        self.action_space = spaces.Discrete(len(DIRECTIONS))

    def reset(
        self,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """Réinitialise l'arène."""
        super().reset(seed=seed)

        turn = self.arena.reset()
        self._environment.update(turn.board)
        self._environment.update_agent(turn.hero)
        self._environment.build_rewards(turn.hero.hero_id)
        return self._observation(), {"turn": turn.turn}

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """Exécute une action (index de direction)."""
        direction = DIRECTIONS[int(action)]
        target = self._environment.next_position(direction)
        reward = float(self._environment.reward_for(target))

        result = self.arena.step(direction)
        self._environment.update(result.turn.board)
        self._environment.update_agent(result.turn.hero)

        info = dict(result.info)
        info["gold"] = result.turn.hero.gold
        # Pas d'état terminal : la partie s'arrête au nombre de tours maximal.
        return self._observation(), reward, False, result.done, info

    def render(self) -> Optional[str]:
        if self.render_mode == "ansi":
            return format_board(self._environment.grid)
        return None

    def _observation(self) -> np.ndarray:
        neighbors = decode_state(self._environment.state_at())
        return np.array(
            [_CODE_TO_INDEX[neighbors[direction]] for direction in NEIGHBOR_ORDER],
            dtype=np.int64,
        )


__all__ = ["VindiniumEnv"]
