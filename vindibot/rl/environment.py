"""Environnement courant du bot : plateau, héros et récompenses.

L'environnement est remplacé en bloc à chaque tour (`update` / `update_agent`)
et ne conserve aucun historique. La table des récompenses, elle, n'est
construite qu'une fois par partie via `build_rewards`.
"""

from __future__ import annotations

import random
from typing import Dict, Optional

import numpy as np

from vindibot.engine.board import (
    DIRECTIONS,
    EMPTY,
    BoardSnapshot,
    HeroSnapshot,
    Position,
)
from vindibot.engine.rules import RewardTable
from vindibot.rl.features import encode_state, surroundings


class Environment:
    """Vue du plateau centrée sur le héros contrôlé."""

    def __init__(self) -> None:
        self._grid: np.ndarray | None = None
        self._size = 0
        self._tiles = ""
        self._hero: HeroSnapshot | None = None
        self._rewards: RewardTable | None = None

    # -- Accès -----------------------------------------------------------------

    @property
    def grid(self) -> np.ndarray:
        if self._grid is None:
            raise RuntimeError("update() doit être appelé avant d'accéder au plateau")
        return self._grid

    @property
    def size(self) -> int:
        return self._size

    @property
    def tiles(self) -> str:
        return self._tiles

    @property
    def hero(self) -> HeroSnapshot:
        if self._hero is None:
            raise RuntimeError("update_agent() doit être appelé avant d'accéder au héros")
        return self._hero

    @property
    def rewards(self) -> RewardTable:
        if self._rewards is None:
            raise RuntimeError("build_rewards() doit être appelé avant de consulter les récompenses")
        return self._rewards

    @property
    def has_rewards(self) -> bool:
        return self._rewards is not None

    @property
    def self_hero_code(self) -> str:
        return self.hero.code

    # -- Mises à jour ------------------------------------------------------------

    def build_rewards(self, agent_id: int) -> RewardTable:
        """Construit la table des récompenses pour ``agent_id`` (début de partie)."""

        self._rewards = RewardTable.build(agent_id)
        return self._rewards

    def update(self, board: BoardSnapshot) -> np.ndarray:
        """Remplace le plateau courant (`MalformedBoardError` si incohérent)."""

        grid = board.grid()
        self._grid = grid
        self._size = board.size
        self._tiles = board.tiles
        return grid

    def update_agent(self, hero: HeroSnapshot) -> None:
        self._hero = hero

    # -- Requêtes ----------------------------------------------------------------

    def next_position(self, direction: str) -> Position:
        """Position visée depuis le héros ; ne modifie pas le héros."""

        return self.hero.position.moved(direction, self._size)

    def reward_for(self, position: Position) -> float:
        """Récompense de la case visée (`UnknownCellCodeError` si code inconnu).

        Notre propre code est lu comme une case vide : un déplacement borné au
        bord du plateau ramène sur la case du héros.
        """

        code = str(self.grid[position.row][position.col])
        if code == self.self_hero_code:
            code = EMPTY
        return self.rewards[code]

    def state_at(self, position: Optional[Position] = None) -> str:
        target = position if position is not None else self.hero.position
        return encode_state(self.grid, self._size, target, self.self_hero_code)

    def surroundings(self, position: Optional[Position] = None) -> Dict[str, str]:
        target = position if position is not None else self.hero.position
        return surroundings(self.grid, self._size, target)

    @staticmethod
    def random_direction(rng: random.Random | None = None) -> str:
        """Direction uniforme parmi ``n``, ``e``, ``s``, ``w``."""

        return (rng or random).choice(DIRECTIONS)


__all__ = ["Environment"]
