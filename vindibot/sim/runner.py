"""Arène headless pour jouer des parties Vindinium en local.

L'arène applique les règles de déplacement du serveur officiel au seul héros
contrôlé ; les autres héros restent immobiles. Elle produit les mêmes
snapshots que le client réseau, ce qui permet d'exercer la boucle d'agent sans
serveur :

- case vide : le héros s'y déplace
- bois, héros adverse, mine déjà possédée : le héros ne bouge pas
- taverne : ``TAVERN_PRICE`` or contre ``TAVERN_HEAL`` points de vie
- mine neutre ou adverse : capturée au prix de ``MINE_CAPTURE_COST`` points de
  vie ; si la vie tombe à zéro, le héros réapparaît et perd ses mines

Chaque fin de tour coûte ``THIRST_PER_TURN`` point de vie (sans descendre
sous 1) et rapporte une pièce d'or par mine possédée.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np

from vindibot.engine.board import (
    EMPTY,
    NEUTRAL_MINE,
    TAVERN,
    BoardSnapshot,
    HeroSnapshot,
    Position,
    TurnSnapshot,
    count_cells,
    find_cells,
    grid_to_tiles,
    hero_code,
    mine_code,
    parse_tiles,
)
from vindibot.engine.rules import (
    MAX_LIFE,
    MINE_CAPTURE_COST,
    TAVERN_HEAL,
    TAVERN_PRICE,
    THIRST_PER_TURN,
)
from vindibot.engine.serialize import turn_to_payload
from vindibot.rl.policies import AgentPolicy

logger = logging.getLogger(__name__)

DEFAULT_MAP_SIZE = 6
DEFAULT_MAP_TILES = "".join(
    (
        "##  $-    ##",
        "  @1    []  ",
        "    ##      ",
        "  $-    ##  ",
        "      $2  @2",
        "##  []    ##",
    )
)


@dataclass(frozen=True)
class StepResult:
    """Résultat d'un appel à HeadlessArena.step()."""

    turn: TurnSnapshot
    reward: float
    done: bool
    info: Dict[str, Any]


class HeadlessArena:
    """Arène locale pour un héros (les autres héros sont du décor)."""

    def __init__(
        self,
        *,
        size: int = DEFAULT_MAP_SIZE,
        tiles: str = DEFAULT_MAP_TILES,
        hero_id: int = 1,
        max_turns: int = 300,
    ) -> None:
        if max_turns <= 0:
            raise ValueError(f"max_turns doit être strictement positif (reçu: {max_turns})")

        initial_grid = parse_tiles(size, tiles)
        positions = find_cells(initial_grid, hero_code(hero_id))
        if len(positions) != 1:
            raise ValueError(
                f"Le plateau doit contenir exactement un héros {hero_code(hero_id)} "
                f"(trouvés: {len(positions)})"
            )

        self._size = size
        self._initial_tiles = tiles
        self._hero_id = hero_id
        self._max_turns = max_turns
        self._spawn = positions[0]
        self.reset()

    # -- Accès -----------------------------------------------------------------

    @property
    def size(self) -> int:
        return self._size

    @property
    def grid(self) -> np.ndarray:
        return self._grid.copy()

    @property
    def turn(self) -> int:
        return self._turn

    @property
    def max_turns(self) -> int:
        return self._max_turns

    @property
    def done(self) -> bool:
        return self._turn >= self._max_turns

    @property
    def mine_count(self) -> int:
        return count_cells(self._grid).get(mine_code(self._hero_id), 0)

    def hero(self) -> HeroSnapshot:
        return HeroSnapshot(
            hero_id=self._hero_id,
            life=self._life,
            gold=self._gold,
            position=self._position,
            name="vindibot",
            mine_count=self.mine_count,
            spawn_position=self._spawn,
        )

    def snapshot(self) -> TurnSnapshot:
        """État courant sous la forme reçue par le bot."""

        return TurnSnapshot(
            board=BoardSnapshot(size=self._size, tiles=grid_to_tiles(self._grid)),
            hero=self.hero(),
            turn=self._turn,
            max_turns=self._max_turns,
            finished=self.done,
        )

    def payload(self) -> Dict[str, Any]:
        """État courant au format JSON du serveur."""

        return turn_to_payload(self.snapshot())

    # -- Dynamique -------------------------------------------------------------

    def reset(self) -> TurnSnapshot:
        self._grid = parse_tiles(self._size, self._initial_tiles)
        self._position = self._spawn
        self._life = MAX_LIFE
        self._gold = 0
        self._turn = 0
        return self.snapshot()

    def step(self, direction: str) -> StepResult:
        """Applique une direction au héros et termine le tour."""

        if self.done:
            raise RuntimeError("La partie est terminée ; appeler reset()")

        gold_before = self._gold
        target = self._position.moved(direction, self._size)
        outcome = self._resolve_move(target)

        self._life = max(1, self._life - THIRST_PER_TURN)
        self._gold += self.mine_count
        self._turn += 1

        reward = float(self._gold - gold_before)
        return StepResult(
            turn=self.snapshot(),
            reward=reward,
            done=self.done,
            info={"direction": direction, "outcome": outcome},
        )

    def _resolve_move(self, target: Position) -> str:
        if target == self._position:
            return "blocked"

        cell = str(self._grid[target.row, target.col])
        if cell == EMPTY:
            self._grid[self._position.row, self._position.col] = EMPTY
            self._grid[target.row, target.col] = hero_code(self._hero_id)
            self._position = target
            return "moved"

        if cell == TAVERN:
            if self._gold >= TAVERN_PRICE:
                self._gold -= TAVERN_PRICE
                self._life = min(MAX_LIFE, self._life + TAVERN_HEAL)
                return "tavern"
            return "blocked"

        if cell == NEUTRAL_MINE or (cell.startswith("$") and cell != mine_code(self._hero_id)):
            self._life -= MINE_CAPTURE_COST
            if self._life <= 0:
                self._respawn()
                return "died"
            self._grid[target.row, target.col] = mine_code(self._hero_id)
            return "captured"

        return "blocked"

    def _respawn(self) -> None:
        own_mine = mine_code(self._hero_id)
        self._grid[self._grid == own_mine] = NEUTRAL_MINE
        self._grid[self._position.row, self._position.col] = EMPTY
        self._grid[self._spawn.row, self._spawn.col] = hero_code(self._hero_id)
        self._position = self._spawn
        self._life = MAX_LIFE
        logger.debug("Héros %d mort, réapparition en %s", self._hero_id, self._spawn)


@dataclass(frozen=True)
class EpisodeSummary:
    """Résume une partie jouée dans l'arène."""

    policy_name: str
    turns: int
    gold: int
    mine_count: int
    life: int
    outcomes: Dict[str, int] = field(default_factory=dict)
    duration_seconds: float = field(default=0.0, compare=False)


def run_episode(
    policy: AgentPolicy,
    arena: Optional[HeadlessArena] = None,
) -> EpisodeSummary:
    """Joue une partie complète de ``policy`` dans ``arena``."""

    arena = arena or HeadlessArena()
    start = time.perf_counter()
    turn = arena.reset()
    policy.start(turn.hero)
    outcomes: Dict[str, int] = {}

    while not arena.done:
        direction = policy.select_direction(turn)
        result = arena.step(direction)
        outcome = result.info["outcome"]
        outcomes[outcome] = outcomes.get(outcome, 0) + 1
        turn = result.turn

    hero = turn.hero
    return EpisodeSummary(
        policy_name=policy.name,
        turns=arena.turn,
        gold=hero.gold,
        mine_count=hero.mine_count,
        life=hero.life,
        outcomes=outcomes,
        duration_seconds=time.perf_counter() - start,
    )


__all__ = [
    "DEFAULT_MAP_SIZE",
    "DEFAULT_MAP_TILES",
    "EpisodeSummary",
    "HeadlessArena",
    "StepResult",
    "run_episode",
]
