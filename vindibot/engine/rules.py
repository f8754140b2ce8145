"""Récompenses et constantes du bot Vindinium.

Ce module expose :
- les récompenses par type de case (`REWARD_*`)
- la table `RewardTable`, construite une fois par partie selon l'identité du héros
- les valeurs par défaut du moteur d'apprentissage (`DEFAULT_*`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping

from vindibot.engine.board import (
    EMPTY,
    HERO_IDS,
    NEUTRAL_MINE,
    TAVERN,
    WOOD,
    hero_code,
    mine_code,
)
from vindibot.engine.errors import UnknownCellCodeError

REWARD_WOOD: float = -1
REWARD_TAVERN: float = 1
REWARD_EMPTY: float = 0
REWARD_MINE: float = 100
REWARD_OWN_MINE: float = -1
REWARD_ENEMY_HERO: float = 50

# Moteur Q-learning
DEFAULT_GAMMA: float = 0.8
DEFAULT_EXPLORATION: float = 0.5
DEFAULT_LEARNING_STEPS: int = 50

# Règles de l'arène locale (valeurs du serveur officiel)
MAX_LIFE: int = 100
MINE_CAPTURE_COST: int = 20
TAVERN_PRICE: int = 2
TAVERN_HEAL: int = 50
THIRST_PER_TURN: int = 1


@dataclass(frozen=True)
class RewardTable(Mapping[str, float]):
    """Récompense associée à chaque code de case, vue d'un héros donné."""

    agent_id: int
    _rewards: Mapping[str, float] = field(repr=False)

    @classmethod
    def build(cls, agent_id: int) -> "RewardTable":
        """Construit la table pour le héros ``agent_id``.

        Nos propres mines ne sont pas une cible ; les mines neutres ou adverses
        et les héros adverses le sont. Notre propre code de héros n'a pas
        d'entrée.
        """

        if agent_id not in HERO_IDS:
            raise ValueError(f"Identifiant de héros invalide: {agent_id!r}")

        rewards: Dict[str, float] = {
            WOOD: REWARD_WOOD,
            TAVERN: REWARD_TAVERN,
            EMPTY: REWARD_EMPTY,
            NEUTRAL_MINE: REWARD_MINE,
        }
        for hero_id in HERO_IDS:
            rewards[mine_code(hero_id)] = REWARD_OWN_MINE if hero_id == agent_id else REWARD_MINE
        for hero_id in HERO_IDS:
            if hero_id != agent_id:
                rewards[hero_code(hero_id)] = REWARD_ENEMY_HERO
        return cls(agent_id=agent_id, _rewards=rewards)

    def __getitem__(self, code: str) -> float:
        try:
            return self._rewards[code]
        except KeyError:
            raise UnknownCellCodeError(code) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._rewards)

    def __len__(self) -> int:
        return len(self._rewards)

    def describe(self) -> str:
        """Une ligne ``code : récompense`` par entrée."""

        return "\n".join(f"{code} : {reward:g}" for code, reward in self._rewards.items())


__all__ = [
    "DEFAULT_EXPLORATION",
    "DEFAULT_GAMMA",
    "DEFAULT_LEARNING_STEPS",
    "MAX_LIFE",
    "MINE_CAPTURE_COST",
    "REWARD_EMPTY",
    "REWARD_ENEMY_HERO",
    "REWARD_MINE",
    "REWARD_OWN_MINE",
    "REWARD_TAVERN",
    "REWARD_WOOD",
    "RewardTable",
    "TAVERN_HEAL",
    "TAVERN_PRICE",
    "THIRST_PER_TURN",
]
