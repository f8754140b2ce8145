"""Politiques de choix de direction pour le bot.

- `RandomDirectionPolicy` : direction uniforme, utile comme référence.
- `QLearningPolicy` : boucle d'agent complète. À chaque tour elle rafraîchit
  l'environnement, choisit entre la meilleure action connue et une direction
  aléatoire (exploration), enregistre la transition puis lance un balayage
  d'apprentissage synthétique.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from vindibot.engine.board import HeroSnapshot, Position, TurnSnapshot
from vindibot.engine.rules import DEFAULT_EXPLORATION, DEFAULT_LEARNING_STEPS
from vindibot.rl.environment import Environment
from vindibot.rl.qlearning import QLearner

logger = logging.getLogger(__name__)


class AgentPolicy:
    """Interface minimale : une direction par tour."""

    def __init__(self, *, name: str | None = None) -> None:
        self._name = name or self.__class__.__name__

    @property
    def name(self) -> str:
        return self._name

    def start(self, hero: HeroSnapshot) -> None:
        """Appelé une fois en début de partie."""

    def select_direction(self, turn: TurnSnapshot) -> str:
        raise NotImplementedError


class RandomDirectionPolicy(AgentPolicy):
    """Politique uniformément aléatoire sur les quatre directions."""

    def __init__(
        self,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(name="RandomDirection")
        self._random = rng or random.Random(seed)

    def select_direction(self, turn: TurnSnapshot) -> str:
        return Environment.random_direction(self._random)


@dataclass(frozen=True)
class PolicyConfig:
    """Paramètres d'exploration et d'apprentissage de `QLearningPolicy`."""

    exploration: float = DEFAULT_EXPLORATION
    exploration_decay: float = 1.0
    min_exploration: float = 0.0
    learning_steps: int = DEFAULT_LEARNING_STEPS

    def __post_init__(self) -> None:
        for name in ("exploration", "exploration_decay", "min_exploration"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} doit être compris entre 0 et 1 (reçu: {value})")
        if self.min_exploration > self.exploration:
            raise ValueError("min_exploration ne peut pas dépasser exploration")
        if self.learning_steps < 0:
            raise ValueError(f"learning_steps doit être positif (reçu: {self.learning_steps})")


@dataclass(frozen=True)
class TurnDecision:
    """Détail d'une décision prise pendant un tour."""

    state: str
    direction: str
    explored: bool
    next_position: Position
    reward: float
    next_state: str
    learning_iterations: int


class QLearningPolicy(AgentPolicy):
    """Boucle d'agent : environnement + moteur Q-learning + exploration."""

    def __init__(
        self,
        *,
        environment: Environment | None = None,
        learner: QLearner | None = None,
        config: PolicyConfig | None = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(name="QLearning")
        self._random = rng or random.Random(seed)
        self._environment = environment or Environment()
        self._learner = learner or QLearner(rng=self._random)
        self._config = config or PolicyConfig()
        self._exploration = self._config.exploration
        self._last_decision: TurnDecision | None = None

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def learner(self) -> QLearner:
        return self._learner

    @property
    def config(self) -> PolicyConfig:
        return self._config

    @property
    def exploration(self) -> float:
        """Probabilité courante d'explorer une direction jamais évaluée."""

        return self._exploration

    @property
    def last_decision(self) -> TurnDecision | None:
        return self._last_decision

    def start(self, hero: HeroSnapshot) -> None:
        """Début de partie : mémorise le héros et construit ses récompenses."""

        self._environment.update_agent(hero)
        self._environment.build_rewards(hero.hero_id)

    def reset(self) -> None:
        """Oublie ce qui a été appris et restaure l'exploration initiale."""

        self._learner.reset()
        self._exploration = self._config.exploration
        self._last_decision = None

    def select_direction(self, turn: TurnSnapshot) -> str:
        return self.decide(turn).direction

    def decide(self, turn: TurnSnapshot) -> TurnDecision:
        environment = self._environment
        learner = self._learner

        environment.update(turn.board)
        environment.update_agent(turn.hero)
        if not environment.has_rewards or environment.rewards.agent_id != turn.hero.hero_id:
            # Partie commencée sans start() : la table est construite une seule fois.
            environment.build_rewards(turn.hero.hero_id)

        current_state = environment.state_at()
        fallback = environment.random_direction(self._random)
        direction = learner.best_action(current_state)

        explored = direction is None or (
            not learner.knows_action(current_state, fallback)
            and self._random.random() < self._exploration
        )
        if explored:
            direction = fallback
        else:
            logger.debug("best action: %s (état %r)", direction, current_state)

        next_position = environment.next_position(direction)
        reward = environment.reward_for(next_position)
        next_state = environment.state_at(next_position)

        learner.add(current_state, next_state, reward, direction)
        iterations = learner.learn(self._config.learning_steps)

        self._exploration = max(
            self._config.min_exploration,
            self._exploration * self._config.exploration_decay,
        )

        decision = TurnDecision(
            state=current_state,
            direction=direction,
            explored=explored,
            next_position=next_position,
            reward=reward,
            next_state=next_state,
            learning_iterations=iterations,
        )
        self._last_decision = decision
        return decision


__all__ = [
    "AgentPolicy",
    "PolicyConfig",
    "QLearningPolicy",
    "RandomDirectionPolicy",
    "TurnDecision",
]
