"""Q-learning tabulaire sur un graphe d'états appris en ligne.

Le graphe est construit à partir des transitions réellement observées
(`QLearner.add`). Les valeurs sont ensuite raffinées par des balayages
synthétiques (`QLearner.learn`) : chaque itération repart d'un état connu tiré
au hasard et applique une mise à jour de Bellman sur une arête aléatoire ::

    Q(s, a) = r(s, a) + gamma * max(0, max_a' Q(s', a'))

Le graphe et la table de valeurs ne font que croître pendant une partie ;
`reset` est la seule opération qui les vide.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from vindibot.engine.rules import DEFAULT_GAMMA

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionEdge:
    """Arête nommée vers l'état suivant, avec la dernière récompense observée."""

    name: str
    next_state: str
    reward: float


class StateNode:
    """Nœud du graphe : un état et ses actions sortantes indexées par nom."""

    __slots__ = ("name", "_actions")

    def __init__(self, name: str) -> None:
        self.name = name
        self._actions: Dict[str, ActionEdge] = {}

    @property
    def actions(self) -> Tuple[ActionEdge, ...]:
        return tuple(self._actions.values())

    def action(self, name: str) -> Optional[ActionEdge]:
        return self._actions.get(name)

    def add_action(self, next_state: str, reward: float, action_name: Optional[str] = None) -> ActionEdge:
        """Ajoute l'arête, ou remplace celle qui porte le même nom."""

        edge = ActionEdge(
            name=next_state if action_name is None else action_name,
            next_state=next_state,
            reward=reward,
        )
        self._actions[edge.name] = edge
        return edge

    def random_action(self, rng: random.Random) -> Optional[ActionEdge]:
        if not self._actions:
            return None
        return rng.choice(list(self._actions.values()))

    def __len__(self) -> int:
        return len(self._actions)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"StateNode({self.name!r}, actions={list(self._actions)})"


class QLearner:
    """Moteur Q-learning : graphe de transitions, valeurs et facteur gamma."""

    def __init__(
        self,
        gamma: float = DEFAULT_GAMMA,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not 0.0 <= gamma <= 1.0:
            raise ValueError(f"gamma doit être compris entre 0 et 1 (reçu: {gamma})")
        self._gamma = gamma
        self._random = rng or random.Random(seed)
        self._states: Dict[str, StateNode] = {}
        self._states_list: List[StateNode] = []
        self._values: Dict[str, Dict[str, float]] = {}
        self._current: Optional[StateNode] = None

    # -- Accès -----------------------------------------------------------------

    @property
    def gamma(self) -> float:
        return self._gamma

    @property
    def current_state(self) -> Optional[str]:
        return self._current.name if self._current is not None else None

    @property
    def num_states(self) -> int:
        return len(self._states_list)

    @property
    def num_edges(self) -> int:
        return sum(len(node) for node in self._states_list)

    @property
    def states(self) -> Tuple[StateNode, ...]:
        """Nœuds du graphe, dans l'ordre de création."""

        return tuple(self._states_list)

    def state_names(self) -> Tuple[str, ...]:
        return tuple(node.name for node in self._states_list)

    def state(self, name: str) -> Optional[StateNode]:
        return self._states.get(name)

    def value(self, state: str, action: str) -> float:
        """Valeur estimée de ``(state, action)`` ; 0 si jamais mise à jour."""

        return self._values.get(state, {}).get(action, 0.0)

    def values_for(self, state: str) -> Mapping[str, float]:
        return dict(self._values.get(state, {}))

    # -- Graphe ----------------------------------------------------------------

    def add(
        self,
        from_state: str,
        to_state: str,
        reward: float,
        action_name: Optional[str] = None,
    ) -> ActionEdge:
        """Enregistre une transition observée (états créés à la demande)."""

        if from_state not in self._states:
            self.add_state(from_state)
        if to_state not in self._states:
            self.add_state(to_state)
        return self._states[from_state].add_action(to_state, reward, action_name)

    def add_state(self, name: str) -> StateNode:
        node = StateNode(name)
        self._states[name] = node
        self._states_list.append(node)
        return node

    def set_state(self, name: Optional[str]) -> Optional[str]:
        """Force l'état courant (``None`` pour repartir d'un état aléatoire)."""

        if name is None:
            self._current = None
            return None
        try:
            self._current = self._states[name]
        except KeyError as exc:
            raise ValueError(f"État inconnu: {name!r}") from exc
        return name

    def random_state(self) -> Optional[StateNode]:
        if not self._states_list:
            return None
        return self._random.choice(self._states_list)

    # -- Apprentissage -----------------------------------------------------------

    def optimal_future_value(self, state: str) -> float:
        """Meilleure valeur enregistrée pour ``state``, bornée à 0 par le bas."""

        best = 0.0
        for value in self._values.get(state, {}).values():
            best = max(best, value)
        return best

    def step(self) -> Optional[str]:
        """Applique une mise à jour sur une arête aléatoire de l'état courant.

        Returns:
            la clé de l'état atteint, ou ``None`` si l'état courant n'a aucune
            action (aucune mise à jour n'est faite).
        """

        if self._current is None:
            self._current = self.random_state()
        if self._current is None:
            return None

        edge = self._current.random_action(self._random)
        if edge is None:
            return None

        state_values = self._values.setdefault(self._current.name, {})
        state_values[edge.name] = (edge.reward or 0.0) + self._gamma * self.optimal_future_value(
            edge.next_state
        )

        self._current = self._states[edge.next_state]
        return self._current.name

    def learn(self, steps: int = 1) -> int:
        """Balayage synthétique : ``max(1, steps)`` pas, chacun depuis un état aléatoire.

        Returns:
            le nombre d'itérations effectuées.
        """

        iterations = max(1, steps or 0)
        for _ in range(iterations):
            self._current = self.random_state()
            self.step()
        logger.debug("learn: %d itérations sur %d états", iterations, self.num_states)
        return iterations

    # -- Décision ----------------------------------------------------------------

    def best_action(self, state: str) -> Optional[str]:
        """Action de plus forte valeur pour ``state`` (``None`` si inconnue).

        Les égalités sont départagées à pile ou face : le résultat n'est pas
        stable d'un appel à l'autre.
        """

        state_values = self._values.get(state, {})
        best: Optional[str] = None
        for action, value in state_values.items():
            if best is None:
                best = action
            elif value == state_values[best] and self._random.random() > 0.5:
                best = action
            elif value > state_values[best]:
                best = action
        return best

    def knows_action(self, state: str, action: str) -> bool:
        """Indique si une valeur a déjà été calculée pour ``(state, action)``."""

        return action in self._values.get(state, {})

    def reset(self) -> None:
        """Oublie le graphe et les valeurs (changement de partie)."""

        self._states.clear()
        self._states_list.clear()
        self._values.clear()
        self._current = None


__all__ = ["ActionEdge", "QLearner", "StateNode"]
