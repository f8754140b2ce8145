"""Point d'entrée par tour du bot, appelé par le client du serveur de jeu.

Le client réseau (hors de ce paquet) appelle `BotService.start` au début de la
partie puis `BotService.play_turn` avec le payload de chaque tour. Tout l'état
appris vit dans la `QLearningPolicy` passée au service : aucun singleton de
module.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Mapping

from vindibot.app.event_bus import EventBus
from vindibot.app.events import EpisodeResetEvent, EpisodeStartedEvent, TurnPlayedEvent
from vindibot.engine.board import HeroSnapshot, TurnSnapshot, direction_name
from vindibot.engine.serialize import hero_from_payload, parse_turn_payload
from vindibot.rl.policies import QLearningPolicy

logger = logging.getLogger(__name__)


def bot_turn(policy: QLearningPolicy, payload: Mapping[str, Any] | TurnSnapshot) -> str:
    """Joue un tour avec ``policy`` et renvoie la direction (``n``, ``s``, ``e``, ``w``)."""

    turn = payload if isinstance(payload, TurnSnapshot) else parse_turn_payload(payload)
    return policy.select_direction(turn)


class BotService:
    """Wrappe une `QLearningPolicy` et publie les évènements de partie.

    Les tours et les remises à zéro sont sérialisés par un verrou : le moteur
    Q-learning n'est jamais modifié par deux appelants à la fois.
    """

    def __init__(
        self,
        *,
        policy: QLearningPolicy | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self._policy = policy or QLearningPolicy()
        self._event_bus = event_bus or EventBus()
        self._lock = threading.Lock()
        self._hero: HeroSnapshot | None = None

    @property
    def policy(self) -> QLearningPolicy:
        return self._policy

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    @property
    def hero(self) -> HeroSnapshot:
        """Héros de la partie en cours (erreur si aucune partie démarrée)."""

        if self._hero is None:
            raise RuntimeError("Aucune partie démarrée. Utiliser start().")
        return self._hero

    def start(self, hero: HeroSnapshot | Mapping[str, Any]) -> HeroSnapshot:
        """Début de partie : construit la table des récompenses du héros."""

        snapshot = hero if isinstance(hero, HeroSnapshot) else hero_from_payload(hero)
        with self._lock:
            self._policy.start(snapshot)
            self._hero = snapshot
        logger.info("Début de partie pour le héros %d", snapshot.hero_id)
        logger.debug("Récompenses:\n%s", self._policy.environment.rewards.describe())
        self._event_bus.publish(EpisodeStartedEvent(hero=snapshot))
        return snapshot

    def play_turn(self, payload: Mapping[str, Any] | TurnSnapshot) -> str:
        """Décide de la direction du tour et notifie les observateurs."""

        turn = payload if isinstance(payload, TurnSnapshot) else parse_turn_payload(payload)
        with self._lock:
            decision = self._policy.decide(turn)
            num_states = self._policy.learner.num_states
            self._hero = turn.hero

        self._event_bus.publish(
            TurnPlayedEvent(
                turn=turn.turn,
                hero=turn.hero,
                decision=decision,
                num_states=num_states,
            )
        )
        return decision.direction

    def play_server_turn(self, payload: Mapping[str, Any] | TurnSnapshot) -> str:
        """Comme `play_turn`, mais renvoie le nom attendu par le serveur (``North``...)."""

        return direction_name(self.play_turn(payload))

    def reset_episode(self) -> int:
        """Vide le modèle appris ; renvoie le nombre d'états oubliés."""

        with self._lock:
            forgotten = self._policy.learner.num_states
            self._policy.reset()
        logger.info("Modèle réinitialisé (%d états oubliés)", forgotten)
        self._event_bus.publish(EpisodeResetEvent(forgotten_states=forgotten))
        return forgotten
