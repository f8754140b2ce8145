"""Évènements publiés par la couche application (`vindibot.app`)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple, Type, Union

from vindibot.engine.board import HeroSnapshot
from vindibot.rl.policies import TurnDecision


@dataclass(frozen=True)
class EpisodeStartedEvent:
    """Émis quand le héros de la partie est connu et ses récompenses construites."""

    hero: HeroSnapshot


@dataclass(frozen=True)
class TurnPlayedEvent:
    """Émis après chaque décision du bot."""

    turn: int
    hero: HeroSnapshot
    decision: TurnDecision
    num_states: int


@dataclass(frozen=True)
class EpisodeResetEvent:
    """Émis quand le modèle appris est vidé entre deux parties."""

    forgotten_states: int


BotEvent = Union[EpisodeStartedEvent, TurnPlayedEvent, EpisodeResetEvent]
BOT_EVENT_TYPES: Tuple[Type[Any], ...] = (EpisodeStartedEvent, TurnPlayedEvent, EpisodeResetEvent)


__all__ = [
    "BOT_EVENT_TYPES",
    "BotEvent",
    "EpisodeResetEvent",
    "EpisodeStartedEvent",
    "TurnPlayedEvent",
]
