"""Diffusion des évènements de partie du bot (`vindibot.app.events`)."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple, Type

from vindibot.app.events import BOT_EVENT_TYPES, BotEvent

logger = logging.getLogger(__name__)

Listener = Callable[[BotEvent], None]


class EventBus:
    """Relaie les évènements `BotEvent` aux observateurs.

    Un observateur peut ne suivre qu'un type d'évènement (``TurnPlayedEvent``
    par exemple) ou tous les évènements (``event_type=None``). La livraison est
    synchrone, dans l'ordre d'inscription ; une exception d'un observateur
    remonte à l'appelant de `publish`.
    """

    def __init__(self) -> None:
        self._listeners: List[Tuple[Optional[Type[BotEvent]], Listener]] = []

    def subscribe(
        self,
        listener: Listener,
        event_type: Optional[Type[BotEvent]] = None,
    ) -> Callable[[], None]:
        """Inscrit ``listener`` ; renvoie la fonction qui l'en retire."""

        if event_type is not None and event_type not in BOT_EVENT_TYPES:
            raise TypeError(f"Type d'évènement inconnu: {event_type!r}")

        entry = (event_type, listener)
        self._listeners.append(entry)

        def cancel() -> None:
            if entry in self._listeners:
                self._listeners.remove(entry)

        return cancel

    def publish(self, event: BotEvent) -> int:
        """Livre ``event`` aux observateurs concernés ; renvoie leur nombre."""

        targets = [
            listener
            for event_type, listener in self._listeners
            if event_type is None or isinstance(event, event_type)
        ]
        for listener in targets:
            listener(event)
        logger.debug("%s livré à %d observateur(s)", type(event).__name__, len(targets))
        return len(targets)


__all__ = ["EventBus", "Listener"]
