"""Services d'application pour piloter le bot tour par tour."""

from .bot_service import BotService, bot_turn
from .event_bus import EventBus
from .events import BotEvent, EpisodeResetEvent, EpisodeStartedEvent, TurnPlayedEvent

__all__ = [
    "BotEvent",
    "BotService",
    "EpisodeResetEvent",
    "EpisodeStartedEvent",
    "EventBus",
    "TurnPlayedEvent",
    "bot_turn",
]
