"""Conversion entre le payload JSON du serveur Vindinium et les snapshots.

Format attendu pour un tour (champs superflus ignorés) ::

    {
        "game": {"turn": 12, "maxTurns": 1200, "finished": false,
                 "board": {"size": 10, "tiles": "##@1    ..."}},
        "hero": {"id": 1, "name": "vindibot", "life": 100, "gold": 0,
                 "pos": {"x": 5, "y": 6}, "spawnPos": {"x": 5, "y": 6},
                 "mineCount": 0}
    }

Un enregistrement réduit ``{"board": {...}, "hero": {...}}`` est aussi accepté.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from vindibot.engine.board import BoardSnapshot, HeroSnapshot, Position, TurnSnapshot


def _require(payload: Mapping[str, Any], key: str, context: str) -> Any:
    try:
        return payload[key]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Champ manquant '{key}' dans {context}") from exc


def _position_from(data: Mapping[str, Any], context: str) -> Position:
    return Position(row=int(_require(data, "x", context)), col=int(_require(data, "y", context)))


def board_from_payload(data: Mapping[str, Any]) -> BoardSnapshot:
    """Lit un bloc ``board`` (la cohérence des tuiles est vérifiée au parsing)."""

    return BoardSnapshot(
        size=int(_require(data, "size", "board")),
        tiles=str(_require(data, "tiles", "board")),
    )


def hero_from_payload(data: Mapping[str, Any]) -> HeroSnapshot:
    """Lit un bloc ``hero``."""

    spawn = data.get("spawnPos")
    return HeroSnapshot(
        hero_id=int(_require(data, "id", "hero")),
        life=int(data.get("life", 0)),
        gold=int(data.get("gold", 0)),
        position=_position_from(_require(data, "pos", "hero"), "hero.pos"),
        name=str(data.get("name", "")),
        mine_count=int(data.get("mineCount", 0)),
        spawn_position=_position_from(spawn, "hero.spawnPos") if spawn is not None else None,
    )


def parse_turn_payload(payload: Mapping[str, Any]) -> TurnSnapshot:
    """Convertit le payload d'un tour en `TurnSnapshot`."""

    game = payload.get("game")
    if game is not None:
        board_data = _require(game, "board", "game")
        turn = int(game.get("turn", 0))
        max_turns = int(game.get("maxTurns", 0))
        finished = bool(game.get("finished", False))
    else:
        board_data = _require(payload, "board", "payload")
        turn = int(payload.get("turn", 0))
        max_turns = int(payload.get("maxTurns", 0))
        finished = bool(payload.get("finished", False))

    return TurnSnapshot(
        board=board_from_payload(board_data),
        hero=hero_from_payload(_require(payload, "hero", "payload")),
        turn=turn,
        max_turns=max_turns,
        finished=finished,
    )


def hero_to_payload(hero: HeroSnapshot) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": hero.hero_id,
        "name": hero.name,
        "life": hero.life,
        "gold": hero.gold,
        "pos": {"x": hero.position.row, "y": hero.position.col},
        "mineCount": hero.mine_count,
    }
    if hero.spawn_position is not None:
        data["spawnPos"] = {"x": hero.spawn_position.row, "y": hero.spawn_position.col}
    return data


def turn_to_payload(snapshot: TurnSnapshot) -> Dict[str, Any]:
    """Produit un payload JSON-friendly au format du serveur."""

    return {
        "game": {
            "turn": snapshot.turn,
            "maxTurns": snapshot.max_turns,
            "finished": snapshot.finished,
            "board": {"size": snapshot.board.size, "tiles": snapshot.board.tiles},
        },
        "hero": hero_to_payload(snapshot.hero),
    }


__all__ = [
    "board_from_payload",
    "hero_from_payload",
    "hero_to_payload",
    "parse_turn_payload",
    "turn_to_payload",
]
