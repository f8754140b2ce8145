"""Encodage de l'état local du héros en clé discrète.

L'état d'une position est décrit uniquement par les codes des quatre cases
voisines (nord, sud, est, ouest). Deux positions différentes avec le même
voisinage partagent donc le même état : c'est la généralisation recherchée
pour l'apprentissage tabulaire.

Exemple :
    >>> grid = [["##", "  "], ["  ", "@2"]]
    >>> encode_state(grid, 2, Position(1, 1), "@2")
    'S  ####  '
"""

from __future__ import annotations

from typing import Dict, Sequence

from vindibot.engine.board import CELL_WIDTH, DIRECTION_DELTAS, EMPTY, WOOD, Position

STATE_PREFIX = "S"

# Ordre fixe des voisins dans une clé d'état
NEIGHBOR_ORDER = ("n", "s", "e", "w")

_STATE_LENGTH = len(STATE_PREFIX) + CELL_WIDTH * len(NEIGHBOR_ORDER)


def surroundings(
    grid: Sequence[Sequence[str]],
    size: int,
    position: Position,
) -> Dict[str, str]:
    """Retourne les codes des cases voisines, ``##`` hors du plateau."""

    result: Dict[str, str] = {}
    for direction in NEIGHBOR_ORDER:
        d_row, d_col = DIRECTION_DELTAS[direction]
        neighbor = Position(position.row + d_row, position.col + d_col)
        if neighbor.in_bounds(size):
            result[direction] = str(grid[neighbor.row][neighbor.col])
        else:
            result[direction] = WOOD
    return result


def encode_state(
    grid: Sequence[Sequence[str]],
    size: int,
    position: Position,
    self_hero_code: str,
) -> str:
    """Construit la clé d'état ``S`` + N + S + E + W.

    Un voisin portant notre propre code de héros est encodé comme une case vide.
    """

    neighbors = surroundings(grid, size, position)
    codes = (
        EMPTY if neighbors[direction] == self_hero_code else neighbors[direction]
        for direction in NEIGHBOR_ORDER
    )
    return STATE_PREFIX + "".join(codes)


def decode_state(state_key: str) -> Dict[str, str]:
    """Opération inverse de `encode_state` (voisins après substitution)."""

    if len(state_key) != _STATE_LENGTH or not state_key.startswith(STATE_PREFIX):
        raise ValueError(f"Clé d'état invalide: {state_key!r}")

    body = state_key[len(STATE_PREFIX):]
    return {
        direction: body[index * CELL_WIDTH:(index + 1) * CELL_WIDTH]
        for index, direction in enumerate(NEIGHBOR_ORDER)
    }


__all__ = ["NEIGHBOR_ORDER", "STATE_PREFIX", "decode_state", "encode_state", "surroundings"]
