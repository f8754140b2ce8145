"""Plateau Vindinium : codes de case, positions et snapshots.

Le serveur décrit le plateau sous la forme d'une chaîne de `size * size`
tokens de deux caractères, ligne par ligne :

- ``##`` : bois infranchissable
- ``  `` : case vide
- ``[]`` : taverne
- ``$-`` : mine neutre, ``$1``..``$4`` : mine du héros correspondant
- ``@1``..``@4`` : héros

Les coordonnées suivent la convention du serveur : ``pos.x`` est la ligne et
``pos.y`` la colonne, toutes deux indexées à partir de 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from vindibot.engine.errors import MalformedBoardError

WOOD = "##"
EMPTY = "  "
TAVERN = "[]"
NEUTRAL_MINE = "$-"
HERO_IDS: Tuple[int, ...] = (1, 2, 3, 4)
CELL_WIDTH = 2


def hero_code(hero_id: int) -> str:
    """Code de case d'un héros (``@1``..``@4``)."""

    return f"@{hero_id}"


def mine_code(hero_id: int) -> str:
    """Code de case d'une mine possédée par un héros (``$1``..``$4``)."""

    return f"${hero_id}"


CELL_CODES: Tuple[str, ...] = (
    WOOD,
    EMPTY,
    TAVERN,
    NEUTRAL_MINE,
    *(mine_code(hero_id) for hero_id in HERO_IDS),
    *(hero_code(hero_id) for hero_id in HERO_IDS),
)

# Ordre historique des déplacements du bot
DIRECTIONS: Tuple[str, ...] = ("n", "e", "s", "w")

DIRECTION_DELTAS: Dict[str, Tuple[int, int]] = {
    "n": (-1, 0),
    "s": (1, 0),
    "e": (0, 1),
    "w": (0, -1),
}

_DIRECTION_NAMES: Dict[str, str] = {
    "n": "North",
    "s": "South",
    "e": "East",
    "w": "West",
}


def direction_name(direction: str) -> str:
    """Convertit un code court (``n``) en nom attendu par le serveur (``North``)."""

    try:
        return _DIRECTION_NAMES[direction]
    except KeyError as exc:
        raise ValueError(f"Direction inconnue: {direction!r}") from exc


@dataclass(frozen=True)
class Position:
    row: int
    col: int

    def clamp(self, size: int) -> "Position":
        """Ramène la position dans ``[0, size-1]`` sur les deux axes."""

        limit = size - 1
        return Position(
            row=min(max(self.row, 0), limit),
            col=min(max(self.col, 0), limit),
        )

    def moved(self, direction: str, size: int) -> "Position":
        """Position atteinte en appliquant une direction, bornée au plateau."""

        try:
            d_row, d_col = DIRECTION_DELTAS[direction]
        except KeyError as exc:
            raise ValueError(f"Direction inconnue: {direction!r}") from exc
        return Position(self.row + d_row, self.col + d_col).clamp(size)

    def in_bounds(self, size: int) -> bool:
        return 0 <= self.row < size and 0 <= self.col < size


@dataclass(frozen=True)
class BoardSnapshot:
    """Plateau tel qu'envoyé par le serveur pour un tour."""

    size: int
    tiles: str

    def grid(self) -> np.ndarray:
        return parse_tiles(self.size, self.tiles)


@dataclass(frozen=True)
class HeroSnapshot:
    """Informations du héros contrôlé, remplacées à chaque tour."""

    hero_id: int
    life: int
    gold: int
    position: Position
    name: str = ""
    mine_count: int = 0
    spawn_position: Optional[Position] = None

    @property
    def code(self) -> str:
        return hero_code(self.hero_id)


@dataclass(frozen=True)
class TurnSnapshot:
    """Regroupe le plateau et le héros reçus pour un tour."""

    board: BoardSnapshot
    hero: HeroSnapshot
    turn: int = 0
    max_turns: int = 0
    finished: bool = False


def split_cells(line: str) -> List[str]:
    """Découpe une ligne de tuiles en codes de deux caractères.

    ``'##@1  ##'`` devient ``['##', '@1', '  ', '##']``.
    """

    return [line[index:index + CELL_WIDTH] for index in range(0, len(line), CELL_WIDTH)]


def parse_tiles(size: int, tiles: str) -> np.ndarray:
    """Construit la grille ``size x size`` à partir de la chaîne de tuiles."""

    if size <= 0 or len(tiles) != size * size * CELL_WIDTH:
        raise MalformedBoardError(size, len(tiles))

    row_width = size * CELL_WIDTH
    rows = [split_cells(tiles[start:start + row_width]) for start in range(0, len(tiles), row_width)]
    return np.array(rows, dtype=f"<U{CELL_WIDTH}")


def grid_to_tiles(grid: Sequence[Sequence[str]]) -> str:
    """Opération inverse de `parse_tiles`."""

    return "".join(str(cell) for row in grid for cell in row)


def find_cells(grid: Sequence[Sequence[str]], code: str) -> List[Position]:
    """Liste les positions contenant un code donné, dans l'ordre de lecture."""

    return [
        Position(row_index, col_index)
        for row_index, row in enumerate(grid)
        for col_index, cell in enumerate(row)
        if cell == code
    ]


def format_board(grid: Sequence[Sequence[str]]) -> str:
    """Représentation texte du plateau (une ligne de tuiles par rangée)."""

    size = len(grid)
    lines = [f"\tThe Map ({size}x{size})"]
    lines.extend("\t" + "".join(str(cell) for cell in row) for row in grid)
    return "\n".join(lines)


def format_hero(hero: HeroSnapshot) -> str:
    """Résumé texte du héros (identifiant, vie, or, position)."""

    return "\n".join(
        (
            f"Bot ID: {hero.hero_id}",
            f"Health: {hero.life}HP",
            f"Gold: {hero.gold}G",
            f"Position: [{hero.position.row},{hero.position.col}]",
        )
    )


def count_cells(grid: Iterable[Iterable[str]]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for row in grid:
        for cell in row:
            key = str(cell)
            counts[key] = counts.get(key, 0) + 1
    return counts


__all__ = [
    "BoardSnapshot",
    "CELL_CODES",
    "CELL_WIDTH",
    "DIRECTIONS",
    "DIRECTION_DELTAS",
    "EMPTY",
    "HERO_IDS",
    "HeroSnapshot",
    "NEUTRAL_MINE",
    "Position",
    "TAVERN",
    "TurnSnapshot",
    "WOOD",
    "count_cells",
    "direction_name",
    "find_cells",
    "format_board",
    "format_hero",
    "grid_to_tiles",
    "hero_code",
    "mine_code",
    "parse_tiles",
    "split_cells",
]
