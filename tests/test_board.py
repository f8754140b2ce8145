"""Tests pour le module board (codes de case, positions, parsing)."""

import numpy as np
import pytest

from vindibot.engine.board import (
    CELL_CODES,
    DIRECTIONS,
    BoardSnapshot,
    HeroSnapshot,
    Position,
    direction_name,
    find_cells,
    format_board,
    format_hero,
    grid_to_tiles,
    hero_code,
    mine_code,
    parse_tiles,
    split_cells,
)
from vindibot.engine.errors import MalformedBoardError

TILES_3X3 = "##$-##" + "  @1[]" + "##  ##"


class TestCellCodes:
    """Tests pour l'alphabet des cases."""

    def test_alphabet_is_closed_and_two_characters_wide(self):
        assert len(CELL_CODES) == 12
        assert len(set(CELL_CODES)) == len(CELL_CODES)
        assert all(len(code) == 2 for code in CELL_CODES)

    def test_hero_and_mine_codes(self):
        assert hero_code(3) == "@3"
        assert mine_code(4) == "$4"

    def test_direction_names(self):
        assert [direction_name(d) for d in DIRECTIONS] == ["North", "East", "South", "West"]
        with pytest.raises(ValueError):
            direction_name("x")


class TestPosition:
    """Tests pour les positions et le bornage au plateau."""

    def test_clamp_keeps_both_axes_in_range(self):
        assert Position(-3, 7).clamp(5) == Position(0, 4)
        assert Position(2, 2).clamp(5) == Position(2, 2)

    def test_moved_applies_direction_delta(self):
        origin = Position(1, 1)
        assert origin.moved("n", 3) == Position(0, 1)
        assert origin.moved("s", 3) == Position(2, 1)
        assert origin.moved("e", 3) == Position(1, 2)
        assert origin.moved("w", 3) == Position(1, 0)

    def test_moved_at_edge_stays_on_board(self):
        assert Position(0, 0).moved("n", 3) == Position(0, 0)
        assert Position(2, 2).moved("e", 3) == Position(2, 2)

    def test_moved_rejects_unknown_direction(self):
        with pytest.raises(ValueError):
            Position(0, 0).moved("north", 3)

    def test_in_bounds(self):
        assert Position(0, 2).in_bounds(3)
        assert not Position(3, 0).in_bounds(3)
        assert not Position(0, -1).in_bounds(3)


class TestParsing:
    """Tests pour la conversion chaîne de tuiles -> grille."""

    def test_split_cells(self):
        assert split_cells("##@1  ##@2##") == ["##", "@1", "  ", "##", "@2", "##"]

    def test_parse_tiles_builds_square_grid(self):
        grid = parse_tiles(3, TILES_3X3)

        assert isinstance(grid, np.ndarray)
        assert grid.shape == (3, 3)
        assert grid[0][1] == "$-"
        assert grid[1][1] == "@1"
        assert grid[1][0] == "  "
        assert grid[2][1] == "  "

    def test_parse_tiles_rejects_inconsistent_length(self):
        with pytest.raises(MalformedBoardError):
            parse_tiles(3, TILES_3X3[:-2])

    def test_parse_tiles_rejects_non_positive_size(self):
        with pytest.raises(MalformedBoardError):
            parse_tiles(0, "")

    def test_malformed_board_error_is_value_error(self):
        with pytest.raises(ValueError, match="taille 2x2"):
            BoardSnapshot(size=2, tiles="####").grid()

    def test_grid_to_tiles_restores_string(self):
        assert grid_to_tiles(parse_tiles(3, TILES_3X3)) == TILES_3X3

    def test_find_cells(self):
        grid = parse_tiles(3, TILES_3X3)
        assert find_cells(grid, "@1") == [Position(1, 1)]
        assert find_cells(grid, "##") == [
            Position(0, 0),
            Position(0, 2),
            Position(2, 0),
            Position(2, 2),
        ]


class TestFormatting:
    """Tests pour l'affichage texte du plateau et du héros."""

    def test_format_board(self):
        text = format_board(parse_tiles(3, TILES_3X3))
        lines = text.split("\n")

        assert lines[0] == "\tThe Map (3x3)"
        assert lines[1:] == ["\t##$-##", "\t  @1[]", "\t##  ##"]

    def test_format_hero(self):
        hero = HeroSnapshot(hero_id=2, life=80, gold=12, position=Position(4, 1))

        assert format_hero(hero) == "Bot ID: 2\nHealth: 80HP\nGold: 12G\nPosition: [4,1]"
        assert hero.code == "@2"
