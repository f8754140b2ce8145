"""Tests pour l'encodage du voisinage en clé d'état."""

import pytest

from vindibot.engine.board import Position, parse_tiles
from vindibot.rl.features import decode_state, encode_state, surroundings


SMALL_GRID = [["##", "  "], ["  ", "@2"]]


class TestSurroundings:
    """Voisins cardinaux et bords du plateau."""

    def test_small_grid_example(self):
        neighbors = surroundings(SMALL_GRID, 2, Position(1, 1))

        assert neighbors == {"n": "  ", "s": "##", "e": "##", "w": "  "}

    def test_corner_reports_wood_off_board(self):
        neighbors = surroundings(SMALL_GRID, 2, Position(0, 0))

        assert neighbors["n"] == "##"
        assert neighbors["w"] == "##"
        assert neighbors["s"] == "  "
        assert neighbors["e"] == "  "

    @pytest.mark.parametrize(
        "position, off_board",
        [
            (Position(0, 0), {"n", "w"}),
            (Position(0, 2), {"n", "e"}),
            (Position(2, 0), {"s", "w"}),
            (Position(2, 2), {"s", "e"}),
        ],
    )
    def test_every_corner_of_an_open_board(self, position, off_board):
        grid = parse_tiles(3, "  " * 9)

        neighbors = surroundings(grid, 3, position)

        for direction, code in neighbors.items():
            expected = "##" if direction in off_board else "  "
            assert code == expected


class TestEncodeState:
    """Clé d'état : préfixe + N + S + E + W."""

    def test_key_layout(self):
        key = encode_state(SMALL_GRID, 2, Position(1, 1), "@2")

        assert key == "S" + "  " + "##" + "##" + "  "

    def test_is_deterministic(self):
        grid = parse_tiles(3, "##$-##" + "  @1[]" + "##  ##")
        keys = {encode_state(grid, 3, Position(1, 1), "@1") for _ in range(20)}

        assert keys == {"S$-  []  "}

    def test_own_hero_becomes_empty(self):
        grid = [["  ", "@1"], ["$-", "@3"]]

        as_hero_1 = encode_state(grid, 2, Position(0, 0), "@1")
        as_hero_3 = encode_state(grid, 2, Position(0, 0), "@3")

        assert decode_state(as_hero_1)["e"] == "  "
        assert decode_state(as_hero_3)["e"] == "@1"

    def test_only_own_hero_is_substituted(self):
        grid = [["@2", "  "], ["  ", "@4"]]

        key = encode_state(grid, 2, Position(0, 1), "@2")

        assert decode_state(key)["w"] == "  "
        assert decode_state(key)["s"] == "@4"

    def test_same_pattern_shares_a_key(self):
        grid = parse_tiles(4, "  " * 16)

        # Seul le voisinage compte : deux cases intérieures d'un plateau vide.
        assert encode_state(grid, 4, Position(1, 1), "@1") == encode_state(grid, 4, Position(2, 2), "@1")
        assert encode_state(grid, 4, Position(0, 1), "@1") != encode_state(grid, 4, Position(1, 0), "@1")

    def test_key_cannot_collide_with_cell_code(self):
        key = encode_state(SMALL_GRID, 2, Position(0, 0), "@2")

        assert key.startswith("S")
        assert len(key) == 9


class TestDecodeState:
    def test_decode_round_trip(self):
        assert decode_state("S$-  []##") == {"n": "$-", "s": "  ", "e": "[]", "w": "##"}

    @pytest.mark.parametrize("key", ["", "S##", "X########", "S##########"])
    def test_invalid_keys(self, key):
        with pytest.raises(ValueError):
            decode_state(key)
