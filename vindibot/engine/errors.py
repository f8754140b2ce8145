"""Erreurs levées par le moteur de plateau."""

from __future__ import annotations


class MalformedBoardError(ValueError):
    """La chaîne de tuiles ne correspond pas à la taille déclarée du plateau."""

    def __init__(self, size: int, tiles_length: int) -> None:
        super().__init__(
            f"Plateau invalide: {tiles_length} caractères pour une taille {size}x{size} "
            f"(attendu: {max(size, 0) * max(size, 0) * 2})"
        )
        self.size = size
        self.tiles_length = tiles_length


class UnknownCellCodeError(KeyError):
    """Code de case absent de la table des récompenses."""

    def __init__(self, code: str) -> None:
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return f"Code de case inconnu: {self.code!r}"


__all__ = ["MalformedBoardError", "UnknownCellCodeError"]
