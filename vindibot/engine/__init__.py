"""Engine package exposing board, rules and serialization modules."""

from . import rules  # re-export for convenience
from .errors import MalformedBoardError, UnknownCellCodeError
from .rules import RewardTable

__all__ = ["rules", "MalformedBoardError", "RewardTable", "UnknownCellCodeError"]
