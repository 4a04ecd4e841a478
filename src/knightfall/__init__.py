"""Knightfall: chess rules engine with a minimax opponent.

The functional interface lives in :mod:`knightfall.api`; the stateful game
controller in :mod:`knightfall.game`.
"""

from knightfall.api import (
    attempt_move,
    choose_automated_move,
    initial_position,
    legal_moves,
    undo,
)

__version__ = "0.1.0"

__all__ = [
    "attempt_move",
    "choose_automated_move",
    "initial_position",
    "legal_moves",
    "undo",
]
