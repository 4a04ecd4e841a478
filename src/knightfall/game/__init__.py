"""Game management layer: controller, players, move record, state machine.

Quick start::

    from knightfall.core import Color
    from knightfall.core.types import E2, E4
    from knightfall.game import AIPlayer, GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=AIPlayer(Color.BLACK, depth=2),
    )
    ctrl.attempt_move(E2, E4)
    ctrl.play_automated_move()
"""

from knightfall.game.controller import GameController, GameEvents
from knightfall.game.interfaces import (
    GameEndReason,
    GamePhase,
    IGameController,
    IPlayer,
    RejectReason,
)
from knightfall.game.outcomes import MoveOutcome, MoveResult, PromotionPending, Rejected
from knightfall.game.player import AIPlayer, HumanPlayer
from knightfall.game.state import GameRecord, GameState, MoveRecord, record_move

__all__ = [
    # Interfaces
    "GameEndReason",
    "GamePhase",
    "IGameController",
    "IPlayer",
    "RejectReason",
    # Outcomes
    "MoveOutcome",
    "MoveResult",
    "PromotionPending",
    "Rejected",
    # Concrete
    "AIPlayer",
    "GameController",
    "GameEvents",
    "GameRecord",
    "GameState",
    "HumanPlayer",
    "MoveRecord",
    "record_move",
]
