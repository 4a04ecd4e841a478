"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the high-level GameController depends on
these ABCs, not on concrete player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from knightfall.core.enums import Color

if TYPE_CHECKING:
    from knightfall.core.enums import PieceType
    from knightfall.core.move import Move
    from knightfall.core.position import Position
    from knightfall.core.types import Square
    from knightfall.game.outcomes import MoveOutcome


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game.

    ``AWAITING_MOVE`` and ``THINKING`` are both "to move" states for the
    side in ``GameState.side_to_move``; ``THINKING`` marks an automated
    player computing its move.
    """

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()
    THINKING = auto()
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    """Why a game reached ``GAME_OVER``."""

    NONE = 0
    CHECKMATE = auto()
    STALEMATE = auto()
    KING_MISSING = auto()


class RejectReason(IntEnum):
    """Why a move request was refused. Rejections never change state."""

    GAME_OVER = auto()
    WRONG_PHASE = auto()
    NO_PIECE = auto()
    ILLEGAL_MOVE = auto()
    INVALID_PROMOTION = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or automated)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, position: Position) -> None:
        """Begin the move-selection process.

        For humans this is a no-op (they interact via the UI).
        Automated players start (or schedule) a search.
        """


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(
        self,
        white: IPlayer | None = None,
        black: IPlayer | None = None,
        position: Position | None = None,
    ) -> None:
        """Set up a new game."""

    @abstractmethod
    def attempt_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> MoveOutcome:
        """Interactive move request from the presentation layer."""

    @abstractmethod
    def submit_move(self, move: Move) -> bool:
        """Submit a complete move. Returns True if legal and applied."""

    @abstractmethod
    def undo_move(self) -> bool:
        """Undo the last move. Returns True on success."""
