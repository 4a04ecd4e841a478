"""Result values returned by move requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from knightfall.core.move import Move
    from knightfall.core.position import Position
    from knightfall.game.interfaces import RejectReason
    from knightfall.game.state import MoveRecord


@dataclass(frozen=True, slots=True)
class MoveResult:
    """A committed move and what it did to the game."""

    position: Position
    record: MoveRecord
    is_checkmate: bool = False
    is_stalemate: bool = False

    @property
    def move(self) -> Move:
        return self.record.move

    @property
    def notation(self) -> str:
        return self.record.notation

    @property
    def is_check(self) -> bool:
        return self.record.is_check

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class PromotionPending:
    """A legal pawn move to the last rank waiting for a promotion choice."""

    move: Move

    @property
    def accepted(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Rejected:
    """A refused request; nothing changed."""

    reason: RejectReason
    detail: str = ""

    @property
    def accepted(self) -> bool:
        return False


MoveOutcome: TypeAlias = "MoveResult | PromotionPending | Rejected"
