"""Functional interface for presentation layers.

These functions work on position values and never hold game state;
:class:`~knightfall.game.controller.GameController` is the stateful
counterpart built on the same rules.
"""

from __future__ import annotations

from knightfall.core.enums import Color, PieceType
from knightfall.core.move import PROMOTION_CHOICES, Move
from knightfall.core.position import Position
from knightfall.core.rules import Rules
from knightfall.core.types import Square
from knightfall.engine.minimax import choose_automated_move
from knightfall.game.interfaces import RejectReason
from knightfall.game.outcomes import MoveResult, Rejected
from knightfall.game.state import GameRecord, record_move

__all__ = [
    "attempt_move",
    "choose_automated_move",
    "initial_position",
    "legal_moves",
    "undo",
]


def initial_position() -> Position:
    return Position.initial()


def legal_moves(
    position: Position,
    color: Color | None = None,
    from_sq: Square | None = None,
) -> set[Move]:
    """Legal moves of *color* (default: side to move), optionally from one square."""
    return set(Rules.legal_moves(position, color, from_sq))


def attempt_move(
    position: Position,
    move: Move,
    promotion: PieceType | None = None,
) -> MoveResult | Rejected:
    """Play *move* on *position* if it is legal for the side to move.

    The move is matched by origin and destination; *promotion* overrides the
    promotion piece of a pawn reaching the last rank (queen by default).
    """
    if Rules.is_king_missing(position) or not Rules.has_legal_move(position):
        return Rejected(RejectReason.GAME_OVER, "the game is over")

    if promotion is not None and promotion not in PROMOTION_CHOICES:
        return Rejected(RejectReason.INVALID_PROMOTION, f"cannot promote to {promotion}")

    candidate = next(
        (
            m
            for m in Rules.legal_moves(position, from_sq=move.from_sq)
            if m.to_sq == move.to_sq
        ),
        None,
    )
    if candidate is None:
        return Rejected(RejectReason.ILLEGAL_MOVE, f"{move} is not legal")

    if candidate.is_promotion:
        choice = promotion or move.promotion or PieceType.QUEEN
        if choice not in PROMOTION_CHOICES:
            return Rejected(RejectReason.INVALID_PROMOTION, f"cannot promote to {choice}")
        candidate = candidate.with_promotion(choice)

    new_position, record = record_move(position, candidate)
    no_reply = not Rules.has_legal_move(new_position)
    return MoveResult(
        position=new_position,
        record=record,
        is_checkmate=no_reply and record.is_check,
        is_stalemate=no_reply and not record.is_check,
    )


def undo(record: GameRecord) -> Position | None:
    """Pop the last move from *record* and return the position before it.

    Returns None, leaving *record* untouched, when there is nothing to undo
    or the last move ended the game.
    """
    last = record.last
    if last is None:
        return None
    final = last.prior.apply(last.move)
    if Rules.is_king_missing(final) or not Rules.has_legal_move(final):
        return None
    record.pop()
    return last.prior
