"""Static evaluation: material plus a fixed home-rank pawn term."""

from __future__ import annotations

from typing import TYPE_CHECKING

from knightfall.core.enums import Color, PieceType
from knightfall.core.types import rank_of

if TYPE_CHECKING:
    from knightfall.core.position import Position

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20_000,
}

# Pawns still on their starting rank. Only the evaluated side is rewarded;
# the term looks at one fixed rank per color, not at actual pawn advancement.
OWN_HOME_PAWN_BONUS = 50
OPPONENT_HOME_PAWN_BONUS = 0

_PAWN_HOME_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}


class Evaluator:
    """Scores positions from one side's point of view."""

    __slots__ = ("_piece_values",)

    def __init__(self, piece_values: dict[PieceType, int] | None = None) -> None:
        self._piece_values = dict(PIECE_VALUES if piece_values is None else piece_values)

    def evaluate(self, position: Position, color: Color) -> int:
        """Signed score: positive when *color* is ahead."""
        score = 0
        for sq, piece in position.board.occupied():
            value = self._piece_values[piece.piece_type]
            home_rank = _PAWN_HOME_RANK[piece.color]
            if piece.piece_type == PieceType.PAWN and rank_of(sq) == home_rank:
                value += (
                    OWN_HOME_PAWN_BONUS
                    if piece.color == color
                    else OPPONENT_HOME_PAWN_BONUS
                )
            score += value if piece.color == color else -value
        return score

    def material(self, position: Position, color: Color) -> int:
        """Sum of *color*'s piece values, kings included."""
        return sum(
            self._piece_values[piece.piece_type]
            for _, piece in position.board.occupied()
            if piece.color == color
        )
