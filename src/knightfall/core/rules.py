"""High-level chess rules: legality filter, check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from knightfall.core.attacks import is_attacked, is_in_check
from knightfall.core.enums import Color, GameResult
from knightfall.core.move_generator import MoveGenerator
from knightfall.core.types import Square, make_square, rank_of

if TYPE_CHECKING:
    from knightfall.core.move import Move
    from knightfall.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Every ``color`` argument defaults to the position's side to move.
    """

    @staticmethod
    def is_in_check(position: Position, color: Color | None = None) -> bool:
        if color is None:
            color = position.side_to_move
        return is_in_check(position, color)

    @staticmethod
    def is_king_missing(position: Position) -> bool:
        """Either king is absent: a corrupted or already-decided position."""
        return (
            position.king_square(Color.WHITE) is None
            or position.king_square(Color.BLACK) is None
        )

    @staticmethod
    def is_legal(position: Position, move: Move) -> bool:
        """Whether *move* is pseudo-legal and keeps the mover's king safe."""
        piece = position.board[move.from_sq]
        if piece is None or piece != move.piece:
            return False
        candidates = MoveGenerator(position).moves_from(
            move.from_sq, under_promotions=True
        )
        if move not in candidates:
            return False
        return Rules._keeps_king_safe(position, move)

    @staticmethod
    def legal_moves(
        position: Position,
        color: Color | None = None,
        from_sq: Square | None = None,
    ) -> list[Move]:
        """Legal moves for *color*, optionally only those starting on *from_sq*.

        Order is board order by origin, then destination. Promotions are
        generated once, as queen promotions.
        """
        if color is None:
            color = position.side_to_move
        gen = MoveGenerator(position)
        if from_sq is None:
            candidates = gen.pseudo_legal_moves(color)
        else:
            piece = position.board[from_sq]
            if piece is None or piece.color != color:
                return []
            candidates = gen.moves_from(from_sq)
        return [m for m in candidates if Rules._keeps_king_safe(position, m)]

    @staticmethod
    def has_legal_move(position: Position, color: Color | None = None) -> bool:
        if color is None:
            color = position.side_to_move
        gen = MoveGenerator(position)
        for sq in position.board.all_pieces(color):
            for move in gen.moves_from(sq):
                if Rules._keeps_king_safe(position, move):
                    return True
        return False

    @staticmethod
    def is_checkmate(position: Position, color: Color | None = None) -> bool:
        if color is None:
            color = position.side_to_move
        if not is_in_check(position, color):
            return False
        return not Rules.has_legal_move(position, color)

    @staticmethod
    def is_stalemate(position: Position, color: Color | None = None) -> bool:
        if color is None:
            color = position.side_to_move
        if is_in_check(position, color):
            return False
        if position.king_square(color) is None:
            return False
        return not Rules.has_legal_move(position, color)

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Determine the result with the side to move about to play."""
        side = position.side_to_move
        if position.king_square(side) is None:
            return GameResult.BLACK_WINS if side == Color.WHITE else GameResult.WHITE_WINS
        if position.king_square(side.opposite) is None:
            return GameResult.WHITE_WINS if side == Color.WHITE else GameResult.BLACK_WINS

        if Rules.has_legal_move(position, side):
            return GameResult.IN_PROGRESS
        if is_in_check(position, side):
            return GameResult.BLACK_WINS if side == Color.WHITE else GameResult.WHITE_WINS
        return GameResult.DRAW  # stalemate

    # ── Internal ─────────────────────────────────────────────────────────

    @staticmethod
    def _keeps_king_safe(position: Position, move: Move) -> bool:
        color = move.piece.color
        opponent = color.opposite

        if move.is_castle:
            if is_in_check(position, color):
                return False
            rank = rank_of(move.from_sq)
            step = 1 if move.to_sq > move.from_sq else -1
            for file_idx in range(4, 4 + 3 * step, step):
                if is_attacked(position, make_square(file_idx, rank), opponent):
                    return False

        return not is_in_check(position.apply(move), color)
