"""Attack detection on a position value.

These queries only read the board; they never build moves or positions,
so castling legality can depend on them without recursion.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from knightfall.core.enums import Color, PieceType
from knightfall.core.move_generator import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    PAWN_CAPTURES,
    ROOK_RAYS,
)
from knightfall.core.piece import Piece
from knightfall.core.types import Square

if TYPE_CHECKING:
    from knightfall.core.position import Position

_DIAGONAL_ATTACKERS = (PieceType.BISHOP, PieceType.QUEEN)
_STRAIGHT_ATTACKERS = (PieceType.ROOK, PieceType.QUEEN)


def is_attacked(position: Position, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Castling never attacks. Pawns attack their two forward diagonals
    whether or not the square is occupied; pawn pushes never attack.
    """
    board = position.board

    # A pawn of by_color attacks sq from the squares a defending pawn on sq
    # would capture towards.
    pawn = Piece(by_color, PieceType.PAWN)
    for from_sq in PAWN_CAPTURES[by_color.opposite][sq]:
        if board[from_sq] == pawn:
            return True

    knight = Piece(by_color, PieceType.KNIGHT)
    for from_sq in KNIGHT_TARGETS[sq]:
        if board[from_sq] == knight:
            return True

    king = Piece(by_color, PieceType.KING)
    for from_sq in KING_TARGETS[sq]:
        if board[from_sq] == king:
            return True

    return _ray_attacked(position, BISHOP_RAYS[sq], by_color, _DIAGONAL_ATTACKERS) or (
        _ray_attacked(position, ROOK_RAYS[sq], by_color, _STRAIGHT_ATTACKERS)
    )


def _ray_attacked(
    position: Position,
    rays: tuple[tuple[Square, ...], ...],
    by_color: Color,
    sliders: tuple[PieceType, ...],
) -> bool:
    board = position.board
    for ray in rays:
        for from_sq in ray:
            piece = board[from_sq]
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in sliders:
                return True
            break
    return False


def is_in_check(position: Position, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?

    A missing king is never in check; callers treat its absence as a
    finished game instead.
    """
    king_sq = position.king_square(color)
    if king_sq is None:
        return False
    return is_attacked(position, king_sq, color.opposite)
