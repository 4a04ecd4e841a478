"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from knightfall.core import Position, Rules

    pos = Position.initial()
    for move in Rules.legal_moves(pos):
        print(move)
"""

from knightfall.core.attacks import is_attacked, is_in_check
from knightfall.core.board import Board
from knightfall.core.enums import CastlingRights, Color, GameResult, MoveFlag, PieceType
from knightfall.core.move import PROMOTION_CHOICES, Move
from knightfall.core.move_generator import MoveGenerator
from knightfall.core.notation import (
    STARTING_FEN,
    move_notation,
    position_from_fen,
    position_to_fen,
)
from knightfall.core.piece import Piece
from knightfall.core.position import Position
from knightfall.core.rules import Rules
from knightfall.core.types import (
    Square,
    board_order,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "Square",
    "board_order",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "PROMOTION_CHOICES",
    "Piece",
    "Position",
    "Rules",
    # Attack oracle
    "is_attacked",
    "is_in_check",
    # Notation
    "STARTING_FEN",
    "move_notation",
    "position_from_fen",
    "position_to_fen",
]
