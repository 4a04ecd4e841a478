"""Pseudo-legal move generation (king safety is not considered here)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from knightfall.core.enums import CastlingRights, Color, MoveFlag, PieceType
from knightfall.core.move import PROMOTION_CHOICES, Move
from knightfall.core.piece import Piece
from knightfall.core.types import (
    Square,
    board_order,
    file_of,
    make_square,
    on_board,
    rank_of,
)

if TYPE_CHECKING:
    from knightfall.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Per color: forward rank step, start rank, last rank.
_PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}
_PAWN_START_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}
_PAWN_LAST_RANK: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        moves: list[Square] = []
        for df, dr in offsets:
            if on_board(file_idx + df, rank_idx + dr):
                moves.append(make_square(file_idx + df, rank_idx + dr))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_of(sq) + df
            ar = rank_of(sq) + dr
            ray: list[Square] = []
            while on_board(af, ar):
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


def _build_pawn_captures(color: Color) -> tuple[tuple[Square, ...], ...]:
    dr = _PAWN_DIRECTION[color]
    return _build_targets(((-1, dr), (1, dr)))


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)
# [color][sq] -> squares a pawn of that color on sq captures towards.
PAWN_CAPTURES: tuple[tuple[tuple[Square, ...], ...], ...] = (
    _build_pawn_captures(Color.WHITE),
    _build_pawn_captures(Color.BLACK),
)

_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: BISHOP_RAYS,
    PieceType.ROOK: ROOK_RAYS,
    PieceType.QUEEN: QUEEN_RAYS,
}

# (right, rook file, files that must be empty, king destination file)
_CASTLE_SIDES: dict[Color, tuple[tuple[CastlingRights, int, tuple[int, ...], int], ...]] = {
    Color.WHITE: (
        (CastlingRights.WHITE_KINGSIDE, 7, (5, 6), 6),
        (CastlingRights.WHITE_QUEENSIDE, 0, (1, 2, 3), 2),
    ),
    Color.BLACK: (
        (CastlingRights.BLACK_KINGSIDE, 7, (5, 6), 6),
        (CastlingRights.BLACK_QUEENSIDE, 0, (1, 2, 3), 2),
    ),
}
_HOME_RANK: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}


class MoveGenerator:
    """Enumerates pseudo-legal moves for a given :class:`Position`.

    Pseudo-legal moves follow piece movement and board occupancy but may
    leave the mover's own king in check; :class:`~knightfall.core.rules.Rules`
    filters them down to legal moves.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def destinations(self, sq: Square, include_castling: bool = True) -> list[Square]:
        """Pseudo-legal destination squares of the piece on *sq*, in board order."""
        piece = self._board[sq]
        if piece is None:
            return []

        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            targets = self._pawn_targets(sq, piece.color)
        elif ptype == PieceType.KNIGHT:
            targets = self._step_targets(KNIGHT_TARGETS[sq], piece.color)
        elif ptype == PieceType.KING:
            targets = self._step_targets(KING_TARGETS[sq], piece.color)
            if include_castling:
                targets.extend(self._castle_targets(sq, piece.color))
        else:
            targets = self._sliding_targets(_SLIDER_RAYS[ptype][sq], piece.color)
        return sorted(targets, key=board_order)

    def moves_from(
        self,
        sq: Square,
        include_castling: bool = True,
        under_promotions: bool = False,
    ) -> list[Move]:
        """Pseudo-legal moves of the piece on *sq*, ordered by destination.

        Promotions default to a queen; with *under_promotions* every
        promotion piece gets its own move.
        """
        piece = self._board[sq]
        if piece is None:
            return []

        moves: list[Move] = []
        for to_sq in self.destinations(sq, include_castling):
            move = self._build_move(sq, to_sq, piece)
            if move.is_promotion and under_promotions:
                moves.extend(move.with_promotion(pt) for pt in PROMOTION_CHOICES)
            else:
                moves.append(move)
        return moves

    def pseudo_legal_moves(
        self,
        color: Color | None = None,
        under_promotions: bool = False,
    ) -> list[Move]:
        """All pseudo-legal moves for *color* (default: side to move).

        Moves come out in board order of origin, then destination.
        """
        if color is None:
            color = self._pos.side_to_move
        moves: list[Move] = []
        for sq in sorted(self._board.all_pieces(color), key=board_order):
            moves.extend(self.moves_from(sq, under_promotions=under_promotions))
        return moves

    # -- Piece-specific generators (private) -------------------------------

    def _build_move(self, from_sq: Square, to_sq: Square, piece: Piece) -> Move:
        captured = self._board[to_sq]
        flag = MoveFlag.NORMAL
        promotion: PieceType | None = None

        if piece.piece_type == PieceType.PAWN:
            if rank_of(to_sq) == _PAWN_LAST_RANK[piece.color]:
                flag = MoveFlag.PROMOTION
                promotion = PieceType.QUEEN
            elif abs(to_sq - from_sq) == 16:
                flag = MoveFlag.DOUBLE_PAWN
            elif captured is None and file_of(to_sq) != file_of(from_sq):
                flag = MoveFlag.EN_PASSANT
                captured = self._board[make_square(file_of(to_sq), rank_of(from_sq))]
        elif piece.piece_type == PieceType.KING:
            delta = file_of(to_sq) - file_of(from_sq)
            if delta == 2:
                flag = MoveFlag.CASTLE_KINGSIDE
            elif delta == -2:
                flag = MoveFlag.CASTLE_QUEENSIDE

        return Move(from_sq, to_sq, piece, captured, promotion, flag)

    def _pawn_targets(self, sq: Square, color: Color) -> list[Square]:
        board = self._board
        targets: list[Square] = []
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        dr = _PAWN_DIRECTION[color]

        if on_board(file_idx, rank_idx + dr):
            one_step = make_square(file_idx, rank_idx + dr)
            if board.is_empty(one_step):
                targets.append(one_step)
                if rank_idx == _PAWN_START_RANK[color]:
                    two_step = make_square(file_idx, rank_idx + 2 * dr)
                    if board.is_empty(two_step):
                        targets.append(two_step)

        # The en-passant target only belongs to the side to move.
        en_passant = self._pos.en_passant if color == self._pos.side_to_move else None
        for cap_sq in PAWN_CAPTURES[color][sq]:
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    targets.append(cap_sq)
            elif cap_sq == en_passant:
                targets.append(cap_sq)
        return targets

    def _step_targets(
        self,
        candidates: tuple[Square, ...],
        color: Color,
    ) -> list[Square]:
        board = self._board
        targets: list[Square] = []
        for to_sq in candidates:
            target = board[to_sq]
            if target is None or target.color != color:
                targets.append(to_sq)
        return targets

    def _sliding_targets(
        self,
        rays: tuple[tuple[Square, ...], ...],
        color: Color,
    ) -> list[Square]:
        board = self._board
        targets: list[Square] = []
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    targets.append(to_sq)
                    continue
                if target.color != color:
                    targets.append(to_sq)
                break
        return targets

    def _castle_targets(self, king_sq: Square, color: Color) -> list[Square]:
        """Castle destinations; attacked squares are left to the legality filter."""
        rank = _HOME_RANK[color]
        if king_sq != make_square(4, rank):
            return []

        board = self._board
        rook = Piece(color, PieceType.ROOK)
        targets: list[Square] = []
        for right, rook_file, empty_files, king_file in _CASTLE_SIDES[color]:
            if not self._pos.castling & right:
                continue
            if board[make_square(rook_file, rank)] != rook:
                continue
            if all(board.is_empty(make_square(f, rank)) for f in empty_files):
                targets.append(make_square(king_file, rank))
        return targets
