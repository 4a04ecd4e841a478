"""Position: complete rules state (board + metadata) with pure move application."""

from __future__ import annotations

from knightfall.core.board import Board
from knightfall.core.enums import CastlingRights, Color, MoveFlag, PieceType
from knightfall.core.move import Move
from knightfall.core.piece import Piece
from knightfall.core.types import Square, file_of, make_square, rank_of

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}

_KING_RIGHTS: dict[Color, CastlingRights] = {
    Color.WHITE: CastlingRights.WHITE_BOTH,
    Color.BLACK: CastlingRights.BLACK_BOTH,
}


class Position:
    """Full chess position: board + side to move + castling + en passant.

    Positions are immutable by convention: :meth:`apply` derives a new
    position and never touches the receiver, so a position stored in a game
    record or handed to the search engine stays valid forever.
    """

    __slots__ = ("board", "side_to_move", "castling", "en_passant")

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position, white to move."""
        return cls()

    # ── Derivation ───────────────────────────────────────────────────────

    def apply(self, move: Move) -> Position:
        """Return the position reached by playing *move*.

        The move must come from the move generator for this position;
        legality is the caller's responsibility.
        """
        board = self.board.copy()
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on the origin square of {move}")

        board[move.from_sq] = None
        if move.flag == MoveFlag.EN_PASSANT:
            # The captured pawn sits behind the destination, on the mover's rank.
            board[make_square(file_of(move.to_sq), rank_of(move.from_sq))] = None

        if move.flag == MoveFlag.PROMOTION:
            piece = Piece(piece.color, move.promotion or PieceType.QUEEN)
        board[move.to_sq] = piece

        rank = rank_of(move.from_sq)
        if move.flag == MoveFlag.CASTLE_KINGSIDE:
            board[make_square(5, rank)] = board[make_square(7, rank)]
            board[make_square(7, rank)] = None
        elif move.flag == MoveFlag.CASTLE_QUEENSIDE:
            board[make_square(3, rank)] = board[make_square(0, rank)]
            board[make_square(0, rank)] = None

        en_passant: Square | None = None
        if move.flag == MoveFlag.DOUBLE_PAWN:
            en_passant = (move.from_sq + move.to_sq) // 2

        return Position(
            board=board,
            side_to_move=piece.color.opposite,
            castling=self._castling_after(move, piece),
            en_passant=en_passant,
        )

    def _castling_after(self, move: Move, piece: Piece) -> CastlingRights:
        castling = self.castling
        if piece.piece_type == PieceType.KING:
            castling &= ~_KING_RIGHTS[piece.color]

        # A rook leaving its corner, or being captured there, loses its right.
        for sq in (move.from_sq, move.to_sq):
            right = _ROOK_CORNERS.get(sq)
            if right is not None:
                castling &= ~right
        return castling

    # ── Queries ──────────────────────────────────────────────────────────

    def piece_at(self, sq: Square) -> Piece | None:
        return self.board[sq]

    def king_square(self, color: Color) -> Square | None:
        return self.board.king_square(color)

    def has_castling_right(self, right: CastlingRights) -> bool:
        return bool(self.castling & right)

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.board == other.board
        )

    def __hash__(self) -> int:
        return hash((self.board, self.side_to_move, self.castling, self.en_passant))

    def __repr__(self) -> str:
        from knightfall.core.notation import position_to_fen

        return f"Position({position_to_fen(self)!r})"
