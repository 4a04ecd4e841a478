"""Move notation and FEN parsing / serialisation."""

from __future__ import annotations

from knightfall.core.board import Board
from knightfall.core.enums import CastlingRights, Color, MoveFlag, PieceType
from knightfall.core.move import Move
from knightfall.core.piece import Piece
from knightfall.core.position import Position
from knightfall.core.types import (
    Square,
    file_name,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


# ── Move notation ────────────────────────────────────────────────────────────


def move_notation(move: Move) -> str:
    """Short algebraic notation for the move list.

    Pieces are named by the uppercase first letter of their kind, so both
    king and knight moves start with ``K``. No disambiguation and no check
    suffix are added.
    """
    if move.flag == MoveFlag.CASTLE_KINGSIDE:
        return "O-O"
    if move.flag == MoveFlag.CASTLE_QUEENSIDE:
        return "O-O-O"

    dest = square_name(move.to_sq)
    if move.flag == MoveFlag.EN_PASSANT:
        return f"{file_name(move.from_sq)}x{dest} e.p."
    if move.piece.piece_type == PieceType.PAWN:
        if move.is_capture:
            return f"{file_name(move.from_sq)}x{dest}"
        return dest

    capture = "x" if move.is_capture else ""
    return f"{move.piece.initial}{capture}{dest}"


# ── FEN ──────────────────────────────────────────────────────────────────────


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    Only the first four fields are used; the move clocks are accepted and
    ignored.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                board[make_square(file, rank)] = Piece.from_char(ch)
                file += 1
            if file > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        rights = dict(_CASTLING_CHARS)
        for ch in castling_part:
            right = rights.pop(ch, None)
            if right is None:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            castling |= right

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        ep = parse_square(ep_part)
        expected_ep_rank = 5 if side == Color.WHITE else 2
        if rank_of(ep) != expected_ep_rank:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    return Position(board, side, castling, ep)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN with zeroed move clocks."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[make_square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    side_str = "w" if pos.side_to_move == Color.WHITE else "b"
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if pos.castling & right)
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str or '-'} {ep_str} 0 1"
