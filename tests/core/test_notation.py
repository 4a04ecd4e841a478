"""Tests for move notation and FEN parsing / serialisation."""

import pytest

from knightfall.core.enums import CastlingRights, Color, PieceType
from knightfall.core.move import Move
from knightfall.core.notation import (
    STARTING_FEN,
    move_notation,
    position_from_fen,
    position_to_fen,
)
from knightfall.core.piece import Piece
from knightfall.core.position import Position
from knightfall.core.rules import Rules
from knightfall.core.types import E1, E8, parse_square


def _notation(fen: str, uci: str) -> str:
    pos = position_from_fen(fen)
    from_sq, to_sq = parse_square(uci[:2]), parse_square(uci[2:4])
    (move,) = [m for m in Rules.legal_moves(pos, from_sq=from_sq) if m.to_sq == to_sq]
    return move_notation(move)


class TestMoveNotation:
    def test_pawn_push(self) -> None:
        assert _notation(STARTING_FEN, "e2e4") == "e4"

    def test_pawn_capture(self) -> None:
        fen = "4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1"
        assert _notation(fen, "e4d5") == "exd5"

    def test_en_passant(self) -> None:
        fen = "4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1"
        assert _notation(fen, "e5d6") == "exd6 e.p."

    def test_knight_uses_k(self) -> None:
        assert _notation(STARTING_FEN, "g1f3") == "Kf3"

    def test_piece_capture(self) -> None:
        fen = "4k3/8/8/3r4/8/8/8/3QK3 w - - 0 1"
        assert _notation(fen, "d1d5") == "Qxd5"

    def test_king_move(self) -> None:
        assert _notation("4k3/8/8/8/8/8/8/4K3 w - - 0 1", "e1d2") == "Kd2"

    def test_castles(self) -> None:
        fen = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"
        assert _notation(fen, "e1g1") == "O-O"
        assert _notation(fen, "e1c1") == "O-O-O"

    def test_promotion_is_destination_only(self) -> None:
        fen = "4k3/P7/8/8/8/8/8/4K3 w - - 0 1"
        assert _notation(fen, "a7a8") == "a8"

    def test_hand_built_move(self) -> None:
        move = Move(E1, E8, Piece(Color.WHITE, PieceType.ROOK), Piece(Color.BLACK, PieceType.KING))
        assert move_notation(move) == "Rxe8"


class TestFenParsing:
    def test_starting(self) -> None:
        assert position_from_fen(STARTING_FEN) == Position.initial()

    def test_fields(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w Kq d6 5 40")
        assert pos.side_to_move == Color.WHITE
        assert pos.castling == CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        assert pos.en_passant == parse_square("d6")

    def test_clocks_optional(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 b - -")
        assert pos.side_to_move == Color.BLACK
        assert pos.castling == CastlingRights.NONE

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "8/8/8/8/8/8/8 w - - 0 1",
            "9/8/8/8/8/8/8/8 w - - 0 1",
            "ppppppppp/8/8/8/8/8/8/8 w - - 0 1",
            "8/8/8/8/8/8/8/7 w - - 0 1",
            "8/8/8/8/8/8/8/8 x - - 0 1",
            "8/8/8/8/8/8/8/8 w X - 0 1",
            "8/8/8/8/8/8/8/8 w KK - 0 1",
            "8/8/8/8/8/8/8/8 w - e3 0 1",
            "8/8/8/8/8/8/8/8 w - z9 0 1",
            "8/8/8/8/8/8/8/x7 w - - 0 1",
        ],
    )
    def test_invalid(self, fen: str) -> None:
        with pytest.raises(ValueError):
            position_from_fen(fen)


class TestFenSerialisation:
    def test_starting(self) -> None:
        assert position_to_fen(Position.initial()) == STARTING_FEN

    def test_clocks_are_zeroed(self) -> None:
        fen = position_to_fen(position_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 12 60"))
        assert fen == "4k3/8/8/8/8/8/8/4K3 w - - 0 1"

    def test_en_passant_written(self) -> None:
        pos = Position.initial()
        e4 = Rules.legal_moves(pos, from_sq=parse_square("e2"))[0]
        assert position_to_fen(pos.apply(e4)) == (
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )
