"""Perft tests: the gold standard for move-generator correctness.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from knightfall.core.enums import Color, MoveFlag, PieceType
from knightfall.core.move_generator import MoveGenerator
from knightfall.core.notation import STARTING_FEN, position_from_fen
from knightfall.core.position import Position
from knightfall.core.rules import Rules
from knightfall.core.types import E1, E2, G1, board_order, parse_square

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
POSITION_3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"
POSITION_4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"
POSITION_5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes at *depth*, every promotion piece included."""
    if depth == 0:
        return 1
    moves = [
        m
        for m in MoveGenerator(position).pseudo_legal_moves(under_promotions=True)
        if Rules.is_legal(position, m)
    ]
    if depth == 1:
        return len(moves)
    return sum(perft(position.apply(m), depth - 1) for m in moves)


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 1) == 20

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 2) == 400

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 3) == 8902


# ── Kiwipete: castling, pins, en passant ────────────────────────────────────


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(KIWIPETE), 1) == 48

    @pytest.mark.slow
    def test_depth_2(self) -> None:
        assert perft(position_from_fen(KIWIPETE), 2) == 2039


class TestPerftPosition3:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POSITION_3), 1) == 14

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POSITION_3), 2) == 191

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(position_from_fen(POSITION_3), 3) == 2812


class TestPerftPosition4:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POSITION_4), 1) == 6

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POSITION_4), 2) == 264


class TestPerftPosition5:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POSITION_5), 1) == 44

    @pytest.mark.slow
    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POSITION_5), 2) == 1486


# ── Generator details ───────────────────────────────────────────────────────


class TestGeneratorOrder:
    def test_board_order(self) -> None:
        moves = MoveGenerator(Position.initial()).pseudo_legal_moves()
        keys = [(board_order(m.from_sq), board_order(m.to_sq)) for m in moves]
        assert keys == sorted(keys)

    def test_first_move_is_a_pawn_double_push(self) -> None:
        first = MoveGenerator(Position.initial()).pseudo_legal_moves()[0]
        assert (first.from_sq, first.to_sq) == (parse_square("a2"), parse_square("a4"))

    def test_far_rank_comes_first(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        targets = MoveGenerator(pos).destinations(parse_square("a1"))
        assert targets[0] == parse_square("a8")
        assert targets[-1] == parse_square("d1")

    def test_destinations_sorted(self) -> None:
        assert MoveGenerator(Position.initial()).destinations(G1) == [
            parse_square("f3"),
            parse_square("h3"),
        ]

    def test_empty_square_has_no_moves(self) -> None:
        gen = MoveGenerator(Position.initial())
        assert gen.destinations(parse_square("e4")) == []
        assert gen.moves_from(parse_square("e4")) == []

    def test_pseudo_legal_for_other_color(self) -> None:
        moves = MoveGenerator(Position.initial()).pseudo_legal_moves(Color.BLACK)
        assert len(moves) == 20
        assert all(m.piece.color == Color.BLACK for m in moves)


class TestMoveFlags:
    def test_double_pawn(self) -> None:
        moves = MoveGenerator(Position.initial()).moves_from(E2)
        flags = {m.to_sq: m.flag for m in moves}
        assert flags[parse_square("e3")] == MoveFlag.NORMAL
        assert flags[parse_square("e4")] == MoveFlag.DOUBLE_PAWN

    def test_blocked_pawn(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        assert MoveGenerator(pos).moves_from(E2) == []

    def test_promotion_defaults_to_queen(self) -> None:
        pos = position_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        (move,) = MoveGenerator(pos).moves_from(parse_square("a7"))
        assert move.flag == MoveFlag.PROMOTION
        assert move.promotion == PieceType.QUEEN

    def test_under_promotions(self) -> None:
        pos = position_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        moves = MoveGenerator(pos).moves_from(parse_square("a7"), under_promotions=True)
        assert [m.promotion for m in moves] == [
            PieceType.QUEEN,
            PieceType.ROOK,
            PieceType.BISHOP,
            PieceType.KNIGHT,
        ]

    def test_castle_targets(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        moves = MoveGenerator(pos).moves_from(E1)
        castles = {m.flag for m in moves if m.is_castle}
        assert castles == {MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE}

    def test_castle_excluded_on_request(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        moves = MoveGenerator(pos).moves_from(E1, include_castling=False)
        assert not any(m.is_castle for m in moves)

    def test_no_castle_without_rook(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K3 w KQkq - 0 1")
        castles = [m for m in MoveGenerator(pos).moves_from(E1) if m.is_castle]
        assert [m.flag for m in castles] == [MoveFlag.CASTLE_QUEENSIDE]

    def test_no_castle_through_pieces(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert not any(m.is_castle for m in MoveGenerator(pos).moves_from(E1))

    def test_en_passant_ignored_for_side_not_to_move(self) -> None:
        # e3 belongs to black; the d2 pawn must not capture onto it.
        pos = position_from_fen("4k3/8/8/8/3pP3/8/3P4/4K3 b - e3 0 1")
        white_moves = MoveGenerator(pos).pseudo_legal_moves(Color.WHITE)
        assert not any(m.is_en_passant for m in white_moves)
        black_moves = MoveGenerator(pos).pseudo_legal_moves(Color.BLACK)
        assert any(m.is_en_passant for m in black_moves)
