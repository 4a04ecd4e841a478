"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from knightfall.core.enums import MoveFlag, PieceType
from knightfall.core.piece import Piece
from knightfall.core.types import Square, square_name

PROMOTION_CHOICES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    ``piece`` is the moving piece and ``captured`` the piece removed by the
    move (for en passant, the pawn behind the destination square).
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None
    promotion: PieceType | None = None
    flag: MoveFlag = MoveFlag.NORMAL

    # ── Classification ───────────────────────────────────────────────────

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    @property
    def is_en_passant(self) -> bool:
        return self.flag == MoveFlag.EN_PASSANT

    @property
    def is_promotion(self) -> bool:
        return self.flag == MoveFlag.PROMOTION

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def with_promotion(self, piece_type: PieceType) -> Move:
        """Same promoting move with a different promotion piece."""
        if not self.is_promotion:
            raise ValueError(f"{self} is not a promotion")
        if piece_type not in PROMOTION_CHOICES:
            raise ValueError(f"Cannot promote to {piece_type}")
        return replace(self, promotion=piece_type)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS[self.promotion]
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
