"""Game state machine data: phase, result and the undo record."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from knightfall.core.enums import Color, GameResult
from knightfall.core.move import Move
from knightfall.core.notation import move_notation
from knightfall.core.position import Position
from knightfall.core.rules import Rules
from knightfall.game.interfaces import GameEndReason, GamePhase


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history.

    ``prior`` is the exact position before the move, so undo is a plain
    restore rather than a reverse computation.
    """

    move: Move
    prior: Position
    notation: str
    is_check: bool = False


def record_move(prior: Position, move: Move) -> tuple[Position, MoveRecord]:
    """Derive the next position and the history entry for *move*."""
    position = prior.apply(move)
    record = MoveRecord(
        move=move,
        prior=prior,
        notation=move_notation(move),
        is_check=Rules.is_in_check(position),
    )
    return position, record


class GameRecord:
    """Ordered move history; grows on commit, shrinks on undo."""

    __slots__ = ("_records",)

    def __init__(self) -> None:
        self._records: list[MoveRecord] = []

    def push(self, record: MoveRecord) -> None:
        self._records.append(record)

    def pop(self) -> MoveRecord | None:
        """Remove and return the last record, or None when empty."""
        if not self._records:
            return None
        return self._records.pop()

    def clear(self) -> None:
        self._records.clear()

    @property
    def last(self) -> MoveRecord | None:
        return self._records[-1] if self._records else None

    def notations(self) -> list[str]:
        return [r.notation for r in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[MoveRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> MoveRecord:
        return self._records[index]


@dataclass
class GameState:
    """Manages game lifecycle: phase, result, move history.

    Pure data and rule checks; no threading and no UI.
    """

    position: Position = field(default_factory=Position.initial, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    end_reason: GameEndReason = field(default=GameEndReason.NONE, init=False)
    record: GameRecord = field(default_factory=GameRecord, init=False)
    pending_promotion: Move | None = field(default=None, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, position: Position | None = None) -> None:
        """Initialise (or reset) the game."""
        self.position = position if position is not None else Position.initial()
        self.phase = GamePhase.AWAITING_MOVE
        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        self.pending_promotion = None
        self.record.clear()
        self._check_game_over()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Apply a validated move and return the history record.

        Caller is responsible for legality check.
        """
        self.position, record = record_move(self.position, move)
        self.record.push(record)
        self.pending_promotion = None
        self.phase = GamePhase.AWAITING_MOVE
        self._check_game_over()
        return record

    def undo_last_move(self) -> Move | None:
        """Undo the last move. Returns the undone Move, or None if empty."""
        record = self.record.pop()
        if record is None:
            return None

        self.position = record.prior
        self.pending_promotion = None
        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        self.phase = GamePhase.AWAITING_MOVE
        return record.move

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.record)

    @property
    def fullmove_display(self) -> int:
        """Current full-move number for display."""
        return (self.ply_count // 2) + 1

    @property
    def move_history(self) -> list[MoveRecord]:
        return list(self.record)

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        return Rules.legal_moves(self.position)

    # ── Internal ─────────────────────────────────────────────────────────

    def _check_game_over(self) -> None:
        position = self.position
        if Rules.is_king_missing(position):
            self._finish(Rules.game_result(position), GameEndReason.KING_MISSING)
        elif not Rules.has_legal_move(position):
            if Rules.is_in_check(position):
                self._finish(Rules.game_result(position), GameEndReason.CHECKMATE)
            else:
                self._finish(GameResult.DRAW, GameEndReason.STALEMATE)

    def _finish(self, result: GameResult, reason: GameEndReason) -> None:
        self.result = result
        self.end_reason = reason
        self.phase = GamePhase.GAME_OVER
