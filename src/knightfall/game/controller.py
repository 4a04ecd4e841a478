"""GameController: the central orchestrator of a chess game.

Coordinates: Players, GameState, Rules and the search engine.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from knightfall.core.enums import Color, GameResult, PieceType
from knightfall.core.move import PROMOTION_CHOICES, Move
from knightfall.core.position import Position
from knightfall.core.rules import Rules
from knightfall.core.types import Square, square_name
from knightfall.engine.minimax import MinimaxEngine
from knightfall.engine.search import IEngine, SearchLimits
from knightfall.game.interfaces import (
    GameEndReason,
    GamePhase,
    IGameController,
    IPlayer,
    RejectReason,
)
from knightfall.game.outcomes import MoveOutcome, MoveResult, PromotionPending, Rejected
from knightfall.game.player import AIPlayer, HumanPlayer
from knightfall.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, str, "GameState"], None]  # move, notation, state
GameOverCallback = Callable[[GameResult, GameEndReason], None]
PhaseCallback = Callable[[GamePhase], None]
PromotionCallback = Callable[[Move], None]  # pending move, queen by default


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full chess game: validates moves, handles promotion
    choices, switches turns, keeps the undo record and notifies listeners.

    Every move, human or automated, goes through the same commit path.
    Methods are meant to be called from a single thread; automated moves
    computed elsewhere come back through :meth:`submit_move`.
    """

    __slots__ = ("_state", "_players", "_engine", "_limits", "events")

    def __init__(
        self,
        engine: IEngine | None = None,
        limits: SearchLimits | None = None,
    ) -> None:
        self._state = GameState()
        self._players: dict[Color, IPlayer] = {}
        self._engine: IEngine = engine or MinimaxEngine()
        self._limits = limits or SearchLimits()
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def position(self) -> Position:
        return self._state.position

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer | None = None,
        black: IPlayer | None = None,
        position: Position | None = None,
    ) -> None:
        self._players = {
            Color.WHITE: white or HumanPlayer(Color.WHITE),
            Color.BLACK: black or HumanPlayer(Color.BLACK),
        }
        self._state = GameState()
        self._state.setup(position)

        if self._state.is_game_over:
            self._emit_game_over()
            return
        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._prompt_current_player()

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the side to move starting on *sq*."""
        if self._state.phase != GamePhase.AWAITING_MOVE:
            return []
        return Rules.legal_moves(
            self._state.position, self._state.side_to_move, from_sq=sq
        )

    def attempt_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> MoveOutcome:
        rejection = self._check_phase(GamePhase.AWAITING_MOVE)
        if rejection is not None:
            return rejection

        piece = self._state.position.board[from_sq]
        if piece is None or piece.color != self._state.side_to_move:
            return self._reject(
                RejectReason.NO_PIECE,
                f"no {self._state.side_to_move} piece on {square_name(from_sq)}",
            )

        move = next(
            (m for m in self.legal_moves_from(from_sq) if m.to_sq == to_sq), None
        )
        if move is None:
            return self._reject(
                RejectReason.ILLEGAL_MOVE,
                f"{square_name(from_sq)}{square_name(to_sq)} is not legal",
            )

        if move.is_promotion:
            if promotion is None:
                return self._await_promotion(move)
            if promotion not in PROMOTION_CHOICES:
                return self._reject(
                    RejectReason.INVALID_PROMOTION, f"cannot promote to {promotion}"
                )
            move = move.with_promotion(promotion)

        return self._commit(move)

    def choose_promotion(self, piece_type: PieceType) -> MoveOutcome:
        """Complete a pending promotion with *piece_type*."""
        rejection = self._check_phase(GamePhase.AWAITING_PROMOTION)
        if rejection is not None:
            return rejection
        pending = self._state.pending_promotion
        assert pending is not None

        if piece_type not in PROMOTION_CHOICES:
            return self._reject(
                RejectReason.INVALID_PROMOTION, f"cannot promote to {piece_type}"
            )
        return self._commit(pending.with_promotion(piece_type))

    def cancel_promotion(self) -> bool:
        """Drop a pending promotion and go back to awaiting a move."""
        if self._state.phase != GamePhase.AWAITING_PROMOTION:
            return False
        self._state.pending_promotion = None
        self._state.phase = GamePhase.AWAITING_MOVE
        self._emit_phase(GamePhase.AWAITING_MOVE)
        return True

    def submit_move(self, move: Move) -> bool:
        if self._state.is_game_over:
            return False
        if self._state.phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return False
        if move.piece.color != self._state.side_to_move:
            return False
        if move.is_promotion and move.promotion is None:
            move = move.with_promotion(PieceType.QUEEN)
        if not Rules.is_legal(self._state.position, move):
            _LOGGER.debug("Rejected submitted move %s", move)
            return False

        self._commit(move)
        return True

    def play_automated_move(self, depth: int | None = None) -> Move | None:
        """Search the live position and commit the engine's choice.

        Without *depth*, an engine player to move searches with its own
        limits and anyone else with the controller's. Returns None when the
        game is over or the side to move has no legal move.
        """
        if self._state.is_game_over:
            return None
        if self._state.phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return None

        if depth is not None:
            limits = SearchLimits(max_depth=depth)
        elif isinstance(self.current_player, AIPlayer):
            limits = self.current_player.limits
        else:
            limits = self._limits
        result = self._engine.search(self._state.position, limits)
        if result.best_move is None:
            return None

        self._commit(result.best_move)
        return result.best_move

    def undo_move(self) -> bool:
        if self._state.is_game_over or not self._state.record:
            return False

        move = self._state.undo_last_move()
        _LOGGER.debug("Undid %s", move)
        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._prompt_current_player()
        return True

    # ── Rule queries ─────────────────────────────────────────────────────

    def is_in_check(self, color: Color | None = None) -> bool:
        return Rules.is_in_check(self._state.position, color)

    def is_checkmate(self, color: Color | None = None) -> bool:
        return Rules.is_checkmate(self._state.position, color)

    def is_stalemate(self, color: Color | None = None) -> bool:
        return Rules.is_stalemate(self._state.position, color)

    def notations(self) -> list[str]:
        return self._state.record.notations()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _check_phase(self, expected: GamePhase) -> Rejected | None:
        if self._state.is_game_over:
            return self._reject(RejectReason.GAME_OVER, "the game is over")
        if self._state.phase != expected:
            return self._reject(
                RejectReason.WRONG_PHASE, f"phase is {self._state.phase.name}"
            )
        return None

    def _reject(self, reason: RejectReason, detail: str) -> Rejected:
        _LOGGER.debug("Rejected move request: %s (%s)", reason.name, detail)
        return Rejected(reason, detail)

    def _await_promotion(self, move: Move) -> PromotionPending:
        self._state.pending_promotion = move
        self._state.phase = GamePhase.AWAITING_PROMOTION
        self._emit_phase(GamePhase.AWAITING_PROMOTION)
        for cb in self.events.on_promotion_required:
            cb(move)
        return PromotionPending(move)

    def _commit(self, move: Move) -> MoveResult:
        record = self._state.apply_move(move)
        _LOGGER.debug("Committed %s (%s)", record.notation, move)

        outcome = MoveResult(
            position=self._state.position,
            record=record,
            is_checkmate=self._state.end_reason == GameEndReason.CHECKMATE,
            is_stalemate=self._state.end_reason == GameEndReason.STALEMATE,
        )
        self._emit_move(move, record.notation)

        if self._state.is_game_over:
            self._emit_game_over()
            return outcome

        self._prompt_current_player()
        return outcome

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if cp.is_human:
            self._state.phase = GamePhase.AWAITING_MOVE
            self._emit_phase(GamePhase.AWAITING_MOVE)
        else:
            self._state.phase = GamePhase.THINKING
            self._emit_phase(GamePhase.THINKING)
            cp.request_move(self._state.position)

    def _emit_move(self, move: Move, notation: str) -> None:
        for cb in self.events.on_move:
            cb(move, notation, self._state)

    def _emit_game_over(self) -> None:
        _LOGGER.info(
            "Game over: %s by %s",
            self._state.result.name,
            self._state.end_reason.name,
        )
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(self._state.result, self._state.end_reason)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
