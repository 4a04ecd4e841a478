"""Fixed-depth minimax search with alpha-beta pruning."""

from __future__ import annotations

import logging

from knightfall.core.enums import Color
from knightfall.core.move import Move
from knightfall.core.position import Position
from knightfall.core.rules import Rules
from knightfall.engine.evaluation import Evaluator
from knightfall.engine.search import DEFAULT_DEPTH, IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 1_000_000


class MinimaxEngine(IEngine):
    """Plain minimax over derived positions, scored by :class:`Evaluator`.

    The engine never mutates the position it is given: every explored node
    is a new :class:`Position` produced by ``apply``. Leaves are reached at
    depth 0 or when the side to move has no legal move; both are scored
    statically, so a mate found deep in the tree only counts through the
    king's material value.
    """

    __slots__ = ("_evaluator", "_nodes")

    def __init__(self, evaluator: Evaluator | None = None) -> None:
        self._evaluator = evaluator or Evaluator()
        self._nodes = 0

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        color: Color | None = None,
    ) -> SearchResult:
        """Pick the best move for *color* (default: side to move).

        Root moves are tried in board order and only a strictly better
        score replaces the current choice, so ties go to the first move.
        """
        if color is None:
            color = position.side_to_move
        self._nodes = 0
        depth = limits.max_depth

        root_moves = Rules.legal_moves(position, color)
        if not root_moves:
            _LOGGER.debug("No legal move for %s", color)
            return SearchResult(
                None, self._evaluator.evaluate(position, color), 0, self._nodes
            )

        best_move: Move | None = None
        best_score = -_INF_SCORE
        alpha = -_INF_SCORE
        for move in root_moves:
            score = self._minimax(
                position.apply(move),
                depth - 1,
                alpha,
                _INF_SCORE,
                color,
            )
            if score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, score)

        _LOGGER.debug(
            "Search depth=%d nodes=%d best=%s score=%d",
            depth,
            self._nodes,
            best_move,
            best_score,
        )
        return SearchResult(best_move, best_score, depth, self._nodes)

    def _minimax(
        self,
        position: Position,
        depth: int,
        alpha: int,
        beta: int,
        color: Color,
    ) -> int:
        self._nodes += 1
        side = position.side_to_move
        if depth <= 0 or position.king_square(side) is None:
            return self._evaluator.evaluate(position, color)

        moves = Rules.legal_moves(position, side)
        if not moves:
            return self._evaluator.evaluate(position, color)

        if side == color:
            best = -_INF_SCORE
            for move in moves:
                score = self._minimax(position.apply(move), depth - 1, alpha, beta, color)
                best = max(best, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break
            return best

        best = _INF_SCORE
        for move in moves:
            score = self._minimax(position.apply(move), depth - 1, alpha, beta, color)
            best = min(best, score)
            beta = min(beta, score)
            if beta <= alpha:
                break
        return best


def choose_automated_move(
    position: Position, depth: int = DEFAULT_DEPTH
) -> Move | None:
    """Best move for the side to move, or None when it has no legal move."""
    return MinimaxEngine().search(position, SearchLimits(max_depth=depth)).best_move
