"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from knightfall.core.position import Position
from knightfall.engine.minimax import MinimaxEngine
from knightfall.engine.search import IEngine, SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Move it to a ``QThread`` and connect ``request_move`` to a queued signal;
    results come back through the signals below, tagged with the caller's
    request id so stale answers can be dropped.
    """

    best_move_ready = pyqtSignal(int, object, int, int, int)
    search_no_move = pyqtSignal(int, int, int)
    search_error = pyqtSignal(int, str)

    def __init__(self, *, max_depth: int = 3, engine: IEngine | None = None) -> None:
        super().__init__()
        self._engine: IEngine = engine or MinimaxEngine()
        self._limits = SearchLimits(max_depth=max_depth)

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, request_id: int) -> None:
        """Search for the best move in *position_obj* and emit the result."""
        if not isinstance(position_obj, Position):
            self.search_error.emit(request_id, "Engine received invalid position")
            return

        try:
            result = self._engine.search(position_obj, self._limits)
        except Exception as exc:
            _LOGGER.exception("Engine search failed for request %d", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if result.best_move is None:
            self.search_no_move.emit(request_id, result.score, result.nodes)
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.depth,
            result.nodes,
        )

    @pyqtSlot(int)
    def set_depth(self, max_depth: int) -> None:
        """Update the search depth (takes effect on the next search)."""
        try:
            self._limits = SearchLimits(max_depth=max_depth)
        except ValueError as exc:
            self.search_error.emit(-1, str(exc))
