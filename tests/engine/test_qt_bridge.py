"""Tests for Qt engine bridge worker."""

from __future__ import annotations

import pytest
from PyQt6.QtTest import QSignalSpy

from knightfall.core.enums import Color
from knightfall.core.notation import STARTING_FEN, position_from_fen
from knightfall.core.position import Position
from knightfall.engine.qt_bridge import EngineWorker
from knightfall.engine.search import SearchLimits, SearchResult


class _NoMoveEngine:
    def search(
        self,
        _position: Position,
        _limits: SearchLimits,
        color: Color | None = None,
    ) -> SearchResult:
        del color
        return SearchResult(best_move=None, score=-400, depth=0, nodes=0)


class _FailingEngine:
    def search(
        self,
        _position: Position,
        _limits: SearchLimits,
        color: Color | None = None,
    ) -> SearchResult:
        del color
        raise RuntimeError("engine exploded")


@pytest.mark.usefixtures("qapp")
class TestEngineWorker:
    def test_emits_best_move(self) -> None:
        position = position_from_fen(STARTING_FEN)
        worker = EngineWorker(max_depth=1)

        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(position, 3)

        assert len(best_moves) == 1
        request_id, move, score, depth, nodes = best_moves[0]
        assert request_id == 3
        assert str(move) == "b1a3"
        assert score == 400
        assert depth == 1
        assert nodes == 20
        assert len(errors) == 0

    def test_emits_no_move_when_search_returns_none(self) -> None:
        position = position_from_fen(STARTING_FEN)
        worker = EngineWorker(engine=_NoMoveEngine())

        no_move = QSignalSpy(worker.search_no_move)
        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(position, 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert no_move[0][1] == -400
        assert len(best_moves) == 0
        assert len(errors) == 0

    def test_rejects_non_position(self) -> None:
        worker = EngineWorker()
        errors = QSignalSpy(worker.search_error)

        worker.request_move("not a position", 5)

        assert len(errors) == 1
        assert errors[0][0] == 5

    def test_engine_failure_becomes_error_signal(self) -> None:
        worker = EngineWorker(engine=_FailingEngine())
        errors = QSignalSpy(worker.search_error)

        worker.request_move(position_from_fen(STARTING_FEN), 9)

        assert len(errors) == 1
        assert errors[0][0] == 9
        assert "engine exploded" in errors[0][1]

    def test_set_depth(self) -> None:
        worker = EngineWorker()
        assert worker.limits.max_depth == 3

        worker.set_depth(2)
        assert worker.limits.max_depth == 2

    def test_set_invalid_depth_keeps_limits(self) -> None:
        worker = EngineWorker(max_depth=2)
        errors = QSignalSpy(worker.search_error)

        worker.set_depth(0)

        assert worker.limits.max_depth == 2
        assert len(errors) == 1
