"""Tests for player implementations."""

import pytest

from knightfall.core.enums import Color
from knightfall.core.position import Position
from knightfall.engine.search import SearchLimits
from knightfall.game.player import AIPlayer, HumanPlayer


class TestHumanPlayer:
    def test_properties(self) -> None:
        p = HumanPlayer(Color.WHITE, "Alice")
        assert p.color == Color.WHITE
        assert p.name == "Alice"
        assert p.is_human

    def test_default_name(self) -> None:
        assert HumanPlayer(Color.BLACK).name == "Player (black)"

    def test_request_move_is_noop(self) -> None:
        HumanPlayer(Color.WHITE).request_move(Position.initial())


class TestAIPlayer:
    def test_properties(self) -> None:
        p = AIPlayer(Color.BLACK)
        assert p.color == Color.BLACK
        assert p.name == "Engine (depth 3)"
        assert not p.is_human

    def test_owns_search_depth(self) -> None:
        p = AIPlayer(Color.WHITE, depth=2, name="Sparring")
        assert p.depth == 2
        assert p.limits == SearchLimits(max_depth=2)
        assert p.name == "Sparring"

    def test_invalid_depth(self) -> None:
        with pytest.raises(ValueError):
            AIPlayer(Color.WHITE, depth=0)

    def test_request_move_calls_bridge(self) -> None:
        seen: list[Position] = []
        p = AIPlayer(Color.BLACK, on_request_move=seen.append)
        pos = Position.initial()
        p.request_move(pos)
        assert seen == [pos]

    def test_request_move_without_bridge(self) -> None:
        AIPlayer(Color.WHITE).request_move(Position.initial())
