"""Human and engine participants."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from knightfall.core.enums import Color
from knightfall.engine.search import DEFAULT_DEPTH, SearchLimits
from knightfall.game.interfaces import IPlayer

if TYPE_CHECKING:
    from knightfall.core.position import Position


class _Participant(IPlayer):
    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str) -> None:
        self._color = color
        self._name = name

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._color.name}, {self._name!r})"


class HumanPlayer(_Participant):
    """Moves arrive through ``GameController.attempt_move``; prompting is a no-op."""

    __slots__ = ()

    def __init__(self, color: Color, name: str = "") -> None:
        super().__init__(color, name or f"Player ({color})")

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, position: Position) -> None:
        pass


class AIPlayer(_Participant):
    """Engine-controlled side with its own search depth.

    The controller reads :attr:`limits` when it searches for this player.
    When the search runs elsewhere (a Qt ``EngineWorker``, for instance),
    *on_request_move* receives the position to think about and the result
    comes back through ``GameController.submit_move``.

    Args:
        color: Side the engine plays.
        depth: Search depth in plies; must be at least 1.
        name: Display name, ``"Engine (depth N)"`` by default.
        on_request_move: ``(Position) -> None``, called when the controller
            hands this player the move.
    """

    __slots__ = ("_limits", "_on_request_move")

    def __init__(
        self,
        color: Color,
        depth: int = DEFAULT_DEPTH,
        name: str = "",
        on_request_move: Callable[[Position], None] | None = None,
    ) -> None:
        self._limits = SearchLimits(max_depth=depth)
        super().__init__(color, name or f"Engine (depth {depth})")
        self._on_request_move = on_request_move

    @property
    def is_human(self) -> bool:
        return False

    @property
    def depth(self) -> int:
        return self._limits.max_depth

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    def request_move(self, position: Position) -> None:
        if self._on_request_move is not None:
            self._on_request_move(position)
