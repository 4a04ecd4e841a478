"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from knightfall.core.enums import Color
    from knightfall.core.move import Move
    from knightfall.core.position import Position

DEFAULT_DEPTH = 3


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = DEFAULT_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"Search depth must be >= 1, got {self.max_depth}")


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search.

    ``best_move`` is None when the searched side has no legal move; the
    caller decides between checkmate and stalemate from the position.
    """

    best_move: Move | None
    score: int
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for chess engines used by the game layer."""

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        color: Color | None = None,
    ) -> SearchResult: ...
