"""Chess engine package: evaluation and minimax search.

The Qt worker lives in :mod:`knightfall.engine.qt_bridge` and is imported
explicitly by Qt front-ends.
"""

from knightfall.engine.evaluation import PIECE_VALUES, Evaluator
from knightfall.engine.minimax import MinimaxEngine, choose_automated_move
from knightfall.engine.search import DEFAULT_DEPTH, IEngine, SearchLimits, SearchResult

DefaultEngine: type[IEngine] = MinimaxEngine

__all__ = [
    "DEFAULT_DEPTH",
    "DefaultEngine",
    "Evaluator",
    "IEngine",
    "MinimaxEngine",
    "PIECE_VALUES",
    "SearchLimits",
    "SearchResult",
    "choose_automated_move",
]
