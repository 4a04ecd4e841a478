"""Console entry point: play against the engine in a terminal."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence

from knightfall.core.enums import Color, GameResult, PieceType
from knightfall.core.move import Move
from knightfall.core.position import Position
from knightfall.core.types import make_square, parse_square
from knightfall.engine.search import DEFAULT_DEPTH, SearchLimits
from knightfall.game.controller import GameController
from knightfall.game.interfaces import GameEndReason, GamePhase
from knightfall.game.outcomes import PromotionPending, Rejected
from knightfall.game.player import AIPlayer, HumanPlayer
from knightfall.game.state import GameState

_LOGGER = logging.getLogger(__name__)

_PROMOTION_LETTERS: dict[str, PieceType] = {
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
}

_HELP = "Enter moves as e2e4 (e7e8q to promote), or: undo, moves, help, quit."


def render_board(position: Position) -> str:
    """Text diagram with white at the bottom."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        cells = []
        for file in range(8):
            piece = position.board[make_square(file, rank)]
            cells.append(piece.symbol if piece is not None else "·")
        rows.append(f"{rank + 1} {' '.join(cells)}")
    rows.append("  a b c d e f g h")
    return "\n".join(rows)


def _describe_result(result: GameResult, reason: GameEndReason) -> str:
    if result == GameResult.DRAW:
        return "Draw by stalemate."
    winner = "White" if result == GameResult.WHITE_WINS else "Black"
    if reason == GameEndReason.KING_MISSING:
        return f"{winner} wins: a king is missing."
    return f"Checkmate. {winner} wins."


class ConsoleGame:
    """Human vs engine loop over a :class:`GameController`."""

    def __init__(
        self,
        human: Color = Color.WHITE,
        depth: int = DEFAULT_DEPTH,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self._human = human
        self._depth = depth
        self._read = read
        self._write = write
        self.controller = GameController(limits=SearchLimits(max_depth=depth))
        self.controller.events.on_move.append(self._on_move)
        self.controller.events.on_game_over.append(
            lambda result, reason: self._write(_describe_result(result, reason))
        )

    def run(self) -> int:
        players = {
            self._human: HumanPlayer(self._human, "You"),
            self._human.opposite: AIPlayer(self._human.opposite, depth=self._depth),
        }
        self.controller.new_game(white=players[Color.WHITE], black=players[Color.BLACK])
        self._write(_HELP)

        while self.controller.phase != GamePhase.GAME_OVER:
            if self.controller.phase == GamePhase.THINKING:
                self._write("Engine is thinking...")
                self.controller.play_automated_move()
                continue

            self._write(render_board(self.controller.position))
            try:
                line = self._read(f"{self.controller.state.side_to_move} > ").strip()
            except EOFError:
                return 0
            if not self._handle(line.lower()):
                return 0

        self._write(render_board(self.controller.position))
        return 0

    def _on_move(self, move: Move, notation: str, state: GameState) -> None:
        number = (state.ply_count + 1) // 2
        dots = "." if move.piece.color == Color.WHITE else "..."
        self._write(f"{number}{dots} {notation}")

    def _handle(self, command: str) -> bool:
        """Process one input line; returns False when the user quits."""
        if command in ("quit", "exit"):
            return False
        if command == "help" or not command:
            self._write(_HELP)
        elif command == "undo":
            self._undo()
        elif command == "moves":
            moves = self.controller.state.legal_moves()
            self._write(" ".join(str(m) for m in moves))
        else:
            self._play(command)
        return True

    def _undo(self) -> None:
        # Take back the engine's reply too, so the human is to move again.
        if not self.controller.undo_move():
            self._write("Nothing to undo.")
            return
        if self.controller.state.side_to_move != self._human:
            self.controller.undo_move()

    def _play(self, text: str) -> None:
        if len(text) not in (4, 5):
            self._write(f"Cannot read move {text!r}. {_HELP}")
            return
        try:
            from_sq = parse_square(text[0:2])
            to_sq = parse_square(text[2:4])
        except ValueError as exc:
            self._write(str(exc))
            return

        promotion = _PROMOTION_LETTERS.get(text[4]) if len(text) == 5 else None
        if len(text) == 5 and promotion is None:
            self._write(f"Unknown promotion piece {text[4]!r}.")
            return

        outcome = self.controller.attempt_move(from_sq, to_sq, promotion)
        if isinstance(outcome, PromotionPending):
            choice = self._read("Promote to (q/r/b/n): ").strip().lower()
            piece_type = _PROMOTION_LETTERS.get(choice)
            if piece_type is None:
                self.controller.cancel_promotion()
                self._write("Promotion cancelled.")
                return
            outcome = self.controller.choose_promotion(piece_type)
        if isinstance(outcome, Rejected):
            self._write(f"Rejected: {outcome.detail}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="knightfall", description=__doc__)
    parser.add_argument(
        "--color",
        choices=("white", "black"),
        default="white",
        help="side you play (default: white)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=DEFAULT_DEPTH,
        help=f"engine search depth in plies (default: {DEFAULT_DEPTH})",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="logging verbosity (default: WARNING)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Launch the console game."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        game = ConsoleGame(
            human=Color.WHITE if args.color == "white" else Color.BLACK,
            depth=args.depth,
        )
    except ValueError as exc:
        _LOGGER.error("%s", exc)
        return 2

    try:
        return game.run()
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
