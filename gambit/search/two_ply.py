"""
Two-Ply Search

This module selects moves for the automated player. It is a simplified
minimax: every candidate move is tried, the opponent's best reply (among
the top few ordered replies) is found, and the candidate whose worst case
is best for the mover wins. There is no pruning besides the fixed cap on
replies.

Key Concepts:
    - Move Ordering: Try promising moves first (MVV-LVA approximation,
      central destinations, minor-piece development)
    - Reply Limit: Only the first N ordered opponent replies are scored
    - Branch Isolation: Every branch works on a cloned position; the
      caller's position is never mutated

Search Depth:
    Depth 1 scores each candidate right after it is played. Depth 2 is the
    two-ply search. Deeper settings are accepted but fall back to depth 2.

References:
    - Minimax: https://www.chessprogramming.org/Minimax
    - MVV-LVA: https://www.chessprogramming.org/MVV-LVA
"""

import logging
import time
from typing import Dict, List, Optional

from gambit.board.move import Move
from gambit.board.position import Color, PieceType, Position
from gambit.evaluation.base import Evaluator
from gambit.evaluation.classical import ClassicalEvaluator, PIECE_VALUES
from gambit.rules import legal_moves_for_color, make_temporary_move

logger = logging.getLogger(__name__)

MIN_DEPTH = 1
MAX_DEPTH = 6
DEFAULT_DEPTH = 2
DEFAULT_REPLY_LIMIT = 10

ATTACKER_FRACTION = 0.1
DEVELOPMENT_BONUS = 10
MINOR_PIECES = (PieceType.KNIGHT, PieceType.BISHOP)


def center_bonus(row: int, col: int) -> float:
    """Bonus for landing near the centre: 7 minus Manhattan distance to it, floored at 0."""
    distance = abs(3.5 - row) + abs(3.5 - col)
    return max(0.0, 7 - distance)


def move_order_score(move: Move, position: Position) -> float:
    """
    Assign a score to a move for ordering purposes.
    Higher score = searched earlier.
    """
    score = 0.0
    mover = position.piece_at(move.from_square)
    attacker_type = mover.piece_type if mover is not None else move.piece.piece_type

    # Captures: victim value minus a fraction of the attacker's value
    if move.captured_piece is not None:
        victim_value = PIECE_VALUES[move.captured_piece.piece_type]
        score += victim_value - PIECE_VALUES[attacker_type] * ATTACKER_FRACTION

    score += center_bonus(move.to_row, move.to_col)

    # Development: minor piece leaving either back rank
    if attacker_type in MINOR_PIECES and move.from_row in (0, 7):
        score += DEVELOPMENT_BONUS

    return score


def order_moves(moves: List[Move], position: Position) -> List[Move]:
    """
    Order moves, best candidates first.

    The sort is stable, so equally scored moves keep generation order.

    Args:
        moves: Legal moves in position
        position: Position the moves are played from

    Returns:
        New sorted list
    """
    return sorted(moves, key=lambda move: move_order_score(move, position), reverse=True)


def _better(color: Color, candidate: float, incumbent: float) -> bool:
    """True if candidate is strictly better than incumbent for color."""
    if color is Color.WHITE:
        return candidate > incumbent
    return candidate < incumbent


def _worst_value(color: Color) -> float:
    return -float("inf") if color is Color.WHITE else float("inf")


class TwoPlySearch:
    """
    Move selection by two-ply evaluation search.

    Attributes:
        evaluator: Position evaluation function
        depth: Configured search depth (1..6; above 2 behaves like 2)
        reply_limit: Number of ordered opponent replies scored per
                     candidate, or None for all of them
        nodes_searched: Positions visited by the last select_move() call
    """

    def __init__(
        self,
        evaluator: Optional[Evaluator] = None,
        depth: int = DEFAULT_DEPTH,
        reply_limit: Optional[int] = DEFAULT_REPLY_LIMIT,
    ):
        self.evaluator = evaluator if evaluator else ClassicalEvaluator()
        self.depth = DEFAULT_DEPTH
        self.set_search_difficulty(depth)
        if reply_limit is not None and reply_limit < 1:
            raise ValueError(f"reply_limit must be positive or None, got {reply_limit}")
        self.reply_limit = reply_limit
        self.nodes_searched = 0

    def set_search_difficulty(self, depth: int) -> None:
        """Set the search depth, clamped to the supported range."""
        self.depth = max(MIN_DEPTH, min(depth, MAX_DEPTH))

    def stats(self) -> Dict[str, int]:
        return {
            "nodes_searched": self.nodes_searched,
            "search_depth": self.depth,
        }

    def select_move(self, color: Color, position: Position) -> Optional[Move]:
        """
        Pick a move for color.

        Args:
            color: Side to pick a move for
            position: Current position (never modified)

        Returns:
            Best move found, or None if color has no legal move
        """
        self.nodes_searched = 0
        start_time = time.time()

        moves = legal_moves_for_color(color, position)
        logger.debug(f"Found {len(moves)} possible moves for {color.value}")
        if not moves:
            return None

        ordered = order_moves(moves, position)

        if self.depth <= 1:
            best_move, best_value = self._one_ply(color, position, ordered)
        else:
            if self.depth > 2:
                logger.debug(f"Depth {self.depth} not implemented, using two-ply search")
            best_move, best_value = self._two_ply(color, position, ordered)

        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Searched {self.nodes_searched} nodes in {elapsed_ms}ms, "
            f"selected {best_move.uci()} ({best_value:.2f})"
        )
        return best_move

    def _one_ply(self, color: Color, position: Position, ordered: List[Move]):
        best_move = None
        best_value = _worst_value(color)
        for move in ordered:
            self.nodes_searched += 1
            value = self.evaluator.evaluate(make_temporary_move(move, position))
            logger.debug(f"Move {move.uci()}: {value:.2f}")
            if _better(color, value, best_value):
                best_value = value
                best_move = move
        return best_move, best_value

    def _two_ply(self, color: Color, position: Position, ordered: List[Move]):
        opponent = color.opponent
        best_move = None
        best_value = _worst_value(color)

        for move in ordered:
            self.nodes_searched += 1
            branch = make_temporary_move(move, position)
            value = self._reply_value(opponent, branch)
            logger.debug(f"Move {move.uci()}: {value:.2f}")

            if _better(color, value, best_value):
                best_value = value
                best_move = move

        return best_move, best_value

    def _reply_value(self, opponent: Color, branch: Position) -> float:
        """Value of branch assuming the opponent picks its best scored reply."""
        replies = legal_moves_for_color(opponent, branch)
        if not replies:
            # Checkmate or stalemate: score the terminal position directly
            return self.evaluator.evaluate(branch)

        replies = order_moves(replies, branch)
        if self.reply_limit is not None:
            replies = replies[:self.reply_limit]

        best_reply_value = _worst_value(opponent)
        for reply in replies:
            self.nodes_searched += 1
            value = self.evaluator.evaluate(make_temporary_move(reply, branch))
            if _better(opponent, value, best_reply_value):
                best_reply_value = value
        return best_reply_value

    def __repr__(self) -> str:
        return (
            f"TwoPlySearch(evaluator={self.evaluator!r}, depth={self.depth}, "
            f"reply_limit={self.reply_limit})"
        )


def select_move(
    color: Color,
    position: Position,
    evaluator: Optional[Evaluator] = None,
    depth: int = DEFAULT_DEPTH,
) -> Optional[Move]:
    """
    Pick a move for color with a one-off searcher.

    Args:
        color: Side to pick a move for
        position: Current position (never modified)
        evaluator: Position evaluator (default: ClassicalEvaluator)
        depth: Search depth

    Returns:
        Best move found, or None if color has no legal move
    """
    return TwoPlySearch(evaluator=evaluator, depth=depth).select_move(color, position)
