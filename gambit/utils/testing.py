"""
Engine Verification and Benchmarking

This module provides tools for checking the rules engine and the search.

Tools:
    1. Perft: Count leaf nodes of the legal move tree to a fixed depth.
       Counts for well-known positions are published, so any mismatch
       points at a move generation bug. divide() breaks the count down
       per root move to locate it.

    2. Mate-in-one suite: Positions where a single move checkmates.
       A two-ply search must find every one of them.

    3. Self-play: Let the engine play itself to exercise the whole stack.

References:
    - Perft: https://www.chessprogramming.org/Perft_Results
"""

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from gambit.board.move import Move
from gambit.board.position import Position
from gambit.board.representation import position_from_fen
from gambit.config import EngineConfig
from gambit.game.session import Game, GameStatus
from gambit.rules import is_checkmate, legal_moves_for_color, make_temporary_move
from gambit.search.two_ply import TwoPlySearch

logger = logging.getLogger(__name__)


def perft(position: Position, depth: int) -> int:
    """
    Count the leaf nodes of the legal move tree.

    Args:
        position: Root position (not modified)
        depth: Plies to expand

    Returns:
        Number of positions reachable in exactly depth plies
    """
    if depth == 0:
        return 1

    moves = legal_moves_for_color(position.side_to_move, position)
    if depth == 1:
        return len(moves)

    return sum(perft(make_temporary_move(move, position), depth - 1) for move in moves)


def divide(position: Position, depth: int) -> Dict[str, int]:
    """Perft split by root move, keyed by the move's UCI string."""
    return {
        move.uci(): perft(make_temporary_move(move, position), depth - 1)
        for move in legal_moves_for_color(position.side_to_move, position)
    }


@dataclass
class TestPosition:
    """
    A test position with expected best move(s).

    Attributes:
        fen: Board position in FEN notation
        best_moves: List of acceptable best moves (UCI format)
        description: Human-readable description of the position
        id: Position identifier
    """
    __test__ = False

    fen: str
    best_moves: List[str]
    description: str = ""
    id: str = ""


@dataclass
class TestResult:
    """
    Result of testing a single position.

    Attributes:
        position: The test position
        found_move: Move the engine found (UCI format)
        correct: Whether the engine found a best move
        time_taken: Time spent searching (seconds)
        nodes_searched: Number of nodes visited
    """
    __test__ = False

    position: TestPosition
    found_move: str
    correct: bool
    time_taken: float
    nodes_searched: int = 0


# ============================================================================
# Mate-in-One Suite
# ============================================================================

MATE_IN_ONE_POSITIONS = [
    TestPosition(
        id="M1.01",
        fen="6k1/5ppp/8/8/8/8/8/R6K w - - 0 1",
        best_moves=["a1a8"],
        description="Back-rank mate with the rook"
    ),
    TestPosition(
        id="M1.02",
        fen="r5k1/8/8/8/8/8/5PPP/6K1 b - - 0 1",
        best_moves=["a8a1"],
        description="Back-rank mate for Black"
    ),
    TestPosition(
        id="M1.03",
        fen="rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq - 0 2",
        best_moves=["d8h4"],
        description="Fool's mate with Qh4"
    ),
    TestPosition(
        id="M1.04",
        fen="r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5Q2/PPPP1PPP/RNB1K1NR w KQkq - 2 4",
        best_moves=["f3f7"],
        description="Scholar's mate with Qxf7"
    ),
]


def evaluate_position(
    position: TestPosition,
    searcher: TwoPlySearch,
    verbose: bool = False,
) -> TestResult:
    """
    Run the search on a single test position.

    A move counts as correct if it is listed in best_moves or if it
    delivers checkmate.

    Args:
        position: Test position to evaluate
        searcher: Configured searcher
        verbose: If True, print detailed output

    Returns:
        TestResult with engine's move and whether it was correct
    """
    root = position_from_fen(position.fen)
    color = root.side_to_move

    if verbose:
        print(f"\nTesting {position.id}: {position.description}")
        print(f"FEN: {position.fen}")
        print(f"Expected moves: {position.best_moves}")

    start_time = time.time()
    best_move = searcher.select_move(color, root)
    time_taken = time.time() - start_time

    if best_move is None:
        found, correct = "", False
    else:
        found = best_move.uci()
        after = make_temporary_move(best_move, root)
        correct = found in position.best_moves or is_checkmate(color.opponent, after)

    if verbose:
        print(f"Engine found: {found or '-'}")
        print(f"Nodes searched: {searcher.nodes_searched:,}")
        print(f"Time: {time_taken:.2f}s")
        print(f"Result: {'CORRECT' if correct else 'WRONG'}")

    return TestResult(
        position=position,
        found_move=found,
        correct=correct,
        time_taken=time_taken,
        nodes_searched=searcher.nodes_searched,
    )


def run_tactics(
    searcher: Optional[TwoPlySearch] = None,
    positions: Optional[List[TestPosition]] = None,
    verbose: bool = False,
) -> Dict[str, Any]:
    """
    Run a tactical test suite (mate-in-one by default).

    Returns:
        Dictionary with test results:
            - score: Number of correct positions
            - total: Total number of positions
            - percentage: Success percentage
            - results: List of TestResult objects
            - avg_time: Average time per position
    """
    searcher = searcher if searcher else TwoPlySearch()
    positions = positions if positions is not None else MATE_IN_ONE_POSITIONS

    results = [evaluate_position(p, searcher, verbose=verbose) for p in positions]
    score = sum(1 for r in results if r.correct)
    total = len(results)
    total_time = sum(r.time_taken for r in results)

    logger.info(f"Tactics: {score}/{total} correct")

    return {
        'score': score,
        'total': total,
        'percentage': 100.0 * score / total if total else 0.0,
        'results': results,
        'avg_time': total_time / total if total else 0.0,
    }


@dataclass
class SelfPlayResult:
    """Outcome of a self-play game."""

    moves: List[Move] = field(default_factory=list)
    status: GameStatus = GameStatus.ONGOING
    final_position: Optional[Position] = None


def play_self_game(
    config: Optional[EngineConfig] = None,
    max_plies: int = 40,
    progress: bool = False,
) -> SelfPlayResult:
    """
    Let the engine play both sides.

    Args:
        config: Engine configuration used for both sides
        max_plies: Stop after this many plies if the game is still going
        progress: Show a tqdm progress bar

    Returns:
        SelfPlayResult with the move list and final status
    """
    config = replace(config, two_player=True) if config else EngineConfig(two_player=True)
    game = Game(config)

    for _ in tqdm(range(max_plies), desc="Self-play", unit="ply", disable=not progress):
        if not game.active:
            break
        if game.make_ai_move() is None:
            break

    logger.info(f"Self-play finished after {len(game.move_log)} plies: {game.status.value}")
    return SelfPlayResult(
        moves=list(game.move_log),
        status=game.status,
        final_position=game.position,
    )
