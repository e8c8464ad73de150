#!/usr/bin/env python3
"""
Gambit Benchmark Runner

Verifies move generation with perft against published node counts
(optionally cross-checked against python-chess), runs the mate-in-one
suite and, optionally, a self-play game.

Usage:
    python tools/run_benchmark.py [--perft-depth 3] [--cross-check] [--self-play 40] [--verbose]
"""

import argparse
import logging
import sys
import time

import chess

from gambit.board.representation import position_from_fen
from gambit.config import EngineConfig
from gambit.search.two_ply import TwoPlySearch
from gambit.evaluation.classical import ClassicalEvaluator
from gambit.utils.testing import perft, play_self_game, run_tactics

# (name, fen, {depth: expected nodes})
PERFT_POSITIONS = [
    ("startpos", chess.STARTING_FEN, {1: 20, 2: 400, 3: 8902}),
    (
        "kiwipete",
        "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
        {1: 48, 2: 2039, 3: 97862},
    ),
    ("position3", "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1", {1: 14, 2: 191, 3: 2812}),
]


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def format_time(seconds: float) -> str:
    """Format time"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"


def reference_perft(board: chess.Board, depth: int) -> int:
    """python-chess perft, counting only queen promotions like the engine."""
    if depth == 0:
        return 1
    count = 0
    for move in board.legal_moves:
        if move.promotion not in (None, chess.QUEEN):
            continue
        board.push(move)
        count += reference_perft(board, depth - 1)
        board.pop()
    return count


def run_perft(max_depth: int, cross_check: bool) -> bool:
    """Run perft on every reference position up to max_depth."""
    logger = logging.getLogger(__name__)
    all_ok = True

    for name, fen, expected in PERFT_POSITIONS:
        position = position_from_fen(fen)
        for depth in range(1, max_depth + 1):
            start = time.time()
            nodes = perft(position, depth)
            elapsed = time.time() - start

            target = expected.get(depth)
            if cross_check:
                target = reference_perft(chess.Board(fen), depth)

            ok = target is None or nodes == target
            all_ok = all_ok and ok
            logger.info(
                f"perft {name} depth {depth}: {nodes:,} nodes "
                f"(expected {target if target is not None else '?'}) "
                f"in {format_time(elapsed)} {'OK' if ok else 'MISMATCH'}"
            )

    return all_ok


def main():
    parser = argparse.ArgumentParser(description="Gambit engine benchmark")
    parser.add_argument("--perft-depth", type=int, default=2, help="Maximum perft depth")
    parser.add_argument("--cross-check", action="store_true",
                        help="Compare perft counts with python-chess instead of the table")
    parser.add_argument("--depth", type=int, default=2, help="Search depth for tactics")
    parser.add_argument("--self-play", type=int, default=0, metavar="PLIES",
                        help="Play a self-play game of up to PLIES plies")
    parser.add_argument("--seed", type=int, default=None, help="Evaluation jitter seed")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    print("=" * 70)
    print("GAMBIT BENCHMARK")
    print("=" * 70)

    perft_ok = run_perft(args.perft_depth, args.cross_check)

    searcher = TwoPlySearch(evaluator=ClassicalEvaluator(seed=args.seed), depth=args.depth)
    tactics = run_tactics(searcher, verbose=args.verbose)
    print(f"\nMate-in-one: {tactics['score']}/{tactics['total']} "
          f"({tactics['percentage']:.1f}%), avg {format_time(tactics['avg_time'])}")

    if args.self_play:
        config = EngineConfig(search_depth=args.depth, random_seed=args.seed)
        result = play_self_game(config, max_plies=args.self_play, progress=True)
        print(f"\nSelf-play: {len(result.moves)} plies, {result.status.value}")
        print(" ".join(move.uci() for move in result.moves))

    if not perft_ok:
        logger.error("Perft mismatch detected")
        sys.exit(1)


if __name__ == "__main__":
    main()
