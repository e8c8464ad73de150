"""
Utilities Module

This module provides utility functions for verifying and benchmarking
the engine.

Key Components:
    - perft / divide: Move generation verification against published counts
    - Mate-in-one suite: Positions the two-ply search must solve
    - Self-play: Engine against itself

Success Metrics:
    - Perft: exact match with published node counts
    - Mate-in-one: 4/4 at depth 2
"""

from gambit.utils.testing import (
    perft,
    divide,
    run_tactics,
    evaluate_position,
    play_self_game,
    MATE_IN_ONE_POSITIONS,
)

__all__ = [
    'perft',
    'divide',
    'run_tactics',
    'evaluate_position',
    'play_self_game',
    'MATE_IN_ONE_POSITIONS',
]
