"""
Evaluation Module

This module provides position evaluation functions for the engine.
Evaluators are SWAPPABLE: the search works with any evaluator that
implements the base interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - ClassicalEvaluator: Material, piece-square tables, pawn structure,
      tactical exposure and game-state terms

Data Flow:
    Position → evaluator.evaluate() → float (centipawns)
                                      Positive = White advantage
                                      Negative = Black advantage
"""

from gambit.evaluation.base import Evaluator, CHECKMATE_VALUE
from gambit.evaluation.classical import ClassicalEvaluator, PIECE_VALUES

__all__ = ['Evaluator', 'ClassicalEvaluator', 'CHECKMATE_VALUE', 'PIECE_VALUES']
