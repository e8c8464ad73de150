"""
Abstract Evaluator Interface

This module defines the abstract base class for all position evaluators.
By defining a common interface, we can swap between evaluators without
modifying the search algorithm.

Key Principles:
    1. evaluate() never mutates the position it is given
    2. Scores are from White's perspective
    3. Positive = White advantage, Negative = Black advantage
    4. A checkmated side scores -CHECKMATE_VALUE (from its perspective)

Convention:
    - Material values in centipawns (pawn = 100, queen = 900)
"""

from abc import ABC, abstractmethod

from gambit.board.position import Position


# Evaluation constants
CHECKMATE_VALUE = 1_000_000_000  # Dominates every other term
CHECK_PENALTY = 75
CASTLING_BONUS = 50
DOUBLED_PAWN_PENALTY = 40
UNDEFENDED_ATTACK_FRACTION = 0.8
DEFENDED_ATTACK_FRACTION = 0.2
RANDOMIZATION_FACTOR = 1.0


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    All evaluator implementations must inherit from this class and implement
    the evaluate() method. This ensures compatibility with the search.

    Methods:
        evaluate(position): Returns position evaluation in centipawns
    """

    @abstractmethod
    def evaluate(self, position: Position) -> float:
        """
        Evaluate a position from White's perspective.

        Args:
            position: Position to evaluate (not modified)

        Returns:
            float: Evaluation in centipawns

        Raises:
            NotImplementedError: If subclass doesn't implement this method
        """
        pass

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"
