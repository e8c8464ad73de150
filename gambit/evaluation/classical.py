"""
Classical Evaluation

This module implements a hand-tuned evaluation function summing:
    1. Material (piece values)
    2. Piece-Square Tables (positional bonuses/penalties)
    3. Pawn structure (doubled pawns)
    4. Tactical exposure (attacked pieces, defended or not)
    5. Game state (check, checkmate, castling rights)
    6. A small random jitter to vary play between equal moves

A stalemate on either side returns exactly 0 and overrides every term.

Evaluation Components:
    - Material: P=100, N=320, B=330, R=500, Q=900, K=100000
    - Position: PST bonuses for each piece type

Reference:
    Simplified Evaluation Function
    https://www.chessprogramming.org/Simplified_Evaluation_Function
"""

import random
from collections import Counter
from typing import Optional

import numpy as np

from gambit.board.position import Color, PieceType, Position
from gambit.evaluation.base import (
    CASTLING_BONUS,
    CHECK_PENALTY,
    CHECKMATE_VALUE,
    DEFENDED_ATTACK_FRACTION,
    DOUBLED_PAWN_PENALTY,
    RANDOMIZATION_FACTOR,
    UNDEFENDED_ATTACK_FRACTION,
    Evaluator,
)
from gambit.rules import is_checkmate, is_in_check, is_square_attacked, is_stalemate

#fmt: off
# ============================================================================
# Material Values (centipawns)
# ============================================================================

PIECE_VALUES = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 100000,
}


# ============================================================================
# Piece-Square Tables (PSTs)
# ============================================================================
# Values are from White's perspective (row 0 = rank 8, row 7 = rank 1).
# For Black pieces the table is flipped vertically, so each side reads it
# from its own side of the board.
#
# ============================================================================

# Pawn PST: Strong push towards promotion, central pawns first
PAWN_TABLE = np.array([
    [  0,   0,   0,   0,   0,   0,   0,   0],  # Rank 8 (promotion)
    [ 80,  80,  80,  80,  80,  80,  80,  80],  # Rank 7
    [ 25,  25,  30,  40,  40,  30,  25,  25],  # Rank 6
    [ 10,  10,  15,  35,  35,  15,  10,  10],  # Rank 5
    [  5,   5,  10,  25,  25,  10,   5,   5],  # Rank 4
    [  5,  -5, -10,   0,   0, -10,  -5,   5],  # Rank 3
    [  5,  10,  10, -20, -20,  10,  10,   5],  # Rank 2
    [  0,   0,   0,   0,   0,   0,   0,   0],  # Rank 1
], dtype=np.float64)

# Knight PST: "Knights on the rim are dim"
KNIGHT_TABLE = np.array([
    [-50, -40, -30, -30, -30, -30, -40, -50],
    [-40, -20,   0,   5,   5,   0, -20, -40],
    [-30,   5,  15,  20,  20,  15,   5, -30],
    [-30,  10,  20,  30,  30,  20,  10, -30],
    [-30,   5,  20,  25,  25,  20,   5, -30],
    [-30,   5,  15,  20,  20,  15,   5, -30],
    [-40, -20,   0,   5,   5,   0, -20, -40],
    [-50, -40, -30, -30, -30, -30, -40, -50],
], dtype=np.float64)

# Bishop PST: Long diagonals and central posts
BISHOP_TABLE = np.array([
    [-20, -10, -10, -10, -10, -10, -10, -20],
    [-10,   5,   0,   0,   0,   0,   5, -10],
    [-10,  10,  15,  15,  15,  15,  10, -10],
    [-10,   5,  10,  15,  15,  10,   5, -10],
    [-10,   0,  10,  15,  15,  10,   0, -10],
    [-10,  10,  10,  15,  15,  10,  10, -10],
    [-10,   5,   0,   0,   0,   0,   5, -10],
    [-20, -10, -10, -10, -10, -10, -10, -20],
], dtype=np.float64)

# Rook PST: Seventh rank, central files on the back rank
ROOK_TABLE = np.array([
    [  0,   0,   0,   0,   0,   0,   0,   0],
    [ 25,  25,  25,  25,  25,  25,  25,  25],
    [  0,   0,   0,   0,   0,   0,   0,   0],
    [  0,   0,   0,   0,   0,   0,   0,   0],
    [  0,   0,   0,   0,   0,   0,   0,   0],
    [  0,   0,   0,   0,   0,   0,   0,   0],
    [  5,   5,   5,   5,   5,   5,   5,   5],
    [ 10,  10,  10,  15,  15,  10,  10,  10],
], dtype=np.float64)

# Queen PST: Avoid early raids into enemy territory
QUEEN_TABLE = np.array([
    [-20, -10, -10,  -5,  -5, -10, -10, -20],
    [-40, -30, -20, -15, -15, -20, -30, -40],
    [-30, -20, -10,  -5,  -5, -10, -20, -30],
    [-20, -10,   0,   5,   5,   0, -10, -20],
    [-10,  -5,   5,  10,  10,   5,  -5, -10],
    [-10,   0,   5,  10,  10,   5,   0, -10],
    [-20, -10,   0,   0,   0,   0, -10, -20],
    [-20, -10, -10,  -5,  -5, -10, -10, -20],
], dtype=np.float64)

# King PST: Stay home, prefer the castled corners
KING_TABLE = np.array([
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-20, -30, -30, -40, -40, -30, -30, -20],
    [-10, -20, -20, -20, -20, -20, -20, -10],
    [ 50,  50,  15,   5,   5,  15,  50,  50],
    [ 60,  80,  70,  10,  10,  20,  80,  60],
], dtype=np.float64)
#fmt: on

PIECE_SQUARE_TABLES = {
    PieceType.PAWN: PAWN_TABLE,
    PieceType.KNIGHT: KNIGHT_TABLE,
    PieceType.BISHOP: BISHOP_TABLE,
    PieceType.ROOK: ROOK_TABLE,
    PieceType.QUEEN: QUEEN_TABLE,
    PieceType.KING: KING_TABLE,
}


def _signed(color: Color, value: float) -> float:
    return value if color is Color.WHITE else -value


class ClassicalEvaluator(Evaluator):
    """
    Classical evaluation: material, PSTs, pawn structure, tactics, game state.

    Attributes:
        jitter: Amplitude of the random term; 0 makes evaluation deterministic
        rng: Private random source for the jitter
    """

    def __init__(self, jitter: float = RANDOMIZATION_FACTOR, seed: Optional[int] = None):
        """
        Initialize the classical evaluator.

        Args:
            jitter: Width of the uniform random term (centred on 0)
            seed: Optional seed for reproducible jitter
        """
        if jitter < 0:
            raise ValueError(f"jitter must be non-negative, got {jitter}")
        self.jitter = jitter
        self.rng = random.Random(seed)

    def material(self, position: Position) -> float:
        score = 0.0
        for _, piece in position.pieces():
            score += _signed(piece.color, PIECE_VALUES[piece.piece_type])
        return score

    def piece_square(self, position: Position) -> float:
        """Sum of PST bonuses, each side reading the table from its own side."""
        score = 0.0
        for (row, col), piece in position.pieces():
            table_row = row if piece.color is Color.WHITE else 7 - row
            bonus = PIECE_SQUARE_TABLES[piece.piece_type][table_row, col]
            score += _signed(piece.color, float(bonus))
        return score

    def pawn_structure(self, position: Position) -> float:
        """Penalize every pawn that shares its file with a friendly pawn."""
        files = Counter(
            (piece.color, col)
            for (_, col), piece in position.pieces()
            if piece.piece_type is PieceType.PAWN
        )
        score = 0.0
        for (color, _), count in files.items():
            if count >= 2:
                score -= _signed(color, DOUBLED_PAWN_PENALTY * count)
        return score

    def tactical_exposure(self, position: Position) -> float:
        """
        Penalize attacked pieces.

        An attacked piece with no defender costs 80% of its value, an
        attacked but defended piece 20%.
        """
        score = 0.0
        for square, piece in position.pieces():
            if not is_square_attacked(square, piece.color.opponent, position):
                continue
            defended = is_square_attacked(square, piece.color, position)
            fraction = DEFENDED_ATTACK_FRACTION if defended else UNDEFENDED_ATTACK_FRACTION
            score -= _signed(piece.color, PIECE_VALUES[piece.piece_type] * fraction)
        return score

    def game_state(self, position: Position) -> float:
        """Check penalties, checkmate values and castling bonuses."""
        score = 0.0
        for color in (Color.WHITE, Color.BLACK):
            if is_in_check(color, position):
                score -= _signed(color, CHECK_PENALTY)
                if is_checkmate(color, position):
                    score -= _signed(color, CHECKMATE_VALUE)
            if position.castling_rights.any(color):
                score += _signed(color, CASTLING_BONUS)
        return score

    def evaluate(self, position: Position) -> float:
        """
        Evaluate position by summing every term.

        Args:
            position: Position to evaluate (not modified)

        Returns:
            float: Evaluation in centipawns (White's perspective), exactly
            0.0 if either side is stalemated
        """
        if is_stalemate(Color.WHITE, position) or is_stalemate(Color.BLACK, position):
            return 0.0

        score = (
            self.material(position)
            + self.piece_square(position)
            + self.pawn_structure(position)
            + self.tactical_exposure(position)
            + self.game_state(position)
        )

        if self.jitter:
            score += (self.rng.random() - 0.5) * self.jitter

        return score

    def __repr__(self) -> str:
        return f"ClassicalEvaluator(jitter={self.jitter})"
