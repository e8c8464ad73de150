"""
Rules Module

This module implements the full rules of chess on top of the board model.

Key Components:
    - attacks: Per-piece attack geometry, check detection
    - movegen: Pseudo-legal move generation, castling preconditions
    - engine: Legality filter, move execution, checkmate/stalemate,
      fifty-move rule and threefold repetition

Data Flow:
    Position → pseudo_legal_moves() → filter_legal() → legal moves
    legal move → execute() → Position (mutated in place)

Failure Semantics:
    Queries never raise for a structurally valid position; an empty square
    yields no moves. execute() raises InvalidMoveError for moves the engine
    would not have generated.
"""

from gambit.rules.attacks import (
    piece_attacks_square,
    is_square_attacked,
    is_in_check,
)
from gambit.rules.movegen import pseudo_legal_moves, can_castle
from gambit.rules.engine import (
    InvalidMoveError,
    filter_legal,
    legal_moves,
    legal_moves_for_color,
    has_legal_moves,
    apply_move,
    make_temporary_move,
    execute,
    is_checkmate,
    is_stalemate,
    is_draw_by_repetition,
    is_draw_by_fifty_move_rule,
)

__all__ = [
    'piece_attacks_square',
    'is_square_attacked',
    'is_in_check',
    'pseudo_legal_moves',
    'can_castle',
    'InvalidMoveError',
    'filter_legal',
    'legal_moves',
    'legal_moves_for_color',
    'has_legal_moves',
    'apply_move',
    'make_temporary_move',
    'execute',
    'is_checkmate',
    'is_stalemate',
    'is_draw_by_repetition',
    'is_draw_by_fifty_move_rule',
]
