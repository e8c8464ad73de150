"""
Board Module

This module provides the data model the rules engine operates on.

Key Components:
    - Color, PieceType, Piece: Tagged piece values
    - CastlingRights: Four independent castling flags
    - Position: Mutable game state (board, side to move, en passant,
      castling rights, halfmove clock, repetition history)
    - Move, CastlingRookRelocation: Immutable description of one ply
    - position_from_fen / position_to_fen: python-chess based conversion

Data Flow:
    FEN string → chess.Board → position_from_board() → Position → rules engine
"""

from gambit.board.position import (
    Color,
    PieceType,
    Piece,
    CastlingRights,
    Position,
    Square,
    in_bounds,
)
from gambit.board.move import Move, CastlingRookRelocation, square_name, parse_square_name
from gambit.board.representation import (
    position_from_board,
    position_from_fen,
    position_to_board,
    position_to_fen,
)

__all__ = [
    'Color',
    'PieceType',
    'Piece',
    'CastlingRights',
    'Position',
    'Square',
    'in_bounds',
    'Move',
    'CastlingRookRelocation',
    'square_name',
    'parse_square_name',
    'position_from_board',
    'position_from_fen',
    'position_to_board',
    'position_to_fen',
]
