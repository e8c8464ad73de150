"""
Move Data Model

A Move describes one ply completely: where the piece goes, what it turns
into (promotion), which square loses a captured piece, the en-passant
target it creates and, for castling, how the rook is relocated.

Moves are immutable values generated by the rules engine. Two moves with
the same fields are equal, so a caller-built move can be checked for
membership in a generated move list.
"""

from dataclasses import dataclass
from typing import Optional

from gambit.board.position import Piece, Square

FILES = "abcdefgh"


def square_name(square: Square) -> str:
    """Algebraic name of a (row, col) square, e.g. (6, 4) -> 'e2'."""
    row, col = square
    return f"{FILES[col]}{8 - row}"


def parse_square_name(name: str) -> Square:
    """
    Inverse of square_name().

    Raises:
        ValueError: If the name is not a square on the board
    """
    if len(name) != 2 or name[0] not in FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return 8 - int(name[1]), FILES.index(name[0])


@dataclass(frozen=True)
class CastlingRookRelocation:
    """Rook side-effect of a castling move."""

    from_square: Square
    to_square: Square
    piece: Piece


@dataclass(frozen=True)
class Move:
    """
    A single ply.

    Attributes:
        from_row, from_col: Origin square
        to_row, to_col: Destination square
        piece: Piece standing on the destination after the move
               (a queen for promotions)
        captured_square: Square of the captured piece; differs from the
                         destination only for en passant
        captured_piece: The piece removed by the capture
        double_pawn_target: New en-passant target for a double pawn step
        castling: Rook relocation for castling moves
        promotion: True if a pawn is promoted by this move
    """

    from_row: int
    from_col: int
    to_row: int
    to_col: int
    piece: Piece
    captured_square: Optional[Square] = None
    captured_piece: Optional[Piece] = None
    double_pawn_target: Optional[Square] = None
    castling: Optional[CastlingRookRelocation] = None
    promotion: bool = False

    @property
    def from_square(self) -> Square:
        return self.from_row, self.from_col

    @property
    def to_square(self) -> Square:
        return self.to_row, self.to_col

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    @property
    def is_en_passant(self) -> bool:
        return self.captured_square is not None and self.captured_square != self.to_square

    def uci(self) -> str:
        """Long algebraic notation, e.g. 'e2e4', 'e7e8q', 'e1g1'."""
        suffix = self.piece.piece_type.value if self.promotion else ""
        return f"{square_name(self.from_square)}{square_name(self.to_square)}{suffix}"

    def __str__(self) -> str:
        return self.uci()
