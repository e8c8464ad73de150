"""
Position Data Model

This module defines the mutable game state the rules engine operates on.

Board Orientation:
    - Row 0 = Rank 8 (Black's back rank)
    - Row 7 = Rank 1 (White's back rank)
    - Column 0 = A-file
    - Column 7 = H-file

White pawns move towards row 0, black pawns towards row 7.

Bookkeeping:
    - en_passant_target: square the last double-stepping pawn skipped over,
      valid for exactly one ply
    - castling_rights: four independent flags, only ever cleared
    - halfmove_clock: plies since the last pawn move or capture
    - position_history: occurrence count per canonical position key
"""

from collections import Counter
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, List, Optional, Tuple

Square = Tuple[int, int]


class Color(Enum):
    """Side of a piece or of the player to move."""

    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def pawn_direction(self) -> int:
        """Row delta of a single pawn step for this color."""
        return -1 if self is Color.WHITE else 1

    @property
    def back_row(self) -> int:
        return 7 if self is Color.WHITE else 0

    @property
    def pawn_row(self) -> int:
        """Row holding this color's pawns in the starting position."""
        return 6 if self is Color.WHITE else 1

    @property
    def promotion_row(self) -> int:
        return 0 if self is Color.WHITE else 7


class PieceType(Enum):
    PAWN = "p"
    KNIGHT = "n"
    BISHOP = "b"
    ROOK = "r"
    QUEEN = "q"
    KING = "k"


@dataclass(frozen=True)
class Piece:
    """
    A chess piece.

    Pieces are plain values: two pieces of the same type and color are
    equal and interchangeable.

    Attributes:
        piece_type: Kind of piece
        color: Owner of the piece
    """

    piece_type: PieceType
    color: Color

    @property
    def symbol(self) -> str:
        """FEN letter (uppercase for white, lowercase for black)."""
        letter = self.piece_type.value
        return letter.upper() if self.color is Color.WHITE else letter

    @classmethod
    def from_symbol(cls, symbol: str) -> "Piece":
        """
        Build a piece from its FEN letter.

        Raises:
            ValueError: If the letter is not a piece symbol
        """
        color = Color.WHITE if symbol.isupper() else Color.BLACK
        return cls(PieceType(symbol.lower()), color)

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class CastlingRights:
    """
    Castling availability for both sides.

    Rights are never restored: clear() returns a new value with the given
    rights removed.
    """

    white_kingside: bool = True
    white_queenside: bool = True
    black_kingside: bool = True
    black_queenside: bool = True

    @classmethod
    def none(cls) -> "CastlingRights":
        return cls(False, False, False, False)

    def kingside(self, color: Color) -> bool:
        return self.white_kingside if color is Color.WHITE else self.black_kingside

    def queenside(self, color: Color) -> bool:
        return self.white_queenside if color is Color.WHITE else self.black_queenside

    def any(self, color: Color) -> bool:
        return self.kingside(color) or self.queenside(color)

    def clear(self, *names: str) -> "CastlingRights":
        return replace(self, **{name: False for name in names})

    def clear_color(self, color: Color) -> "CastlingRights":
        if color is Color.WHITE:
            return self.clear("white_kingside", "white_queenside")
        return self.clear("black_kingside", "black_queenside")

    def fen(self) -> str:
        """Castling field of a FEN string ('-' when no rights remain)."""
        text = "".join(
            letter
            for letter, allowed in (
                ("K", self.white_kingside),
                ("Q", self.white_queenside),
                ("k", self.black_kingside),
                ("q", self.black_queenside),
            )
            if allowed
        )
        return text or "-"


BACK_RANK_ORDER = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < 8 and 0 <= col < 8


class Position:
    """
    Mutable chess position.

    Created once per game (or cloned per search branch) and mutated in
    place by the rules engine. A new Position records its own canonical
    key once in its repetition history.

    Attributes:
        board: 8x8 grid, board[row][col] is a Piece or None
        side_to_move: Color whose turn it is
        en_passant_target: Square skipped by the last double pawn step
        castling_rights: Remaining castling rights
        halfmove_clock: Plies since the last pawn move or capture
        fullmove_number: Starts at 1, incremented after each black move
        position_history: Counter of canonical position keys
    """

    def __init__(
        self,
        board: Optional[List[List[Optional[Piece]]]] = None,
        side_to_move: Color = Color.WHITE,
        en_passant_target: Optional[Square] = None,
        castling_rights: Optional[CastlingRights] = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
        position_history: Optional[Counter] = None,
    ):
        self.board = board if board is not None else [[None] * 8 for _ in range(8)]
        self.side_to_move = side_to_move
        self.en_passant_target = en_passant_target
        self.castling_rights = (
            castling_rights if castling_rights is not None else CastlingRights.none()
        )
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number

        if position_history is None:
            position_history = Counter()
            position_history[self.key()] += 1
        self.position_history = position_history

    @classmethod
    def starting(cls) -> "Position":
        """Standard initial position, white to move, all castling rights."""
        board: List[List[Optional[Piece]]] = [[None] * 8 for _ in range(8)]
        for col, piece_type in enumerate(BACK_RANK_ORDER):
            board[0][col] = Piece(piece_type, Color.BLACK)
            board[1][col] = Piece(PieceType.PAWN, Color.BLACK)
            board[6][col] = Piece(PieceType.PAWN, Color.WHITE)
            board[7][col] = Piece(piece_type, Color.WHITE)
        return cls(board=board, castling_rights=CastlingRights())

    def piece_at(self, square: Square) -> Optional[Piece]:
        row, col = square
        return self.board[row][col]

    def set_piece(self, square: Square, piece: Optional[Piece]) -> None:
        row, col = square
        self.board[row][col] = piece

    def is_empty(self, square: Square) -> bool:
        row, col = square
        return self.board[row][col] is None

    def pieces(self, color: Optional[Color] = None) -> Iterator[Tuple[Square, Piece]]:
        """Yield (square, piece) for every piece, optionally of one color."""
        for row in range(8):
            for col in range(8):
                piece = self.board[row][col]
                if piece is not None and (color is None or piece.color is color):
                    yield (row, col), piece

    def find_king(self, color: Color) -> Optional[Square]:
        king = Piece(PieceType.KING, color)
        for square, piece in self.pieces(color):
            if piece == king:
                return square
        return None

    def key(self) -> tuple:
        """
        Canonical serialization used for repetition detection.

        Covers the board, the side to move, the en-passant target and the
        castling rights; the move counters are deliberately left out.
        """
        placement = tuple(
            piece.symbol if piece is not None else "."
            for row in self.board
            for piece in row
        )
        return (
            placement,
            self.side_to_move.value,
            self.en_passant_target,
            self.castling_rights,
        )

    def copy(self, keep_history: bool = True) -> "Position":
        """
        Deep, independent clone of this position.

        Args:
            keep_history: Copy the repetition history. Without it the clone
                starts a fresh history holding only its own key, which is
                all a search branch or legality check needs.
        """
        return Position(
            board=[row[:] for row in self.board],
            side_to_move=self.side_to_move,
            en_passant_target=self.en_passant_target,
            castling_rights=self.castling_rights,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
            position_history=Counter(self.position_history) if keep_history else None,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.key() == other.key()
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    __hash__ = None  # mutable

    def __str__(self) -> str:
        lines = []
        for row in range(8):
            cells = [
                piece.symbol if piece is not None else "."
                for piece in self.board[row]
            ]
            lines.append(f"{8 - row} {' '.join(cells)}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Position(side_to_move={self.side_to_move.value}, "
            f"castling={self.castling_rights.fen()}, "
            f"en_passant={self.en_passant_target}, "
            f"halfmove_clock={self.halfmove_clock})"
        )
