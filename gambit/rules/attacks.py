"""
Attack Geometry

One function per piece type answers "does the piece on this square attack
that square?". This is capture-only geometry: pawns attack diagonally
forward, sliders need a clear path, pins are ignored. Check detection,
castling transit checks and the evaluator's attacked/defended terms all
share this single predicate.
"""

from typing import Callable, Dict

from gambit.board.position import Color, Piece, PieceType, Position, Square


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_path_clear(from_square: Square, to_square: Square, position: Position) -> bool:
    """True if every square strictly between the two squares is empty."""
    from_row, from_col = from_square
    to_row, to_col = to_square
    row_step = _sign(to_row - from_row)
    col_step = _sign(to_col - from_col)

    row, col = from_row + row_step, from_col + col_step
    while (row, col) != (to_row, to_col):
        if position.board[row][col] is not None:
            return False
        row += row_step
        col += col_step
    return True


def _pawn_attacks(piece: Piece, row_diff: int, col_diff: int, from_square, to_square, position) -> bool:
    return row_diff == piece.color.pawn_direction and abs(col_diff) == 1


def _knight_attacks(piece: Piece, row_diff: int, col_diff: int, from_square, to_square, position) -> bool:
    return {abs(row_diff), abs(col_diff)} == {1, 2}


def _bishop_attacks(piece: Piece, row_diff: int, col_diff: int, from_square, to_square, position) -> bool:
    return (
        abs(row_diff) == abs(col_diff)
        and row_diff != 0
        and is_path_clear(from_square, to_square, position)
    )


def _rook_attacks(piece: Piece, row_diff: int, col_diff: int, from_square, to_square, position) -> bool:
    return (
        (row_diff == 0) != (col_diff == 0)
        and is_path_clear(from_square, to_square, position)
    )


def _queen_attacks(piece: Piece, row_diff: int, col_diff: int, from_square, to_square, position) -> bool:
    return (
        _rook_attacks(piece, row_diff, col_diff, from_square, to_square, position)
        or _bishop_attacks(piece, row_diff, col_diff, from_square, to_square, position)
    )


def _king_attacks(piece: Piece, row_diff: int, col_diff: int, from_square, to_square, position) -> bool:
    return max(abs(row_diff), abs(col_diff)) == 1


ATTACK_GEOMETRY: Dict[PieceType, Callable[..., bool]] = {
    PieceType.PAWN: _pawn_attacks,
    PieceType.KNIGHT: _knight_attacks,
    PieceType.BISHOP: _bishop_attacks,
    PieceType.ROOK: _rook_attacks,
    PieceType.QUEEN: _queen_attacks,
    PieceType.KING: _king_attacks,
}


def piece_attacks_square(from_square: Square, to_square: Square, position: Position) -> bool:
    """
    Check whether the piece on from_square attacks to_square.

    Args:
        from_square: Square of the attacking piece
        to_square: Target square (its occupant, if any, is ignored)
        position: Current position

    Returns:
        bool: False if from_square is empty
    """
    piece = position.piece_at(from_square)
    if piece is None:
        return False
    row_diff = to_square[0] - from_square[0]
    col_diff = to_square[1] - from_square[1]
    return ATTACK_GEOMETRY[piece.piece_type](
        piece, row_diff, col_diff, from_square, to_square, position
    )


def is_square_attacked(square: Square, by_color: Color, position: Position) -> bool:
    """True if any piece of by_color (other than one on square) attacks square."""
    for from_square, _ in position.pieces(by_color):
        if from_square != square and piece_attacks_square(from_square, square, position):
            return True
    return False


def is_in_check(color: Color, position: Position) -> bool:
    """
    Check whether color's king is attacked by the opponent.

    Returns False when color has no king on the board.
    """
    king_square = position.find_king(color)
    if king_square is None:
        return False
    return is_square_attacked(king_square, color.opponent, position)
