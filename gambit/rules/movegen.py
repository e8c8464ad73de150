"""
Pseudo-Legal Move Generation

Moves here obey piece movement and capture rules but may still leave the
mover's king in check; engine.filter_legal() removes those. Castling is the
exception: its transit squares are verified during generation, because the
post-move king-safety filter only sees the king's final square.

Promotion always yields a queen.
"""

from typing import List

from gambit.board.move import CastlingRookRelocation, Move
from gambit.board.position import Color, Piece, PieceType, Position, Square, in_bounds
from gambit.rules.attacks import is_in_check, is_square_attacked

KNIGHT_OFFSETS = [(-2, -1), (-2, 1), (2, -1), (2, 1), (-1, -2), (1, -2), (-1, 2), (1, 2)]
KING_OFFSETS = [(-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)]
ROOK_DIRECTIONS = [(-1, 0), (1, 0), (0, -1), (0, 1)]
BISHOP_DIRECTIONS = [(-1, -1), (-1, 1), (1, -1), (1, 1)]
QUEEN_DIRECTIONS = ROOK_DIRECTIONS + BISHOP_DIRECTIONS

KING_HOME_COL = 4
# side -> (rook column, rook destination column, king transit columns)
CASTLING_LAYOUT = {
    True: (7, 5, (5, 6)),
    False: (0, 3, (3, 2)),
}


def _capture_move(from_square: Square, to_square: Square, piece: Piece, target: Piece, **kwargs) -> Move:
    return Move(
        *from_square,
        *to_square,
        piece,
        captured_square=to_square,
        captured_piece=target,
        **kwargs,
    )


def _pawn_moves(square: Square, piece: Piece, position: Position) -> List[Move]:
    moves = []
    row, col = square
    color = piece.color
    step = color.pawn_direction
    forward = row + step

    if not in_bounds(forward, col):
        return moves

    promotes = forward == color.promotion_row
    result = Piece(PieceType.QUEEN, color) if promotes else piece

    if position.board[forward][col] is None:
        moves.append(Move(row, col, forward, col, result, promotion=promotes))

        double = forward + step
        if row == color.pawn_row and position.board[double][col] is None:
            moves.append(
                Move(row, col, double, col, piece, double_pawn_target=(forward, col))
            )

    for target_col in (col - 1, col + 1):
        if not in_bounds(forward, target_col):
            continue
        target = position.board[forward][target_col]
        if target is not None and target.color is not color:
            moves.append(
                _capture_move(square, (forward, target_col), result, target, promotion=promotes)
            )

    ep = position.en_passant_target
    if ep is not None and ep[0] == forward and abs(ep[1] - col) == 1:
        victim = position.board[row][ep[1]]
        if (
            victim is not None
            and victim.color is not color
            and victim.piece_type is PieceType.PAWN
            and position.board[ep[0]][ep[1]] is None
        ):
            moves.append(
                Move(
                    row, col, forward, ep[1], piece,
                    captured_square=(row, ep[1]),
                    captured_piece=victim,
                )
            )

    return moves


def _leaping_moves(square: Square, piece: Piece, offsets, position: Position) -> List[Move]:
    moves = []
    row, col = square
    for d_row, d_col in offsets:
        to_row, to_col = row + d_row, col + d_col
        if not in_bounds(to_row, to_col):
            continue
        target = position.board[to_row][to_col]
        if target is None:
            moves.append(Move(row, col, to_row, to_col, piece))
        elif target.color is not piece.color:
            moves.append(_capture_move(square, (to_row, to_col), piece, target))
    return moves


def _sliding_moves(square: Square, piece: Piece, directions, position: Position) -> List[Move]:
    moves = []
    row, col = square
    for d_row, d_col in directions:
        to_row, to_col = row + d_row, col + d_col
        while in_bounds(to_row, to_col):
            target = position.board[to_row][to_col]
            if target is None:
                moves.append(Move(row, col, to_row, to_col, piece))
            else:
                if target.color is not piece.color:
                    moves.append(_capture_move(square, (to_row, to_col), piece, target))
                break
            to_row += d_row
            to_col += d_col
    return moves


def can_castle(color: Color, kingside: bool, position: Position) -> bool:
    """
    Check every castling precondition for one side.

    Requires the right to be held, king and rook on their home squares,
    the squares between them empty, the king not in check, and no square
    the king crosses or lands on attacked by the opponent.
    """
    rights = position.castling_rights
    if not (rights.kingside(color) if kingside else rights.queenside(color)):
        return False

    row = color.back_row
    rook_col, _, transit = CASTLING_LAYOUT[kingside]

    if position.board[row][KING_HOME_COL] != Piece(PieceType.KING, color):
        return False
    if position.board[row][rook_col] != Piece(PieceType.ROOK, color):
        return False

    low, high = sorted((KING_HOME_COL, rook_col))
    if any(position.board[row][col] is not None for col in range(low + 1, high)):
        return False

    if is_in_check(color, position):
        return False

    opponent = color.opponent
    return not any(is_square_attacked((row, col), opponent, position) for col in transit)


def _castling_moves(square: Square, piece: Piece, position: Position) -> List[Move]:
    moves = []
    row, col = square
    if square != (piece.color.back_row, KING_HOME_COL):
        return moves

    for kingside in (True, False):
        if can_castle(piece.color, kingside, position):
            rook_col, rook_to_col, transit = CASTLING_LAYOUT[kingside]
            relocation = CastlingRookRelocation(
                from_square=(row, rook_col),
                to_square=(row, rook_to_col),
                piece=position.board[row][rook_col],
            )
            moves.append(Move(row, col, row, transit[-1], piece, castling=relocation))
    return moves


def pseudo_legal_moves(square: Square, position: Position) -> List[Move]:
    """
    Generate pseudo-legal moves for the piece on square.

    Args:
        square: (row, col) of the piece
        position: Current position

    Returns:
        List of moves; empty if the square is empty
    """
    piece = position.piece_at(square)
    if piece is None:
        return []

    kind = piece.piece_type
    if kind is PieceType.PAWN:
        return _pawn_moves(square, piece, position)
    if kind is PieceType.KNIGHT:
        return _leaping_moves(square, piece, KNIGHT_OFFSETS, position)
    if kind is PieceType.BISHOP:
        return _sliding_moves(square, piece, BISHOP_DIRECTIONS, position)
    if kind is PieceType.ROOK:
        return _sliding_moves(square, piece, ROOK_DIRECTIONS, position)
    if kind is PieceType.QUEEN:
        return _sliding_moves(square, piece, QUEEN_DIRECTIONS, position)
    return (
        _leaping_moves(square, piece, KING_OFFSETS, position)
        + _castling_moves(square, piece, position)
    )
