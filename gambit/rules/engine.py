"""
Rules Engine

Legal move generation, move execution and game-status queries.

Legality:
    A pseudo-legal move is legal iff, after executing it on a clone of
    the position, the mover's king is not attacked. filter_legal() is the
    single authoritative self-check filter.

Execution:
    apply_move() mutates a position without validation and is what search
    and the legality filter use on clones. execute() is the public entry
    point: it only accepts moves the engine itself generates for the side
    to move, and raises InvalidMoveError otherwise.
"""

from typing import Iterable, List

from gambit.board.move import Move, square_name
from gambit.board.position import Color, PieceType, Position, Square
from gambit.rules.attacks import is_in_check
from gambit.rules.movegen import pseudo_legal_moves

FIFTY_MOVE_PLIES = 100
REPETITION_COUNT = 3

# Corner square -> castling right lost when that corner is vacated or captured on
ROOK_HOME_RIGHTS = {
    (7, 7): "white_kingside",
    (7, 0): "white_queenside",
    (0, 7): "black_kingside",
    (0, 0): "black_queenside",
}


class InvalidMoveError(ValueError):
    """Raised when execution of a move not legal in the position is requested."""


def filter_legal(moves: Iterable[Move], color: Color, position: Position) -> List[Move]:
    """
    Remove moves that would leave color's king attacked.

    Args:
        moves: Candidate (pseudo-legal) moves
        color: Color of the moving side
        position: Position before the moves; not modified

    Returns:
        List of legal moves, in input order
    """
    legal = []
    for move in moves:
        branch = make_temporary_move(move, position)
        if not is_in_check(color, branch):
            legal.append(move)
    return legal


def legal_moves(square: Square, position: Position) -> List[Move]:
    """
    Legal moves for the piece on square (of either color).

    Returns:
        List of moves; empty for an empty square
    """
    piece = position.piece_at(square)
    if piece is None:
        return []
    return filter_legal(pseudo_legal_moves(square, position), piece.color, position)


def legal_moves_for_color(color: Color, position: Position) -> List[Move]:
    """All legal moves for every piece of color, in board order."""
    moves = []
    for square, _ in position.pieces(color):
        moves.extend(legal_moves(square, position))
    return moves


def has_legal_moves(color: Color, position: Position) -> bool:
    """Like bool(legal_moves_for_color()), but stops at the first legal move."""
    for square, _ in position.pieces(color):
        for move in pseudo_legal_moves(square, position):
            if filter_legal([move], color, position):
                return True
    return False


def _update_castling_rights(move: Move, position: Position) -> None:
    rights = position.castling_rights

    if move.piece.piece_type is PieceType.KING:
        rights = rights.clear_color(move.piece.color)

    for square in (move.from_square, move.to_square):
        name = ROOK_HOME_RIGHTS.get(square)
        if name is not None:
            rights = rights.clear(name)

    position.castling_rights = rights


def apply_move(move: Move, position: Position) -> None:
    """
    Execute a move on the position in place, without validation.

    Steps:
        1. Clear the origin square and, for en passant, the captured pawn
        2. Place the (promotion-adjusted) piece on the destination
        3. Relocate the rook for castling
        4. Update castling rights and the en-passant target
        5. Toggle the side to move, update move counters and history
    """
    board = position.board
    board[move.from_row][move.from_col] = None

    if move.captured_square is not None and move.captured_square != move.to_square:
        captured_row, captured_col = move.captured_square
        board[captured_row][captured_col] = None

    board[move.to_row][move.to_col] = move.piece

    if move.castling is not None:
        rook = move.castling
        position.set_piece(rook.from_square, None)
        position.set_piece(rook.to_square, rook.piece)

    _update_castling_rights(move, position)

    position.en_passant_target = move.double_pawn_target

    mover = move.piece.color
    if move.piece.piece_type is PieceType.PAWN or move.promotion or move.is_capture:
        position.halfmove_clock = 0
    else:
        position.halfmove_clock += 1
    if mover is Color.BLACK:
        position.fullmove_number += 1

    position.side_to_move = position.side_to_move.opponent
    position.position_history[position.key()] += 1


def make_temporary_move(move: Move, position: Position) -> Position:
    """
    Return a clone of position with move applied; position is untouched.

    The clone does not carry the game's repetition history, so its cost
    does not grow with the length of the game.
    """
    branch = position.copy(keep_history=False)
    apply_move(move, branch)
    return branch


def execute(move: Move, position: Position) -> None:
    """
    Execute a legal move on the position.

    Args:
        move: Move generated by the rules engine for this position
        position: Position to mutate

    Raises:
        InvalidMoveError: If the move is not legal for the side to move.
            The position is left unchanged.
    """
    piece = position.piece_at(move.from_square)
    if piece is None:
        raise InvalidMoveError(f"No piece on {square_name(move.from_square)}")
    if piece.color is not position.side_to_move:
        raise InvalidMoveError(
            f"It is {position.side_to_move.value}'s turn, "
            f"{square_name(move.from_square)} holds a {piece.color.value} piece"
        )
    if move not in legal_moves(move.from_square, position):
        raise InvalidMoveError(f"Illegal move: {move.uci()}")

    apply_move(move, position)


def is_checkmate(color: Color, position: Position) -> bool:
    """True if color is in check and has no legal move."""
    return is_in_check(color, position) and not has_legal_moves(color, position)


def is_stalemate(color: Color, position: Position) -> bool:
    """True if color is not in check and has no legal move."""
    return not is_in_check(color, position) and not has_legal_moves(color, position)


def is_draw_by_repetition(position: Position) -> bool:
    """True once the current position has occurred for the third time."""
    return position.position_history[position.key()] >= REPETITION_COUNT


def is_draw_by_fifty_move_rule(position: Position) -> bool:
    """True after 100 plies without a pawn move or capture."""
    return position.halfmove_clock >= FIFTY_MOVE_PLIES
