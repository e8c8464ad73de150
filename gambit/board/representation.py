"""
Conversion Between python-chess Boards and Positions

The engine keeps its own Position model; python-chess is used at the edges
to parse FEN strings and to talk to tooling that already speaks
chess.Board (GUIs, test oracles).

Coordinate mapping:
    python-chess square 0 = A1, 63 = H8
    Position (row, col): row 0 = rank 8, row 7 = rank 1, col 0 = A-file
"""

import chess
from typing import Tuple

from gambit.board.position import CastlingRights, Color, Piece, PieceType, Position

PIECE_TYPE_FROM_CHESS = {
    chess.PAWN: PieceType.PAWN,
    chess.KNIGHT: PieceType.KNIGHT,
    chess.BISHOP: PieceType.BISHOP,
    chess.ROOK: PieceType.ROOK,
    chess.QUEEN: PieceType.QUEEN,
    chess.KING: PieceType.KING,
}

PIECE_TYPE_TO_CHESS = {v: k for k, v in PIECE_TYPE_FROM_CHESS.items()}


def square_to_coordinates(square: int) -> Tuple[int, int]:
    """
    Convert python-chess square index to (row, column) coordinates.

    Args:
        square: Square index (0-63) where 0=A1, 63=H8

    Returns:
        Tuple of (row, col) where:
            - row 0 = rank 8 (index 56-63)
            - row 7 = rank 1 (index 0-7)
            - col 0 = A-file
            - col 7 = H-file
    """
    rank = square // 8
    file = square % 8
    return 7 - rank, file


def coordinates_to_square(row: int, col: int) -> int:
    """
    Convert (row, column) coordinates to python-chess square index.

    Args:
        row: Row index (0-7) where 0 is rank 8
        col: Column index (0-7) where 0 is A-file

    Returns:
        Square index (0-63)
    """
    return (7 - row) * 8 + col


def position_from_board(board: chess.Board) -> Position:
    """
    Convert a python-chess Board into a Position.

    The move stack of the board is not replayed, so the repetition history
    of the new position starts with the current position only.

    Args:
        board: python-chess Board object

    Returns:
        Position with the same placement, side to move, castling rights,
        en-passant target and move counters
    """
    grid = [[None] * 8 for _ in range(8)]
    for square, piece in board.piece_map().items():
        row, col = square_to_coordinates(square)
        color = Color.WHITE if piece.color == chess.WHITE else Color.BLACK
        grid[row][col] = Piece(PIECE_TYPE_FROM_CHESS[piece.piece_type], color)

    rights = CastlingRights(
        white_kingside=board.has_kingside_castling_rights(chess.WHITE),
        white_queenside=board.has_queenside_castling_rights(chess.WHITE),
        black_kingside=board.has_kingside_castling_rights(chess.BLACK),
        black_queenside=board.has_queenside_castling_rights(chess.BLACK),
    )

    en_passant = None
    if board.ep_square is not None:
        en_passant = square_to_coordinates(board.ep_square)

    return Position(
        board=grid,
        side_to_move=Color.WHITE if board.turn == chess.WHITE else Color.BLACK,
        en_passant_target=en_passant,
        castling_rights=rights,
        halfmove_clock=board.halfmove_clock,
        fullmove_number=board.fullmove_number,
    )


def position_from_fen(fen: str) -> Position:
    """
    Parse a FEN string into a Position.

    Raises:
        ValueError: If the FEN string is malformed
    """
    return position_from_board(chess.Board(fen))


def position_to_board(position: Position) -> chess.Board:
    """
    Convert a Position into a python-chess Board (without move history).

    Args:
        position: Position to convert

    Returns:
        python-chess Board object
    """
    board = chess.Board(fen=None)

    for (row, col), piece in position.pieces():
        board.set_piece_at(
            coordinates_to_square(row, col),
            chess.Piece(
                PIECE_TYPE_TO_CHESS[piece.piece_type],
                chess.WHITE if piece.color is Color.WHITE else chess.BLACK,
            ),
        )

    board.turn = chess.WHITE if position.side_to_move is Color.WHITE else chess.BLACK

    rights = position.castling_rights
    castling = chess.BB_EMPTY
    if rights.white_kingside:
        castling |= chess.BB_H1
    if rights.white_queenside:
        castling |= chess.BB_A1
    if rights.black_kingside:
        castling |= chess.BB_H8
    if rights.black_queenside:
        castling |= chess.BB_A8
    board.castling_rights = castling

    if position.en_passant_target is not None:
        board.ep_square = coordinates_to_square(*position.en_passant_target)

    board.halfmove_clock = position.halfmove_clock
    board.fullmove_number = position.fullmove_number
    return board


def position_to_fen(position: Position) -> str:
    """FEN string of a Position."""
    return position_to_board(position).fen(en_passant="fen")
