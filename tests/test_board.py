"""
Unit Tests for Board Module

Tests for the position and move data model, focusing on:
    - Starting position layout
    - Cloning independence
    - Canonical keys for repetition detection
    - Conversion from/to python-chess boards and FEN
"""

import chess
import pytest

from gambit.board import (
    CastlingRights,
    Color,
    Move,
    Piece,
    PieceType,
    Position,
    parse_square_name,
    position_from_fen,
    position_to_board,
    position_to_fen,
    square_name,
)
from gambit.board.representation import coordinates_to_square, square_to_coordinates


class TestPosition:
    """Tests for Position."""

    def test_starting_layout(self):
        """Test that the starting position has every piece on its home square."""
        position = Position.starting()

        assert position.piece_at((7, 4)) == Piece(PieceType.KING, Color.WHITE)
        assert position.piece_at((0, 4)) == Piece(PieceType.KING, Color.BLACK)
        assert position.piece_at((7, 3)) == Piece(PieceType.QUEEN, Color.WHITE)
        assert position.piece_at((0, 0)) == Piece(PieceType.ROOK, Color.BLACK)

        for col in range(8):
            assert position.piece_at((6, col)) == Piece(PieceType.PAWN, Color.WHITE)
            assert position.piece_at((1, col)) == Piece(PieceType.PAWN, Color.BLACK)
            for row in range(2, 6):
                assert position.is_empty((row, col))

        assert position.side_to_move is Color.WHITE
        assert position.en_passant_target is None
        assert position.castling_rights == CastlingRights()
        assert position.halfmove_clock == 0

    def test_one_king_per_color(self):
        position = Position.starting()
        assert position.find_king(Color.WHITE) == (7, 4)
        assert position.find_king(Color.BLACK) == (0, 4)
        assert Position().find_king(Color.WHITE) is None

    def test_new_position_records_itself(self):
        """A fresh position counts its own key once in the history."""
        position = Position.starting()
        assert position.position_history[position.key()] == 1
        assert sum(position.position_history.values()) == 1

    def test_copy_is_independent(self):
        """Mutating a clone must not leak into the original."""
        original = Position.starting()
        clone = original.copy()

        clone.set_piece((6, 4), None)
        clone.side_to_move = Color.BLACK
        clone.position_history[clone.key()] += 1

        assert original.piece_at((6, 4)) == Piece(PieceType.PAWN, Color.WHITE)
        assert original.side_to_move is Color.WHITE
        assert sum(original.position_history.values()) == 1
        assert clone != original

    def test_copy_without_history(self):
        """A clone taken without history starts over from its own key."""
        original = Position.starting()
        original.position_history[original.key()] += 2

        fresh = original.copy(keep_history=False)
        full = original.copy()

        assert dict(fresh.position_history) == {original.key(): 1}
        assert full.position_history[original.key()] == 3
        assert fresh == original

    def test_copy_equals_original(self):
        original = Position.starting()
        assert original.copy() == original

    def test_key_depends_on_side_to_move(self):
        white = Position.starting()
        black = Position.starting()
        black.side_to_move = Color.BLACK
        assert white.key() != black.key()

    def test_key_ignores_move_counters(self):
        position = Position.starting()
        other = Position.starting()
        other.halfmove_clock = 12
        other.fullmove_number = 7
        assert position.key() == other.key()

    def test_pieces_filter_by_color(self):
        position = Position.starting()
        white = list(position.pieces(Color.WHITE))
        assert len(white) == 16
        assert all(piece.color is Color.WHITE for _, piece in white)
        assert len(list(position.pieces())) == 32

    def test_str_renders_board(self):
        text = str(Position.starting())
        assert text.splitlines()[0] == "8 r n b q k b n r"
        assert text.splitlines()[-1] == "  a b c d e f g h"


class TestPieceAndRights:
    """Tests for Piece and CastlingRights values."""

    def test_piece_symbols(self):
        assert Piece(PieceType.KNIGHT, Color.WHITE).symbol == "N"
        assert Piece(PieceType.KNIGHT, Color.BLACK).symbol == "n"
        assert Piece.from_symbol("q") == Piece(PieceType.QUEEN, Color.BLACK)

    def test_invalid_symbol(self):
        with pytest.raises(ValueError):
            Piece.from_symbol("x")

    def test_pieces_are_values(self):
        assert Piece(PieceType.ROOK, Color.WHITE) == Piece(PieceType.ROOK, Color.WHITE)
        assert len({Piece(PieceType.ROOK, Color.WHITE), Piece(PieceType.ROOK, Color.WHITE)}) == 1

    def test_clearing_rights_returns_new_value(self):
        rights = CastlingRights()
        cleared = rights.clear("white_kingside")

        assert rights.white_kingside
        assert not cleared.white_kingside
        assert cleared.white_queenside
        assert cleared.fen() == "Qkq"

    def test_clear_color(self):
        rights = CastlingRights().clear_color(Color.BLACK)
        assert rights.any(Color.WHITE)
        assert not rights.any(Color.BLACK)
        assert CastlingRights.none().fen() == "-"

    def test_color_helpers(self):
        assert Color.WHITE.opponent is Color.BLACK
        assert Color.WHITE.pawn_direction == -1
        assert Color.BLACK.promotion_row == 7


class TestMove:
    """Tests for Move values."""

    def test_uci(self):
        pawn = Piece(PieceType.PAWN, Color.WHITE)
        assert Move(6, 4, 4, 4, pawn).uci() == "e2e4"

    def test_uci_promotion(self):
        queen = Piece(PieceType.QUEEN, Color.WHITE)
        assert Move(1, 0, 0, 0, queen, promotion=True).uci() == "a7a8q"

    def test_square_names(self):
        assert square_name((7, 0)) == "a1"
        assert square_name((0, 7)) == "h8"
        assert parse_square_name("e4") == (4, 4)

    def test_invalid_square_name(self):
        with pytest.raises(ValueError):
            parse_square_name("i9")

    def test_en_passant_flag(self):
        pawn = Piece(PieceType.PAWN, Color.WHITE)
        victim = Piece(PieceType.PAWN, Color.BLACK)
        move = Move(3, 4, 2, 3, pawn, captured_square=(3, 3), captured_piece=victim)
        assert move.is_capture
        assert move.is_en_passant


class TestRepresentation:
    """Tests for python-chess conversion."""

    def test_coordinate_mapping(self):
        assert square_to_coordinates(chess.A1) == (7, 0)
        assert square_to_coordinates(chess.H8) == (0, 7)
        assert square_to_coordinates(chess.E2) == (6, 4)
        assert coordinates_to_square(6, 4) == chess.E2

    def test_starting_fen(self):
        assert position_to_fen(Position.starting()) == chess.STARTING_FEN
        assert position_from_fen(chess.STARTING_FEN) == Position.starting()

    def test_fen_fields(self):
        """Test side to move, castling, en passant and clocks from FEN."""
        position = position_from_fen(
            "rnbqkbnr/ppp1pppp/8/3pP3/8/8/PPPP1PPP/RNBQKBNR w Kq d6 0 3"
        )

        assert position.side_to_move is Color.WHITE
        assert position.en_passant_target == (2, 3)
        assert position.castling_rights == CastlingRights(True, False, False, True)
        assert position.halfmove_clock == 0
        assert position.fullmove_number == 3
        assert position.piece_at((3, 4)) == Piece(PieceType.PAWN, Color.WHITE)

    def test_board_export(self):
        position = position_from_fen("4k3/8/8/8/8/8/8/R3K2R b KQ - 5 40")
        board = position_to_board(position)

        assert board.turn == chess.BLACK
        assert board.has_kingside_castling_rights(chess.WHITE)
        assert not board.has_queenside_castling_rights(chess.BLACK)
        assert board.piece_at(chess.A1) == chess.Piece(chess.ROOK, chess.WHITE)
        assert board.halfmove_clock == 5

    def test_invalid_fen(self):
        with pytest.raises(ValueError):
            position_from_fen("not a fen")
