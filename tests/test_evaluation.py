"""
Unit Tests for Evaluation Module

Tests for position evaluation functions, focusing on:
    - Material counting accuracy
    - Symmetry (flipped position = negated evaluation)
    - Individual terms (pawn structure, tactical exposure, game state)
    - Terminal position detection (checkmate, stalemate)
    - Jitter bounds and reproducibility
"""

import pytest

from gambit.board import CastlingRights, Piece, Position, position_from_fen
from gambit.evaluation import CHECKMATE_VALUE, ClassicalEvaluator, Evaluator
from gambit.rules import execute, legal_moves_for_color

FOOLS_MATE = ["f2f3", "e7e5", "g2g4", "d8h4"]


def mirror(position: Position) -> Position:
    """Flip the board vertically and swap the colors of every piece."""
    board = [[None] * 8 for _ in range(8)]
    for (row, col), piece in position.pieces():
        board[7 - row][col] = Piece(piece.piece_type, piece.color.opponent)

    rights = position.castling_rights
    ep = position.en_passant_target
    return Position(
        board=board,
        side_to_move=position.side_to_move.opponent,
        en_passant_target=(7 - ep[0], ep[1]) if ep else None,
        castling_rights=CastlingRights(
            white_kingside=rights.black_kingside,
            white_queenside=rights.black_queenside,
            black_kingside=rights.white_kingside,
            black_queenside=rights.white_queenside,
        ),
    )


def play(position, *ucis):
    for uci in ucis:
        candidates = legal_moves_for_color(position.side_to_move, position)
        execute(next(m for m in candidates if m.uci() == uci), position)
    return position


class TestClassicalEvaluator:
    """Tests for ClassicalEvaluator."""

    @pytest.fixture
    def evaluator(self):
        """Create a deterministic ClassicalEvaluator instance."""
        return ClassicalEvaluator(jitter=0.0)

    def test_is_evaluator(self, evaluator):
        assert isinstance(evaluator, Evaluator)
        assert "jitter=0.0" in repr(evaluator)

    def test_starting_position_is_equal(self, evaluator):
        """Every term cancels out in the symmetric starting position."""
        assert evaluator.evaluate(Position.starting()) == 0.0

    def test_material_advantage(self, evaluator):
        """
        Test that material advantage is properly counted.

        White is missing the h1 rook, so Black should be ahead by roughly 500.
        """
        position = position_from_fen("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBN1 w Qkq - 0 1")
        score = evaluator.evaluate(position)

        assert score < -400, f"Black should be ahead by ~500 cp, got {score}"
        assert evaluator.material(position) == -500

    @pytest.mark.parametrize("fen", [
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
        "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4",
        "4k3/8/8/3n4/8/8/3R4/4K3 w - - 0 1",
        "r3k2r/8/8/8/8/8/8/R3K2R w KQ - 0 1",
    ])
    def test_symmetry(self, evaluator, fen):
        """Flipping the board (swapping colors) negates the evaluation."""
        position = position_from_fen(fen)
        score = evaluator.evaluate(position)
        flipped = evaluator.evaluate(mirror(position))

        assert flipped == pytest.approx(-score)

    def test_doubled_pawns(self, evaluator):
        """Each pawn on a file shared with a friendly pawn costs 40."""
        position = position_from_fen("4k3/8/8/8/8/4P3/4P3/4K3 w - - 0 1")
        assert evaluator.pawn_structure(position) == -80
        assert evaluator.pawn_structure(mirror(position)) == 80

    def test_tripled_pawns(self, evaluator):
        position = position_from_fen("4k3/4p3/4p3/4p3/8/8/8/4K3 w - - 0 1")
        assert evaluator.pawn_structure(position) == 120

    def test_no_doubled_pawns_at_start(self, evaluator):
        assert evaluator.pawn_structure(Position.starting()) == 0

    def test_undefended_piece_under_attack(self, evaluator):
        """The rook attacks an undefended knight: 80% of its value."""
        position = position_from_fen("4k3/8/8/3n4/8/8/3R4/4K3 w - - 0 1")
        assert evaluator.tactical_exposure(position) == pytest.approx(0.8 * 320)

    def test_defended_piece_under_attack(self, evaluator):
        """With a pawn defending the knight only 20% is charged."""
        position = position_from_fen("4k3/8/4p3/3n4/8/8/3R4/4K3 w - - 0 1")
        assert evaluator.tactical_exposure(position) == pytest.approx(0.2 * 320)

    def test_check_penalty(self, evaluator):
        position = position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert evaluator.game_state(position) == -75

    def test_castling_bonus(self, evaluator):
        position = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert evaluator.game_state(position) == 50
        assert evaluator.game_state(Position.starting()) == 0

    def test_checkmate_detection(self, evaluator):
        """White is checkmated, so the score is hugely negative."""
        position = play(Position.starting(), *FOOLS_MATE)
        score = evaluator.evaluate(position)

        assert score < -CHECKMATE_VALUE / 2
        assert evaluator.evaluate(mirror(position)) > CHECKMATE_VALUE / 2

    def test_stalemate_is_zero(self):
        """Stalemate scores exactly 0, even with jitter enabled."""
        position = position_from_fen("k7/2Q5/1K6/8/8/8/8/8 b - - 0 1")
        assert ClassicalEvaluator(jitter=1.0).evaluate(position) == 0.0

    def test_stalemate_of_side_not_to_move_is_zero(self, evaluator):
        position = position_from_fen("k7/2Q5/1K6/8/8/8/8/8 w - - 0 1")
        assert evaluator.evaluate(position) == 0.0

    def test_evaluate_does_not_mutate(self, evaluator):
        position = position_from_fen(
            "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"
        )
        before = position.copy()
        evaluator.evaluate(position)

        assert position == before
        assert position.position_history == before.position_history


class TestJitter:
    """Tests for the random evaluation term."""

    def test_jitter_is_bounded(self):
        evaluator = ClassicalEvaluator(jitter=1.0, seed=0)
        for _ in range(50):
            assert abs(evaluator.evaluate(Position.starting())) <= 0.5

    def test_seed_is_reproducible(self):
        first = ClassicalEvaluator(jitter=1.0, seed=42)
        second = ClassicalEvaluator(jitter=1.0, seed=42)
        position = Position.starting()

        assert [first.evaluate(position) for _ in range(5)] == [
            second.evaluate(position) for _ in range(5)
        ]

    def test_negative_jitter_rejected(self):
        with pytest.raises(ValueError):
            ClassicalEvaluator(jitter=-1.0)
