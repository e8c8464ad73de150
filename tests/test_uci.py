"""
Unit Tests for UCI Interface

Tests for UCI protocol implementation, focusing on:
    - Command parsing: uci, isready, position, go, setoption, stop, quit
    - Position setup: FEN parsing, move application
    - Search invocation: depth handling, background thread
    - Output format: Proper UCI responses
    - Error handling: Invalid commands, illegal moves
"""

import logging
import time
from unittest.mock import patch

import chess
import pytest

from gambit.board import Position, position_to_fen
from gambit.config import EngineConfig
from gambit.uci import UCIEngine


@pytest.fixture
def engine(tmp_path):
    """Create a deterministic UCI engine logging into a temporary directory."""
    engine = UCIEngine(EngineConfig(jitter=0.0, log_dir=tmp_path))
    yield engine
    engine.handle_stop()
    for handler in list(logging.getLogger("gambit").handlers):
        logging.getLogger("gambit").removeHandler(handler)
        handler.close()


def run_search(engine, tokens):
    """Start a search and wait for it to finish."""
    engine.handle_go(tokens)
    engine.search_thread.join(timeout=60)
    assert not engine.search_thread.is_alive()


def expected_fen(*ucis, fen=chess.STARTING_FEN):
    board = chess.Board(fen)
    for uci in ucis:
        board.push(chess.Move.from_uci(uci))
    return board.fen(en_passant="fen")


class TestUCICommands:
    """Tests for UCI command handling."""

    def test_handle_uci(self, engine, capsys):
        """Test 'uci' command response."""
        engine.handle_uci()
        output = capsys.readouterr().out

        assert "id name Gambit" in output, "Should include engine name"
        assert "id author" in output, "Should include author"
        assert "option name Depth type spin default 2 min 1 max 6" in output
        assert output.strip().endswith("uciok"), "Should end with uciok"

    def test_handle_isready(self, engine, capsys):
        engine.handle_isready()
        assert "readyok" in capsys.readouterr().out

    def test_handle_ucinewgame(self, engine):
        engine.handle_position(["position", "startpos", "moves", "e2e4", "e7e5"])
        engine.handle_ucinewgame()

        assert engine.position == Position.starting()

    def test_handle_setoption_depth(self, engine):
        engine.handle_setoption(["setoption", "name", "Depth", "value", "1"])
        assert engine.searcher.depth == 1

        engine.handle_setoption(["setoption", "name", "Depth", "value", "99"])
        assert engine.searcher.depth == 6

    def test_malformed_setoption(self, engine):
        engine.handle_setoption(["setoption", "name", "Depth"])
        engine.handle_setoption(["setoption", "name", "Depth", "value", "deep"])
        assert engine.searcher.depth == 2

    def test_log_file_written(self, engine, tmp_path):
        engine.handle_isready()
        assert (tmp_path / "engine.log").exists()


class TestUCIPositionSetup:
    """Tests for position setup via UCI."""

    def test_startpos_is_correct(self, engine):
        engine.handle_position(["position", "startpos", "moves", "e2e4"])
        engine.handle_position(["position", "startpos"])

        assert position_to_fen(engine.position) == chess.STARTING_FEN

    def test_move_sequence(self, engine):
        """Test that move sequence is applied correctly."""
        moves = ["e2e4", "e7e5", "g1f3", "b8c6"]
        engine.handle_position(["position", "startpos", "moves"] + moves)

        assert position_to_fen(engine.position) == expected_fen(*moves)

    def test_castling_and_promotion_moves(self, engine):
        fen = "4k3/P7/8/8/8/8/8/4K2R w K - 0 1"
        engine.handle_position(["position", "fen", *fen.split(), "moves", "e1g1", "e8d7", "a7a8q"])

        assert position_to_fen(engine.position) == expected_fen("e1g1", "e8d7", "a7a8q", fen=fen)

    def test_fen_with_moves(self, engine):
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        engine.handle_position(["position", "fen", *fen.split(), "moves", "e7e5"])

        assert position_to_fen(engine.position) == expected_fen("e7e5", fen=fen)

    def test_illegal_move_stops_application(self, engine, capsys):
        engine.handle_position(["position", "startpos", "moves", "e2e4", "e7e4", "g1f3"])

        assert position_to_fen(engine.position) == expected_fen("e2e4")
        assert "Illegal move: e7e4" in capsys.readouterr().err

    def test_underpromotion_rejected(self, engine):
        fen = "4k3/P7/8/8/8/8/8/4K3 w - - 0 1"
        engine.handle_position(["position", "fen", *fen.split(), "moves", "a7a8n"])

        assert position_to_fen(engine.position) == chess.Board(fen).fen()

    def test_invalid_fen_keeps_position(self, engine, capsys):
        engine.handle_position(["position", "startpos", "moves", "e2e4"])
        before = engine.position.copy()

        engine.handle_position(["position", "fen", "invalid_fen"])

        assert engine.position == before
        assert "Invalid FEN" in capsys.readouterr().err

    def test_empty_position_command(self, engine):
        engine.handle_position(["position"])
        assert engine.position == Position.starting()


class TestUCISearch:
    """Tests for search invocation and output."""

    def test_bestmove_output_format(self, engine, capsys):
        engine.handle_position(["position", "startpos"])
        run_search(engine, ["go"])

        lines = capsys.readouterr().out.strip().splitlines()
        bestmove = lines[-1].split()

        assert lines[-2].startswith("info depth 2 nodes ")
        assert bestmove[0] == "bestmove"
        assert chess.Move.from_uci(bestmove[1]) in chess.Board().legal_moves

    def test_finds_mate(self, engine, capsys):
        fen = "6k1/5ppp/8/8/8/8/8/R6K w - - 0 1"
        engine.handle_position(["position", "fen", *fen.split()])
        run_search(engine, ["go", "depth", "2"])

        assert "bestmove a1a8" in capsys.readouterr().out

    def test_go_depth_sets_depth(self, engine, capsys):
        engine.handle_position(["position", "fen", *"6k1/5ppp/8/8/8/8/8/R6K w - - 0 1".split()])
        run_search(engine, ["go", "depth", "1"])

        assert engine.searcher.depth == 1
        assert "info depth 1" in capsys.readouterr().out

    def test_no_legal_moves(self, engine, capsys):
        fen = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
        engine.handle_position(["position", "fen", *fen.split()])
        run_search(engine, ["go"])

        assert "bestmove 0000" in capsys.readouterr().out

    def test_search_does_not_touch_engine_position(self, engine):
        engine.handle_position(["position", "startpos", "moves", "d2d4"])
        before = engine.position.copy()
        run_search(engine, ["go"])

        assert engine.position == before
        assert not engine.searching

    def test_search_error_falls_back_to_legal_move(self, engine, capsys):
        engine.handle_position(["position", "startpos"])
        with patch.object(engine.searcher, "select_move", side_effect=RuntimeError("boom")):
            run_search(engine, ["go"])

        output = capsys.readouterr()
        assert "bestmove a2a3" in output.out
        assert "Search error: boom" in output.err

    def test_go_depth_waits_for_running_search(self, engine):
        """A new 'go depth N' must not change the depth under a running search."""
        seen = []
        select_move = engine.searcher.select_move

        def slow_select(color, position):
            time.sleep(0.2)
            seen.append(engine.searcher.depth)
            return select_move(color, position)

        engine.handle_position(["position", "startpos"])
        with patch.object(engine.searcher, "select_move", side_effect=slow_select):
            engine.handle_go(["go"])
            run_search(engine, ["go", "depth", "1"])

        assert seen == [2, 1]
        assert engine.searcher.depth == 1

    def test_stop_waits_for_search(self, engine):
        engine.handle_position(["position", "startpos"])
        engine.handle_go(["go"])
        engine.handle_stop()

        assert not engine.search_thread.is_alive()
        assert not engine.searching


class TestUCILoop:
    """Tests for the command loop."""

    def test_full_uci_session(self, engine, capsys):
        commands = [
            "uci",
            "isready",
            "",
            "ucinewgame",
            "position startpos moves e2e4",
            "go depth 2",
            "stop",
            "unknowncommand",
            "quit",
        ]
        with patch("builtins.input", side_effect=commands):
            engine.run()

        output = capsys.readouterr().out
        assert "uciok" in output
        assert "readyok" in output
        assert "bestmove" in output

    def test_eof_ends_loop(self, engine):
        with patch("builtins.input", side_effect=EOFError):
            engine.run()

    def test_command_error_is_reported(self, engine, capsys):
        with patch.object(engine, "handle_isready", side_effect=RuntimeError("broken")):
            with patch("builtins.input", side_effect=["isready", "quit"]):
                engine.run()

        assert "# Error: broken" in capsys.readouterr().err
