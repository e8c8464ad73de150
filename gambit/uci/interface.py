"""
UCI Front End

Text-protocol front end that lets chess GUIs drive the engine over
stdin/stdout.

Recognised commands:
    uci, isready, ucinewgame, position, go, setoption, stop, quit

Everything else is ignored, as the protocol requires.

Threading:
    - The command loop runs on the caller's thread
    - Each 'go' searches a clone of the current position on a worker thread

The search has a fixed, small depth, so 'stop' just waits for the worker.

References:
    - https://www.chessprogramming.org/UCI
"""

import logging
import sys
import threading
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional

from gambit import __version__
from gambit.board.move import Move
from gambit.board.position import Position
from gambit.board.representation import position_from_fen
from gambit.config import EngineConfig
from gambit.evaluation.classical import ClassicalEvaluator
from gambit.rules import apply_move, legal_moves_for_color
from gambit.search.two_ply import MAX_DEPTH, MIN_DEPTH, TwoPlySearch

ENGINE_NAME = "Gambit"
ENGINE_AUTHOR = "Gambit developers"


def setup_logger(log_dir: Path, debug: bool = False) -> logging.Logger:
    """
    Send everything the 'gambit' loggers emit to <log_dir>/engine.log.

    stdout belongs to the protocol, so the front end never logs there.
    Handlers left by an earlier engine instance are closed and replaced.

    Args:
        log_dir: Directory for the log file (created if missing)
        debug: Log at DEBUG instead of INFO

    Returns:
        The 'gambit' package logger
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("gambit")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    file_handler = logging.FileHandler(log_dir / "engine.log", mode='w')
    file_handler.setFormatter(
        logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s', datefmt='%H:%M:%S')
    )
    logger.addHandler(file_handler)
    return logger


def find_move(uci: str, position: Position) -> Optional[Move]:
    """Legal move of the side to move whose UCI string is uci, if any."""
    for move in legal_moves_for_color(position.side_to_move, position):
        if move.uci() == uci:
            return move
    return None


class UCIEngine:
    """
    Protocol driver around a TwoPlySearch.

    Attributes:
        config: Engine configuration
        position: Position set by the last 'position' command
        searcher: Move selection used by 'go'
        searching: True while a worker thread is searching
        search_thread: Worker of the last 'go', if any
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config if config else EngineConfig()
        self.position = Position.starting()
        self.searcher = TwoPlySearch(
            evaluator=ClassicalEvaluator(jitter=self.config.jitter, seed=self.config.random_seed),
            depth=self.config.search_depth,
            reply_limit=self.config.reply_limit,
        )

        self.searching = False
        self.search_thread: Optional[threading.Thread] = None

        self.name = ENGINE_NAME
        self.author = ENGINE_AUTHOR

        self.commands: Dict[str, Callable[[List[str]], None]] = {
            "uci": lambda tokens: self.handle_uci(),
            "isready": lambda tokens: self.handle_isready(),
            "ucinewgame": lambda tokens: self.handle_ucinewgame(),
            "position": self.handle_position,
            "go": self.handle_go,
            "setoption": self.handle_setoption,
            "stop": lambda tokens: self.handle_stop(),
        }

        self.logger = setup_logger(self.config.log_dir, debug=self.config.debug)
        self.logger.info(f"{self.name} {__version__} started with {self.searcher!r}")

    def run(self):
        """Read and dispatch commands from stdin until 'quit' or end of input."""
        while True:
            try:
                line = input().strip()
            except EOFError:
                self.logger.info("End of input")
                self.handle_quit()
                return

            tokens = line.split()
            if not tokens:
                continue
            self.logger.debug(f"recv: {line}")

            name = tokens[0].lower()
            if name == "quit":
                self.handle_quit()
                return

            handler = self.commands.get(name)
            if handler is None:
                # Unknown command - the protocol says to ignore
                self.logger.debug(f"Ignoring unknown command: {name}")
                continue

            try:
                handler(tokens)
            except Exception as e:
                self.logger.error(f"'{name}' failed: {e}", exc_info=True)
                print(f"# Error: {e}", file=sys.stderr)

    def _send(self, message: str) -> None:
        print(message, flush=True)
        self.logger.debug(f"sent: {message}")

    def handle_uci(self):
        """Identify the engine and advertise the Depth option."""
        self._send(f"id name {self.name} {__version__}")
        self._send(f"id author {self.author}")
        self._send(
            f"option name Depth type spin default {self.searcher.depth} "
            f"min {MIN_DEPTH} max {MAX_DEPTH}"
        )
        self._send("uciok")

    def handle_isready(self):
        self._send("readyok")

    def handle_ucinewgame(self):
        self.handle_stop()
        self.position = Position.starting()
        self.logger.info("New game")

    def handle_position(self, tokens: List[str]):
        """
        Set up the position to search.

        Accepted forms:
            position startpos [moves m1 m2 ...]
            position fen <six FEN fields> [moves m1 m2 ...]

        An unparsable FEN leaves the current position alone. Move
        application stops at the first move that is not legal, keeping
        the moves before it.
        """
        if len(tokens) < 2:
            self.logger.warning("'position' without arguments")
            return

        moves_at = tokens.index("moves") if "moves" in tokens else len(tokens)
        position = self._parse_setup(tokens[1], tokens[2:moves_at])
        if position is None:
            return

        self.position = position
        self._apply_moves(tokens[moves_at + 1:])
        self.logger.debug(f"Position now:\n{self.position}")

    def _parse_setup(self, kind: str, fields: List[str]) -> Optional[Position]:
        if kind == "startpos":
            return Position.starting()

        if kind == "fen":
            fen = " ".join(fields)
            try:
                return position_from_fen(fen)
            except ValueError as e:
                self.logger.error(f"Invalid FEN '{fen}': {e}")
                print(f"# Invalid FEN: {e}", file=sys.stderr)
                return None

        self.logger.warning(f"Unknown position kind: {kind}")
        return None

    def _apply_moves(self, ucis: List[str]) -> None:
        for count, uci in enumerate(ucis):
            move = find_move(uci, self.position)
            if move is None:
                self.logger.error(f"Illegal move: {uci} (after {count} moves)")
                print(f"# Illegal move: {uci}", file=sys.stderr)
                return
            apply_move(move, self.position)

    def handle_setoption(self, tokens: List[str]):
        """Handle 'setoption name Depth value N'; other options are ignored."""
        try:
            name = tokens[tokens.index("name") + 1]
            value = tokens[tokens.index("value") + 1]
        except (ValueError, IndexError):
            self.logger.warning(f"Malformed setoption: {' '.join(tokens)}")
            return

        if name.lower() != "depth":
            self.logger.debug(f"Ignoring option {name}")
            return

        self._set_depth(value)

    def _set_depth(self, value: str) -> None:
        try:
            self.searcher.set_search_difficulty(int(value))
        except ValueError:
            self.logger.warning(f"Depth must be an integer, got {value!r}")
            return
        self.logger.info(f"Depth set to {self.searcher.depth}")

    def handle_go(self, tokens: List[str]):
        """
        Search the current position on a worker thread.

        'go depth N' changes the search depth first. Clock parameters
        (wtime, movetime, ...) are accepted and ignored.
        """
        # The previous worker still reads searcher.depth
        self.handle_stop()

        if "depth" in tokens[:-1]:
            self._set_depth(tokens[tokens.index("depth") + 1])

        self.searching = True
        self.search_thread = threading.Thread(
            target=self._search_thread,
            args=(self.position.copy(),),
            name="gambit-search",
        )
        self.search_thread.start()

    def _search_thread(self, position: Position):
        """
        Worker body: search position and report the result.

        Output:
            info depth D nodes N time T pv <move>
            bestmove <move>        (bestmove 0000 without legal moves)
        """
        started = time.time()
        try:
            best = self.searcher.select_move(position.side_to_move, position)
            elapsed_ms = int((time.time() - started) * 1000)

            if best is None:
                self.logger.info("Nothing to search: no legal moves")
                self._send("bestmove 0000")
                return

            self._send(
                f"info depth {min(self.searcher.depth, 2)} "
                f"nodes {self.searcher.nodes_searched} "
                f"time {elapsed_ms} pv {best.uci()}"
            )
            self._send(f"bestmove {best.uci()}")

        except Exception as e:
            self.logger.error(f"Search failed: {e}", exc_info=True)
            print(f"# Search error: {e}", file=sys.stderr)

            # A GUI waits for bestmove, so answer with any legal move
            fallback = legal_moves_for_color(position.side_to_move, position)
            self._send(f"bestmove {fallback[0].uci()}" if fallback else "bestmove 0000")

        finally:
            self.searching = False

    def handle_stop(self):
        """Wait for a running search; it always finishes quickly."""
        if self.search_thread is not None and self.search_thread.is_alive():
            self.search_thread.join()

    def handle_quit(self):
        self.handle_stop()
        self.logger.info(f"{self.name} stopped")
