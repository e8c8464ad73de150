"""
Game Session

Drives one game for a front end: answers legal-move queries for a square,
executes moves, detects the end of the game and lets the automated
opponent reply.

Threading:
    With ai_move_delay > 0 the automated reply runs on a threading.Timer
    after the human move has been applied. Every mutation of the position
    happens under one re-entrant lock, so no branch of a search and no
    front-end query ever sees a half-applied move.
"""

import logging
import threading
from enum import Enum
from typing import List, Optional

from gambit.board.move import Move
from gambit.board.position import Color, Position, Square
from gambit.config import EngineConfig
from gambit.evaluation.classical import ClassicalEvaluator
from gambit.rules import (
    InvalidMoveError,
    execute,
    has_legal_moves,
    is_draw_by_fifty_move_rule,
    is_draw_by_repetition,
    is_in_check,
    legal_moves,
)
from gambit.search.two_ply import TwoPlySearch

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    ONGOING = "ongoing"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW_BY_REPETITION = "draw by repetition"
    DRAW_BY_FIFTY_MOVE_RULE = "draw by 50-move rule"


class Game:
    """
    A game between a human and the engine (or two humans).

    Attributes:
        config: Engine configuration
        position: Current position
        searcher: Move selection for the automated side
        two_player: If True, the engine never moves on its own
        status: Result of the last end-of-game check
        last_move: Most recently executed move
        move_log: All executed moves in order
    """

    def __init__(self, config: Optional[EngineConfig] = None, position: Optional[Position] = None):
        self.config = config if config else EngineConfig()
        self.searcher = TwoPlySearch(
            evaluator=ClassicalEvaluator(jitter=self.config.jitter, seed=self.config.random_seed),
            depth=self.config.search_depth,
            reply_limit=self.config.reply_limit,
        )
        self.two_player = self.config.two_player
        self.ai_color = self.config.ai_color

        self._lock = threading.RLock()
        self._pending_ai: Optional[threading.Timer] = None

        self.position = position if position is not None else Position.starting()
        self.status = GameStatus.ONGOING
        self.last_move: Optional[Move] = None
        self.move_log: List[Move] = []
        self.check_game_end()

    @property
    def active(self) -> bool:
        return self.status is GameStatus.ONGOING

    @property
    def winner(self) -> Optional[Color]:
        """Winning color after checkmate, None otherwise."""
        if self.status is GameStatus.CHECKMATE:
            return self.position.side_to_move.opponent
        return None

    def legal_moves_at(self, square: Square) -> List[Move]:
        """Legal moves for the piece on square, if it belongs to the side to move."""
        with self._lock:
            piece = self.position.piece_at(square)
            if not self.active or piece is None or piece.color is not self.position.side_to_move:
                return []
            return legal_moves(square, self.position)

    def attempt_move(self, from_square: Square, to_square: Square) -> Optional[Move]:
        """
        Play the legal move from from_square to to_square, if there is one.

        Returns:
            The executed move, or None if no legal move matches
        """
        with self._lock:
            for move in self.legal_moves_at(from_square):
                if move.to_square == to_square:
                    self.make_move(move)
                    return move
        return None

    def make_move(self, move: Move) -> GameStatus:
        """
        Execute a move and hand over to the automated side if it is its turn.

        Raises:
            InvalidMoveError: If the game is over or the move is illegal
        """
        with self._lock:
            if not self.active:
                raise InvalidMoveError(f"Game is over ({self.status.value})")

            execute(move, self.position)
            self.last_move = move
            self.move_log.append(move)
            logger.debug(f"Played {move.uci()}")

            self.check_game_end()

            if self._ai_to_move():
                if self.config.ai_move_delay > 0:
                    self._schedule_ai_move()
                else:
                    self.make_ai_move()

            return self.status

    def make_ai_move(self) -> Optional[Move]:
        """Let the engine play one move for the side to move."""
        with self._lock:
            if not self.active:
                return None

            move = self.searcher.select_move(self.position.side_to_move, self.position)
            if move is not None:
                self.make_move(move)
            return move

    def _ai_to_move(self) -> bool:
        return (
            not self.two_player
            and self.active
            and self.position.side_to_move is self.ai_color
        )

    def _schedule_ai_move(self) -> None:
        self.cancel_pending_ai_move()
        timer = threading.Timer(
            self.config.ai_move_delay, lambda: self._play_scheduled_reply(timer)
        )
        timer.daemon = True
        self._pending_ai = timer
        timer.start()

    def _play_scheduled_reply(self, timer: threading.Timer) -> None:
        """
        Timer callback for a delayed reply.

        A timer that has already fired may be waiting on the lock while the
        game is reset, switched to two-player mode or the reply cancelled,
        so it only plays if it is still the pending timer and the engine
        is still to move.
        """
        with self._lock:
            if timer is not self._pending_ai or not self._ai_to_move():
                logger.debug("Dropping stale automated reply")
                return
            self.make_ai_move()

    def cancel_pending_ai_move(self) -> None:
        """Cancel a scheduled automated reply, if any (fired or not)."""
        with self._lock:
            if self._pending_ai is not None:
                self._pending_ai.cancel()
                self._pending_ai = None

    def wait_for_ai(self, timeout: Optional[float] = None) -> None:
        """Block until a scheduled automated reply has been played."""
        pending = self._pending_ai
        if pending is not None and pending is not threading.current_thread():
            pending.join(timeout)

    def check_game_end(self) -> GameStatus:
        """
        Check for game ending conditions for the side to move.

        Order: checkmate, stalemate, threefold repetition, fifty-move rule.
        """
        with self._lock:
            color = self.position.side_to_move
            in_check = is_in_check(color, self.position)
            can_move = has_legal_moves(color, self.position)

            if in_check and not can_move:
                self.status = GameStatus.CHECKMATE
            elif not can_move:
                self.status = GameStatus.STALEMATE
            elif is_draw_by_repetition(self.position):
                self.status = GameStatus.DRAW_BY_REPETITION
            elif is_draw_by_fifty_move_rule(self.position):
                self.status = GameStatus.DRAW_BY_FIFTY_MOVE_RULE
            else:
                self.status = GameStatus.ONGOING

            if self.status is GameStatus.CHECKMATE:
                logger.info(f"Checkmate! {color.opponent.value} wins")
            elif not self.active:
                logger.info(f"Game drawn: {self.status.value}")
            return self.status

    def reset(self) -> None:
        """Start a new game from the initial position."""
        with self._lock:
            self.cancel_pending_ai_move()
            self.position = Position.starting()
            self.status = GameStatus.ONGOING
            self.last_move = None
            self.move_log = []
            logger.info("Game reset")

    def set_two_player_mode(self, enabled: bool) -> None:
        with self._lock:
            self.two_player = enabled
            if enabled:
                self.cancel_pending_ai_move()

    def set_ai_difficulty(self, depth: int) -> None:
        self.searcher.set_search_difficulty(depth)
