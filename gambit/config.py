"""
Engine configuration.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from gambit.board.position import Color


@dataclass
class EngineConfig:
    """Configuration for the engine, game session and UCI front end.

    This dataclass keeps search, evaluation and session settings in one
    place so a game can be reproduced from its configuration.
    """

    # Search
    search_depth: int = 2
    """Search depth (1 = one ply, 2 = two-ply; deeper settings behave like 2)"""

    reply_limit: Optional[int] = 10
    """Ordered opponent replies scored per candidate (None = all)"""

    # Evaluation
    jitter: float = 1.0
    """Width of the random evaluation term (0 = deterministic)"""

    random_seed: Optional[int] = None
    """Seed for the evaluation jitter (None for random)"""

    # Game session
    ai_color: Color = Color.BLACK
    """Side played by the automated opponent"""

    two_player: bool = False
    """If True, no automated moves are made"""

    ai_move_delay: float = 0.0
    """Seconds to wait before the automated reply (0 = reply immediately)"""

    # Logging
    log_dir: Path = field(default_factory=lambda: Path.home() / ".gambit")
    """Directory for the UCI engine log file"""

    debug: bool = False
    """Log at DEBUG level instead of INFO"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.log_dir = Path(self.log_dir)

        if isinstance(self.ai_color, str):
            self.ai_color = Color(self.ai_color)

        if self.search_depth < 1:
            raise ValueError(f"search_depth must be positive, got {self.search_depth}")

        if self.reply_limit is not None and self.reply_limit < 1:
            raise ValueError(f"reply_limit must be positive or None, got {self.reply_limit}")

        if self.jitter < 0:
            raise ValueError(f"jitter must be non-negative, got {self.jitter}")

        if self.ai_move_delay < 0:
            raise ValueError(f"ai_move_delay must be non-negative, got {self.ai_move_delay}")

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"EngineConfig(\n"
            f"  Search: depth={self.search_depth}, reply_limit={self.reply_limit}\n"
            f"  Evaluation: jitter={self.jitter}, seed={self.random_seed}\n"
            f"  Session: ai_color={self.ai_color.value}, two_player={self.two_player}, "
            f"ai_move_delay={self.ai_move_delay}s\n"
            f"  Logging: {self.log_dir} (debug={self.debug})\n"
            f")"
        )
