"""
Game Module

This module provides the game session a front end (board UI, CLI, UCI)
talks to. It wires the rules engine and the search together.

Key Components:
    - Game: Move execution, end-of-game detection, automated replies
    - GameStatus: Ongoing, checkmate, stalemate and draw results
"""

from gambit.game.session import Game, GameStatus

__all__ = ['Game', 'GameStatus']
