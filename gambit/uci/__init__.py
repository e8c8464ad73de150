"""
UCI Protocol Interface

This module implements the Universal Chess Interface (UCI) protocol,
which allows the engine to communicate with chess GUIs.

Protocol Flow:
    GUI → "uci"
    Engine → "id name Gambit 0.1.0"
    Engine → "uciok"
    GUI → "isready"
    Engine → "readyok"
    GUI → "position startpos moves e2e4"
    GUI → "go"
    Engine → "info depth 2 nodes 245 time 310 pv e7e5"
    Engine → "bestmove e7e5"

Reference:
    UCI Protocol: https://www.chessprogramming.org/UCI
"""

from gambit.uci.interface import UCIEngine

__all__ = ['UCIEngine']
