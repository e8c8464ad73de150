"""
Search Module

This module implements move selection for the automated player: a two-ply
evaluation search (simplified minimax, no alpha-beta) driven by move
ordering.

Key Components:
    - TwoPlySearch: Configurable searcher (depth, reply limit, evaluator)
    - select_move: One-off convenience wrapper
    - order_moves: Move ordering heuristics (MVV-LVA approximation,
      centre and development bonuses)
"""

from gambit.search.two_ply import TwoPlySearch, select_move, order_moves

__all__ = ['TwoPlySearch', 'select_move', 'order_moves']
