"""
Gambit Chess Engine

A two-player chess engine: board state, legal move generation under the
full rules of chess, and a shallow adversarial search that picks moves for
an automated opponent.

## Architecture

The engine is organized into several key modules:

1. **board**: Position and move data model
   - Pieces, castling rights, en-passant target, repetition bookkeeping
   - Conversion from/to python-chess boards and FEN strings

2. **rules**: The rules engine
   - Pseudo-legal move generation per piece type
   - Legality filter (no self-check), check/checkmate/stalemate
   - Move execution, fifty-move rule, threefold repetition

3. **evaluation**: Position evaluation functions
   - Abstract Evaluator interface (swappable design)
   - ClassicalEvaluator: material, piece-square tables, pawn structure,
     tactical exposure and game-state terms

4. **search**: Move selection
   - Two-ply search with move ordering (MVV-LVA approximation)

5. **game**: Game session driving rules and search for a front end

6. **uci**: Universal Chess Interface protocol

7. **utils**: Perft, tactical test suite and self-play

## Quick Start

```python
from gambit.board import Color, Position
from gambit.rules import legal_moves_for_color, execute
from gambit.search import TwoPlySearch

position = Position.starting()
searcher = TwoPlySearch()

move = searcher.select_move(Color.WHITE, position)
execute(move, position)
print(move.uci())
```

### As a UCI Engine

```bash
python -m gambit.uci
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from gambit.board import Color, PieceType, Piece, Position, Move
from gambit.rules import InvalidMoveError
from gambit.evaluation import Evaluator, ClassicalEvaluator
from gambit.search import TwoPlySearch, select_move
from gambit.game import Game, GameStatus

__all__ = [
    'Color',
    'PieceType',
    'Piece',
    'Position',
    'Move',
    'InvalidMoveError',
    'Evaluator',
    'ClassicalEvaluator',
    'TwoPlySearch',
    'select_move',
    'Game',
    'GameStatus',
]
