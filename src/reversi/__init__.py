"""
Reversi with a computer opponent.
"""
from .types import Cell, Player, GameStatus, Score, DIRECTIONS
from .game import Board, ReversiGame, GameMode
from .advisor import MoveAdvisor, Difficulty

__version__ = "0.2.0"

__all__ = [
    'Cell', 'Player', 'GameStatus', 'Score', 'DIRECTIONS',
    'Board', 'ReversiGame', 'GameMode',
    'MoveAdvisor', 'Difficulty',
]
