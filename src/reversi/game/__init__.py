"""
Reversi game module.
This package contains the core game logic for Reversi.
"""

from .board import Board
from .game import ReversiGame, GameMode

__all__ = ['Board', 'ReversiGame', 'GameMode']
