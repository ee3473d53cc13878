"""
Computer opponent for Reversi.
"""
from .advisor import MoveAdvisor, Difficulty, POSITION_VALUES

__all__ = ['MoveAdvisor', 'Difficulty', 'POSITION_VALUES']
