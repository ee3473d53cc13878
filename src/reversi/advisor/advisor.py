"""
Move selection for the computer opponent.

Every tier looks exactly one move ahead: the advisor only reads the board,
it never plays moves out on it.
"""
import logging
import random
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

import numpy as np

from ..types import Move, Player

if TYPE_CHECKING:
    from ..game.board import Board

logger = logging.getLogger(__name__)

CORNER_VALUE = 100
FLIP_WEIGHT = 2

# Static square weights: corners are gold, the squares next to them are poison
POSITION_VALUES = np.array([
    [100, -20, 10,  5,  5, 10, -20, 100],
    [-20, -50,  1,  1,  1,  1, -50, -20],
    [ 10,   1,  1,  0,  0,  1,   1,  10],
    [  5,   1,  0,  0,  0,  0,   1,   5],
    [  5,   1,  0,  0,  0,  0,   1,   5],
    [ 10,   1,  1,  0,  0,  1,   1,  10],
    [-20, -50,  1,  1,  1,  1, -50, -20],
    [100, -20, 10,  5,  5, 10, -20, 100],
], dtype=np.int32)
POSITION_VALUES.setflags(write=False)


class Difficulty(str, Enum):
    EASY = 'easy'
    NORMAL = 'normal'
    HARD = 'hard'

    @classmethod
    def parse(cls, value) -> 'Difficulty':
        """Accept a Difficulty or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ', '.join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {value!r}, expected one of: {choices}") from None


class MoveAdvisor:
    """Picks a move for one side using a fixed-depth heuristic."""

    def __init__(self, board: 'Board', difficulty: Difficulty = Difficulty.NORMAL,
                 rng: Optional[random.Random] = None):
        """
        Args:
            board: Board to read; the advisor never mutates it
            difficulty: Tier used by select_move()
            rng: Random source for the easy tier (seedable for tests)
        """
        self.board = board
        self.difficulty = Difficulty.parse(difficulty)
        self.rng = rng if rng is not None else random.Random()

    def set_difficulty(self, difficulty) -> None:
        self.difficulty = Difficulty.parse(difficulty)

    def legal_moves(self, player: Player) -> List[Move]:
        return self.board.get_valid_moves(player)

    def flip_count(self, row: int, col: int, player: Player) -> int:
        """Number of opponent stones the move would capture."""
        return len(self.board.get_flipped_pieces(row, col, player))

    @staticmethod
    def position_value(row: int, col: int) -> int:
        return int(POSITION_VALUES[row, col])

    def choose_easy(self, player: Player) -> Optional[Move]:
        moves = self.legal_moves(player)
        if not moves:
            return None
        return self.rng.choice(moves)

    def choose_normal(self, player: Player) -> Optional[Move]:
        """
        Take the first corner found in scan order, otherwise the move that
        flips the most stones. Ties keep the earlier move.
        """
        best_move = None
        best_flips = -1

        for row, col in self.legal_moves(player):
            if self.position_value(row, col) >= CORNER_VALUE:
                return (row, col)

            flips = self.flip_count(row, col, player)
            if flips > best_flips:
                best_flips = flips
                best_move = (row, col)

        return best_move

    def choose_hard(self, player: Player) -> Optional[Move]:
        """Maximise square weight plus twice the flips. Ties keep the earlier move."""
        best_move = None
        best_score = None

        for row, col in self.legal_moves(player):
            score = self.position_value(row, col) + FLIP_WEIGHT * self.flip_count(row, col, player)
            if best_score is None or score > best_score:
                best_score = score
                best_move = (row, col)

        return best_move

    def select_move(self, player: Player) -> Optional[Move]:
        """
        Pick a move for the player at the configured difficulty.

        Returns:
            (row, col), or None if the player has no legal move
        """
        choosers = {
            Difficulty.EASY: self.choose_easy,
            Difficulty.NORMAL: self.choose_normal,
            Difficulty.HARD: self.choose_hard,
        }
        move = choosers[self.difficulty](Player(player))
        logger.debug("%s advisor picked %s for %s", self.difficulty.value, move, Player(player).label)
        return move
