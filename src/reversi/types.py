"""
Basic value types shared by the board and the computer opponent.
"""
from enum import Enum, IntEnum
from typing import NamedTuple, Tuple

Move = Tuple[int, int]

# Directions: NW, N, NE, W, E, SW, S, SE as (row delta, col delta)
DIRECTIONS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


class Cell(IntEnum):
    """Contents of a single square."""
    EMPTY = 0
    BLACK = 1
    WHITE = 2


class Player(IntEnum):
    """A side in the game. Values match the corresponding Cell values."""
    BLACK = 1  # Moves first
    WHITE = 2

    @property
    def opponent(self) -> 'Player':
        return Player(3 - self)

    @property
    def label(self) -> str:
        return 'Black' if self is Player.BLACK else 'White'

    @classmethod
    def parse(cls, value) -> 'Player':
        """Accept a Player, its value, or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.upper()]
            except KeyError:
                raise ValueError(f"Unknown player {value!r}, expected 'black' or 'white'") from None
        return cls(value)


class GameStatus(Enum):
    NOT_STARTED = 'not_started'
    IN_PROGRESS = 'in_progress'
    TERMINAL = 'terminal'


class Score(NamedTuple):
    black: int
    white: int
