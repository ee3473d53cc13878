"""
Reversi game module.
Handles game flow, player modes and the paced computer turn.
"""
import asyncio
import logging
import random
from enum import Enum
from typing import List, Optional, Dict, Any

import numpy as np

from ..advisor import MoveAdvisor, Difficulty
from ..config import GameConfig
from ..types import Cell, GameStatus, Move, Player, Score
from .board import Board

logger = logging.getLogger(__name__)


class GameMode(str, Enum):
    PVP = 'pvp'  # Human vs human
    PVC = 'pvc'  # Human vs computer

    @classmethod
    def parse(cls, value) -> 'GameMode':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown game mode {value!r}, expected 'pvp' or 'pvc'") from None


class ReversiGame:
    """
    A game session: owns the board and the computer opponent.

    Presentation code talks to the game only through this object. Human
    moves go through attempt_move(); the computer moves through
    schedule_computer_turn(), which holds the session in a "thinking" state
    until its move has been committed.
    """

    def __init__(self, mode=GameMode.PVC, difficulty=Difficulty.NORMAL,
                 computer_color=Player.WHITE, cpu_delay: float = 0.5,
                 rng: Optional[random.Random] = None):
        """
        Create a new, not yet started game. Call initialize() to begin.

        Args:
            mode: 'pvp' or 'pvc'
            difficulty: Computer tier ('easy', 'normal' or 'hard')
            computer_color: Side the computer plays in 'pvc' mode
            cpu_delay: Seconds to wait before the computer moves
            rng: Random source for the easy tier
        """
        self.board = Board()
        self.advisor = MoveAdvisor(self.board, difficulty, rng=rng)
        self.mode = GameMode.parse(mode)
        self.computer_color = Player.parse(computer_color)
        self.cpu_delay = cpu_delay
        self.thinking = False
        self.move_history: List[Dict[str, Any]] = []

    @classmethod
    def from_config(cls, config: GameConfig, rng: Optional[random.Random] = None) -> 'ReversiGame':
        """Build a session from the game section of the configuration."""
        return cls(mode=config.mode,
                   difficulty=config.difficulty,
                   computer_color=config.computer_color,
                   cpu_delay=config.cpu_delay,
                   rng=rng)

    def initialize(self) -> None:
        """Start (or restart) the game from the opening position."""
        self.board.initialize()
        self.thinking = False
        self.move_history = []
        logger.info("New game: mode=%s difficulty=%s computer=%s",
                    self.mode.value, self.advisor.difficulty.value, self.computer_color.label)

    def set_position(self, grid, current_player=Player.BLACK) -> None:
        """Continue play from an arbitrary position."""
        self.board.set_position(grid, Player.parse(current_player))
        self.thinking = False
        self.move_history = []

    # Settings

    def set_mode(self, mode) -> None:
        self.mode = GameMode.parse(mode)

    def set_difficulty(self, difficulty) -> None:
        self.advisor.set_difficulty(difficulty)

    def set_computer_color(self, color) -> None:
        self.computer_color = Player.parse(color)

    # Queries

    def get_cell(self, row: int, col: int) -> Cell:
        return self.board.get_cell(row, col)

    def get_current_player(self) -> Player:
        return self.board.current_player

    def get_status(self) -> GameStatus:
        return self.board.status

    def is_terminal(self) -> bool:
        return self.board.game_over

    def get_score(self) -> Score:
        return self.board.get_score()

    def get_winner(self) -> Optional[Player]:
        """Winner once the game is over; None for a draw or an unfinished game."""
        return self.board.get_winner()

    def legal_moves(self, player=None) -> List[Move]:
        if player is None:
            player = self.board.current_player
        return self.advisor.legal_moves(Player.parse(player))

    def get_board_state(self) -> np.ndarray:
        return self.board.get_board_state()

    def get_move_history(self) -> List[Dict[str, Any]]:
        """
        Get the move history.

        Returns:
            List of dictionaries with the player, the move and the flipped squares
        """
        return self.move_history.copy()

    def is_computer_turn(self) -> bool:
        return (self.mode is GameMode.PVC
                and self.board.status is GameStatus.IN_PROGRESS
                and self.board.current_player == self.computer_color)

    # Commands

    def _commit(self, row: int, col: int, player: Player) -> None:
        flipped = self.board.place(row, col, player)
        self.move_history.append({
            'player': player,
            'move': (row, col),
            'flipped': flipped,
        })

    def attempt_move(self, row: int, col: int, player=None) -> bool:
        """
        Play a human move if it is legal right now.

        Args:
            row: Row of the move (0-based)
            col: Column of the move (0-based)
            player: Side making the move. If None, uses the current player.

        Returns:
            bool: True if the move was made, False if it was ignored
        """
        if self.thinking or self.board.status is not GameStatus.IN_PROGRESS:
            return False

        player = self.board.current_player if player is None else Player.parse(player)
        if player != self.board.current_player:
            return False
        if self.mode is GameMode.PVC and player == self.computer_color:
            return False
        if not self.board.is_valid_move(row, col, player):
            return False

        self._commit(row, col, player)
        self.board.advance_turn()
        return True

    def _claim_computer_turn(self) -> None:
        """Enter the thinking state, or refuse if a computer move cannot start now."""
        if self.thinking:
            raise ValueError("The computer is already thinking")
        if not self.is_computer_turn():
            raise ValueError("It is not the computer's turn")
        self.thinking = True

    async def _computer_turn(self) -> Optional[Move]:
        try:
            await asyncio.sleep(self.cpu_delay)
            move = self.advisor.select_move(self.computer_color)
            if move is not None:
                self._commit(move[0], move[1], self.computer_color)
            self.board.advance_turn()
        finally:
            self.thinking = False
        return move

    async def play_computer_turn(self) -> Optional[Move]:
        """
        Wait out the pacing delay, then pick and commit the computer's move.

        The turn is handed over even when the computer has nothing to play.
        Raises ValueError unless the game is running, it is the computer's
        turn and no other computer move is pending.

        Returns:
            The move played, or None if there was none
        """
        self._claim_computer_turn()
        return await self._computer_turn()

    def schedule_computer_turn(self) -> 'asyncio.Task':
        """
        Start the computer's turn as a task on the running event loop.

        Human input is ignored from this call until the task completes. Only
        one computer turn can be pending at a time.
        """
        self._claim_computer_turn()
        return asyncio.get_running_loop().create_task(self._computer_turn())

    def __str__(self) -> str:
        """String representation of the game state."""
        return str(self.board)
