"""
Board module for Reversi.
Handles the grid state, move validation, capture and turn progression.
"""
import logging
from typing import List, Optional

import numpy as np

from ..types import DIRECTIONS, Cell, GameStatus, Move, Player, Score

logger = logging.getLogger(__name__)


class Board:
    """
    Represents the Reversi game board as an 8x8 numpy grid of Cell values.

    The board owns the current player and the terminal flag. A freshly
    constructed board is empty and NOT_STARTED until initialize() is called.
    """

    SIZE = 8

    SYMBOLS = {Cell.EMPTY: '.', Cell.BLACK: 'B', Cell.WHITE: 'W'}

    def __init__(self, size: int = 8):
        """Create an empty, not yet started board."""
        if size != 8:
            raise ValueError("Only 8x8 board is supported")

        self.size = size
        self._board = np.zeros((size, size), dtype=np.int8)
        self.current_player = Player.BLACK
        self.game_over = False
        self.status = GameStatus.NOT_STARTED

    def initialize(self) -> None:
        """Reset to the standard opening with Black to move."""
        self._board.fill(Cell.EMPTY)
        mid = self.SIZE // 2
        self._board[mid - 1, mid - 1] = Cell.WHITE
        self._board[mid - 1, mid] = Cell.BLACK
        self._board[mid, mid - 1] = Cell.BLACK
        self._board[mid, mid] = Cell.WHITE

        self.current_player = Player.BLACK
        self.game_over = False
        self.status = GameStatus.IN_PROGRESS
        logger.debug("Board initialized")

    def set_position(self, grid, current_player: Player = Player.BLACK) -> None:
        """
        Load an arbitrary position.

        Args:
            grid: 8x8 array-like of Cell values
            current_player: Player to move in the loaded position
        """
        grid = np.asarray(grid, dtype=np.int8)
        if grid.shape != (self.SIZE, self.SIZE):
            raise ValueError(f"Expected an {self.SIZE}x{self.SIZE} grid, got {grid.shape}")
        if not np.isin(grid, [c.value for c in Cell]).all():
            raise ValueError("Grid contains values that are not Cell states")

        self._board[:, :] = grid
        self.current_player = Player(current_player)
        self.game_over = False
        self.status = GameStatus.IN_PROGRESS

    @classmethod
    def from_string(cls, text: str, current_player: Player = Player.BLACK) -> 'Board':
        """
        Build a board from 8 lines of 'B', 'W' and '.' characters.
        Whitespace inside a line is ignored.
        """
        lookup = {symbol: cell for cell, symbol in cls.SYMBOLS.items()}
        rows = [line.replace(' ', '') for line in text.strip().splitlines()]
        if len(rows) != cls.SIZE or any(len(row) != cls.SIZE for row in rows):
            raise ValueError("Position must have 8 rows of 8 squares")

        try:
            grid = [[lookup[ch] for ch in row] for row in rows]
        except KeyError as e:
            raise ValueError(f"Unknown square symbol: {e.args[0]!r}") from None

        board = cls()
        board.set_position(grid, current_player)
        return board

    def copy(self) -> 'Board':
        """Create a deep copy of the board."""
        new_board = Board(self.size)
        new_board._board = self._board.copy()
        new_board.current_player = self.current_player
        new_board.game_over = self.game_over
        new_board.status = self.status
        return new_board

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.SIZE and 0 <= col < self.SIZE

    def get_cell(self, row: int, col: int) -> Cell:
        """Get the contents of a square."""
        if not self.in_bounds(row, col):
            raise ValueError(f"Square out of range: ({row}, {col})")
        return Cell(int(self._board[row, col]))

    def _captures_in_direction(self, row: int, col: int, dr: int, dc: int,
                               player: Player) -> List[Move]:
        """
        Opponent squares bracketed from (row, col) along one direction.

        Returns an empty list unless a contiguous run of opponent stones is
        closed off by one of the player's stones before an empty square or
        the edge of the board.
        """
        opponent = player.opponent
        run = []
        r, c = row + dr, col + dc
        while self.in_bounds(r, c):
            cell = self._board[r, c]
            if cell == opponent:
                run.append((r, c))
            elif cell == player:
                return run
            else:
                break
            r += dr
            c += dc
        return []

    def is_valid_move(self, row: int, col: int, player: Optional[Player] = None) -> bool:
        """Check if a move is valid."""
        if player is None:
            player = self.current_player
        player = Player(player)

        # Check if the position is empty and within bounds
        if not self.in_bounds(row, col) or self._board[row, col] != Cell.EMPTY:
            return False

        for dr, dc in DIRECTIONS:
            if self._captures_in_direction(row, col, dr, dc, player):
                return True
        return False

    def get_flipped_pieces(self, row: int, col: int, player: Player) -> List[Move]:
        """
        Get the list of pieces that would be flipped by a move.
        Does not modify the board.
        """
        player = Player(player)
        flipped = []
        for dr, dc in DIRECTIONS:
            flipped.extend(self._captures_in_direction(row, col, dr, dc, player))
        return flipped

    def place(self, row: int, col: int, player: Player) -> List[Move]:
        """
        Put a stone down and flip every bracketed opponent run.

        The move is NOT re-validated: callers must check is_valid_move()
        first. Placing an illegal move leaves the board in a corrupted but
        deterministic state.

        Returns:
            The squares that were flipped
        """
        player = Player(player)
        flipped = self.get_flipped_pieces(row, col, player)

        self._board[row, col] = player
        for r, c in flipped:
            self._board[r, c] = player

        logger.debug("%s plays (%d, %d), flipping %d", player.label, row, col, len(flipped))
        return flipped

    def get_valid_moves(self, player: Optional[Player] = None) -> List[Move]:
        """
        Get all valid moves for the given player in row-major order.

        Args:
            player: The player to get valid moves for. If None, uses current player.

        Returns:
            List of (row, col) tuples representing valid moves
        """
        if player is None:
            player = self.current_player

        return [(row, col)
                for row in range(self.SIZE)
                for col in range(self.SIZE)
                if self.is_valid_move(row, col, player)]

    def has_any_valid_move(self, player: Optional[Player] = None) -> bool:
        """Check if the player has any valid moves."""
        if player is None:
            player = self.current_player

        for row in range(self.SIZE):
            for col in range(self.SIZE):
                if self.is_valid_move(row, col, player):
                    return True
        return False

    def advance_turn(self) -> bool:
        """
        Hand the turn over after a committed move.

        The turn passes to the opponent. If the opponent cannot move, the
        turn comes straight back; if the original mover cannot move either,
        the game is over.
        A board that was never initialized is left untouched.

        Returns:
            True if the game has ended
        """
        if self.status is GameStatus.NOT_STARTED:
            return False
        if self.game_over:
            return True

        self.current_player = self.current_player.opponent

        if not self.has_any_valid_move(self.current_player):
            logger.debug("%s has no valid move and passes", self.current_player.label)
            self.current_player = self.current_player.opponent

            if not self.has_any_valid_move(self.current_player):
                self.game_over = True
                self.status = GameStatus.TERMINAL
                black, white = self.get_score()
                logger.info("Game over. Black: %d, White: %d", black, white)

        return self.game_over

    def get_score(self) -> Score:
        """
        Get the current score (black, white).

        Returns:
            Score named tuple of (black, white)
        """
        black_count = int(np.count_nonzero(self._board == Cell.BLACK))
        white_count = int(np.count_nonzero(self._board == Cell.WHITE))
        return Score(black_count, white_count)

    def count_empty(self) -> int:
        return int(np.count_nonzero(self._board == Cell.EMPTY))

    def get_winner(self) -> Optional[Player]:
        """
        Winner by stone count once the game is over.

        Returns:
            Player.BLACK or Player.WHITE, or None for a draw or an unfinished game
        """
        if not self.game_over:
            return None

        black, white = self.get_score()
        if black > white:
            return Player.BLACK
        if white > black:
            return Player.WHITE
        return None

    def get_board_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            2D numpy array of Cell values
        """
        return self._board.copy()

    def __str__(self) -> str:
        """Return a string representation of the board."""
        rows = []
        for i in range(self.SIZE):
            rows.append(' '.join(self.SYMBOLS[Cell(int(v))] for v in self._board[i]))

        status = ["\n".join(rows)]
        status.append(f"Current player: {self.current_player.label}")

        black, white = self.get_score()
        status.append(f"Score - Black: {black}, White: {white}")

        if self.game_over:
            winner = self.get_winner()
            if winner is None:
                status.append("Game over! It's a draw!")
            else:
                status.append(f"Game over! {winner.label} wins!")

        return "\n".join(status)
