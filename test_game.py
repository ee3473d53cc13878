"""
Test script for the Reversi game session.
"""
import asyncio
import random

import pytest

from reversi.config import GameConfig
from reversi.game import Board, ReversiGame, GameMode
from reversi.advisor import Difficulty
from reversi.types import Cell, GameStatus, Player


def row_position(row0: str):
    """Grid whose first row is row0 and everything else is empty."""
    empty = ". . . . . . . ."
    return Board.from_string("\n".join([row0] + [empty] * 7)).get_board_state()


def new_game(**kwargs) -> ReversiGame:
    kwargs.setdefault('cpu_delay', 0)
    game = ReversiGame(**kwargs)
    game.initialize()
    return game


def test_game_starts_after_initialize():
    game = ReversiGame()
    assert game.get_status() is GameStatus.NOT_STARTED
    assert not game.attempt_move(2, 3), "No moves before the game starts"

    game.initialize()
    assert game.get_status() is GameStatus.IN_PROGRESS
    assert game.get_current_player() == Player.BLACK
    assert not game.is_terminal()
    assert game.legal_moves() == [(2, 3), (3, 2), (4, 5), (5, 4)]


def test_make_move():
    """Test making moves and capturing pieces."""
    game = new_game(mode='pvp')

    assert game.attempt_move(2, 3, Player.BLACK), "Should be a valid move"
    assert game.get_cell(2, 3) == Cell.BLACK, "Move should place black piece"
    assert game.get_cell(3, 3) == Cell.BLACK, "Should capture white piece"
    assert game.get_current_player() == Player.WHITE, "Should be white's turn"
    assert game.get_score() == (4, 1)

    history = game.get_move_history()
    assert len(history) == 1
    assert history[0]['move'] == (2, 3)
    assert history[0]['flipped'] == [(3, 3)]


def test_illegal_moves_are_ignored():
    game = new_game(mode='pvp')
    before = game.get_board_state()

    assert not game.attempt_move(3, 3), "Occupied square"
    assert not game.attempt_move(0, 0), "Captures nothing"
    assert not game.attempt_move(-1, 9), "Off the board"
    assert not game.attempt_move(2, 4, Player.WHITE), "Not White's turn"

    assert (game.get_board_state() == before).all()
    assert game.get_current_player() == Player.BLACK


def test_human_cannot_move_for_the_computer():
    game = new_game(mode='pvc', computer_color='white')
    assert game.attempt_move(2, 3)
    assert game.is_computer_turn()
    assert not game.attempt_move(2, 2), "White belongs to the computer"


def test_input_is_ignored_while_thinking():
    game = new_game(mode='pvp')
    game.thinking = True
    assert not game.attempt_move(2, 3)
    game.thinking = False
    assert game.attempt_move(2, 3)


def test_computer_turn():
    game = new_game(mode='pvc', difficulty='hard')
    assert game.attempt_move(2, 3)

    async def run():
        task = game.schedule_computer_turn()
        assert game.thinking, "Thinking starts as soon as the turn is scheduled"
        assert not game.attempt_move(2, 2, Player.BLACK)
        return await task

    move = asyncio.run(run())

    # (2,2) is worth 1 + 2*1, the other replies only 0 + 2*1
    assert move == (2, 2)
    assert game.get_cell(2, 2) == Cell.WHITE
    assert not game.thinking
    assert game.get_current_player() == Player.BLACK
    assert len(game.get_move_history()) == 2


def test_computer_turn_without_a_move_still_hands_over():
    game = new_game(mode='pvc')
    game.set_position(row_position("B W . . . . . ."), current_player=Player.WHITE)
    assert game.is_computer_turn()

    move = asyncio.run(game.play_computer_turn())

    assert move is None
    assert game.get_current_player() == Player.BLACK
    assert game.get_move_history() == []
    assert not game.thinking


def test_schedule_outside_the_computer_turn_is_an_error():
    with pytest.raises(ValueError):
        new_game(mode='pvp').schedule_computer_turn()
    with pytest.raises(ValueError):
        new_game(mode='pvc').schedule_computer_turn()  # Black (human) to move


def test_only_one_computer_turn_at_a_time():
    """A second computer turn cannot start while the first is pending."""
    game = new_game(mode='pvc', difficulty='hard')
    assert game.attempt_move(2, 3)

    async def run():
        task = game.schedule_computer_turn()
        with pytest.raises(ValueError):
            game.schedule_computer_turn()
        with pytest.raises(ValueError):
            await game.play_computer_turn()
        return await task

    assert asyncio.run(run()) == (2, 2)

    history = game.get_move_history()
    assert [entry['player'] for entry in history] == [Player.BLACK, Player.WHITE]
    assert game.get_current_player() == Player.BLACK
    assert not game.thinking


def test_computer_turn_needs_a_started_game():
    game = ReversiGame(mode='pvc', cpu_delay=0)
    with pytest.raises(ValueError):
        asyncio.run(game.play_computer_turn())

    assert game.get_status() is GameStatus.NOT_STARTED
    assert not game.thinking
    assert game.get_move_history() == []


def test_computer_turn_refused_on_the_human_turn():
    game = new_game(mode='pvc')
    with pytest.raises(ValueError):
        asyncio.run(game.play_computer_turn())

    assert game.get_current_player() == Player.BLACK
    assert game.get_score() == (2, 2)


def test_game_over():
    """Black's move leaves nobody with a move and ends the game."""
    game = new_game(mode='pvp')
    game.set_position(row_position(". W B . . . . ."))

    assert game.attempt_move(0, 0)
    assert game.is_terminal(), "Game should be over"
    assert game.get_status() is GameStatus.TERMINAL
    assert game.get_winner() == Player.BLACK
    assert game.get_score() == (3, 0)
    assert not game.attempt_move(0, 3), "No moves after the end"

    game.initialize()
    assert not game.is_terminal()
    assert game.get_score() == (2, 2)


def test_full_game_between_tiers():
    game = new_game(mode='pvp', difficulty='easy', rng=random.Random(1))
    moves = 0
    while not game.is_terminal():
        player = game.get_current_player()
        game.set_difficulty(Difficulty.EASY if player == Player.BLACK else Difficulty.HARD)
        move = game.advisor.select_move(player)
        assert move is not None
        assert game.attempt_move(*move)
        moves += 1

        black, white = game.get_score()
        assert black + white + game.board.count_empty() == 64

    assert moves <= 60
    assert game.get_status() is GameStatus.TERMINAL


def test_settings():
    game = ReversiGame.from_config(GameConfig(mode='pvp', difficulty='easy',
                                              computer_color='black', cpu_delay=0.1))
    assert game.mode is GameMode.PVP
    assert game.advisor.difficulty is Difficulty.EASY
    assert game.computer_color == Player.BLACK
    assert game.cpu_delay == 0.1

    game.set_mode('pvc')
    game.set_difficulty('hard')
    game.set_computer_color('white')
    assert game.mode is GameMode.PVC
    assert game.advisor.difficulty is Difficulty.HARD
    assert game.computer_color == Player.WHITE

    with pytest.raises(ValueError):
        game.set_mode('online')
    with pytest.raises(ValueError):
        game.set_difficulty('expert')
    with pytest.raises(ValueError):
        game.set_computer_color('red')


if __name__ == "__main__":
    pytest.main([__file__])
