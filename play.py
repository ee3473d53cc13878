"""
Play Reversi in the terminal, against a friend or the computer.
"""
import os
import asyncio
import argparse
import logging
from typing import Optional, Tuple

from reversi.config import Config, get_default_config
from reversi.game import ReversiGame
from reversi.logger import setup_logger

logger = logging.getLogger("reversi.play")


def parse_move(text: str) -> Optional[Tuple[int, int]]:
    """
    Read a move typed as 'row col' (0-based) or as a square like 'd3'.

    Returns:
        (row, col), or None if the text is not a move
    """
    text = text.strip().lower()
    parts = text.replace(',', ' ').split()
    if len(parts) == 2 and all(p.isdigit() for p in parts):
        return int(parts[0]), int(parts[1])
    if len(text) == 2 and text[0] in 'abcdefgh' and text[1] in '12345678':
        return int(text[1]) - 1, ord(text[0]) - ord('a')
    return None


def render(game: ReversiGame) -> str:
    hints = set(game.legal_moves()) if not game.is_terminal() else set()
    lines = ["  " + " ".join("abcdefgh")]
    for row in range(8):
        cells = []
        for col in range(8):
            if (row, col) in hints and not game.is_computer_turn():
                cells.append('*')
            else:
                cells.append(game.board.SYMBOLS[game.get_cell(row, col)])
        lines.append(f"{row + 1} " + " ".join(cells))

    black, white = game.get_score()
    lines.append(f"Black: {black} | White: {white}")
    if game.is_terminal():
        winner = game.get_winner()
        lines.append("Draw!" if winner is None else f"{winner.label} wins!")
    else:
        lines.append(f"Turn: {game.get_current_player().label}")
    return "\n".join(lines)


async def play(game: ReversiGame, read_line=input, write=print):
    """Drive one game until it ends or the player quits."""
    game.initialize()
    while not game.is_terminal():
        write(render(game))

        if game.is_computer_turn():
            write("Computer is thinking...")
            await game.schedule_computer_turn()
            continue

        text = read_line("Your move (e.g. d3 or '2 3', q to quit): ")
        if text.strip().lower() in ('q', 'quit', 'exit'):
            return None

        move = parse_move(text)
        if move is None or not game.attempt_move(*move):
            logger.debug("Rejected input %r", text)
            write("That move is not allowed.")

    write(render(game))
    return game.get_winner()


def main(argv=None):
    parser = argparse.ArgumentParser(description='Play Reversi in the terminal')
    parser.add_argument('--config', type=str, default='configs/default_config.json',
                        help='Path to config file')
    parser.add_argument('--mode', choices=['pvp', 'pvc'], default=None,
                        help='pvp: two humans, pvc: human vs computer')
    parser.add_argument('--difficulty', choices=['easy', 'normal', 'hard'], default=None,
                        help='Computer difficulty')
    parser.add_argument('--computer-color', choices=['black', 'white'], default=None,
                        help='Side the computer plays')
    parser.add_argument('--delay', type=float, default=None,
                        help='Seconds the computer waits before moving')
    args = parser.parse_args(argv)

    config = Config.load(args.config) if os.path.exists(args.config) else get_default_config()
    if args.mode is not None:
        config.game.mode = args.mode
    if args.difficulty is not None:
        config.game.difficulty = args.difficulty
    if args.computer_color is not None:
        config.game.computer_color = args.computer_color
    if args.delay is not None:
        config.game.cpu_delay = args.delay
    config.validate()

    run_logger = setup_logger(config)
    game = ReversiGame.from_config(config.game)
    try:
        asyncio.run(play(game))
    except (KeyboardInterrupt, EOFError):
        print("\nBye!")
    finally:
        run_logger.close()


if __name__ == '__main__':
    main()
