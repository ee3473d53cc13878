"""
Script for running matches between the computer difficulty tiers.
"""
import os
import argparse
import logging
from datetime import datetime

from reversi.advisor import Difficulty
from reversi.arena import Arena, TierPlayer, ELORatingSystem
from reversi.config import Config, get_default_config
from reversi.logger import setup_logger

logger = logging.getLogger("reversi.run_arena")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Run matches between Reversi difficulty tiers')

    parser.add_argument('--config', type=str, default='configs/default_config.json',
                        help='Path to config file')
    parser.add_argument('--games', type=int, default=None,
                        help='Games per pairing (overrides config)')
    parser.add_argument('--tiers', nargs='+', default=[d.value for d in Difficulty],
                        choices=[d.value for d in Difficulty],
                        help='Tiers taking part')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for the easy tier (overrides config)')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory to save results (overrides config)')
    parser.add_argument('--no-progress', action='store_true',
                        help='Hide the progress bar')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    if os.path.exists(args.config):
        config = Config.load(args.config)
    else:
        config = get_default_config()

    if args.games is not None:
        config.arena.games = args.games
    if args.seed is not None:
        config.arena.seed = args.seed
    if args.output_dir is not None:
        config.arena.output_dir = args.output_dir
    config.validate()

    run_logger = setup_logger(config)
    os.makedirs(config.arena.output_dir, exist_ok=True)

    elo_file = os.path.join(config.arena.output_dir, config.arena.elo_file)
    if os.path.exists(elo_file):
        logger.info("Loading ELO ratings from %s", elo_file)
        elo = ELORatingSystem.load_ratings(elo_file)
    else:
        elo = ELORatingSystem(k=config.arena.elo_k, initial_rating=config.arena.initial_rating)

    arena = Arena(elo_system=elo)
    for offset, tier in enumerate(dict.fromkeys(args.tiers)):
        arena.add_player(TierPlayer(tier, tier, seed=config.arena.seed + offset))

    logger.info("Starting arena: %s, %d games per pairing",
                ', '.join(arena.players), config.arena.games)
    results = arena.run_tournament(games=config.arena.games, show_progress=not args.no_progress)

    for step, matchup in enumerate(results['matchups'].values(), 1):
        run_logger.log_metrics(matchup, step, prefix='arena/')

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    base, ext = os.path.splitext(config.arena.results_file)
    results_file = os.path.join(config.arena.output_dir, f"{base}_{timestamp}{ext}")
    arena.save_results(results, results_file)
    elo.save_ratings(elo_file)

    logger.info("Arena completed! Results saved to %s", results_file)
    arena.print_leaderboard()
    run_logger.close()
    return results


if __name__ == '__main__':
    main()
