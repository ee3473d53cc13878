"""
Arena for running matches between computer difficulty tiers with ELO rating.
"""
import os
import json
import logging
import random
import time
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, List, Dict, Optional

from tqdm import tqdm

from ..advisor import MoveAdvisor, Difficulty
from ..game import Board
from ..types import Move, Player

logger = logging.getLogger(__name__)


@dataclass
class Rating:
    """A tier's current rating and how many games it is based on."""
    rating: float
    games_played: int = 0


class ELORatingSystem:
    """
    ELO ratings for the tiers taking part in the arena.

    Every game moves both players by the same amount in opposite
    directions, so the total rating in the pool stays constant.
    """

    def __init__(self, k: float = 32, initial_rating: float = 1500.0):
        """
        Args:
            k: Largest rating change a single game can cause
            initial_rating: Rating given to a tier the first time it is seen
        """
        self.k = k
        self.initial_rating = initial_rating
        self.players: Dict[str, Rating] = {}
        self.history: List[Dict] = []

    @property
    def ratings(self) -> Dict[str, float]:
        return {player_id: entry.rating for player_id, entry in self.players.items()}

    @property
    def games_played(self) -> Dict[str, int]:
        return {player_id: entry.games_played for player_id, entry in self.players.items()}

    def add_player(self, player_id: str, rating: Optional[float] = None) -> Rating:
        start = self.initial_rating if rating is None else rating
        return self.players.setdefault(player_id, Rating(start))

    def get_rating(self, player_id: str) -> float:
        entry = self.players.get(player_id)
        return entry.rating if entry is not None else self.initial_rating

    @staticmethod
    def expected_score(rating_a: float, rating_b: float) -> float:
        """Expected score of a player rated rating_a against one rated rating_b."""
        return 1.0 / (1.0 + 10.0 ** ((rating_b - rating_a) / 400.0))

    def update_ratings(self, player_a: str, player_b: str, score_a: float) -> Dict:
        """
        Record one game between two tiers.

        Args:
            player_a: ID of player A
            player_b: ID of player B
            score_a: Score for player A (1.0 for win, 0.5 for draw, 0.0 for loss)

        Returns:
            The recorded game, with ratings before and after
        """
        a = self.add_player(player_a)
        b = self.add_player(player_b)
        before_a, before_b = a.rating, b.rating

        delta = self.k * (score_a - self.expected_score(before_a, before_b))
        a.rating += delta
        b.rating -= delta
        a.games_played += 1
        b.games_played += 1

        record = {
            'timestamp': time.time(),
            'player_a': player_a,
            'player_b': player_b,
            'score_a': score_a,
            'rating_a_before': before_a,
            'rating_b_before': before_b,
            'rating_a_after': a.rating,
            'rating_b_after': b.rating,
        }
        self.history.append(record)
        return record

    def get_leaderboard(self) -> List[Dict]:
        """Tiers from strongest to weakest."""
        ranked = sorted(self.players.items(), key=lambda item: item[1].rating, reverse=True)
        return [dict(player_id=player_id, **asdict(entry)) for player_id, entry in ranked]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'k': self.k,
            'initial_rating': self.initial_rating,
            'players': {player_id: asdict(entry) for player_id, entry in self.players.items()},
            'history': self.history,
            'last_updated': datetime.now().isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ELORatingSystem':
        elo = cls(k=data['k'], initial_rating=data['initial_rating'])
        elo.players = {player_id: Rating(float(entry['rating']), int(entry['games_played']))
                       for player_id, entry in data.get('players', {}).items()}
        elo.history = data.get('history', [])
        return elo

    def save_ratings(self, filepath: str):
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_ratings(cls, filepath: str) -> 'ELORatingSystem':
        with open(filepath, 'r') as f:
            return cls.from_dict(json.load(f))


class TierPlayer:
    """A computer player at a fixed difficulty."""

    def __init__(self, player_id: str, difficulty, seed: Optional[int] = None):
        self.player_id = player_id
        self.difficulty = Difficulty.parse(difficulty)
        self.rng = random.Random(seed)

    def get_move(self, board: Board, color: Player) -> Optional[Move]:
        return MoveAdvisor(board, self.difficulty, rng=self.rng).select_move(color)


class Arena:
    """Arena for running matches between tiers."""

    def __init__(self, elo_system: Optional[ELORatingSystem] = None):
        self.elo = elo_system if elo_system is not None else ELORatingSystem()
        self.players: Dict[str, TierPlayer] = {}

    def add_player(self, player: TierPlayer):
        self.players[player.player_id] = player
        self.elo.add_player(player.player_id)

    def play_game(self, black_id: str, white_id: str) -> float:
        """
        Play a single game.

        Args:
            black_id: ID of the player taking Black (moves first)
            white_id: ID of the player taking White

        Returns:
            1.0 if Black wins, 0.5 for a draw, 0.0 if White wins
        """
        if black_id not in self.players or white_id not in self.players:
            raise ValueError(f"One or both players not found: {black_id}, {white_id}")

        sides = {Player.BLACK: self.players[black_id], Player.WHITE: self.players[white_id]}
        board = Board()
        board.initialize()

        while not board.game_over:
            color = board.current_player
            move = sides[color].get_move(board, color)
            if move is not None:
                board.place(move[0], move[1], color)
            board.advance_turn()

        black, white = board.get_score()
        logger.debug("%s (Black) vs %s (White): %d-%d", black_id, white_id, black, white)

        if black > white:
            return 1.0
        if white > black:
            return 0.0
        return 0.5

    def run_tournament(self, games: int = 20, show_progress: bool = True) -> Dict:
        """
        Play every pairing of players the given number of times,
        alternating who takes Black.

        Returns:
            Dictionary with per-pairing results and the final leaderboard
        """
        player_ids = list(self.players.keys())
        if len(player_ids) < 2:
            raise ValueError("Need at least 2 players for a tournament")

        pairings = [(player_ids[i], player_ids[j])
                    for i in range(len(player_ids))
                    for j in range(i + 1, len(player_ids))]

        results = {
            'games_played': 0,
            'matchups': {},
            'start_time': time.time(),
        }
        for p1, p2 in pairings:
            results['matchups'][f"{p1}_vs_{p2}"] = {
                'player1': p1,
                'player2': p2,
                'games_played': 0,
                'wins1': 0,
                'wins2': 0,
                'draws': 0
            }

        with tqdm(total=games * len(pairings), desc="Arena", disable=not show_progress) as pbar:
            for game_num in range(games):
                for p1, p2 in pairings:
                    black, white = (p1, p2) if game_num % 2 == 0 else (p2, p1)
                    result = self.play_game(black, white)
                    self.elo.update_ratings(black, white, result)

                    score1 = result if black == p1 else 1.0 - result
                    matchup = results['matchups'][f"{p1}_vs_{p2}"]
                    matchup['games_played'] += 1
                    if score1 == 1.0:
                        matchup['wins1'] += 1
                    elif score1 == 0.0:
                        matchup['wins2'] += 1
                    else:
                        matchup['draws'] += 1

                    results['games_played'] += 1
                    pbar.update(1)

        results['end_time'] = time.time()
        results['duration'] = results['end_time'] - results['start_time']
        results['leaderboard'] = self.elo.get_leaderboard()
        return results

    def print_leaderboard(self):
        leaderboard = self.elo.get_leaderboard()
        print("\nCurrent Leaderboard:")
        print("Rank  Player ID               Rating  Games Played")
        print("----  ---------------------  -------  ------------")

        for i, player in enumerate(leaderboard, 1):
            print(f"{i:4d}  {player['player_id']:22s}  {player['rating']:7.1f}  {player['games_played']:12d}")

    def save_results(self, results: Dict, filepath: str):
        """Save tournament results, and the ratings next to them."""
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        elo_file = os.path.splitext(filepath)[0] + '_elo.json'
        self.elo.save_ratings(elo_file)

        with open(filepath, 'w') as f:
            json.dump(results, f, indent=2)
