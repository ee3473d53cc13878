"""
Configuration parameters for Reversi.
"""
import os
from dataclasses import dataclass, asdict, field
from typing import Dict, Any
import json

GAME_MODES = ('pvp', 'pvc')


@dataclass
class GameConfig:
    """Configuration for a game session."""
    mode: str = 'pvc'  # 'pvp' (human vs human) or 'pvc' (human vs computer)
    difficulty: str = 'normal'  # easy, normal or hard
    computer_color: str = 'white'
    cpu_delay: float = 0.5  # Seconds the computer "thinks" before moving


@dataclass
class ArenaConfig:
    """Configuration for tier-vs-tier matches."""
    games: int = 20  # Games per pairing
    seed: int = 42
    output_dir: str = "arena_results"
    results_file: str = "arena_results.json"
    elo_file: str = "elo_ratings.json"
    elo_k: float = 32.0
    initial_rating: float = 1500.0


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    log_dir: str = "logs"
    log_level: str = "INFO"
    log_to_file: bool = False
    verbose: bool = False


@dataclass
class Config:
    """Main configuration class."""
    project_name: str = "Reversi"
    seed: int = 42
    game: GameConfig = field(default_factory=GameConfig)
    arena: ArenaConfig = field(default_factory=ArenaConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def save(self, filepath: str):
        """Save config to JSON file."""
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        config = cls(
            project_name=config_dict.get('project_name', 'Reversi'),
            seed=config_dict.get('seed', 42),
            game=GameConfig(**config_dict.get('game', {})),
            arena=ArenaConfig(**config_dict.get('arena', {})),
            logging=LoggingConfig(**config_dict.get('logging', {}))
        )
        config.validate()
        return config

    @classmethod
    def load(cls, filepath: str) -> 'Config':
        """Load config from JSON file."""
        with open(filepath, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)

    def validate(self):
        """Reject settings the game cannot run with."""
        if self.game.mode not in GAME_MODES:
            raise ValueError(f"Unknown game mode {self.game.mode!r}, expected one of {GAME_MODES}")
        if self.game.difficulty.lower() not in ('easy', 'normal', 'hard'):
            raise ValueError(f"Unknown difficulty {self.game.difficulty!r}")
        if self.game.computer_color.lower() not in ('black', 'white'):
            raise ValueError(f"Unknown computer color {self.game.computer_color!r}")
        if self.game.cpu_delay < 0:
            raise ValueError("cpu_delay must not be negative")
        if self.arena.games < 1:
            raise ValueError("arena.games must be at least 1")


def get_default_config() -> Config:
    """Get default configuration."""
    return Config()
