"""Configuration settings for the hold'em engine."""

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

import yaml


@dataclass
class GameConfig:
    """Table configuration."""

    player_names: tuple[str, ...] = ("Alice", "Bob")
    small_blind: int = 10
    big_blind: int = 20
    initial_chips: int = 10_000
    min_chips_to_continue: int = 10
    default_bet: int = 50  # Starting bet/raise size before the player picks one
    max_bet_default: int = 500
    max_bet_multiplier: int = 100  # Ceiling on any bet is max_bet_default * this
    # False keeps the modular blind formula (SB at dealer+1, BB at dealer+2);
    # True uses the standard heads-up rule (dealer posts SB and acts first
    # preflop, the other seat acts first after the flop).
    heads_up_convention: bool = False
    seed: int | None = None

    def __post_init__(self) -> None:
        self.player_names = tuple(self.player_names)
        if len(self.player_names) != 2:
            raise ValueError(f"Heads-up play needs exactly 2 players, got {len(self.player_names)}")
        if self.small_blind <= 0 or self.big_blind <= 0:
            raise ValueError("Blinds must be positive")
        if self.small_blind > self.big_blind:
            raise ValueError("Small blind cannot exceed big blind")
        if self.initial_chips <= 0:
            raise ValueError("Initial chips must be positive")
        if self.min_chips_to_continue < 0:
            raise ValueError("Minimum chips to continue cannot be negative")

    @property
    def bet_ceiling(self) -> int:
        return self.max_bet_default * self.max_bet_multiplier


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"
    log_file: str | None = None

    def __post_init__(self) -> None:
        self.level = str(self.level).upper()
        if not isinstance(logging.getLevelName(self.level), int):
            raise ValueError(f"Unknown logging level: {self.level!r}")


@dataclass
class Config:
    """Complete configuration."""

    game: GameConfig = field(default_factory=GameConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path) -> Config:
    """Load configuration from YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    config = Config()

    if "game" in data:
        config.game = GameConfig(**data["game"])
    if "logging" in data:
        config.logging = LoggingConfig(**data["logging"])

    return config


def save_config(config: Config, path: str | Path) -> None:
    """Save configuration to YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "game": asdict(config.game),
        "logging": asdict(config.logging),
    }
    data["game"]["player_names"] = list(config.game.player_names)

    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# Default configuration
DEFAULT_CONFIG = Config()
