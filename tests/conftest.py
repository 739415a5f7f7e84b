"""Shared pytest fixtures for engine tests."""

import pytest

from config.settings import GameConfig
from holdem.game import GameEngine


@pytest.fixture
def game_config():
    """Default table: blinds 10/20, 10,000 chips each, reproducible shuffles."""
    return GameConfig(seed=42)


@pytest.fixture
def engine(game_config):
    """Engine waiting for its first hand."""
    return GameEngine(game_config)


@pytest.fixture
def started_engine(engine):
    """Engine with the first hand dealt and preflop action open."""
    engine.start_new_hand()
    return engine


@pytest.fixture
def conventional_engine():
    """Engine using the standard heads-up blind and action order."""
    return GameEngine(GameConfig(seed=42, heads_up_convention=True))
