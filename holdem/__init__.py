"""Rules engine for heads-up Texas Hold'em."""

from holdem.cards import Card, Deck, Rank, Suit
from holdem.errors import PokerError
from holdem.game import GameEngine, HandResult
from holdem.hand_evaluator import EvaluatedHand, HandEvaluator, HandRank
from holdem.player import ActionType, Player
from holdem.table import GameStage, TableState

__all__ = [
    "ActionType",
    "Card",
    "Deck",
    "EvaluatedHand",
    "GameEngine",
    "GameStage",
    "HandEvaluator",
    "HandRank",
    "HandResult",
    "Player",
    "PokerError",
    "Rank",
    "Suit",
    "TableState",
]
