"""Hand evaluation for Texas Hold'em."""

from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Sequence

from holdem.cards import Card, Rank, Suit


class HandRank(IntEnum):
    """Poker hand rankings from lowest to highest."""

    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


ROYAL_RANKS = [14, 13, 12, 11, 10]


@dataclass(frozen=True, slots=True, order=True)
class EvaluatedHand:
    """Result of evaluating a poker hand.

    Compared lexicographically: rank, then ``primary_values``, then
    ``kickers``. Equal values are an exact split.
    """

    rank: HandRank
    primary_values: list[int] = field(default_factory=list)  # Values that define the category, high to low
    kickers: list[int] = field(default_factory=list)  # Tie-breakers outside the category, high to low

    def __hash__(self) -> int:
        return hash((self.rank, tuple(self.primary_values), tuple(self.kickers)))

    def describe(self) -> str:
        """Human-readable name such as 'Full House, 5s over 10s'."""
        names = [_rank_name(v) for v in self.primary_values]
        if self.rank == HandRank.HIGH_CARD:
            if not self.kickers:
                return "Incomplete Hand"
            return f"High Card, {_rank_name(self.kickers[0])}"
        if self.rank in (HandRank.PAIR, HandRank.THREE_OF_A_KIND, HandRank.FOUR_OF_A_KIND):
            return f"{self.rank}, {names[0]}s"
        if self.rank == HandRank.TWO_PAIR:
            return f"{self.rank}, {names[0]}s and {names[1]}s"
        if self.rank == HandRank.FULL_HOUSE:
            return f"{self.rank}, {names[0]}s over {names[1]}s"
        if self.rank == HandRank.ROYAL_FLUSH:
            return str(self.rank)
        return f"{self.rank}, {names[0]} high"

    def __str__(self) -> str:
        return self.describe()


def _rank_name(value: int) -> str:
    # The wheel reports the ace as 1.
    return str(Rank(14 if value == 1 else value))


class HandEvaluator:
    """Evaluate poker hands."""

    @staticmethod
    def evaluate(hole_cards: Sequence[Card], community: Sequence[Card]) -> EvaluatedHand:
        """Evaluate a player's best five-card hand from hole + community cards.

        With fewer than five cards in total the result is a ``HIGH_CARD`` with
        empty values, meaning the hand cannot be evaluated yet.
        """
        cards = list(hole_cards) + list(community)
        if len(cards) < 5:
            return EvaluatedHand(HandRank.HIGH_CARD)

        ranks = sorted((int(c.rank) for c in cards), reverse=True)
        rank_counts = Counter(ranks)

        # Four of a kind
        quads = _ranks_with_count(rank_counts, 4)
        if quads:
            quad_rank = quads[0]
            kicker = [r for r in ranks if r != quad_rank][:1]
            return EvaluatedHand(HandRank.FOUR_OF_A_KIND, [quad_rank], kicker)

        # Full house: highest set, then highest remaining rank that can pair it
        trips = _ranks_with_count(rank_counts, 3)
        if trips:
            set_rank = trips[0]
            pairs = [r for r in _ranks_with_count(rank_counts, 2) if r != set_rank]
            if pairs:
                return EvaluatedHand(HandRank.FULL_HOUSE, [set_rank, pairs[0]])

        # Flush, straight flush, royal flush
        flush = HandEvaluator._best_flush(cards)
        if flush is not None:
            return flush

        # Straight
        straight = HandEvaluator._find_straight(ranks)
        if straight is not None:
            return EvaluatedHand(HandRank.STRAIGHT, straight)

        # Three of a kind
        if trips:
            kickers = [r for r in ranks if r != trips[0]][:2]
            return EvaluatedHand(HandRank.THREE_OF_A_KIND, [trips[0]], kickers)

        # Two pair
        pairs = _ranks_with_count(rank_counts, 2)
        if len(pairs) >= 2:
            top_two = pairs[:2]
            kicker = [r for r in ranks if r not in top_two][:1]
            return EvaluatedHand(HandRank.TWO_PAIR, top_two, kicker)

        # One pair
        if pairs:
            kickers = [r for r in ranks if r != pairs[0]][:3]
            return EvaluatedHand(HandRank.PAIR, [pairs[0]], kickers)

        # High card
        return EvaluatedHand(HandRank.HIGH_CARD, [], ranks[:5])

    @staticmethod
    def _best_flush(cards: Sequence[Card]) -> EvaluatedHand | None:
        """Best flush-family hand, or None without five cards of one suit."""
        suit_counts = Counter(c.suit for c in cards)
        best: EvaluatedHand | None = None
        for suit in sorted(Suit):
            if suit_counts[suit] < 5:
                continue
            suited = sorted((int(c.rank) for c in cards if c.suit == suit), reverse=True)
            straight = HandEvaluator._find_straight(suited)
            if straight == ROYAL_RANKS:
                hand = EvaluatedHand(HandRank.ROYAL_FLUSH, straight)
            elif straight is not None:
                hand = EvaluatedHand(HandRank.STRAIGHT_FLUSH, straight)
            else:
                hand = EvaluatedHand(HandRank.FLUSH, suited[:5])
            if best is None or hand > best:
                best = hand
        return best

    @staticmethod
    def _find_straight(ranks: Sequence[int]) -> list[int] | None:
        """Highest run of five consecutive ranks, high to low.

        The ace also plays low, so A-2-3-4-5 comes back as [5, 4, 3, 2, 1].
        """
        unique_ranks = sorted(set(ranks), reverse=True)
        if 14 in unique_ranks:
            unique_ranks.append(1)
        for i in range(len(unique_ranks) - 4):
            window = unique_ranks[i : i + 5]
            if window[0] - window[4] == 4:
                return window
        return None

    @staticmethod
    def compare_hands(hands: list[EvaluatedHand]) -> list[int]:
        """Compare hands and return indices of winners (handles ties)."""
        if not hands:
            return []

        best_hand = max(hands)
        return [i for i, h in enumerate(hands) if h == best_hand]


def _ranks_with_count(rank_counts: Counter, minimum: int) -> list[int]:
    """Ranks appearing at least ``minimum`` times, highest first."""
    return sorted((r for r, c in rank_counts.items() if c >= minimum), reverse=True)
