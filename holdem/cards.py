"""Card, Deck, Suit, and Rank definitions for hold'em."""

from dataclasses import dataclass
from enum import IntEnum
from random import Random
from typing import Iterator

from holdem.errors import CardParseError, DealFailure


class Suit(IntEnum):
    """Card suits, in canonical deck order."""

    SPADES = 0
    HEARTS = 1
    DIAMONDS = 2
    CLUBS = 3

    def __str__(self) -> str:
        return SUIT_SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Suit":
        """Parse a suit glyph (♠ ♥ ♦ ♣)."""
        for suit, glyph in SUIT_SYMBOLS.items():
            if glyph == symbol:
                return suit
        raise CardParseError(f"Invalid suit: {symbol!r}")

    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)


SUIT_SYMBOLS = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
}


class Rank(IntEnum):
    """Card ranks (2-14, where 14 is Ace)."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {11: "J", 12: "Q", 13: "K", 14: "A"}[self.value]

    @classmethod
    def from_token(cls, token: str) -> "Rank":
        """Parse a rank token: ``2``-``10``, ``J``, ``Q``, ``K`` or ``A``."""
        faces = {"J": cls.JACK, "Q": cls.QUEEN, "K": cls.KING, "A": cls.ACE}
        if token in faces:
            return faces[token]
        # Only canonical decimal tokens; rejects "02", "+5", "1_0" and friends.
        if token in {str(value) for value in range(2, 11)}:
            return cls(int(token))
        raise CardParseError(f"Invalid rank: {token!r}")


@dataclass(frozen=True, slots=True, order=True)
class Card:
    """A single playing card. Orders by rank, then suit."""

    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        # Accept plain ints so Card(14, Suit.SPADES) works.
        object.__setattr__(self, "rank", Rank(self.rank))
        object.__setattr__(self, "suit", Suit(self.suit))

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    def is_red(self) -> bool:
        return self.suit.is_red()

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from text like 'A♠', '10♥', '2♣'.

        The last character is the suit glyph and everything before it the rank
        token. Anything else raises CardParseError.
        """
        if not isinstance(s, str) or len(s) < 2:
            raise CardParseError(f"Invalid card string: {s!r}")
        return cls(rank=Rank.from_token(s[:-1]), suit=Suit.from_symbol(s[-1]))


def parse_cards(text: str | list[str]) -> list[Card]:
    """Parse whitespace separated card tokens (or a list of tokens)."""
    tokens = text.split() if isinstance(text, str) else text
    return [Card.from_string(token) for token in tokens]


def format_cards(cards: list[Card]) -> str:
    return " ".join(str(card) for card in cards)


class Deck:
    """A standard 52-card deck.

    Cards are dealt from the top (front) and burned from the bottom (back),
    so the two never draw the same card.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = Random(seed)
        self._cards: list[Card] = []
        self.burned: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset deck to full 52 cards in canonical order."""
        self._cards = [Card(rank, suit) for suit in Suit for rank in Rank]
        self.burned = []

    def shuffle(self) -> None:
        """Shuffle the remaining cards."""
        self._rng.shuffle(self._cards)

    def deal(self, n: int = 1) -> list[Card]:
        """Deal n cards from the top of the deck."""
        if n < 0:
            raise DealFailure(f"Cannot deal a negative number of cards ({n})")
        if n > len(self._cards):
            raise DealFailure(f"Cannot deal {n} cards, only {len(self._cards)} remaining")
        dealt = self._cards[:n]
        del self._cards[:n]
        return dealt

    def deal_one(self) -> Card:
        """Deal a single card."""
        return self.deal(1)[0]

    def burn(self) -> None:
        """Discard the bottom card face down."""
        if not self._cards:
            raise DealFailure("Cannot burn from an empty deck")
        self.burned.append(self._cards.pop())

    def remaining(self) -> int:
        """Number of cards remaining in deck."""
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
