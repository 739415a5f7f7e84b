"""Tests for cards and the deck (holdem/cards.py)."""

import pytest

from holdem.cards import Card, Deck, Rank, Suit, format_cards, parse_cards
from holdem.errors import CardParseError, DealFailure


class TestCardText:
    """Test card text encoding."""

    @pytest.mark.parametrize(
        "card,text",
        [
            (Card(Rank.ACE, Suit.SPADES), "A♠"),
            (Card(Rank.TEN, Suit.HEARTS), "10♥"),
            (Card(Rank.TWO, Suit.CLUBS), "2♣"),
            (Card(Rank.QUEEN, Suit.DIAMONDS), "Q♦"),
        ],
    )
    def test_known_cards(self, card, text):
        """Test string representation and parsing of known cards."""
        assert str(card) == text
        assert Card.from_string(text) == card

    def test_every_card_parses_back(self):
        """Every card in the deck reads back from its own text."""
        for card in Deck():
            assert Card.from_string(str(card)) == card

    @pytest.mark.parametrize("text", ["", "A", "As", "1♠", "11♠", "T♠", "a♠", "02♠", "invalid", "A♠♠"])
    def test_rejects_malformed_text(self, text):
        """Anything other than rank token + suit glyph is a parse error."""
        with pytest.raises(CardParseError):
            Card.from_string(text)

    def test_parse_error_is_value_error(self):
        """Callers catching ValueError also see card parse failures."""
        with pytest.raises(ValueError):
            Card.from_string("Z♠")

    def test_parse_and_format_cards(self):
        """Test whitespace separated card lists."""
        cards = parse_cards("A♠ K♥  10♦")
        assert cards == [
            Card(Rank.ACE, Suit.SPADES),
            Card(Rank.KING, Suit.HEARTS),
            Card(Rank.TEN, Suit.DIAMONDS),
        ]
        assert format_cards(cards) == "A♠ K♥ 10♦"

    def test_int_fields_are_coerced(self):
        """Plain ints become Rank and Suit members."""
        card = Card(14, 0)
        assert card.rank is Rank.ACE
        assert card.suit is Suit.SPADES

    def test_is_red(self):
        """Hearts and diamonds are red."""
        assert Card(Rank.FIVE, Suit.HEARTS).is_red()
        assert Card(Rank.FIVE, Suit.DIAMONDS).is_red()
        assert not Card(Rank.FIVE, Suit.SPADES).is_red()
        assert not Card(Rank.FIVE, Suit.CLUBS).is_red()

    def test_cards_are_hashable_values(self):
        """Equal cards are interchangeable in sets."""
        assert len({Card(Rank.ACE, Suit.SPADES), Card.from_string("A♠")}) == 1


class TestDeck:
    """Test deck construction, shuffling and dealing."""

    def test_new_deck_has_52_unique_cards(self):
        """A fresh deck holds every card exactly once."""
        deck = Deck()
        cards = list(deck)
        assert len(deck) == 52
        assert deck.remaining() == 52
        assert len(set(cards)) == 52

    def test_canonical_order(self):
        """Fresh decks run suit by suit, deuce to ace."""
        cards = list(Deck())
        assert cards[0] == Card(Rank.TWO, Suit.SPADES)
        assert cards[12] == Card(Rank.ACE, Suit.SPADES)
        assert cards[13] == Card(Rank.TWO, Suit.HEARTS)
        assert cards[-1] == Card(Rank.ACE, Suit.CLUBS)

    def test_shuffle_keeps_all_cards(self):
        """Shuffling permutes without adding or losing cards."""
        deck = Deck(seed=7)
        before = set(deck)
        deck.shuffle()
        assert set(deck) == before
        assert len(deck) == 52
        assert list(deck) != list(Deck())

    def test_same_seed_same_order(self):
        """Seeded decks shuffle reproducibly."""
        a, b = Deck(seed=123), Deck(seed=123)
        a.shuffle()
        b.shuffle()
        assert list(a) == list(b)

    def test_deal_from_top(self):
        """Dealt cards come off the front in order."""
        deck = Deck()
        top = list(deck)[:5]
        assert deck.deal(5) == top
        assert deck.remaining() == 47

    def test_deals_do_not_overlap(self):
        """Cards dealt in separate calls are distinct."""
        deck = Deck(seed=3)
        deck.shuffle()
        dealt = deck.deal(2) + deck.deal(2) + deck.deal(3) + [deck.deal_one()]
        assert len(set(dealt)) == len(dealt)
        assert not set(dealt) & set(deck)

    def test_deal_zero(self):
        """Dealing nothing is allowed."""
        deck = Deck()
        assert deck.deal(0) == []
        assert len(deck) == 52

    def test_over_deal_raises_without_mutating(self):
        """Asking for more cards than remain fails and leaves the deck alone."""
        deck = Deck()
        deck.deal(50)
        remaining = list(deck)
        with pytest.raises(DealFailure):
            deck.deal(3)
        assert list(deck) == remaining

    def test_negative_deal_raises(self):
        """Test negative card counts."""
        with pytest.raises(DealFailure):
            Deck().deal(-1)

    def test_burn_takes_bottom_card(self):
        """Burns come off the back, away from the dealing end."""
        deck = Deck()
        bottom = list(deck)[-1]
        top = list(deck)[0]
        deck.burn()
        assert deck.burned == [bottom]
        assert bottom not in set(deck)
        assert deck.deal_one() == top

    def test_burn_empty_deck_raises(self):
        """Test burning from an exhausted deck."""
        deck = Deck()
        deck.deal(52)
        with pytest.raises(DealFailure):
            deck.burn()

    def test_reset_restores_full_deck(self):
        """Reset brings back dealt and burned cards."""
        deck = Deck(seed=1)
        deck.shuffle()
        deck.deal(10)
        deck.burn()
        deck.reset()
        assert list(deck) == list(Deck())
        assert deck.burned == []
