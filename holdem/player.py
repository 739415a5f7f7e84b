"""Player state and actions for hold'em."""

from dataclasses import dataclass, field
from enum import Enum, auto

from holdem.cards import Card
from holdem.errors import InsufficientChips


class ActionType(Enum):
    """Types of actions a player can take."""

    FOLD = auto()
    CHECK = auto()
    CALL = auto()
    BET = auto()
    RAISE = auto()
    ALL_IN = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

    @classmethod
    def from_name(cls, name: str) -> "ActionType":
        """Parse 'fold', 'all-in', 'ALL_IN', 'allin', ..."""
        key = name.strip().upper().replace("-", "_").replace(" ", "_")
        if key == "ALLIN":
            key = "ALL_IN"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown action: {name!r}") from None


@dataclass
class Player:
    """A player at the table.

    Identity and chips persist across hands; everything else is per hand
    (``total_committed``) or per street (``current_bet``, ``acted``).
    """

    name: str
    chips: int
    hole_cards: list[Card] = field(default_factory=list)
    current_bet: int = 0  # Amount committed in the current street
    total_committed: int = 0  # Total chips put in the pot this hand
    folded: bool = False
    all_in: bool = False
    acted: bool = False

    def receive_cards(self, cards: list[Card]) -> None:
        self.hole_cards.extend(cards)

    def bet(self, amount: int) -> int:
        """Move ``amount`` chips from the stack into this street's bet."""
        if amount < 0:
            raise ValueError(f"Bet amount must be non-negative, got {amount}")
        if amount > self.chips:
            raise InsufficientChips(
                f"{self.name} cannot bet {amount} with {self.chips} chips"
            )
        self.chips -= amount
        self.current_bet += amount
        self.total_committed += amount
        if self.chips == 0:
            self.all_in = True
        self.acted = True
        return amount

    def collect_pot(self, amount: int) -> None:
        """Receive winnings."""
        self.chips += amount

    def reset_for_new_hand(self) -> None:
        """Reset player state for a new hand."""
        self.hole_cards = []
        self.current_bet = 0
        self.total_committed = 0
        self.folded = False
        self.all_in = False
        self.acted = False

    def reset_for_street(self) -> None:
        """Reset player state for a new betting round."""
        self.current_bet = 0
        self.acted = False

    def can_act(self) -> bool:
        """Check if player can take an action."""
        return not self.folded and not self.all_in

    def is_in_hand(self) -> bool:
        """Check if player is still contesting the pot (active or all-in)."""
        return not self.folded

    def __str__(self) -> str:
        cards_str = ""
        if self.hole_cards:
            cards_str = " [" + " ".join(str(c) for c in self.hole_cards) + "]"
        flags = [name for name, on in (("folded", self.folded), ("all-in", self.all_in)) if on]
        flags_str = f" ({', '.join(flags)})" if flags else ""
        return f"{self.name}: {self.chips} chips{cards_str}{flags_str}"
