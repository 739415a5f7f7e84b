"""Read-only table snapshots handed to presentation layers."""

import copy
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from holdem.cards import Card

if TYPE_CHECKING:
    from holdem.game import GameEngine, HandResult


class GameStage(Enum):
    """Where the engine is within a hand."""

    WAITING_TO_START = "Waiting"
    PREFLOP = "Preflop"
    FLOP = "Flop"
    TURN = "Turn"
    RIVER = "River"
    SHOWDOWN = "Showdown"
    HAND_COMPLETE = "Complete"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PlayerState:
    """State of a single player visible to all."""

    seat: int
    name: str
    chips: int
    current_bet: int
    folded: bool
    all_in: bool
    is_dealer: bool
    hole_cards: tuple[Card, ...] | None  # None when hidden from the observer


@dataclass(frozen=True)
class TableState:
    """Complete state of the table as seen by one observer.

    Built by copying engine fields, so holding on to it never exposes or
    mutates engine internals.
    """

    stage: GameStage
    pot: int
    community_cards: tuple[Card, ...]
    dealer_position: int
    current_player: int | None
    to_call: int
    players: tuple[PlayerState, ...]

    # Action context for the seat to act
    can_check: bool = False
    can_call: bool = False
    can_bet: bool = False
    can_raise: bool = False
    can_fold: bool = False
    call_amount: int = 0
    pot_odds: float = 0.0
    bet_amount: int = 0
    min_bet: int = 0
    max_bet: int = 0

    last_result: "HandResult | None" = None

    @property
    def hand_over(self) -> bool:
        return self.stage in (GameStage.SHOWDOWN, GameStage.HAND_COMPLETE)

    def get_player_state(self, seat: int) -> PlayerState | None:
        """Get a specific player's state."""
        for p in self.players:
            if p.seat == seat:
                return p
        return None


def create_table_state(engine: "GameEngine", observer: int | None = None) -> TableState:
    """Create a TableState from the engine.

    Hole cards are visible for the observer's own seat, and for every player
    still in the hand once the hand has reached showdown. ``observer=None``
    is a spectator view.
    """
    reveal_all = engine.stage in (GameStage.SHOWDOWN, GameStage.HAND_COMPLETE) and (
        engine.last_result is not None and not engine.last_result.won_by_fold
    )

    player_states = []
    for seat, player in enumerate(engine.players):
        visible = seat == observer or (reveal_all and not player.folded)
        player_states.append(
            PlayerState(
                seat=seat,
                name=player.name,
                chips=player.chips,
                current_bet=player.current_bet,
                folded=player.folded,
                all_in=player.all_in,
                is_dealer=seat == engine.dealer_position,
                hole_cards=tuple(player.hole_cards) if visible else None,
            )
        )

    acting = engine.pending_action
    return TableState(
        stage=engine.stage,
        pot=engine.pot,
        community_cards=tuple(engine.community_cards),
        dealer_position=engine.dealer_position,
        current_player=engine.current_player if acting else None,
        to_call=engine.to_call,
        players=tuple(player_states),
        can_check=acting and engine.can_check(),
        can_call=acting and engine.can_call(),
        can_bet=acting and engine.can_bet(),
        can_raise=acting and engine.can_raise(),
        can_fold=acting and engine.can_fold(),
        call_amount=engine.call_amount() if acting else 0,
        pot_odds=engine.pot_odds if acting else 0.0,
        bet_amount=engine.bet_amount,
        min_bet=engine.min_bet,
        max_bet=engine.max_bet,
        last_result=copy.deepcopy(engine.last_result),
    )
