"""Heads-up Texas Hold'em betting state machine."""

import logging
import math
import threading
from dataclasses import dataclass, field
from random import Random

from config.settings import GameConfig
from holdem.cards import Card, Deck, format_cards
from holdem.errors import (
    HandInProgress,
    IllegalCheck,
    InsufficientPlayers,
    InvalidBetSize,
    NoPendingAction,
    PlayerCannotAct,
    PokerError,
    RaiseTooSmall,
    UseRaiseInstead,
)
from holdem.hand_evaluator import EvaluatedHand, HandEvaluator
from holdem.player import ActionType, Player
from holdem.table import GameStage, TableState, create_table_state

logger = logging.getLogger(__name__)

# Community cards dealt when each street opens
STREET_CARDS = {
    GameStage.FLOP: 3,
    GameStage.TURN: 1,
    GameStage.RIVER: 1,
}
NEXT_STREET = {
    GameStage.PREFLOP: GameStage.FLOP,
    GameStage.FLOP: GameStage.TURN,
    GameStage.TURN: GameStage.RIVER,
}


@dataclass
class HandResult:
    """Result of a completed hand."""

    hand_number: int
    winners: list[int]  # Seats that won a share of the pot
    winnings: dict[int, int]  # Seat -> chips awarded from the pot
    won_by_fold: bool  # True if everyone else folded
    showdown_hands: dict[int, EvaluatedHand] | None = None
    winning_hand: EvaluatedHand | None = None
    refunded: dict[int, int] = field(default_factory=dict)  # Uncalled chips returned


class GameEngine:
    """Rules engine for one heads-up table.

    Callers drive it one operation at a time. Each mutating call holds the
    engine lock until every cascading transition (street advance, run-out,
    showdown) has finished, and either completes or raises a
    :class:`~holdem.errors.PokerError` without touching state.
    """

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config or GameConfig()
        self._lock = threading.RLock()
        self._rng = Random(self.config.seed)

        self.players = [Player(name, self.config.initial_chips) for name in self.config.player_names]
        self.deck = self._new_deck()
        self.community_cards: list[Card] = []
        self.pot = 0
        self.stage = GameStage.WAITING_TO_START
        self.dealer_position = 0
        self.current_player = 0
        self.to_call = 0
        self.pending_action = False

        # Bet sizing helper for the seat to act; legality never depends on it
        self.bet_amount = self.config.default_bet
        self.min_bet = self.config.big_blind
        self.max_bet = self.config.max_bet_default
        self.pot_odds = 0.0

        self.hand_number = 0
        self.last_result: HandResult | None = None
        self._expected_total = sum(p.chips for p in self.players)

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def stage_name(self) -> str:
        return str(self.stage)

    def is_pending_action(self) -> bool:
        return self.pending_action

    def total_chips(self) -> int:
        """Chips in stacks plus the pot; constant for the life of the engine."""
        return sum(p.chips for p in self.players) + self.pot

    def _new_deck(self) -> Deck:
        deck = Deck(seed=self._rng.getrandbits(64))
        deck.shuffle()
        return deck

    # Hand lifecycle --------------------------------------------------

    def start_new_hand(self) -> None:
        """Shuffle, deal hole cards, post blinds and open preflop action."""
        with self._lock:
            if self.pending_action:
                raise HandInProgress(f"Hand #{self.hand_number} is still in progress")
            eligible = [p for p in self.players if p.chips >= self.config.min_chips_to_continue]
            if len(eligible) < 2:
                raise InsufficientPlayers(
                    f"Need 2 players with at least {self.config.min_chips_to_continue} chips, "
                    f"have {len(eligible)}"
                )

            # Draw everything before touching the table so a deal failure
            # leaves the previous state intact.
            deck = self._new_deck()
            deck.burn()
            hole_cards = [deck.deal(2) for _ in self.players]

            for player, cards in zip(self.players, hole_cards):
                player.reset_for_new_hand()
                player.receive_cards(cards)
            self.deck = deck
            self.community_cards = []
            self.pot = 0
            self.last_result = None
            self.hand_number += 1

            sb_seat, bb_seat = self._blind_seats()
            sb_posted = self._post_blind(sb_seat, self.config.small_blind)
            bb_posted = self._post_blind(bb_seat, self.config.big_blind)
            # Forced bets leave the option to act with both players.
            for player in self.players:
                player.acted = False

            self.stage = GameStage.PREFLOP
            self.to_call = max(sb_posted, bb_posted)
            self.current_player = self._first_able_seat(self._preflop_first_seat())
            self.pending_action = True

            logger.info(
                "Hand #%d: dealer=%s, blinds %s (%d) / %s (%d)",
                self.hand_number,
                self.players[self.dealer_position].name,
                self.players[sb_seat].name,
                sb_posted,
                self.players[bb_seat].name,
                bb_posted,
            )

            # Blinds can put both players all-in before anyone acts.
            if not any(p.can_act() for p in self.players):
                self._check_street_complete()
                return
            self._refresh_action_context()

    def _blind_seats(self) -> tuple[int, int]:
        """Small blind and big blind seats."""
        n = self.num_players
        if self.config.heads_up_convention and n == 2:
            # Heads-up: dealer is small blind
            return self.dealer_position, (self.dealer_position + 1) % n
        return (self.dealer_position + 1) % n, (self.dealer_position + 2) % n

    def _preflop_first_seat(self) -> int:
        n = self.num_players
        if self.config.heads_up_convention and n == 2:
            return self.dealer_position  # Heads-up: dealer acts first pre-flop
        return (self.dealer_position + 3) % n

    def _post_blind(self, seat: int, amount: int) -> int:
        player = self.players[seat]
        posted = player.bet(min(amount, player.chips))
        self.pot += posted
        return posted

    def _first_able_seat(self, start: int) -> int:
        """First seat from ``start`` onwards that can still act."""
        for offset in range(self.num_players):
            seat = (start + offset) % self.num_players
            if self.players[seat].can_act():
                return seat
        return start

    # Action handling -------------------------------------------------

    def perform_action(self, action: ActionType) -> str:
        """Apply ``action`` for the seat to act and return a description."""
        with self._lock:
            if not self.pending_action:
                raise NoPendingAction("No action is pending")

            player = self.players[self.current_player]
            try:
                amount = self._size_action(player, action)
            except PokerError as e:
                logger.debug("Rejected %s from %s: %s", action, player.name, e)
                raise

            if action == ActionType.FOLD:
                player.folded = True
                player.acted = True
                message = f"{player.name} folded"
            elif action == ActionType.CHECK:
                player.acted = True
                message = f"{player.name} checked"
            else:
                self.pot += player.bet(amount)
                if action == ActionType.CALL:
                    message = f"{player.name} called {amount}"
                elif action == ActionType.BET:
                    self.to_call = player.current_bet
                    message = f"{player.name} bet {amount}"
                elif action == ActionType.RAISE:
                    self.to_call = player.current_bet
                    message = f"{player.name} raised to {player.current_bet}"
                else:
                    self.to_call = max(self.to_call, player.current_bet)
                    message = f"{player.name} went all-in with {amount}"

            logger.debug("%s (pot %d, to call %d)", message, self.pot, self.to_call)
            self._advance_to_next_player()

            if self.last_result is not None and self.stage == GameStage.HAND_COMPLETE:
                message = f"{message}. {self._describe_result(self.last_result)}"
            return message

    def _size_action(self, player: Player, action: ActionType) -> int:
        """Validate ``action`` for ``player`` and return the chips it moves."""
        if not player.can_act():
            raise PlayerCannotAct(f"{player.name} cannot act")

        call_amount = max(0, self.to_call - player.current_bet)
        if action == ActionType.FOLD:
            return 0
        if action == ActionType.CHECK:
            if player.current_bet != self.to_call:
                raise IllegalCheck(f"Cannot check when {call_amount} is owed")
            return 0
        if action == ActionType.CALL:
            return min(call_amount, player.chips)
        if action == ActionType.BET:
            if self.to_call > 0:
                raise UseRaiseInstead("Use Raise instead of Bet when a bet is pending")
            return min(self.bet_amount, player.chips)
        if action == ActionType.RAISE:
            if self.to_call == 0:
                raise RaiseTooSmall("Nothing to raise; use Bet")
            amount = min(self.bet_amount, player.chips)
            if player.current_bet + amount <= self.to_call:
                raise RaiseTooSmall(
                    f"Raise to {player.current_bet + amount} does not exceed {self.to_call}"
                )
            return amount
        if action == ActionType.ALL_IN:
            return player.chips
        raise ValueError(f"Unsupported action {action}")

    def _advance_to_next_player(self) -> None:
        for _ in range(self.num_players):
            self.current_player = (self.current_player + 1) % self.num_players
            if self.players[self.current_player].can_act():
                break
        self._check_street_complete()

    def _active_seats(self) -> list[int]:
        return [i for i, p in enumerate(self.players) if not p.folded]

    def _betting_seats(self) -> list[int]:
        return [i for i, p in enumerate(self.players) if p.can_act()]

    def _check_street_complete(self) -> None:
        active = self._active_seats()
        if len(active) == 1:
            self._award_uncontested(active[0])
            return

        betting = self._betting_seats()
        if not betting:
            self._run_out_board()
            self._resolve_showdown()
            return

        all_acted = all(self.players[i].acted for i in betting)
        bets_equal = all(self.players[i].current_bet == self.to_call for i in betting)
        if all_acted and bets_equal:
            self._advance_street()
        else:
            self._refresh_action_context()

    def _advance_street(self) -> None:
        if self.stage == GameStage.RIVER:
            self._resolve_showdown()
            return

        for player in self.players:
            player.reset_for_street()
        self.to_call = 0

        next_stage = NEXT_STREET[self.stage]
        self._deal_community_cards(STREET_CARDS[next_stage])
        self.stage = next_stage
        logger.info("%s: %s (pot %d)", self.stage, format_cards(self.community_cards), self.pot)

        self.current_player = self._first_able_seat((self.dealer_position + 1) % self.num_players)
        self.pending_action = True
        self._refresh_action_context()

    def _deal_community_cards(self, count: int) -> None:
        self.deck.burn()
        self.community_cards.extend(self.deck.deal(count))

    def _run_out_board(self) -> None:
        """Deal the remaining streets with no betting (everyone is all-in)."""
        while self.stage in NEXT_STREET:
            self.stage = NEXT_STREET[self.stage]
            self._deal_community_cards(STREET_CARDS[self.stage])
        logger.info("Board run out: %s", format_cards(self.community_cards))

    # Resolution ------------------------------------------------------

    def _award_uncontested(self, winner: int) -> None:
        amount = self.pot
        self.players[winner].collect_pot(amount)
        self.pot = 0
        self.last_result = HandResult(
            hand_number=self.hand_number,
            winners=[winner],
            winnings={winner: amount},
            won_by_fold=True,
        )
        logger.info("%s wins %d uncontested", self.players[winner].name, amount)
        self._end_hand()

    def _return_uncalled_chips(self) -> dict[int, int]:
        """Give back the part of the largest commitment nobody matched."""
        ranked = sorted(range(self.num_players), key=lambda i: self.players[i].total_committed, reverse=True)
        top, second = ranked[0], ranked[1]
        excess = self.players[top].total_committed - self.players[second].total_committed
        if excess <= 0 or self.players[top].folded:
            return {}
        self.players[top].collect_pot(excess)
        self.pot -= excess
        logger.debug("Returned %d uncalled chips to %s", excess, self.players[top].name)
        return {top: excess}

    def _resolve_showdown(self) -> None:
        self.stage = GameStage.SHOWDOWN
        self.pending_action = False
        refunded = self._return_uncalled_chips()

        contenders = self._active_seats()
        hands = {
            seat: HandEvaluator.evaluate(self.players[seat].hole_cards, self.community_cards)
            for seat in contenders
        }
        best = max(hands.values())
        winners = sorted(seat for seat, hand in hands.items() if hand == best)

        share, remainder = divmod(self.pot, len(winners))
        winnings = {seat: share for seat in winners}
        # Odd chips go to the lowest-indexed winner.
        winnings[winners[0]] += remainder
        for seat, amount in winnings.items():
            self.players[seat].collect_pot(amount)
        self.pot = 0

        self.last_result = HandResult(
            hand_number=self.hand_number,
            winners=winners,
            winnings=winnings,
            won_by_fold=False,
            showdown_hands=hands,
            winning_hand=best,
            refunded=refunded,
        )
        for seat in contenders:
            logger.info(
                "Showdown: %s shows %s (%s)",
                self.players[seat].name,
                format_cards(self.players[seat].hole_cards),
                hands[seat],
            )
        logger.info("%s", self._describe_result(self.last_result))
        self._end_hand()

    def _end_hand(self) -> None:
        self.stage = GameStage.HAND_COMPLETE
        self.pending_action = False
        self.pot_odds = 0.0
        self.dealer_position = (self.dealer_position + 1) % self.num_players
        if self.total_chips() != self._expected_total:
            logger.error(
                "Chip total drifted to %d (expected %d)", self.total_chips(), self._expected_total
            )

    def _describe_result(self, result: HandResult) -> str:
        names = " and ".join(self.players[seat].name for seat in result.winners)
        total = sum(result.winnings.values())
        if result.won_by_fold:
            return f"{names} wins {total}"
        verb = "split" if len(result.winners) > 1 else "wins"
        return f"{names} {verb} {total} with {result.winning_hand}"

    # Bet sizing and derived queries ----------------------------------

    def _refresh_action_context(self) -> None:
        self.update_action_bounds()
        self.update_pot_odds()

    def update_action_bounds(self) -> None:
        """Recompute min/max bet for the seat to act and clamp bet_amount."""
        if not self.players or self.current_player >= self.num_players:
            return
        player = self.players[self.current_player]
        self.min_bet = self.config.big_blind if self.to_call == 0 else 2 * self.to_call
        self.max_bet = min(player.chips, self.config.bet_ceiling)
        self.bet_amount = self._clamp_bet(self.bet_amount)

    def _clamp_bet(self, value: int) -> int:
        # The stack ceiling wins when a short stack cannot reach min_bet.
        return min(max(value, self.min_bet), self.max_bet)

    def set_bet_amount(self, value: float) -> int:
        """Store the bet/raise size for the next Bet or Raise, clamped to bounds."""
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidBetSize(f"Bet size must be a finite number, got {value}")
        with self._lock:
            self.bet_amount = self._clamp_bet(int(value))
            return self.bet_amount

    def _acting_player(self) -> Player | None:
        if not self.pending_action:
            return None
        player = self.players[self.current_player]
        return player if player.can_act() else None

    def can_check(self) -> bool:
        player = self._acting_player()
        return player is not None and player.current_bet == self.to_call

    def can_call(self) -> bool:
        player = self._acting_player()
        return player is not None and player.chips > 0 and player.current_bet < self.to_call

    def can_bet(self) -> bool:
        player = self._acting_player()
        return player is not None and player.chips > 0 and self.to_call == 0

    def can_raise(self) -> bool:
        player = self._acting_player()
        if player is None or player.chips == 0 or self.to_call == 0:
            return False
        return player.current_bet + min(self.bet_amount, player.chips) > self.to_call

    def can_fold(self) -> bool:
        return self._acting_player() is not None

    def call_amount(self) -> int:
        """Chips the seat to act needs to match the current bet."""
        if not self.players:
            return 0
        return max(0, self.to_call - self.players[self.current_player].current_bet)

    def update_pot_odds(self) -> float:
        call_amount = self.call_amount()
        total_pot = self.pot + call_amount
        self.pot_odds = call_amount / total_pot if call_amount > 0 and total_pot > 0 else 0.0
        return self.pot_odds

    def snapshot(self, observer: int | None = None) -> TableState:
        """Immutable view of the table for ``observer`` (None = spectator)."""
        with self._lock:
            return create_table_state(self, observer)
