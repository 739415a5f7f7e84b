"""Typed failures raised by the hold'em engine.

Every failure is local to the call that raised it: the engine validates before
it mutates, so catching one of these leaves the table exactly as it was.
"""


class PokerError(Exception):
    """Base class for all rule violations and engine failures."""


class InsufficientChips(PokerError):
    """A player tried to commit more chips than they hold."""


class InsufficientPlayers(PokerError):
    """Fewer than two players can cover the minimum stack for a new hand."""


class NoPendingAction(PokerError):
    """An action arrived while the engine was not waiting for one."""


class PlayerCannotAct(PokerError):
    """The seat to act has folded or is all-in."""


class IllegalCheck(PokerError):
    """Check attempted while facing a bet."""


class UseRaiseInstead(PokerError):
    """Bet attempted while a bet is already pending."""


class RaiseTooSmall(PokerError):
    """Raise that does not lift the commitment above the amount to call."""


class InvalidBetSize(PokerError, ValueError):
    """Bet size that is not a finite number."""


class HandInProgress(PokerError):
    """A new hand was requested before the current one finished."""


class DealFailure(PokerError):
    """The deck cannot supply the requested cards."""


class CardParseError(PokerError, ValueError):
    """Text that is not a valid card token."""
