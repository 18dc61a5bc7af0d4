"""Exceptions raised by the Hold'em engine."""


class HoldemError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(HoldemError):
    """Invalid table configuration; raised before any chips move."""


class InsufficientFundsError(ConfigurationError):
    """The balance cannot cover the session buy-in."""


class IllegalActionError(HoldemError):
    """An action that is not legal in the current state.

    The table state is left exactly as it was before the attempt.
    """


class ConcurrentActionError(IllegalActionError):
    """Another decision is already being applied to this table."""


class DeckExhaustedError(HoldemError):
    """A card was requested from an empty deck."""


class InsufficientCardsError(HoldemError):
    """Fewer than five cards were given to the hand evaluator."""


class HandAbortedError(HoldemError):
    """The current hand was aborted and no pot was awarded."""


class SessionOverError(HoldemError):
    """The session cannot continue: fewer than two seats have chips."""
