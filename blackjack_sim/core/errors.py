"""Exceptions raised by the blackjack engine."""
from __future__ import annotations


class BlackjackError(Exception):
    """Base class for engine errors."""


class IllegalMoveError(BlackjackError, ValueError):
    """A move was requested whose preconditions do not hold."""

    def __init__(self, move: object, reason: str) -> None:
        super().__init__(f"cannot {getattr(move, 'value', move)}: {reason}")
        self.move = move
        self.reason = reason


class StateError(BlackjackError, RuntimeError):
    """The round state was used in a way that breaks its invariants."""


class ShoeExhaustedError(StateError):
    pass


class ConfigError(BlackjackError, ValueError):
    pass


__all__ = [
    "BlackjackError",
    "IllegalMoveError",
    "StateError",
    "ShoeExhaustedError",
    "ConfigError",
]
