"""Player actions and their card preconditions."""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, FrozenSet, Sequence

from .cards import Card
from .scoring import BLACKJACK, score

if TYPE_CHECKING:  # pragma: no cover
    from .state import RoundState


class MoveResult(Enum):
    OK = "ok"
    # The active hand went over 21 and is still the active hand.
    BUST = "bust"


class Move(Enum):
    """The closed set of actions a strategy can choose."""

    HIT = "hit"
    STAND = "stand"
    SPLIT = "split"
    DOUBLE = "double"

    def apply(self, state: "RoundState") -> MoveResult:
        return state.apply(self)

    def __str__(self) -> str:
        return self.value


def can_split(cards: Sequence[Card]) -> bool:
    return len(cards) == 2 and cards[0].rank == cards[1].rank


def can_double(cards: Sequence[Card]) -> bool:
    return len(cards) == 2


def legal_moves(cards: Sequence[Card]) -> FrozenSet[Move]:
    """Moves whose preconditions hold for a visible player hand."""

    moves = set()
    if score(cards) <= BLACKJACK:
        moves.add(Move.HIT)
    if len(cards) >= 2:
        moves.add(Move.STAND)
    if can_split(cards):
        moves.add(Move.SPLIT)
    if can_double(cards):
        moves.add(Move.DOUBLE)
    return frozenset(moves)


__all__ = ["Move", "MoveResult", "legal_moves", "can_split", "can_double"]
