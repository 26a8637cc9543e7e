"""Hand scoring for blackjack."""
from __future__ import annotations

from typing import Sequence

from .cards import ACE, Card

BLACKJACK = 21


def min_score(cards: Sequence[Card]) -> int:
    """Total of the hand with every ace counted as 1."""

    return sum(card.value for card in cards)


def score(cards: Sequence[Card]) -> int:
    """Best total for the hand.

    At most one ace is ever promoted to 11; a second promotion would always
    push the total past 21.
    """

    total = min_score(cards)
    if total <= 11 and any(card.rank == ACE for card in cards):
        return total + 10
    return total


def is_soft(cards: Sequence[Card]) -> bool:
    return min_score(cards) != score(cards)


def is_blackjack(cards: Sequence[Card]) -> bool:
    return len(cards) == 2 and score(cards) == BLACKJACK


def is_bust(cards: Sequence[Card]) -> bool:
    return score(cards) > BLACKJACK


__all__ = ["BLACKJACK", "min_score", "score", "is_soft", "is_blackjack", "is_bust"]
