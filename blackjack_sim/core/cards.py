"""Card and shoe utilities."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List

from .errors import ShoeExhaustedError

SUITS = ("♠", "♥", "♦", "♣")
NO_SUIT = ""
RANKS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "T", "J", "Q", "K")
RANK_TO_VALUE = {r: i + 1 for i, r in enumerate(RANKS)}
VALUE_TO_RANK = {v: r for r, v in RANK_TO_VALUE.items()}

ACE = RANK_TO_VALUE["A"]

DECK_SIZE = len(SUITS) * len(RANKS)


@dataclass(frozen=True)
class Card:
    """Representation of a standard playing card."""

    rank: int
    suit: str

    @property
    def value(self) -> int:
        """Blackjack value with aces counted as 1."""
        return min(self.rank, 10)

    @property
    def is_placeholder(self) -> bool:
        return self.suit == NO_SUIT

    def __str__(self) -> str:
        if self.is_placeholder:
            return "??"
        return f"{VALUE_TO_RANK[self.rank]}{self.suit}"


# Stand-in for the dealer's up-card when the dealer itself is deciding.
HIDDEN_CARD = Card(0, NO_SUIT)


def new_deck() -> List[Card]:
    return [Card(RANK_TO_VALUE[r], s) for s in SUITS for r in RANKS]


class Shoe:
    """One or more decks dealt from the front."""

    def __init__(self, decks: int = 1, *, rng: random.Random | None = None, shuffle: bool = True) -> None:
        if decks < 1:
            raise ValueError("a shoe needs at least one deck")
        self._rng = rng or random.Random()
        self._cards: List[Card] = []
        for _ in range(decks):
            self._cards.extend(new_deck())
        if shuffle:
            self.shuffle()

    @classmethod
    def from_cards(cls, cards: Iterable[Card]) -> "Shoe":
        """Build a stacked shoe that deals ``cards`` in the given order."""

        shoe = cls.__new__(cls)
        shoe._rng = random.Random()
        shoe._cards = list(cards)
        return shoe

    def shuffle(self) -> None:
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        if not self._cards:
            raise ShoeExhaustedError("cannot draw from an empty shoe")
        return self._cards.pop(0)

    def __len__(self) -> int:
        return len(self._cards)


def parse_cards(repr_cards: Iterable[str]) -> List[Card]:
    """Parse string representations such as ``"As"`` or ``"Td"`` into cards.

    The suit letter may be one of ``s h d c`` or the suit symbol itself.
    """

    letters = {"s": "♠", "h": "♥", "d": "♦", "c": "♣"}
    cards = []
    for token in repr_cards:
        rank_symbol, suit = token[:-1], token[-1]
        if rank_symbol == "10":
            rank_symbol = "T"
        cards.append(Card(RANK_TO_VALUE[rank_symbol.upper()], letters.get(suit.lower(), suit)))
    return cards


__all__ = [
    "Card",
    "Shoe",
    "HIDDEN_CARD",
    "parse_cards",
    "new_deck",
    "SUITS",
    "RANKS",
    "NO_SUIT",
    "ACE",
    "DECK_SIZE",
]
