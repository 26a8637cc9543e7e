"""Strategies that decide bets and moves for a seat at the table."""
from __future__ import annotations

import sys
from typing import Callable, List, Optional, Protocol, Sequence, TextIO

from .cards import ACE, Card
from .moves import Move, can_double, can_split, legal_moves
from .scoring import is_blackjack, is_soft, score


class Strategy(Protocol):
    """Structural interface the game driver talks to."""

    def bet(self, reshuffled: bool) -> int:
        """Stake for the next round; ``reshuffled`` is set when a new shoe was built."""

    def play(self, hand: List[Card], dealer_up_card: Card) -> Move:
        """Choose a move for ``hand``, a copy of the active hand."""

    def summary(self, hands: List[List[Card]], dealer_hand: List[Card]) -> None:
        """Receive the finished hands once a round is settled."""


class DealerStrategy:
    """House policy: hit on 16 or less and on soft 17."""

    def bet(self, reshuffled: bool) -> int:
        return 0

    def play(self, hand: List[Card], dealer_up_card: Card) -> Move:
        total = score(hand)
        if total <= 16 or (total == 17 and is_soft(hand)):
            return Move.HIT
        return Move.STAND

    def summary(self, hands: List[List[Card]], dealer_hand: List[Card]) -> None:
        pass


def _up_card_value(card: Card) -> int:
    return 11 if card.rank == ACE else card.value


_PAIR_ADVICE = {
    1: lambda d: Move.SPLIT,
    2: lambda d: Move.SPLIT if d in {4, 5, 6, 7} else Move.HIT,
    3: lambda d: Move.SPLIT if d in {4, 5, 6, 7} else Move.HIT,
    4: lambda d: Move.SPLIT if d in {5, 6} else Move.HIT,
    5: lambda d: Move.DOUBLE if d in {2, 3, 4, 5, 6, 7, 8, 9} else Move.HIT,
    6: lambda d: Move.SPLIT if d in {2, 3, 4, 5, 6} else Move.HIT,
    7: lambda d: Move.SPLIT if d in {2, 3, 4, 5, 6, 7} else Move.HIT,
    8: lambda d: Move.SPLIT,
    9: lambda d: Move.SPLIT if d in {2, 3, 4, 5, 6, 8, 9} else Move.STAND,
}


def basic_strategy_move(hand: Sequence[Card], dealer_card: Card) -> Move:
    """Textbook basic strategy for a multi-deck, dealer-hits-soft-17 table."""

    if len(hand) < 2:
        return Move.HIT
    if is_blackjack(hand):
        return Move.STAND
    dealer_val = _up_card_value(dealer_card)
    doubling = can_double(hand)

    if can_split(hand) and hand[0].value in _PAIR_ADVICE:
        return _PAIR_ADVICE[hand[0].value](dealer_val)

    total = score(hand)
    if is_soft(hand):
        if total <= 17:
            return Move.HIT
        if total == 18:
            if dealer_val in {2, 7, 8}:
                return Move.STAND
            if dealer_val in {3, 4, 5, 6}:
                return Move.DOUBLE if doubling else Move.STAND
            return Move.HIT
        return Move.STAND

    if total <= 8:
        return Move.HIT
    if total == 9:
        return Move.DOUBLE if doubling and dealer_val in {3, 4, 5, 6} else Move.HIT
    if total == 10:
        return Move.DOUBLE if doubling and dealer_val in {2, 3, 4, 5, 6, 7, 8, 9} else Move.HIT
    if total == 11:
        return Move.DOUBLE if doubling and dealer_val != 11 else Move.HIT
    if total == 12:
        return Move.STAND if dealer_val in {4, 5, 6} else Move.HIT
    if 13 <= total <= 16:
        return Move.STAND if dealer_val in {2, 3, 4, 5, 6} else Move.HIT
    return Move.STAND


class BasicStrategy:
    """Scripted player betting a flat amount and following basic strategy."""

    def __init__(self, bet_amount: int = 10) -> None:
        self.bet_amount = bet_amount
        self.rounds_seen = 0

    def bet(self, reshuffled: bool) -> int:
        return self.bet_amount

    def play(self, hand: List[Card], dealer_up_card: Card) -> Move:
        return basic_strategy_move(hand, dealer_up_card)

    def summary(self, hands: List[List[Card]], dealer_hand: List[Card]) -> None:
        self.rounds_seen += 1


_MOVE_KEYS = {"h": Move.HIT, "s": Move.STAND, "p": Move.SPLIT, "d": Move.DOUBLE}
_MOVE_LABELS = {"h": "(h)it", "s": "(s)tand", "p": "s(p)lit", "d": "(d)ouble"}


def _format_cards(cards: Sequence[Card]) -> str:
    return " ".join(str(card) for card in cards)


class ConsoleStrategy:
    """Human player typing moves at a terminal."""

    def __init__(
        self,
        *,
        default_bet: int = 1,
        input_fn: Callable[[str], str] = input,
        out: Optional[TextIO] = None,
    ) -> None:
        self.default_bet = default_bet
        self.input_fn = input_fn
        self.out = out or sys.stdout

    def _say(self, *parts: object) -> None:
        print(*parts, file=self.out)

    def bet(self, reshuffled: bool) -> int:
        if reshuffled:
            self._say("The shoe has been reshuffled.")
        while True:
            answer = self.input_fn(f"Your bet [{self.default_bet}]: ").strip()
            if not answer:
                return self.default_bet
            if answer.isdigit():
                return int(answer)
            self._say("Invalid bet:", answer)

    def play(self, hand: List[Card], dealer_up_card: Card) -> Move:
        allowed = legal_moves(hand)
        prompt = ", ".join(label for key, label in _MOVE_LABELS.items() if _MOVE_KEYS[key] in allowed)
        while True:
            self._say("Player:", _format_cards(hand), f"({score(hand)})")
            self._say("Dealer:", dealer_up_card)
            answer = self.input_fn(f"What will you do? {prompt} ").strip().lower()
            move = _MOVE_KEYS.get(answer)
            if move in allowed:
                return move
            self._say("Invalid option:", answer)

    def summary(self, hands: List[List[Card]], dealer_hand: List[Card]) -> None:
        self._say("==FINAL HANDS==")
        for cards in hands:
            self._say("Player:", _format_cards(cards), f"({score(cards)})")
        self._say("Dealer:", _format_cards(dealer_hand), f"({score(dealer_hand)})")


__all__ = [
    "Strategy",
    "DealerStrategy",
    "BasicStrategy",
    "ConsoleStrategy",
    "basic_strategy_move",
]
