"""Settlement of finished hands against the dealer."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence, Tuple

from .cards import Card
from .scoring import BLACKJACK, is_blackjack, score
from .state import PlayerHand, RoundState


class Outcome(Enum):
    BLACKJACK = "blackjack"
    WIN = "win"
    PUSH = "push"
    LOSE = "lose"
    BUST = "bust"


@dataclass(frozen=True)
class HandResult:
    cards: Tuple[Card, ...]
    bet: int
    outcome: Outcome
    delta: int


@dataclass
class RoundResult:
    """Everything the table knows once a round has been settled."""

    hands: List[HandResult] = field(default_factory=list)
    dealer_cards: Tuple[Card, ...] = ()

    @property
    def total(self) -> int:
        return sum(result.delta for result in self.hands)

    @property
    def dealer_blackjack(self) -> bool:
        return is_blackjack(self.dealer_cards)


def settle_hand(hand: PlayerHand, dealer_cards: Sequence[Card], payout: float) -> Tuple[Outcome, int]:
    """Return the outcome and signed bankroll change for one player hand.

    A two-card 21 reached after a split is an ordinary 21 and pays even money.
    """

    bet = hand.bet
    player_score = score(hand.cards)
    dealer_score = score(dealer_cards)
    player_blackjack = is_blackjack(hand.cards) and not hand.from_split
    dealer_blackjack = is_blackjack(dealer_cards)

    if player_blackjack and dealer_blackjack:
        return Outcome.PUSH, 0
    if dealer_blackjack:
        return Outcome.LOSE, -bet
    if player_blackjack:
        # Truncate, but not below an exact product that float math lands just under.
        return Outcome.BLACKJACK, int(round(bet * payout, 9))
    if player_score > BLACKJACK:
        return Outcome.BUST, -bet
    if dealer_score > BLACKJACK:
        return Outcome.WIN, bet
    if player_score > dealer_score:
        return Outcome.WIN, bet
    if player_score < dealer_score:
        return Outcome.LOSE, -bet
    return Outcome.PUSH, 0


def resolve_round(state: RoundState, payout: float) -> RoundResult:
    """Settle every player hand and credit the bankroll."""

    dealer_cards = tuple(state.dealer_hand)
    result = RoundResult(dealer_cards=dealer_cards)
    for hand in state.player_hands:
        outcome, delta = settle_hand(hand, dealer_cards, payout)
        result.hands.append(HandResult(cards=tuple(hand.cards), bet=hand.bet, outcome=outcome, delta=delta))
    state.bankroll += result.total
    return result


__all__ = ["Outcome", "HandResult", "RoundResult", "settle_hand", "resolve_round"]
