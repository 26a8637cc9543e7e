"""Round state representation and transitions."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Dict, List

from .cards import Card, Shoe
from .errors import IllegalMoveError, StateError
from .moves import Move, MoveResult, can_double, can_split
from .scoring import is_bust, score

LOGGER = logging.getLogger(__name__)


class Phase(IntEnum):
    PLAYER_TURN = 0
    DEALER_TURN = 1
    HAND_OVER = 2


@dataclass
class PlayerHand:
    """Player cards with the bet riding on them."""

    cards: List[Card] = field(default_factory=list)
    bet: int = 0
    doubled: bool = False
    from_split: bool = False

    @property
    def score(self) -> int:
        return score(self.cards)


@dataclass
class RoundState:
    """Mutable state for one blackjack table.

    The shoe and bankroll carry over between rounds; the hands are filled by
    :meth:`deal` and emptied by :meth:`clear`.
    """

    shoe: Shoe = field(default_factory=lambda: Shoe.from_cards([]))
    phase: Phase = Phase.HAND_OVER
    hand_index: int = 0
    player_hands: List[PlayerHand] = field(default_factory=list)
    dealer_hand: List[Card] = field(default_factory=list)
    bet: int = 0
    bankroll: int = 0

    # ---------------- Round lifecycle ----------------

    def deal(self, bet: int) -> None:
        """Start a round: two cards each, alternating player and dealer."""

        if bet < 0:
            raise ValueError("bet amount must be positive")
        self.bet = bet
        player_cards: List[Card] = []
        self.dealer_hand = []
        for _ in range(2):
            player_cards.append(self.shoe.draw())
            self.dealer_hand.append(self.shoe.draw())
        self.player_hands = [PlayerHand(cards=player_cards, bet=bet)]
        self.hand_index = 0
        self.phase = Phase.PLAYER_TURN
        LOGGER.debug(
            "Dealt %s against up-card %s (bet %d)",
            " ".join(map(str, player_cards)),
            self.dealer_up_card(),
            bet,
        )

    def clear(self) -> None:
        self._advance(Phase.HAND_OVER)
        self.player_hands = []
        self.dealer_hand = []
        self.hand_index = 0
        self.bet = 0

    def _advance(self, phase: Phase) -> None:
        if phase < self.phase:
            raise StateError(f"cannot move from {self.phase.name} back to {phase.name}")
        self.phase = phase

    # ---------------- Queries ----------------

    def active_cards(self) -> List[Card]:
        """Cards of whoever is currently acting."""

        if self.phase == Phase.PLAYER_TURN:
            return self.player_hands[self.hand_index].cards
        if self.phase == Phase.DEALER_TURN:
            return self.dealer_hand
        raise StateError("it isn't currently anyone's turn")

    def active_hand(self) -> PlayerHand:
        if self.phase != Phase.PLAYER_TURN:
            raise StateError("no player hand is active outside the player's turn")
        return self.player_hands[self.hand_index]

    def dealer_up_card(self) -> Card:
        if not self.dealer_hand:
            raise StateError("the dealer has no cards")
        return self.dealer_hand[0]

    # ---------------- Moves ----------------

    def apply(self, move: Move) -> MoveResult:
        try:
            handler = _HANDLERS[move]
        except KeyError:
            raise IllegalMoveError(move, "not a blackjack move") from None
        return handler(self)

    def hit(self) -> MoveResult:
        cards = self.active_cards()
        card = self.shoe.draw()
        cards.append(card)
        LOGGER.debug("%s drew %s (score %d)", self.phase.name, card, score(cards))
        if is_bust(cards):
            return MoveResult.BUST
        return MoveResult.OK

    def stand(self) -> MoveResult:
        if self.phase == Phase.DEALER_TURN:
            self._advance(Phase.HAND_OVER)
            return MoveResult.OK
        if self.phase == Phase.PLAYER_TURN:
            if len(self.active_hand().cards) < 2:
                raise IllegalMoveError(Move.STAND, "split hand needs a second card")
            self.hand_index += 1
            if self.hand_index >= len(self.player_hands):
                self.hand_index = 0
                self._advance(Phase.DEALER_TURN)
            return MoveResult.OK
        raise IllegalMoveError(Move.STAND, "no turn is active")

    def split(self) -> MoveResult:
        hand = self._player_hand_for(Move.SPLIT)
        if len(hand.cards) != 2:
            raise IllegalMoveError(Move.SPLIT, "you can only split with two cards in your hand")
        if not can_split(hand.cards):
            raise IllegalMoveError(Move.SPLIT, "both cards must have the same rank to split")
        second = hand.cards.pop()
        hand.from_split = True
        self.player_hands.append(PlayerHand(cards=[second], bet=hand.bet, from_split=True))
        return MoveResult.OK

    def double(self) -> MoveResult:
        hand = self._player_hand_for(Move.DOUBLE)
        if not can_double(hand.cards):
            raise IllegalMoveError(Move.DOUBLE, "can only double on a hand with 2 cards")
        if hand.doubled:
            raise IllegalMoveError(Move.DOUBLE, "hand is already doubled")
        hand.bet *= 2
        hand.doubled = True
        self.hit()
        # The doubled hand is finished whether or not the card busted it.
        self.stand()
        return MoveResult.OK

    def _player_hand_for(self, move: Move) -> PlayerHand:
        if self.phase != Phase.PLAYER_TURN:
            raise IllegalMoveError(move, "only allowed during the player's turn")
        return self.player_hands[self.hand_index]


_HANDLERS: Dict[Move, Callable[[RoundState], MoveResult]] = {
    Move.HIT: RoundState.hit,
    Move.STAND: RoundState.stand,
    Move.SPLIT: RoundState.split,
    Move.DOUBLE: RoundState.double,
}


__all__ = ["Phase", "PlayerHand", "RoundState"]
