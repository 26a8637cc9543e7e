"""Game options and the driver that plays many rounds."""
from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Callable, Optional

from .cards import DECK_SIZE, HIDDEN_CARD, Shoe
from .errors import ConfigError
from .moves import MoveResult
from .payout import Outcome, RoundResult, resolve_round
from .scoring import is_blackjack
from .state import Phase, RoundState
from .strategy import DealerStrategy, Strategy

LOGGER = logging.getLogger(__name__)

DEFAULT_HANDS = 100
DEFAULT_DECKS = 3
DEFAULT_PAYOUT = 1.5


@dataclass(frozen=True)
class GameOptions:
    """Table configuration; out-of-range values fall back to the defaults."""

    hands: int = DEFAULT_HANDS
    decks: int = DEFAULT_DECKS
    blackjack_payout: float = DEFAULT_PAYOUT

    def __post_init__(self) -> None:
        if self.hands < 1:
            LOGGER.warning("hands=%r is not positive, using %d", self.hands, DEFAULT_HANDS)
            object.__setattr__(self, "hands", DEFAULT_HANDS)
        if self.decks < 1:
            LOGGER.warning("decks=%r is not positive, using %d", self.decks, DEFAULT_DECKS)
            object.__setattr__(self, "decks", DEFAULT_DECKS)
        if self.blackjack_payout <= 1.0:
            LOGGER.warning(
                "blackjack_payout=%r must exceed 1.0, using %s", self.blackjack_payout, DEFAULT_PAYOUT
            )
            object.__setattr__(self, "blackjack_payout", DEFAULT_PAYOUT)

    @property
    def reshuffle_threshold(self) -> int:
        return DECK_SIZE * self.decks // 3


def load_options(path: Path) -> GameOptions:
    """Load :class:`GameOptions` from a JSON file."""

    try:
        data = json.loads(Path(path).read_text())
    except (OSError, ValueError) as exc:
        raise ConfigError(f"unable to read options from {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    known = {f.name for f in fields(GameOptions)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"unknown option(s) in {path}: {', '.join(unknown)}")
    try:
        return GameOptions(
            hands=int(data.get("hands", DEFAULT_HANDS)),
            decks=int(data.get("decks", DEFAULT_DECKS)),
            blackjack_payout=float(data.get("blackjack_payout", DEFAULT_PAYOUT)),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid option value in {path}: {exc}") from exc


@dataclass
class GameStats:
    rounds: int = 0
    hands: int = 0
    wins: int = 0
    losses: int = 0
    pushes: int = 0
    blackjacks: int = 0
    busts: int = 0
    reshuffles: int = 0
    net: int = 0
    current_streak: int = 0
    best_streak: int = 0

    def record(self, result: RoundResult) -> None:
        self.rounds += 1
        for hand in result.hands:
            self.hands += 1
            if hand.outcome in (Outcome.WIN, Outcome.BLACKJACK):
                self.wins += 1
            elif hand.outcome == Outcome.PUSH:
                self.pushes += 1
            else:
                self.losses += 1
            if hand.outcome == Outcome.BLACKJACK:
                self.blackjacks += 1
            elif hand.outcome == Outcome.BUST:
                self.busts += 1
        profit = result.total
        self.net += profit
        if profit > 0:
            self.current_streak = self.current_streak + 1 if self.current_streak > 0 else 1
            self.best_streak = max(self.best_streak, self.current_streak)
        elif profit < 0:
            self.current_streak = self.current_streak - 1 if self.current_streak < 0 else -1
        else:
            self.current_streak = 0


class Game:
    """Plays ``options.hands`` rounds of one player against the dealer."""

    def __init__(
        self,
        options: Optional[GameOptions] = None,
        *,
        rng: random.Random | None = None,
        shoe_factory: Optional[Callable[[int], Shoe]] = None,
        dealer: Optional[Strategy] = None,
    ) -> None:
        self.options = options or GameOptions()
        self.rng = rng or random.Random()
        self.shoe_factory = shoe_factory or (lambda decks: Shoe(decks, rng=self.rng))
        self.dealer = dealer or DealerStrategy()
        self.state = RoundState()
        self.stats = GameStats()

    @property
    def bankroll(self) -> int:
        return self.state.bankroll

    def play(self, strategy: Strategy) -> int:
        """Run every round and return the final bankroll."""

        for number in range(1, self.options.hands + 1):
            reshuffled = self._ensure_shoe()
            result = self.play_round(strategy, reshuffled)
            LOGGER.debug("Round %d settled %+d, bankroll %d", number, result.total, self.bankroll)
        LOGGER.info(
            "Played %d rounds: %d won, %d lost, %d pushed, bankroll %d",
            self.stats.rounds,
            self.stats.wins,
            self.stats.losses,
            self.stats.pushes,
            self.bankroll,
        )
        return self.bankroll

    def _ensure_shoe(self) -> bool:
        if len(self.state.shoe) >= self.options.reshuffle_threshold:
            return False
        self.state.shoe = self.shoe_factory(self.options.decks)
        self.stats.reshuffles += 1
        LOGGER.info("Reshuffled %d deck(s) into a new shoe", self.options.decks)
        return True

    def play_round(self, strategy: Strategy, reshuffled: bool = False) -> RoundResult:
        state = self.state
        state.deal(strategy.bet(reshuffled))
        if is_blackjack(state.dealer_hand):
            LOGGER.debug("Dealer has blackjack, skipping the player's turn")
            return self._end_round(strategy)

        while state.phase == Phase.PLAYER_TURN:
            hand = list(state.active_hand().cards)
            move = strategy.play(hand, state.dealer_up_card())
            LOGGER.debug("Player %s on %s", move, " ".join(map(str, hand)))
            if state.apply(move) == MoveResult.BUST:
                state.stand()

        while state.phase == Phase.DEALER_TURN:
            move = self.dealer.play(list(state.dealer_hand), HIDDEN_CARD)
            if state.apply(move) == MoveResult.BUST:
                state.stand()

        return self._end_round(strategy)

    def _end_round(self, strategy: Strategy) -> RoundResult:
        state = self.state
        result = resolve_round(state, self.options.blackjack_payout)
        self.stats.record(result)
        strategy.summary([list(hand.cards) for hand in result.hands], list(result.dealer_cards))
        state.clear()
        return result


__all__ = ["Game", "GameOptions", "GameStats", "load_options"]
