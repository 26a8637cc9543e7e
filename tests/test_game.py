import dataclasses
import json
import random

import pytest

from blackjack_sim.core.cards import Shoe, parse_cards
from blackjack_sim.core.errors import ConfigError, IllegalMoveError
from blackjack_sim.core.game import Game, GameOptions, load_options
from blackjack_sim.core.moves import Move
from blackjack_sim.core.strategy import BasicStrategy


class ScriptedStrategy:
    def __init__(self, moves=(), bet=10):
        self.moves = list(moves)
        self.bet_amount = bet
        self.reshuffles = []
        self.seen = []
        self.summaries = []

    def bet(self, reshuffled):
        self.reshuffles.append(reshuffled)
        return self.bet_amount

    def play(self, hand, dealer_up_card):
        self.seen.append((list(hand), dealer_up_card))
        return self.moves.pop(0) if self.moves else Move.STAND

    def summary(self, hands, dealer_hand):
        self.summaries.append((hands, dealer_hand))


def stacked_game(*codes, hands=1):
    cards = parse_cards(codes)
    return Game(GameOptions(hands=hands, decks=1), shoe_factory=lambda decks: Shoe.from_cards(cards))


def test_options_default_out_of_range_values():
    options = GameOptions(hands=0, decks=-1, blackjack_payout=1.0)
    assert options == GameOptions()
    assert (options.hands, options.decks, options.blackjack_payout) == (100, 3, 1.5)
    custom = GameOptions(hands=5, decks=2, blackjack_payout=2.0)
    assert (custom.hands, custom.decks, custom.blackjack_payout) == (5, 2, 2.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        custom.hands = 10


def test_reshuffle_threshold_is_a_third_of_the_shoe():
    assert GameOptions(decks=3).reshuffle_threshold == 52
    assert GameOptions(decks=1).reshuffle_threshold == 17


def test_load_options_from_json(tmp_path):
    path = tmp_path / "options.json"
    path.write_text(json.dumps({"hands": 20, "blackjack_payout": 1.2}))
    options = load_options(path)
    assert options.hands == 20
    assert options.decks == 3
    assert options.blackjack_payout == 1.2


def test_load_options_rejects_bad_files(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(ConfigError):
        load_options(broken)
    unknown = tmp_path / "unknown.json"
    unknown.write_text(json.dumps({"seats": 4}))
    with pytest.raises(ConfigError):
        load_options(unknown)
    with pytest.raises(ConfigError):
        load_options(tmp_path / "missing.json")


def test_blackjack_against_eighteen_pays_one_and_a_half():
    game = stacked_game("As", "9h", "Kd", "9c")
    assert game.play(ScriptedStrategy()) == 15


def test_twenty_loses_to_dealer_drawing_to_twenty_one():
    game = stacked_game("Ts", "7h", "Td", "9c", "5s")
    strategy = ScriptedStrategy()
    assert game.play(strategy) == -10
    hands, dealer = strategy.summaries[0]
    assert dealer == parse_cards(["7h", "9c", "5s"])


def test_twenty_against_twenty_pushes():
    game = stacked_game("Ts", "Th", "Qd", "Kc")
    assert game.play(ScriptedStrategy()) == 0
    assert game.stats.pushes == 1


def test_dealer_blackjack_skips_the_player_turn():
    game = stacked_game("9s", "Ah", "9d", "Kc")
    strategy = ScriptedStrategy()
    assert game.play(strategy) == -10
    assert strategy.seen == []
    assert len(strategy.summaries) == 1


def test_bust_is_an_implicit_stand():
    game = stacked_game("Ts", "7h", "6d", "Tc", "9s")
    strategy = ScriptedStrategy([Move.HIT])
    assert game.play(strategy) == -10
    assert len(strategy.seen) == 1
    assert game.stats.busts == 1


def test_split_hands_are_played_in_order():
    game = stacked_game("8s", "7h", "8d", "Tc", "Qs", "Jh")
    strategy = ScriptedStrategy([Move.SPLIT, Move.HIT, Move.STAND, Move.HIT, Move.STAND])
    assert game.play(strategy) == 20
    assert [hand for hand, _ in strategy.seen] == [
        parse_cards(["8s", "8d"]),
        parse_cards(["8s"]),
        parse_cards(["8s", "Qs"]),
        parse_cards(["8d"]),
        parse_cards(["8d", "Jh"]),
    ]
    assert all(up == parse_cards(["7h"])[0] for _, up in strategy.seen)
    hands, _ = strategy.summaries[0]
    assert len(hands) == 2


def test_double_down_doubles_the_win():
    game = stacked_game("5s", "7h", "6d", "Tc", "9s")
    strategy = ScriptedStrategy([Move.DOUBLE])
    assert game.play(strategy) == 20
    assert len(strategy.seen) == 1


def test_illegal_move_propagates_to_the_caller():
    game = stacked_game("7d", "9h", "8c", "9s")
    with pytest.raises(IllegalMoveError):
        game.play(ScriptedStrategy([Move.SPLIT]))


def test_reshuffle_is_reported_once_per_new_shoe():
    builds = []

    def factory(decks):
        builds.append(decks)
        return Shoe(decks, rng=random.Random(len(builds)))

    game = Game(GameOptions(hands=30, decks=1), shoe_factory=factory)
    strategy = ScriptedStrategy()
    game.play(strategy)
    assert strategy.reshuffles[0] is True
    assert strategy.reshuffles.count(True) == len(builds) == game.stats.reshuffles
    assert len(builds) >= 3


def test_games_do_not_share_state():
    first = stacked_game("As", "9h", "Kd", "9c")
    second = stacked_game("Ts", "7h", "Td", "9c", "5s")
    assert first.play(ScriptedStrategy()) == 15
    assert second.play(ScriptedStrategy()) == -10
    assert first.bankroll == 15


def test_basic_strategy_runs_a_full_session():
    game = Game(GameOptions(hands=200, decks=6), rng=random.Random(1))
    strategy = BasicStrategy(bet_amount=5)
    bankroll = game.play(strategy)
    assert game.stats.rounds == 200
    assert strategy.rounds_seen == 200
    assert bankroll == game.stats.net
    assert game.stats.hands >= 200
