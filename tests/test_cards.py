import random

import pytest

from blackjack_sim.core.cards import DECK_SIZE, Card, Shoe, parse_cards
from blackjack_sim.core.errors import ShoeExhaustedError


def test_shoe_holds_every_deck():
    shoe = Shoe(3, rng=random.Random(4))
    assert len(shoe) == 3 * DECK_SIZE
    drawn = [shoe.draw() for _ in range(3 * DECK_SIZE)]
    assert len(set(drawn)) == DECK_SIZE
    assert all(drawn.count(card) == 3 for card in set(drawn))


def test_stacked_shoe_draws_from_the_front():
    shoe = Shoe.from_cards(parse_cards(["As", "10h", "Kd"]))
    assert shoe.draw() == Card(1, "♠")
    assert shoe.draw() == Card(10, "♥")
    assert len(shoe) == 1
    assert shoe.draw() == Card(13, "♦")
    with pytest.raises(ShoeExhaustedError):
        shoe.draw()


def test_shoe_needs_a_deck():
    with pytest.raises(ValueError):
        Shoe(0)
