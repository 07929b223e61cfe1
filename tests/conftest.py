import numpy as np
import pytest

from ph_poker_eval.cards import init_deck


@pytest.fixture
def deck():
    return init_deck()


@pytest.fixture
def rng():
    return np.random.default_rng(20011)


@pytest.fixture
def random_hands(deck, rng):
    """Draw n distinct-card hands of size k from the deck, shape (n, k)."""
    def draw(n, k):
        return np.stack([rng.choice(deck, size=k, replace=False) for _ in range(n)])
    return draw
