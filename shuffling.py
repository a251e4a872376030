"""Strategies that reorder a whole deck using an explicit random generator."""

from __future__ import annotations

import logging
import random
from typing import Protocol

from deck import IndexedDeck
from game_types import ConfigurationError


logger = logging.getLogger(__name__)


class Shuffler(Protocol):
    def shuffle(self, deck: IndexedDeck, rng: random.Random) -> IndexedDeck:
        ...


class NoShuffler:
    """Leaves the deck as it is. Handy to eyeball what the dealers do."""

    name = "none"

    def shuffle(self, deck: IndexedDeck, rng: random.Random) -> IndexedDeck:
        return deck


class DeepShuffler:
    """Uniformly random permutation of the deck.

    Card ``n`` of the original deck is inserted at a random position in
    ``[0, n]`` of the deck being built, which gives every ordering the same
    probability.
    """

    name = "deep"

    def shuffle(self, deck: IndexedDeck, rng: random.Random) -> IndexedDeck:
        shuffled: IndexedDeck = IndexedDeck.empty()
        for n, card in enumerate(deck):
            shuffled = shuffled.insert_nth(rng.randrange(n + 1), card)
        return shuffled


class HumanLikeShuffler:
    """Mimics a person shuffling by hand.

    A random number of times (below ``max_shuffles``), a packet of cards
    starting around a third of the way up the deck is moved to the top. The
    result is deliberately not uniform.
    """

    name = "human"

    def __init__(self, max_shuffles: int = 40) -> None:
        if max_shuffles < 1:
            raise ConfigurationError("max_shuffles must be at least 1")
        self.max_shuffles = max_shuffles

    def shuffle(self, deck: IndexedDeck, rng: random.Random) -> IndexedDeck:
        passes = rng.randrange(self.max_shuffles)
        logger.debug("human-like shuffle of %d cards in %d passes", deck.size(), passes)
        for _ in range(passes):
            deck = self._move_packet(deck, rng)
        return deck

    @staticmethod
    def _move_packet(deck: IndexedDeck, rng: random.Random) -> IndexedDeck:
        height = deck.size()
        if height < 2:
            return deck
        third = height // 3
        first = min(height - 2, int(third + third * rng.gauss(0.0, 1.0)))
        number = rng.randrange(height - first - 1)
        for _ in range(number):
            card, remaining = deck.remove_nth(first)
            if card is None:
                # start fell below the bottom of the deck
                break
            deck = remaining.insert_last(card)
        return deck


__all__ = ["DeepShuffler", "HumanLikeShuffler", "NoShuffler", "Shuffler"]
