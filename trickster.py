"""A dealer and shuffler in one object, colluding through shared state."""

from __future__ import annotations

import logging
import random
from typing import Any, Optional

from deck import IndexedDeck, RemoveResult
from game_types import ConfigurationError


logger = logging.getLogger(__name__)


class Trickster:
    """Shuffles and deals so that a chosen card comes out early.

    The shuffle looks like an honest random shuffle but remembers where the
    special card ended up. Every deal then hands out the special card with
    probability ``deals / limit`` until it is gone, and otherwise deals a
    random card. By the ``limit``-th deal the special card is out for sure.

    The special card is followed by identity, so equal copies of it in the
    deck are ordinary cards. A Trickster belongs to a single game session;
    its counters are not safe to share between threads.
    """

    name = "trickster"

    def __init__(self, special_card: Any, *, limit: int = 4, rng: Optional[random.Random] = None) -> None:
        if limit < 1:
            raise ConfigurationError("limit must be at least 1")
        self.special_card = special_card
        self.limit = limit
        self.rng = rng or random.Random()
        self._reset()

    def _reset(self) -> None:
        self._deals = 0
        self._special_position: Optional[int] = None
        self._special_dealt = False
        self._cycle: Optional[int] = None

    def shuffle(self, deck: IndexedDeck, rng: Optional[random.Random] = None) -> IndexedDeck:
        rng = rng or self.rng
        self._reset()
        self._cycle = deck.size()
        position = deck.index_of(self.special_card)
        for i in range(deck.size() - 1, 0, -1):
            j = rng.randrange(i + 1)
            deck = deck.swap(i, j)
            if position == i:
                position = j
            elif position == j:
                position = i
        self._special_position = position
        # No special card in the deck: behave like an honest random dealer.
        self._special_dealt = position is None
        logger.debug("special card shuffled to position %s", position)
        return deck

    def deal(self, deck: IndexedDeck) -> RemoveResult:
        if deck.is_empty():
            return deck.remove_first()
        if self._cycle is None:
            self._start_unshuffled(deck)
        self._deals += 1
        if not self._special_dealt and self.rng.random() < self._deals / self.limit:
            position = self._special_position
            self._special_dealt = True
        else:
            position = self.rng.randrange(deck.size())
            if self._special_position is not None and not self._special_dealt:
                if position < self._special_position:
                    self._special_position -= 1
                elif position == self._special_position:
                    self._special_dealt = True
        if self._deals == self._cycle:
            self._reset()
        return deck.remove_nth(position)

    def _start_unshuffled(self, deck: IndexedDeck) -> None:
        self._cycle = deck.size()
        self._special_position = deck.index_of(self.special_card)
        self._special_dealt = self._special_position is None


__all__ = ["Trickster"]
