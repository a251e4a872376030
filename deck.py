"""An immutable, indexed deck of cards.

Every "modifying" operation returns a new :class:`IndexedDeck` and leaves the
receiver untouched. Positions outside the deck never raise: removals yield
``None`` together with the unchanged deck and insertions fall back to
appending, so dealing loops can run off the end of a deck without special
cases.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, Optional, Tuple, TypeVar


Card = TypeVar("Card")

RemoveResult = Tuple[Optional[Card], "IndexedDeck[Card]"]


@dataclass(frozen=True)
class IndexedDeck(Generic[Card]):
    """A persistent sequence of cards backed by a tuple.

    Index 0 is the bottom of the deck and ``size() - 1`` the top.
    """

    cards: Tuple[Card, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.cards, tuple):
            object.__setattr__(self, "cards", tuple(self.cards))

    @classmethod
    def of(cls, cards: Iterable[Card]) -> "IndexedDeck[Card]":
        return cls(tuple(cards))

    @classmethod
    def empty(cls) -> "IndexedDeck[Card]":
        return cls(())

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def size(self) -> int:
        return len(self.cards)

    def is_empty(self) -> bool:
        return len(self.cards) == 0

    def is_not_empty(self) -> bool:
        return len(self.cards) != 0

    def _holds(self, n: int) -> bool:
        # Python would happily wrap negative indices around.
        return 0 <= n < len(self.cards)

    def peek(self, n: int) -> Optional[Card]:
        """Return the card at position ``n`` or ``None`` when out of range."""

        if not self._holds(n):
            return None
        return self.cards[n]

    def remove_nth(self, n: int) -> RemoveResult:
        """Remove the card at position ``n``.

        Returns ``(card, remaining_deck)`` or ``(None, self)`` when ``n`` is
        not a position in the deck.
        """

        if not self._holds(n):
            return None, self
        return self.cards[n], IndexedDeck(self.cards[:n] + self.cards[n + 1 :])

    def remove_first(self) -> RemoveResult:
        return self.remove_nth(0)

    def remove_last(self) -> RemoveResult:
        return self.remove_nth(len(self.cards) - 1)

    def insert_nth(self, n: int, card: Card) -> "IndexedDeck[Card]":
        """Insert ``card`` so that it ends up at position ``n``.

        Positions outside ``[0, size()]`` append the card instead.
        """

        if not 0 <= n <= len(self.cards):
            n = len(self.cards)
        return IndexedDeck(self.cards[:n] + (card,) + self.cards[n:])

    def insert_first(self, card: Card) -> "IndexedDeck[Card]":
        return self.insert_nth(0, card)

    def insert_last(self, card: Card) -> "IndexedDeck[Card]":
        return self.insert_nth(len(self.cards), card)

    def swap(self, i: int, j: int) -> "IndexedDeck[Card]":
        """Exchange the cards at positions ``i`` and ``j``."""

        if i == j or not (self._holds(i) and self._holds(j)):
            return self
        cards = list(self.cards)
        cards[i], cards[j] = cards[j], cards[i]
        return IndexedDeck(tuple(cards))

    def index_of(self, card: Card) -> Optional[int]:
        """Position of this exact ``card`` object, ignoring equal copies."""

        for index, candidate in enumerate(self.cards):
            if candidate is card:
                return index
        return None


__all__ = ["IndexedDeck", "RemoveResult"]
