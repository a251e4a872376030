"""Strategies that take a single card out of a deck."""

from __future__ import annotations

from typing import Protocol

from deck import IndexedDeck, RemoveResult


class Dealer(Protocol):
    """Anything able to pick the next card to hand out."""

    def deal(self, deck: IndexedDeck) -> RemoveResult:
        ...


class TopDealer:
    """Always deals the top card of the deck."""

    name = "top"

    def deal(self, deck: IndexedDeck) -> RemoveResult:
        return deck.remove_last()


class BottomDealer:
    """Always deals the bottom card of the deck."""

    name = "bottom"

    def deal(self, deck: IndexedDeck) -> RemoveResult:
        return deck.remove_first()


__all__ = ["BottomDealer", "Dealer", "TopDealer"]
