"""The classic French 52-card deck used by the demo games."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence


RANKS: Sequence[str] = tuple("A23456789TJQK")
SUITS: Sequence[str] = tuple("HDSC")  # Hearts, Diamonds, Spades, Clubs


@dataclass(frozen=True)
class FrenchCard:
    """Representation of a single playing card."""

    rank: str
    suit: str

    def __post_init__(self) -> None:
        if self.rank not in RANKS:
            raise ValueError(f"Unknown rank: {self.rank}")
        if self.suit not in SUITS:
            raise ValueError(f"Unknown suit: {self.suit}")

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"


def card_from_str(card: str) -> FrenchCard:
    """Create a :class:`FrenchCard` from a compact string representation."""

    if len(card) != 2:
        raise ValueError(f"Card string must be length 2, got {card!r}")
    return FrenchCard(rank=card[0].upper(), suit=card[1].upper())


def all_cards() -> List[FrenchCard]:
    """Every French card, suit by suit, each suit ordered Ace to King.

    A fresh list of fresh instances is returned on every call.
    """

    return [FrenchCard(rank, suit) for suit in SUITS for rank in RANKS]


def hand_to_str(hand: Iterable[object]) -> List[str]:
    """Convert a hand to its string representation."""

    return [str(card) for card in hand]


def format_hands(hands: Iterable[Iterable[object]]) -> str:
    return "\n".join("|".join(hand_to_str(hand)) for hand in hands)


__all__ = [
    "FrenchCard",
    "RANKS",
    "SUITS",
    "all_cards",
    "card_from_str",
    "format_hands",
    "hand_to_str",
]
