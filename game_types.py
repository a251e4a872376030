"""Shared aliases, configuration and errors for building card games."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple


Hand = List[Any]
AllHands = List[Hand]

WIEZEN_DEAL_COUNTS: Tuple[int, ...] = (4, 4, 4, 4, 5, 5, 5, 5, 4, 4, 4, 4)

GAMES: Tuple[str, ...] = ("consecutive", "piecewise", "wiezen", "pick", "trick")
SHUFFLERS: Tuple[str, ...] = ("none", "deep", "human")
DEALERS: Tuple[str, ...] = ("top", "bottom")


class ConfigurationError(ValueError):
    """Raised when a game, dealer or shuffler is built with invalid settings."""


@dataclass(frozen=True)
class GameConfig:
    """Everything needed to assemble one of the known games."""

    game: str = "consecutive"
    shuffler: str = "deep"
    dealer: str = "top"
    max_shuffles: int = 40
    deal_counts: Tuple[int, ...] = WIEZEN_DEAL_COUNTS
    hands: int = 4
    hand_size: int = 13
    limit: int = 4
    special_card: str = "AH"

    def __post_init__(self) -> None:
        # frozen: normalise lists coming from JSON payloads
        object.__setattr__(self, "deal_counts", tuple(int(c) for c in self.deal_counts))
        if self.game not in GAMES:
            raise ConfigurationError(f"Unknown game: {self.game}")
        if self.shuffler not in SHUFFLERS:
            raise ConfigurationError(f"Unknown shuffler: {self.shuffler}")
        if self.dealer not in DEALERS:
            raise ConfigurationError(f"Unknown dealer: {self.dealer}")
        if self.max_shuffles < 1:
            raise ConfigurationError("max_shuffles must be at least 1")
        if any(count < 0 for count in self.deal_counts):
            raise ConfigurationError("deal_counts must be non-negative")
        if self.hands < 0 or self.hand_size < 0:
            raise ConfigurationError("hands and hand_size must be non-negative")
        if self.limit < 1:
            raise ConfigurationError("limit must be at least 1")


__all__ = [
    "AllHands",
    "ConfigurationError",
    "DEALERS",
    "GAMES",
    "GameConfig",
    "Hand",
    "SHUFFLERS",
    "WIEZEN_DEAL_COUNTS",
]
