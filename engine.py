"""Games assembled from a dealer and a shuffler."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from cards import RANKS, SUITS, all_cards, card_from_str, hand_to_str
from dealing import BottomDealer, Dealer, TopDealer
from deck import IndexedDeck
from game_types import WIEZEN_DEAL_COUNTS, AllHands, ConfigurationError, GameConfig, Hand
from shuffling import DeepShuffler, HumanLikeShuffler, NoShuffler, Shuffler
from trickster import Trickster


logger = logging.getLogger(__name__)


def deal_n(dealer: Dealer, deck: IndexedDeck, n: int) -> Tuple[Hand, IndexedDeck]:
    """Deal up to ``n`` cards, fewer if the deck runs out first."""

    if n < 0:
        raise ConfigurationError("Cannot deal a negative number of cards")
    hand: Hand = []
    for _ in range(n):
        card, deck = dealer.deal(deck)
        if card is None:
            break
        hand.append(card)
    return hand, deck


def regroup_by_player(round_hands: Sequence[Hand], players: int) -> AllHands:
    """Turn hands dealt round after round into one hand per player.

    The rounds are split into batches of ``players`` consecutive hands; player
    ``p`` receives hand ``p`` of every batch, in batch order.
    """

    if players <= 0:
        raise ConfigurationError("players must be positive")
    if len(round_hands) % players:
        raise ConfigurationError(
            f"{len(round_hands)} rounds cannot be split evenly among {players} players"
        )
    batches = [round_hands[start : start + players] for start in range(0, len(round_hands), players)]
    return [[card for batch in batches for card in batch[player]] for player in range(players)]


@dataclass
class DealResult:
    game_id: int
    game: str
    hands: AllHands
    remaining: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "game_id": self.game_id,
            "game": self.game,
            "hands": [hand_to_str(hand) for hand in self.hands],
            "remaining": hand_to_str(self.remaining),
        }


class CompleteDealGame:
    """A game that shuffles a deck and turns it into hands."""

    name = "complete"

    def __init__(self, dealer: Dealer, shuffler: Shuffler, *, rng: Optional[random.Random] = None) -> None:
        self.dealer = dealer
        self.shuffler = shuffler
        self.rng = rng or random.Random()

    def deal_all(self, deck: IndexedDeck) -> AllHands:
        hands, _ = self._deal(deck)
        return hands

    def play(self, deck: IndexedDeck, game_id: int = 1) -> DealResult:
        hands, remaining = self._deal(deck)
        logger.debug("game %d (%s): %d hands, %d cards left", game_id, self.name, len(hands), remaining.size())
        return DealResult(game_id=game_id, game=self.name, hands=hands, remaining=list(remaining))

    def _deal(self, deck: IndexedDeck) -> Tuple[AllHands, IndexedDeck]:
        raise NotImplementedError


class CompleteConsecutiveSingleDealGame(CompleteDealGame):
    """Shuffle once, then deal one full hand after the other.

    With the defaults a French deck ends up as four hands of thirteen cards.
    """

    name = "consecutive"

    def __init__(
        self,
        dealer: Dealer,
        shuffler: Shuffler,
        *,
        hands: int = len(SUITS),
        hand_size: int = len(RANKS),
        rng: Optional[random.Random] = None,
    ) -> None:
        if hands < 0 or hand_size < 0:
            raise ConfigurationError("hands and hand_size must be non-negative")
        super().__init__(dealer, shuffler, rng=rng)
        self.hands = hands
        self.hand_size = hand_size

    def _deal(self, deck: IndexedDeck) -> Tuple[AllHands, IndexedDeck]:
        deck = self.shuffler.shuffle(deck, self.rng)
        hands: AllHands = []
        for _ in range(self.hands):
            hand, deck = deal_n(self.dealer, deck, self.hand_size)
            hands.append(hand)
        return hands, deck


class PieceWiseDealGame(CompleteDealGame):
    """Deals in predetermined packets, one packet per entry of ``deal_counts``."""

    name = "piecewise"

    def __init__(
        self,
        dealer: Dealer,
        shuffler: Shuffler,
        deal_counts: Sequence[int],
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        if any(count < 0 for count in deal_counts):
            raise ConfigurationError("deal_counts must be non-negative")
        super().__init__(dealer, shuffler, rng=rng)
        self.deal_counts = tuple(deal_counts)

    def deal_rounds(self, deck: IndexedDeck) -> Tuple[AllHands, IndexedDeck]:
        """Deal one packet per count from ``deck`` as it is, without shuffling."""

        rounds: AllHands = []
        for count in self.deal_counts:
            hand, deck = deal_n(self.dealer, deck, count)
            rounds.append(hand)
        return rounds, deck

    def _deal(self, deck: IndexedDeck) -> Tuple[AllHands, IndexedDeck]:
        return self.deal_rounds(self.shuffler.shuffle(deck, self.rng))


class Wiezen(PieceWiseDealGame):
    """Dealing for the Belgian game of Wiezen.

    Four players get 4, then 5, then 4 cards each, dealt from the top. The
    shuffle is left open and defaults to shuffling by hand.
    """

    name = "wiezen"
    players = 4

    def __init__(self, shuffler: Optional[Shuffler] = None, *, rng: Optional[random.Random] = None) -> None:
        super().__init__(TopDealer(), shuffler or HumanLikeShuffler(40), WIEZEN_DEAL_COUNTS, rng=rng)

    def _deal(self, deck: IndexedDeck) -> Tuple[AllHands, IndexedDeck]:
        rounds, deck = super()._deal(deck)
        return regroup_by_player(rounds, self.players), deck


class PickGame(CompleteDealGame):
    """Shuffles and deals the entire deck into a single hand."""

    name = "pick"

    def _deal(self, deck: IndexedDeck) -> Tuple[AllHands, IndexedDeck]:
        deck = self.shuffler.shuffle(deck, self.rng)
        hand, deck = deal_n(self.dealer, deck, deck.size())
        return [hand], deck


class TrickGame(PickGame):
    """A pick game where the Trickster both shuffles and deals."""

    name = "trick"

    def __init__(self, trickster: Trickster, *, rng: Optional[random.Random] = None) -> None:
        super().__init__(trickster, trickster, rng=rng or trickster.rng)
        self.trickster = trickster


def make_shuffler(config: GameConfig) -> Shuffler:
    if config.shuffler == "none":
        return NoShuffler()
    if config.shuffler == "human":
        return HumanLikeShuffler(config.max_shuffles)
    return DeepShuffler()


def make_dealer(config: GameConfig) -> Dealer:
    if config.dealer == "bottom":
        return BottomDealer()
    return TopDealer()


def build_game(
    config: GameConfig, deck: IndexedDeck, rng: Optional[random.Random] = None
) -> CompleteDealGame:
    """Assemble the game described by ``config`` for playing ``deck``."""

    rng = rng or random.Random()
    if config.game == "consecutive":
        return CompleteConsecutiveSingleDealGame(
            make_dealer(config),
            make_shuffler(config),
            hands=config.hands,
            hand_size=config.hand_size,
            rng=rng,
        )
    if config.game == "piecewise":
        return PieceWiseDealGame(make_dealer(config), make_shuffler(config), config.deal_counts, rng=rng)
    if config.game == "wiezen":
        return Wiezen(make_shuffler(config), rng=rng)
    if config.game == "pick":
        return PickGame(make_dealer(config), make_shuffler(config), rng=rng)
    wanted = card_from_str(config.special_card)
    special = next((card for card in deck if card == wanted), None)
    if special is None:
        raise ConfigurationError(f"Special card {config.special_card} is not in the deck")
    return TrickGame(Trickster(special, limit=config.limit, rng=rng), rng=rng)


def setup_game(
    config: GameConfig, rng: Optional[random.Random] = None
) -> Tuple[CompleteDealGame, IndexedDeck]:
    """A fresh sorted French deck together with the game configured to deal it."""

    deck = IndexedDeck.of(all_cards())
    return build_game(config, deck, rng), deck


__all__ = [
    "CompleteConsecutiveSingleDealGame",
    "CompleteDealGame",
    "DealResult",
    "PickGame",
    "PieceWiseDealGame",
    "TrickGame",
    "Wiezen",
    "build_game",
    "deal_n",
    "make_dealer",
    "make_shuffler",
    "regroup_by_player",
    "setup_game",
]
