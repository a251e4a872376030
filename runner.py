"""Command-line interface for dealing demo games and simulating the Trickster."""

from __future__ import annotations

import argparse
import importlib.util
import json
import logging
import random
from typing import Any, Dict, List, Optional, Sequence

from cards import all_cards, card_from_str, format_hands
from deck import IndexedDeck
from engine import TrickGame, setup_game
from game_types import DEALERS, GAMES, SHUFFLERS, WIEZEN_DEAL_COUNTS, ConfigurationError, GameConfig
from logger import GameLogger
from trickster import Trickster


logger = logging.getLogger(__name__)

NUMERIC_OPTIONS = ("max_shuffles", "hands", "hand_size", "limit", "games", "seed", "simulate_trickster")


def _load_config(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as handle:
        if path.endswith((".yaml", ".yml")):
            spec = importlib.util.find_spec("yaml")
            if spec is None:
                raise RuntimeError("PyYAML is required to load YAML configurations")
            module = importlib.util.module_from_spec(spec)
            if spec.loader is None:  # pragma: no cover - defensive
                raise RuntimeError("Unable to import yaml module")
            spec.loader.exec_module(module)  # type: ignore[no-untyped-call]
            return module.safe_load(handle) or {}  # type: ignore[attr-defined]
        return json.load(handle)


class TricksterStats:
    """Tallies at which deal the special card showed up."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.games = 0
        self.positions: Dict[int, int] = {}

    def update(self, position: int) -> None:
        self.games += 1
        self.positions[position] = self.positions.get(position, 0) + 1

    @property
    def within_limit(self) -> int:
        return sum(count for position, count in self.positions.items() if position < self.limit)

    def summary(self) -> Dict[str, Any]:
        played = max(self.games, 1)
        return {
            "games": self.games,
            "limit": self.limit,
            "within_limit": self.within_limit,
            "within_limit_rate": self.within_limit / played,
            "max_position": max(self.positions) if self.positions else None,
            "positions": {str(position): self.positions[position] for position in sorted(self.positions)},
        }


def simulate_trickster(
    games: int,
    *,
    limit: int = 4,
    special_card: str = "AH",
    rng: Optional[random.Random] = None,
) -> TricksterStats:
    """Play ``games`` trick games and record where the special card was dealt."""

    if games < 0:
        raise ConfigurationError("games must be non-negative")
    rng = rng or random.Random()
    wanted = card_from_str(special_card)
    deck = IndexedDeck.of(all_cards())
    special = next(card for card in deck if card == wanted)
    game = TrickGame(Trickster(special, limit=limit, rng=rng), rng=rng)
    stats = TricksterStats(limit)
    for _ in range(games):
        (hand,) = game.deal_all(deck)
        position = next(index for index, card in enumerate(hand) if card is special)
        stats.update(position)
    return stats


def parse_deal_counts(value: Optional[str]) -> List[int]:
    if not value:
        return list(WIEZEN_DEAL_COUNTS)
    return [int(part.strip()) for part in value.split(",") if part.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deal card games from a persistent deck")
    parser.add_argument("--game", choices=GAMES, default="consecutive", help="Game to deal")
    parser.add_argument("--shuffler", choices=SHUFFLERS, default="deep", help="Shuffling strategy")
    parser.add_argument("--dealer", choices=DEALERS, default="top", help="Dealing strategy")
    parser.add_argument(
        "--max-shuffles",
        type=int,
        default=40,
        help="Upper bound on the passes made by the human-like shuffler",
    )
    parser.add_argument(
        "--deal-counts",
        type=str,
        default=None,
        help="Comma-separated packet sizes for the piecewise game",
    )
    parser.add_argument("--hands", type=int, default=4, help="Hands dealt by the consecutive game")
    parser.add_argument("--hand-size", type=int, default=13, help="Cards per hand in the consecutive game")
    parser.add_argument("--limit", type=int, default=4, help="Deal by which the Trickster's card is out")
    parser.add_argument("--special-card", type=str, default="AH", help="Card favoured by the Trickster")
    parser.add_argument("--games", type=int, default=1, help="Number of games to deal")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed")
    parser.add_argument("--log", type=str, default=None, help="Path to write per-game logs")
    parser.add_argument(
        "--log-format", choices=["jsonl", "csv"], default="jsonl", help="Log format"
    )
    parser.add_argument(
        "--simulate-trickster",
        type=int,
        default=None,
        metavar="GAMES",
        help="Run this many trick games and report where the special card landed",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Optional JSON or YAML configuration file",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def coerce_numbers(args: argparse.Namespace) -> None:
    """Apply argparse's int conversion to values merged in from a config file."""

    for key in NUMERIC_OPTIONS:
        value = getattr(args, key)
        if value is not None:
            setattr(args, key, int(value))


def config_from_args(args: argparse.Namespace) -> GameConfig:
    deal_counts = args.deal_counts
    if deal_counts is None or isinstance(deal_counts, str):
        deal_counts = parse_deal_counts(deal_counts)
    return GameConfig(
        game=args.game,
        shuffler=args.shuffler,
        dealer=args.dealer,
        max_shuffles=args.max_shuffles,
        deal_counts=tuple(deal_counts),
        hands=args.hands,
        hand_size=args.hand_size,
        limit=args.limit,
        special_card=args.special_card,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    defaults = parser.parse_args([])
    args = parser.parse_args(argv)
    if args.config:
        config = _load_config(args.config)
        for key, value in config.items():
            if hasattr(args, key) and getattr(args, key) == getattr(defaults, key):
                setattr(args, key, value)
        try:
            coerce_numbers(args)
        except (TypeError, ValueError) as exc:
            parser.error(f"invalid value in {args.config}: {exc}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    rng = random.Random(args.seed)

    if args.simulate_trickster is not None:
        try:
            stats = simulate_trickster(
                args.simulate_trickster,
                limit=args.limit,
                special_card=args.special_card,
                rng=rng,
            )
        except ValueError as exc:
            parser.error(str(exc))
        print(json.dumps(stats.summary(), indent=2))
        return

    try:
        game, deck = setup_game(config_from_args(args), rng)
    except (TypeError, ValueError) as exc:
        parser.error(str(exc))
    logger.info("dealing %d %s game(s)", args.games, game.name)

    game_log: Optional[GameLogger] = None
    if args.log:
        game_log = GameLogger(args.log, fmt=args.log_format)

    dealt = 0
    for game_id in range(1, args.games + 1):
        result = game.play(deck, game_id)
        if game_log:
            game_log.log(result)
        print(f"# {result.game} game {game_id}")
        print(format_hands(result.hands))
        print()
        dealt += 1

    if game_log:
        game_log.close()

    print(json.dumps({"game": game.name, "games": dealt}, indent=2))


if __name__ == "__main__":
    main()
