"""Flask service exposing a stateless REST API for dealing games."""

from __future__ import annotations

import os
import random
from typing import Any, Dict

from flask import Flask, abort, jsonify, request

from engine import setup_game
from game_types import DEALERS, GAMES, SHUFFLERS, GameConfig
from runner import simulate_trickster


MAX_SIMULATED_GAMES = 10_000
MAX_SHUFFLES = 1_000
MAX_HANDS = 52
MAX_HAND_SIZE = 52
MAX_DEAL_ROUNDS = 52
CONFIG_KEYS = (
    "game",
    "shuffler",
    "dealer",
    "max_shuffles",
    "deal_counts",
    "hands",
    "hand_size",
    "limit",
    "special_card",
)

app = Flask(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_config(payload: Dict[str, Any]) -> GameConfig:
    values = {key: payload[key] for key in CONFIG_KEYS if key in payload}
    for key in ("max_shuffles", "hands", "hand_size", "limit"):
        if key in values:
            values[key] = int(values[key])
    if "deal_counts" in values and not isinstance(values["deal_counts"], list):
        raise ValueError("deal_counts must be a list")
    for key, cap in (
        ("max_shuffles", MAX_SHUFFLES),
        ("hands", MAX_HANDS),
        ("hand_size", MAX_HAND_SIZE),
    ):
        if key in values and values[key] > cap:
            raise ValueError(f"{key} must be at most {cap}")
    if len(values.get("deal_counts", ())) > MAX_DEAL_ROUNDS:
        raise ValueError(f"deal_counts may hold at most {MAX_DEAL_ROUNDS} rounds")
    return GameConfig(**values)


def _read_payload() -> Dict[str, Any]:
    payload = request.get_json(force=True, silent=True) or {}
    if not isinstance(payload, dict):
        abort(400, description="Request body must be a JSON object")
    return payload


def _make_rng(payload: Dict[str, Any]) -> random.Random:
    seed = payload.get("seed")
    return random.Random(seed) if seed is not None else random.Random()


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/api/games")
def list_games():
    return jsonify({"games": list(GAMES), "shufflers": list(SHUFFLERS), "dealers": list(DEALERS)})


@app.post("/api/deals")
def create_deal():
    payload = _read_payload()
    try:
        config = _make_config(payload)
        game, deck = setup_game(config, _make_rng(payload))
        result = game.play(deck, int(payload.get("game_id", 1)))
    except (TypeError, ValueError) as exc:  # noqa: BLE001
        abort(400, description=str(exc))
    return jsonify(result.to_dict()), 201


@app.post("/api/trickster/simulate")
def simulate():
    payload = _read_payload()
    try:
        games = int(payload.get("games", 1000))
        if not 1 <= games <= MAX_SIMULATED_GAMES:
            raise ValueError(f"games must be between 1 and {MAX_SIMULATED_GAMES}")
        stats = simulate_trickster(
            games,
            limit=int(payload.get("limit", 4)),
            special_card=str(payload.get("special_card", "AH")),
            rng=_make_rng(payload),
        )
    except ValueError as exc:  # noqa: BLE001
        abort(400, description=str(exc))
    return jsonify(stats.summary())


if __name__ == "__main__":  # pragma: no cover
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 8000)))
