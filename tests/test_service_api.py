from __future__ import annotations

from typing import Any, Dict

import pytest

from service import MAX_DEAL_ROUNDS, MAX_HAND_SIZE, MAX_HANDS, MAX_SHUFFLES, app


def _deal(client, payload: Dict[str, Any]) -> Dict[str, Any]:
    response = client.post("/api/deals", json=payload)
    assert response.status_code == 201
    data = response.get_json()
    assert data is not None
    return data


def test_list_games():
    client = app.test_client()
    response = client.get("/api/games")
    assert response.status_code == 200
    data = response.get_json()
    assert "wiezen" in data["games"]
    assert set(data["shufflers"]) == {"none", "deep", "human"}
    assert set(data["dealers"]) == {"top", "bottom"}


def test_deal_wiezen_game():
    client = app.test_client()
    data = _deal(client, {"game": "wiezen", "shuffler": "human", "seed": 123})
    assert data["game"] == "wiezen"
    assert [len(hand) for hand in data["hands"]] == [13, 13, 13, 13]
    dealt = [card for hand in data["hands"] for card in hand]
    assert len(set(dealt)) == 52
    assert data["remaining"] == []


def test_seeded_deals_are_reproducible():
    client = app.test_client()
    payload = {"game": "consecutive", "shuffler": "deep", "seed": 7, "game_id": 4}
    first = _deal(client, payload)
    second = _deal(client, payload)
    assert first == second
    assert first["game_id"] == 4


def test_piecewise_deal_with_custom_counts():
    client = app.test_client()
    data = _deal(
        client,
        {"game": "piecewise", "shuffler": "none", "dealer": "bottom", "deal_counts": [2, 3]},
    )
    assert data["hands"] == [["AH", "2H"], ["3H", "4H", "5H"]]
    assert len(data["remaining"]) == 47


def test_trick_game_deals_special_card_early():
    client = app.test_client()
    data = _deal(client, {"game": "trick", "special_card": "QS", "limit": 3, "seed": 1})
    (hand,) = data["hands"]
    assert hand.index("QS") < 3


def test_invalid_configuration_returns_400():
    client = app.test_client()
    for payload in (
        {"game": "poker"},
        {"shuffler": "human", "max_shuffles": 0},
        {"game": "piecewise", "deal_counts": "4,4"},
        {"game": "trick", "special_card": "ZZ"},
    ):
        response = client.post("/api/deals", json=payload)
        assert response.status_code == 400


def test_simulate_trickster():
    client = app.test_client()
    response = client.post("/api/trickster/simulate", json={"games": 300, "seed": 5})
    assert response.status_code == 200
    summary = response.get_json()
    assert summary["games"] == 300
    assert summary["within_limit_rate"] == 1.0


def test_simulate_trickster_bounds_games():
    client = app.test_client()
    response = client.post("/api/trickster/simulate", json={"games": 0})
    assert response.status_code == 400


@pytest.mark.parametrize(
    "payload",
    [
        {"shuffler": "human", "max_shuffles": MAX_SHUFFLES + 1},
        {"shuffler": "human", "max_shuffles": 10**12},
        {"hands": MAX_HANDS + 1},
        {"hand_size": MAX_HAND_SIZE + 1},
        {"game": "piecewise", "deal_counts": [1] * (MAX_DEAL_ROUNDS + 1)},
    ],
)
def test_oversized_deal_is_rejected(payload):
    client = app.test_client()
    response = client.post("/api/deals", json=payload)
    assert response.status_code == 400


def test_deal_at_the_caps_is_accepted():
    client = app.test_client()
    data = _deal(
        client,
        {"shuffler": "human", "max_shuffles": MAX_SHUFFLES, "hands": MAX_HANDS, "hand_size": 1, "seed": 2},
    )
    assert len(data["hands"]) == MAX_HANDS


@pytest.mark.parametrize("route", ["/api/deals", "/api/trickster/simulate"])
@pytest.mark.parametrize("body", [[1, 2], "wiezen", 42])
def test_non_object_body_returns_400(route, body):
    client = app.test_client()
    response = client.post(route, json=body)
    assert response.status_code == 400
