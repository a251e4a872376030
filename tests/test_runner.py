from __future__ import annotations

import csv
import json
import random

import pytest

from engine import setup_game
from game_types import GameConfig
from logger import GameLogger
from runner import TricksterStats, build_parser, config_from_args, main, parse_deal_counts


def test_parse_deal_counts() -> None:
    assert parse_deal_counts(None) == [4, 4, 4, 4, 5, 5, 5, 5, 4, 4, 4, 4]
    assert parse_deal_counts("3, 2,1") == [3, 2, 1]


def test_config_from_args_uses_flags() -> None:
    args = build_parser().parse_args(
        ["--game", "piecewise", "--shuffler", "none", "--dealer", "bottom", "--deal-counts", "2,2"]
    )
    config = config_from_args(args)
    assert config == GameConfig(game="piecewise", shuffler="none", dealer="bottom", deal_counts=(2, 2))


def test_trickster_stats_summary() -> None:
    stats = TricksterStats(limit=4)
    for position in (0, 1, 1, 3, 5):
        stats.update(position)
    summary = stats.summary()
    assert summary["games"] == 5
    assert summary["within_limit"] == 4
    assert summary["within_limit_rate"] == pytest.approx(0.8)
    assert summary["max_position"] == 5
    assert summary["positions"] == {"0": 1, "1": 2, "3": 1, "5": 1}


def test_main_prints_hands(capsys) -> None:
    main(["--game", "consecutive", "--shuffler", "none", "--dealer", "bottom", "--seed", "1"])
    out = capsys.readouterr().out
    assert "AH|2H|3H|4H|5H|6H|7H|8H|9H|TH|JH|QH|KH" in out
    assert '"games": 1' in out


def test_main_is_reproducible_with_seed(capsys) -> None:
    main(["--game", "wiezen", "--seed", "12", "--games", "2"])
    first = capsys.readouterr().out
    main(["--game", "wiezen", "--seed", "12", "--games", "2"])
    second = capsys.readouterr().out
    assert first == second


def test_main_simulates_trickster(capsys) -> None:
    main(["--simulate-trickster", "200", "--seed", "3"])
    summary = json.loads(capsys.readouterr().out)
    assert summary["games"] == 200
    assert summary["within_limit"] == 200


def test_main_reads_json_config(tmp_path, capsys) -> None:
    config_path = tmp_path / "game.json"
    config_path.write_text(json.dumps({"game": "pick", "shuffler": "none", "dealer": "bottom"}))
    main(["--config", str(config_path)])
    out = capsys.readouterr().out
    assert "# pick game 1" in out
    assert out.splitlines()[1].startswith("AH|2H")


def test_main_rejects_bad_configuration(capsys) -> None:
    with pytest.raises(SystemExit):
        main(["--max-shuffles", "0"])
    assert "max_shuffles" in capsys.readouterr().err


@pytest.mark.parametrize("fmt", ["jsonl", "csv"])
def test_game_logger_writes_records(tmp_path, fmt: str) -> None:
    game, deck = setup_game(GameConfig(game="wiezen"), random.Random(0))
    path = tmp_path / f"games.{fmt}"
    with GameLogger(str(path), fmt=fmt) as game_log:
        for game_id in (1, 2):
            game_log.log(game.play(deck, game_id))

    if fmt == "jsonl":
        records = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
        assert [record["game_id"] for record in records] == [1, 2]
        assert all(len(record["hands"]) == 4 for record in records)
    else:
        with open(path, newline="", encoding="utf-8") as handle:
            rows = list(csv.DictReader(handle))
        assert [row["game"] for row in rows] == ["wiezen", "wiezen"]
        assert len(json.loads(rows[0]["hands"])) == 4


def test_game_logger_rejects_unknown_format(tmp_path) -> None:
    with pytest.raises(ValueError):
        GameLogger(str(tmp_path / "games.xml"), fmt="xml")


def test_main_converts_numbers_from_config(tmp_path, capsys) -> None:
    config_path = tmp_path / "game.json"
    config_path.write_text(
        json.dumps({"shuffler": "human", "max_shuffles": "5", "hands": "2", "hand_size": "3", "seed": "4"})
    )
    main(["--config", str(config_path)])
    lines = capsys.readouterr().out.splitlines()
    assert [len(line.split("|")) for line in lines[1:3]] == [3, 3]


@pytest.mark.parametrize("value", ["five", None, [5]])
def test_main_rejects_non_numeric_config_value(tmp_path, capsys, value) -> None:
    config_path = tmp_path / "game.json"
    config_path.write_text(json.dumps({"max_shuffles": value}))
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(config_path)])
    assert excinfo.value.code == 2
    assert "Traceback" not in capsys.readouterr().err


def test_main_rejects_non_numeric_deal_counts_in_config(tmp_path, capsys) -> None:
    config_path = tmp_path / "game.json"
    config_path.write_text(json.dumps({"game": "piecewise", "deal_counts": [4, None]}))
    with pytest.raises(SystemExit):
        main(["--config", str(config_path)])
