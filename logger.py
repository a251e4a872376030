"""Structured logging helpers for dealt games."""

from __future__ import annotations

import csv
import json
from typing import Optional

from engine import DealResult


class GameLogger:
    def __init__(self, path: str, *, fmt: str = "jsonl") -> None:
        self.path = path
        self.format = fmt.lower()
        if self.format not in {"jsonl", "csv"}:
            raise ValueError(f"Unsupported log format: {self.format}")
        newline = "\n" if self.format == "csv" else ""
        self._handle = open(path, "w", encoding="utf-8", newline=newline)
        self._writer: Optional[csv.DictWriter] = None
        if self.format == "csv":
            fieldnames = ["game_id", "game", "hands", "remaining"]
            self._writer = csv.DictWriter(self._handle, fieldnames=fieldnames)
            self._writer.writeheader()

    def __enter__(self) -> "GameLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def log(self, result: DealResult) -> None:
        if self.format == "jsonl":
            json.dump(result.to_dict(), self._handle, ensure_ascii=False)
            self._handle.write("\n")
        else:
            assert self._writer is not None
            self._writer.writerow(self._as_csv_row(result))
        self._handle.flush()

    def close(self) -> None:
        if not self._handle.closed:
            self._handle.close()

    def _as_csv_row(self, result: DealResult) -> dict:
        payload = result.to_dict()
        return {
            "game_id": payload["game_id"],
            "game": payload["game"],
            "hands": json.dumps(payload["hands"], ensure_ascii=False),
            "remaining": " ".join(payload["remaining"]),
        }


__all__ = ["GameLogger"]
