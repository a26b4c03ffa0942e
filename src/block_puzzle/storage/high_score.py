from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional, Protocol, Union


class HighScoreStore(Protocol):
    def load_high_score(self) -> Optional[int]: ...

    def save_high_score(self, score: int) -> None: ...

    def clear_high_score(self) -> None: ...


class MemoryHighScoreStore:
    """Keeps the high score in process memory only."""

    def __init__(self, score: Optional[int] = None) -> None:
        self._score = score

    def load_high_score(self) -> Optional[int]:
        return self._score

    def save_high_score(self, score: int) -> None:
        self._score = int(score)

    def clear_high_score(self) -> None:
        self._score = None


def default_high_score_path() -> Path:
    app_name = os.getenv("BLOCK_PUZZLE_APP_NAME", "block_puzzle")
    return Path.home() / f".{app_name.lower()}_high_score.json"


class JsonHighScoreStore:
    """Stores the high score as {"high_score": N} in a JSON file.

    A missing or unreadable file counts as no high score.
    """

    def __init__(self, path: Union[str, Path, None] = None) -> None:
        self.path = Path(path) if path is not None else default_high_score_path()

    def load_high_score(self) -> Optional[int]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return None
        value = data.get("high_score") if isinstance(data, dict) else None
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def save_high_score(self, score: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"high_score": int(score)}), encoding="utf-8")

    def clear_high_score(self) -> None:
        if self.path.exists():
            self.path.unlink()
