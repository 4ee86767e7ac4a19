"""
High-score store - the only persistence in the system.

The store:
- Keeps at most MAX_SCORES entries per game, best first
- Lives in memory, optionally backed by a JSON file
- Resets to empty when the file is unreadable or fails validation

Game state is never persisted; only final scores are.
"""

from __future__ import annotations
from datetime import datetime, timezone
import logging
from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ..games.catalog import GAME_IDS

logger = logging.getLogger(__name__)

MAX_SCORES = 10
MAX_NAME_LENGTH = 20
DEFAULT_PLAYER_NAME = "Anonymous"


class ScoreEntry(BaseModel):
    """One persisted score record."""
    score: int = Field(ge=0)
    created_at: str
    player_name: str = DEFAULT_PLAYER_NAME


_FILE_SCHEMA = TypeAdapter(dict[str, list[ScoreEntry]])


def _normalize(entries: list[ScoreEntry]) -> list[ScoreEntry]:
    """Best first, ties in insertion order, trimmed to MAX_SCORES."""
    return sorted(entries, key=lambda entry: -entry.score)[:MAX_SCORES]


def _clean_name(player_name: str | None) -> str:
    name = (player_name or "").strip()[:MAX_NAME_LENGTH]
    return name or DEFAULT_PLAYER_NAME


class HighScoreStore:
    """
    Key-value score store keyed by game id.

    Usage:
        store = HighScoreStore(path="~/.arcadehub/scores.json")
        store.add_score("tetris", 1200)
        top = store.get_scores("tetris")
    """

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path).expanduser() if path else None
        self._scores: dict[str, list[ScoreEntry]] = self._load()

    def get_scores(self, game_id: str) -> list[ScoreEntry]:
        self._check_game(game_id)
        return list(self._scores.get(game_id, []))

    def add_score(
        self,
        game_id: str,
        score: int,
        player_name: str | None = None,
    ) -> list[ScoreEntry]:
        """
        Append a score and trim the table.

        Returns the updated table for the game.
        """
        self._check_game(game_id)
        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            raise ValueError("Score must be a non-negative integer.")

        entry = ScoreEntry(
            score=score,
            created_at=datetime.now(timezone.utc).isoformat(),
            player_name=_clean_name(player_name),
        )
        self._scores[game_id] = _normalize(self._scores.get(game_id, []) + [entry])
        self._save()
        return list(self._scores[game_id])

    def clear(self):
        self._scores = {}
        self._save()

    def _check_game(self, game_id: str):
        if game_id not in GAME_IDS:
            raise ValueError(f"Unknown game: {game_id}")

    def _load(self) -> dict[str, list[ScoreEntry]]:
        if self.path is None or not self.path.exists():
            return {}
        try:
            raw = _FILE_SCHEMA.validate_json(self.path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.warning("Resetting unreadable score file %s: %s", self.path, e)
            self._write({})
            return {}
        return {
            game_id: _normalize(entries)
            for game_id, entries in raw.items()
            if game_id in GAME_IDS
        }

    def _save(self):
        if self.path is not None:
            self._write(self._scores)

    def _write(self, scores: dict[str, list[ScoreEntry]]):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_bytes(_FILE_SCHEMA.dump_json(scores, indent=2))
        except OSError as e:
            # keep serving from memory
            logger.warning("Could not write score file %s: %s", self.path, e)
