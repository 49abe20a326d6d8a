"""
SQLite archive of finished (or abandoned) games plus user preferences.

Preferences are stored as JSON text so ints, bools and name lists come back
with their types.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from patchwork.history.log import GameHistory
from patchwork.storage.schema import SCHEMA
from patchwork.utils.config import DEFAULT_PLAYER_NAMES

logger = logging.getLogger(__name__)

PLAYER_NAMES_KEY = "player_names"
FIRST_PLAYER_KEY = "first_player"
AUTO_SKIP_KEY = "auto_skip"


class HistoryStore:
    """Saved games and preferences in one SQLite file."""

    def __init__(self, db_path: str | Path, read_only: bool = False):
        self.db_path = Path(db_path).resolve()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.read_only = read_only
        self._closed = False

        self.conn = sqlite3.connect(str(self.db_path))
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA synchronous=NORMAL")

        if not read_only:
            self.conn.executescript(SCHEMA)
            self.conn.commit()

    def _require_writable(self) -> None:
        if self.read_only:
            raise RuntimeError("Cannot write in read-only mode")

    # -------------------------------------------------------------------------
    # Histories
    # -------------------------------------------------------------------------

    def save_history(self, history: GameHistory) -> int:
        """Store a history and return its game id."""
        self._require_writable()
        scores = history.final_scores or (None, None)
        cur = self.conn.execute(
            "INSERT INTO histories (seed, board_size, player1, player2, score1, score2, body) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                history.seed,
                history.board_size,
                history.player_names[0],
                history.player_names[1],
                scores[0],
                scores[1],
                history.to_json(),
            ),
        )
        self.conn.commit()
        game_id = int(cur.lastrowid)
        logger.debug("Saved history %d (seed %d)", game_id, history.seed)
        return game_id

    def load_history(self, game_id: int) -> Optional[GameHistory]:
        row = self.conn.execute("SELECT body FROM histories WHERE game_id=?", (game_id,)).fetchone()
        if row is None:
            return None
        return GameHistory.from_json(row[0])

    def list_histories(self) -> List[Dict[str, Any]]:
        """Summaries, newest first."""
        rows = self.conn.execute(
            "SELECT game_id, seed, board_size, player1, player2, score1, score2, created_at "
            "FROM histories ORDER BY created_at DESC, game_id DESC"
        ).fetchall()
        return [
            {
                "game_id": r[0],
                "seed": r[1],
                "board_size": r[2],
                "player_names": (r[3], r[4]),
                "final_scores": (r[5], r[6]) if r[5] is not None else None,
                "created_at": r[7],
            }
            for r in rows
        ]

    def delete_history(self, game_id: int) -> bool:
        self._require_writable()
        cur = self.conn.execute("DELETE FROM histories WHERE game_id=?", (game_id,))
        self.conn.commit()
        return cur.rowcount > 0

    # -------------------------------------------------------------------------
    # Preferences
    # -------------------------------------------------------------------------

    def get_preference(self, key: str, default: Any = None) -> Any:
        row = self.conn.execute("SELECT value FROM preferences WHERE key=?", (key,)).fetchone()
        if row is None:
            return default
        try:
            return json.loads(row[0])
        except (TypeError, ValueError):
            logger.warning("Ignoring unreadable preference %r", key)
            return default

    def set_preference(self, key: str, value: Any) -> None:
        self._require_writable()
        self.conn.execute(
            "INSERT INTO preferences (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, json.dumps(value)),
        )
        self.conn.commit()

    def load_player_names(self) -> Tuple[str, str]:
        names = self.get_preference(PLAYER_NAMES_KEY)
        if isinstance(names, list) and len(names) == 2:
            return str(names[0]), str(names[1])
        return DEFAULT_PLAYER_NAMES

    def save_player_names(self, names: Tuple[str, str]) -> None:
        self.set_preference(PLAYER_NAMES_KEY, [names[0], names[1]])

    def load_first_player(self) -> int:
        return 1 if self.get_preference(FIRST_PLAYER_KEY) == 1 else 0

    def save_first_player(self, index: int) -> None:
        self.set_preference(FIRST_PLAYER_KEY, index)

    def load_auto_skip(self) -> bool:
        return self.get_preference(AUTO_SKIP_KEY) is True

    def save_auto_skip(self, enabled: bool) -> None:
        self.set_preference(AUTO_SKIP_KEY, bool(enabled))

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.conn.close()

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()
