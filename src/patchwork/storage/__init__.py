"""
Storage module - saved game histories and preferences (SQLite).
"""

from patchwork.storage.history_store import HistoryStore
from patchwork.storage.schema import SCHEMA

__all__ = [
    "HistoryStore",
    "SCHEMA",
]
