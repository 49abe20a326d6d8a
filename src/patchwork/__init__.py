"""
Patchwork - rules engine for the two-player quilt-building board game.

This package models the full game: the patch catalog and market, the time
track with income checkpoints and leather patches, quilt boards with
placement checks, scoring, and a seeded action log that replays a match
exactly.

Quick Start:
    from patchwork import new_game, Config, Placement

    game = new_game(Config(board_size=9, seed=42))
    game.buy(0, Placement(x=0, y=0, rotation=1))
    game.skip()
    print(game.state_string())

Modules:
    core     - Shape transforms, hashing, error types
    games    - Game state, board rules, catalog, time track, turn session
    history  - Seeded shuffle, action log, deterministic replay
    stats    - Per-player statistics and time series from a history
    storage  - SQLite store for finished games and preferences
    debug    - Text rendering for development
"""

from patchwork.api import (
    new_game,
    replay_history,
    load_and_replay,
    play_hot_seat,
)

from patchwork.core.errors import PatchworkError, CatalogError, TurnOrderError, HistoryError, ReplayError
from patchwork.games.patchwork import PatchworkGame, Phase
from patchwork.history.log import GameHistory, Placement
from patchwork.utils.config import Config

__version__ = "1.0.0"

__all__ = [
    # Main API
    "new_game",
    "replay_history",
    "load_and_replay",
    "play_hot_seat",
    "PatchworkGame",
    "Phase",
    "Config",
    # History
    "GameHistory",
    "Placement",
    # Errors
    "PatchworkError",
    "CatalogError",
    "TurnOrderError",
    "HistoryError",
    "ReplayError",
]
