"""
History module - seeded randomness and the append-only action log.

Replay lives in patchwork.history.replay; it drives the game engine and is
imported on demand to keep this package free of engine imports.
"""

from patchwork.history.rng import seeded_random, shuffle_with_seed, shuffle_unseeded, generate_seed
from patchwork.history.log import (
    Placement,
    BuyPatchAction,
    SkipAction,
    LeatherPatchAction,
    GameAction,
    GameHistory,
    action_from_dict,
    create_history,
)

__all__ = [
    # Randomness
    "seeded_random",
    "shuffle_with_seed",
    "shuffle_unseeded",
    "generate_seed",
    # Log
    "Placement",
    "BuyPatchAction",
    "SkipAction",
    "LeatherPatchAction",
    "GameAction",
    "GameHistory",
    "action_from_dict",
    "create_history",
]
