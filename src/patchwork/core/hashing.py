"""
State fingerprints - byte-level digests for replay comparisons.
"""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from patchwork.games.game_state import GameState


def hash_board(board: np.ndarray) -> str:
    """
    Hash of a board's cells and dimensions.

    Boards are normalized to little-endian int16 first so equal boards hash
    equally whatever dtype they were built with.
    """
    data = np.ascontiguousarray(board, dtype="<i2")
    h = hashlib.sha256()
    h.update(np.asarray(data.shape, dtype="<i4").tobytes())
    h.update(data.tobytes())
    return h.hexdigest()[:16]


def fingerprint(state: "GameState") -> str:
    """
    Digest of everything that defines a GameState: boards, purses, track,
    deck order, market token, leather slots and the bonus flag.

    Two states with the same fingerprint are interchangeable for play.
    """
    h = hashlib.sha256()

    def put(*values: object) -> None:
        h.update(repr(values).encode())

    put(state.board_size, state.time_track_length, state.first_player_index)
    put(tuple(state.income_positions))
    for p in state.players:
        put(p.name, p.buttons, p.income, p.position, p.bonus_7x7_area)
        h.update(hash_board(p.board).encode())
        put(tuple((pp.patch.id, pp.x, pp.y, pp.rotation, pp.reflected) for pp in p.placed_patches))
    put(tuple(patch.id for patch in state.patches), state.market_position)
    put(tuple((lp.position, lp.collected, lp.patch_id) for lp in state.leather_patches))
    put(state.bonus_7x7_claimed)
    return h.hexdigest()
