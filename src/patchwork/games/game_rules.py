"""
NumPy board rules: placement legality, stamping and coverage queries.

can_place() never mutates and is safe for per-frame previews. stamp()
trusts its caller: it does not re-check bounds or overlap.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from patchwork.core.shapes import Shape, transform
from patchwork.games.game_state import EMPTY, Patch, PlacedPatch, Player


def in_bounds(board: np.ndarray, x: int, y: int) -> bool:
    """Return True if (x, y) is inside the board."""
    rows, cols = board.shape
    return 0 <= x < cols and 0 <= y < rows


def _footprint(shape: Shape, x: int, y: int) -> Tuple[np.ndarray, np.ndarray]:
    offsets = np.argwhere(shape)
    return offsets[:, 0] + y, offsets[:, 1] + x


def can_place(board: np.ndarray, shape: Shape, x: int, y: int) -> bool:
    """
    True if every filled cell of `shape` with its top-left at (x, y) lands
    inside the board on an empty cell.
    """
    rows, cols = board.shape
    ys, xs = _footprint(shape, x, y)
    if np.any(xs < 0) or np.any(xs >= cols) or np.any(ys < 0) or np.any(ys >= rows):
        return False
    return not np.any(board[ys, xs] != EMPTY)


def stamp(player: Player, patch: Patch, x: int, y: int, rotation: int, reflected: bool) -> None:
    """
    Write the patch id into the player's board and record the placement.

    Call can_place() first.
    """
    shape = transform(patch.shape, rotation, reflected)
    ys, xs = _footprint(shape, x, y)
    player.board[ys, xs] = patch.id
    player.placed_patches.append(PlacedPatch(patch, x, y, rotation % 4, reflected))


def empty_cell_count(board: np.ndarray) -> int:
    return int(np.count_nonzero(board == EMPTY))


def filled_cell_count(board: np.ndarray) -> int:
    return int(np.count_nonzero(board != EMPTY))


def board_full(board: np.ndarray) -> bool:
    return not np.any(board == EMPTY)


def find_filled_square(board: np.ndarray, size: int = 7) -> Optional[Tuple[int, int]]:
    """
    Top-left (x, y) of the first fully covered size x size window, scanning
    rows top to bottom and columns left to right. None if there is none.
    """
    rows, cols = board.shape
    if rows < size or cols < size:
        return None
    windows = sliding_window_view(board != EMPTY, (size, size))
    hits = np.argwhere(windows.all(axis=(2, 3)))
    if hits.size == 0:
        return None
    y, x = hits[0]
    return int(x), int(y)
