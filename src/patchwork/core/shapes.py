"""
Shape transforms for polyomino bitmaps.

Shapes are 2-D boolean arrays indexed [row, col]. Every function here is pure:
inputs are never mutated and the returned arrays are read-only.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np

Shape = np.ndarray


def make_shape(rows: Iterable[Sequence[object]]) -> Shape:
    """
    Build a read-only shape from nested rows of truthy values.

    Raises ValueError for empty or jagged input.
    """
    data = [list(r) for r in rows]
    if not data or not data[0]:
        raise ValueError("Shape must have at least one row and one column")
    width = len(data[0])
    if any(len(r) != width for r in data):
        raise ValueError("Shape rows must all have the same length")
    return _freeze(np.array(data, dtype=bool))


def _freeze(arr: np.ndarray) -> Shape:
    out = np.ascontiguousarray(arr, dtype=bool).copy()
    out.flags.writeable = False
    return out


def rotate(shape: Shape, times: int) -> Shape:
    """Rotate clockwise by `times` quarter turns (taken mod 4)."""
    return _freeze(np.rot90(shape, k=-(times % 4)))


def reflect(shape: Shape) -> Shape:
    """Mirror horizontally: each row is reversed."""
    return _freeze(np.fliplr(shape))


def transform(shape: Shape, rotation: int, reflected: bool) -> Shape:
    """Rotate first, then reflect. The order is fixed."""
    result = rotate(shape, rotation)
    if reflected:
        result = reflect(result)
    return result


def dimensions(shape: Shape) -> Tuple[int, int]:
    """Return (width, height)."""
    rows, cols = shape.shape
    return cols, rows


def filled_cells(shape: Shape) -> List[Tuple[int, int]]:
    """Filled cells as (col, row) offsets, row-major."""
    return [(int(c), int(r)) for r, c in np.argwhere(shape)]


def cell_count(shape: Shape) -> int:
    return int(np.count_nonzero(shape))


def leading_offset(shape: Shape) -> Tuple[int, int]:
    """
    (first filled column, first filled row).

    A placement origin may go this far negative and still keep every
    filled cell on the board.
    """
    cols = np.flatnonzero(shape.any(axis=0))
    rows = np.flatnonzero(shape.any(axis=1))
    if cols.size == 0:
        return 0, 0
    return int(cols[0]), int(rows[0])


def shape_key(shape: Shape) -> str:
    """Canonical string form, e.g. "01|11"."""
    return "|".join("".join("1" if cell else "0" for cell in row) for row in shape)


def shapes_equal(a: Shape, b: Shape) -> bool:
    return a.shape == b.shape and bool(np.array_equal(a, b))
