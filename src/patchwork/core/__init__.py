"""
Core module - shape transforms, fingerprints and the error hierarchy.
"""

from patchwork.core.errors import (
    PatchworkError,
    CatalogError,
    TurnOrderError,
    HistoryError,
    ReplayError,
)
from patchwork.core.shapes import (
    Shape,
    make_shape,
    rotate,
    reflect,
    transform,
    dimensions,
    filled_cells,
    cell_count,
    leading_offset,
    shape_key,
    shapes_equal,
)
from patchwork.core.hashing import hash_board, fingerprint

__all__ = [
    # Errors
    "PatchworkError",
    "CatalogError",
    "TurnOrderError",
    "HistoryError",
    "ReplayError",
    # Shapes
    "Shape",
    "make_shape",
    "rotate",
    "reflect",
    "transform",
    "dimensions",
    "filled_cells",
    "cell_count",
    "leading_offset",
    "shape_key",
    "shapes_equal",
    # Hashing
    "hash_board",
    "fingerprint",
]
