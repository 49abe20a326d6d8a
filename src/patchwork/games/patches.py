"""
Patch catalog: market patch definitions, leather patches and deck shuffling.

Shapes are written as row strings ("1" = filled). A definition with several
variants produces one patch per variant, all sharing the same shape.
"""

from __future__ import annotations

from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from patchwork.core.errors import CatalogError
from patchwork.core.shapes import Shape, make_shape, shape_key
from patchwork.games.game_state import Patch
from patchwork.history.rng import shuffle_unseeded, shuffle_with_seed
from patchwork.utils.config import board_config


class PatchVariant(NamedTuple):
    button_cost: int
    time_cost: int
    button_income: int


class PatchDefinition(NamedTuple):
    shape: Shape
    variants: Tuple[PatchVariant, ...]


def _define(rows: Sequence[str], *variants: Tuple[int, int, int]) -> PatchDefinition:
    shape = make_shape([[ch == "1" for ch in row] for row in rows])
    return PatchDefinition(shape, tuple(PatchVariant(*v) for v in variants))


# (button_cost, time_cost, button_income)
PATCH_SHAPE_DEFINITIONS: Tuple[PatchDefinition, ...] = (
    _define(["1", "1", "1"], (2, 2, 0)),
    _define(["01", "11", "10"], (3, 2, 1), (7, 6, 3)),
    _define(["10", "11", "11"], (2, 2, 0)),
    _define(["00100", "11111", "00100"], (1, 4, 1)),
    _define(["1", "1"], (2, 1, 0)),
    _define(["01", "11"], (1, 3, 0), (3, 1, 0)),
    _define(["010", "111", "010", "010"], (0, 3, 1)),
    _define(["10", "11", "11", "01"], (4, 2, 0)),
    _define(["11", "01", "01", "11"], (1, 5, 1)),
    _define(["1", "1", "1", "1"], (3, 3, 1)),
    _define(["01", "11", "01"], (2, 2, 0)),
    _define(["11", "11"], (6, 5, 2)),
    _define(["10", "10", "11", "10"], (3, 4, 1)),
    _define(["10", "11", "11", "10"], (7, 4, 2)),
    _define(["010", "011", "110", "010"], (2, 1, 0)),
    _define(["010", "111", "101"], (3, 6, 2)),
    _define(["11111"], (7, 1, 1)),
    _define(["010", "111", "111", "010"], (5, 3, 1)),
    _define(["01", "01", "01", "11"], (10, 3, 2)),
    _define(["01", "01", "11"], (4, 6, 2), (4, 2, 1)),
    _define(["010", "111", "010"], (5, 4, 2)),
    _define(["101", "111", "101"], (2, 3, 0)),
    _define(["010", "010", "111"], (5, 5, 2)),
    _define(["11", "11", "01", "01"], (10, 5, 3)),
    _define(["110", "010", "010", "011"], (1, 2, 0)),
    _define(["010", "010", "010", "111"], (7, 2, 2)),
    _define(["100", "110", "011"], (10, 4, 3)),
    _define(["101", "111"], (1, 2, 0)),
    _define(["01", "01", "11", "10"], (2, 3, 1)),
    _define(["011", "011", "110"], (8, 6, 3)),
)

LEATHER_PATCH_SHAPE: Shape = make_shape([[True]])


def validate_definitions(definitions: Sequence[PatchDefinition]) -> None:
    """
    Raise CatalogError if two definitions share a shape or a definition
    repeats a (cost, time, income) variant.
    """
    seen_shapes = set()
    for definition in definitions:
        key = shape_key(definition.shape)
        if key in seen_shapes:
            raise CatalogError(f"Duplicate shape in patch catalog: {key}")
        seen_shapes.add(key)

        seen_variants = set()
        for variant in definition.variants:
            if variant in seen_variants:
                raise CatalogError(
                    f"Duplicate variant for shape {key}: "
                    f"{variant.button_cost}:{variant.time_cost}:{variant.button_income}"
                )
            seen_variants.add(variant)


def create_patches_from_definitions(definitions: Sequence[PatchDefinition]) -> List[Patch]:
    """Validate and flatten definitions into patches with ids 1..N."""
    validate_definitions(definitions)

    patches: List[Patch] = []
    next_id = 1
    for definition in definitions:
        for variant in definition.variants:
            patches.append(Patch(
                id=next_id,
                shape=definition.shape,
                button_cost=variant.button_cost,
                time_cost=variant.time_cost,
                button_income=variant.button_income,
            ))
            next_id += 1
    return patches


# Built once at import; a broken catalog fails the import.
PATCH_DEFINITIONS: Tuple[Patch, ...] = tuple(create_patches_from_definitions(PATCH_SHAPE_DEFINITIONS))

_PATCHES_BY_ID: Dict[int, Patch] = {p.id: p for p in PATCH_DEFINITIONS}


def create_leather_patch(patch_id: int) -> Patch:
    return Patch(id=patch_id, shape=LEATHER_PATCH_SHAPE, button_cost=0, time_cost=0, button_income=0)


def leather_patch_positions(board_size: int) -> List[int]:
    return list(board_config(board_size).leather_positions)


def patch_by_id(patch_id: int) -> Optional[Patch]:
    """Catalog patch for a positive id, a leather patch for a negative one."""
    if patch_id < 0:
        return create_leather_patch(patch_id)
    return _PATCHES_BY_ID.get(patch_id)


def shuffle_patches(patches: Sequence[Patch], seed: Optional[int] = None) -> List[Patch]:
    """Deck order: reproducible when seeded, random otherwise."""
    if seed is None:
        return shuffle_unseeded(patches)
    return shuffle_with_seed(patches, seed)
