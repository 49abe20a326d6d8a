"""
Tests for patchwork.games.patches

Tests the patch catalog, leather patches and deck shuffling.
"""

import pytest

from patchwork.core.errors import CatalogError
from patchwork.core.shapes import cell_count, shape_key
from patchwork.games.patches import (
    PATCH_DEFINITIONS,
    PATCH_SHAPE_DEFINITIONS,
    _define,
    create_leather_patch,
    create_patches_from_definitions,
    leather_patch_positions,
    patch_by_id,
    shuffle_patches,
    validate_definitions,
)


class TestCatalog:
    """Built-in catalog tests."""

    def test_patch_count(self):
        """30 shapes with three two-variant shapes give 33 patches."""
        assert len(PATCH_SHAPE_DEFINITIONS) == 30
        assert len(PATCH_DEFINITIONS) == 33

    def test_ids_sequential(self):
        """Ids run 1..N in definition order."""
        assert [p.id for p in PATCH_DEFINITIONS] == list(range(1, 34))

    def test_variants_share_shape(self):
        """Both variants of a shape get consecutive ids and the same shape."""
        second, third = PATCH_DEFINITIONS[1], PATCH_DEFINITIONS[2]
        assert shape_key(second.shape) == shape_key(third.shape) == "01|11|10"
        assert (second.button_cost, second.time_cost, second.button_income) == (3, 2, 1)
        assert (third.button_cost, third.time_cost, third.button_income) == (7, 6, 3)

    def test_all_positive_and_non_empty(self):
        """Market patches have positive ids and at least two cells."""
        for patch in PATCH_DEFINITIONS:
            assert patch.id > 0
            assert not patch.is_leather
            assert cell_count(patch.shape) >= 2

    def test_shapes_unique(self):
        """No two shape definitions coincide."""
        keys = [shape_key(d.shape) for d in PATCH_SHAPE_DEFINITIONS]
        assert len(set(keys)) == len(keys)

    def test_patch_by_id(self):
        """Lookup returns catalog patches and builds leather ones."""
        assert patch_by_id(1) is PATCH_DEFINITIONS[0]
        assert patch_by_id(999) is None
        assert patch_by_id(-3).is_leather


class TestValidation:
    """Catalog validation tests."""

    def test_duplicate_shape_rejected(self):
        """Two definitions with one shape raise CatalogError."""
        defs = [_define(["11"], (1, 1, 0)), _define(["11"], (2, 2, 0))]
        with pytest.raises(CatalogError, match="Duplicate shape"):
            validate_definitions(defs)

    def test_duplicate_variant_rejected(self):
        """A repeated variant raises CatalogError."""
        defs = [_define(["11"], (1, 1, 0), (1, 1, 0))]
        with pytest.raises(CatalogError, match="Duplicate variant"):
            create_patches_from_definitions(defs)

    def test_rotations_are_distinct_shapes(self):
        """A rotated copy is a different definition, not a duplicate."""
        defs = [_define(["11"], (1, 1, 0)), _define(["1", "1"], (1, 1, 0))]
        assert [p.id for p in create_patches_from_definitions(defs)] == [1, 2]


class TestLeather:
    """Leather patch tests."""

    def test_single_cell_free(self):
        """Leather patches are 1x1 and cost nothing."""
        patch = create_leather_patch(-2)
        assert patch.id == -2
        assert patch.is_leather
        assert shape_key(patch.shape) == "1"
        assert (patch.button_cost, patch.time_cost, patch.button_income) == (0, 0, 0)

    @pytest.mark.parametrize("size,positions", [
        (7, [8, 14, 20, 26, 32]),
        (9, [8, 18, 28, 38, 48]),
        (11, [10, 24, 38, 52, 64]),
    ])
    def test_positions(self, size, positions):
        """Leather slots per board size."""
        assert leather_patch_positions(size) == positions

    def test_unknown_size(self):
        """Unsupported sizes raise ValueError."""
        with pytest.raises(ValueError):
            leather_patch_positions(8)


class TestShuffle:
    """Deck shuffling tests."""

    def test_seeded_reproducible(self):
        """Same seed, same order."""
        assert shuffle_patches(PATCH_DEFINITIONS, 42) == shuffle_patches(PATCH_DEFINITIONS, 42)

    def test_seeded_differs_by_seed(self):
        """Different seeds give different orders."""
        assert shuffle_patches(PATCH_DEFINITIONS, 1) != shuffle_patches(PATCH_DEFINITIONS, 2)

    def test_permutation(self):
        """Shuffling keeps every patch exactly once."""
        deck = shuffle_patches(PATCH_DEFINITIONS, 7)
        assert sorted(p.id for p in deck) == [p.id for p in PATCH_DEFINITIONS]

    def test_unseeded_permutation(self):
        """Unseeded shuffles are permutations too."""
        deck = shuffle_patches(PATCH_DEFINITIONS)
        assert sorted(p.id for p in deck) == [p.id for p in PATCH_DEFINITIONS]

    def test_input_untouched(self):
        """The catalog itself is not reordered."""
        before = list(PATCH_DEFINITIONS)
        shuffle_patches(PATCH_DEFINITIONS, 3)
        assert list(PATCH_DEFINITIONS) == before
