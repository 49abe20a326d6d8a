"""
Tests for patchwork.core.shapes

Tests rotation, reflection and shape queries.
"""

import numpy as np
import pytest

from patchwork.core.shapes import (
    cell_count,
    dimensions,
    filled_cells,
    leading_offset,
    make_shape,
    reflect,
    rotate,
    shape_key,
    shapes_equal,
    transform,
)
from patchwork.games.patches import PATCH_DEFINITIONS


@pytest.fixture
def corner():
    """Three-cell corner: .X / XX"""
    return make_shape([[0, 1], [1, 1]])


@pytest.fixture
def bar():
    """Vertical three-cell bar."""
    return make_shape([[1], [1], [1]])


class TestMakeShape:
    """make_shape construction tests."""

    def test_bool_and_read_only(self, corner):
        """Shapes are boolean and cannot be written."""
        assert corner.dtype == bool
        with pytest.raises(ValueError):
            corner[0, 0] = True

    def test_rejects_empty(self):
        """Empty input is refused."""
        with pytest.raises(ValueError):
            make_shape([])

    def test_rejects_jagged(self):
        """Rows of different lengths are refused."""
        with pytest.raises(ValueError):
            make_shape([[1, 1], [1]])


class TestRotate:
    """Clockwise rotation tests."""

    def test_quarter_turn_bar(self, bar):
        """A vertical bar turns horizontal."""
        assert shape_key(rotate(bar, 1)) == "111"

    def test_quarter_turn_corner(self, corner):
        """Clockwise quarter turn of .X/XX is X./XX."""
        assert shape_key(rotate(corner, 1)) == "10|11"

    def test_half_turn(self):
        """Half turn reverses both axes."""
        l_shape = make_shape([[1, 0], [1, 0], [1, 1]])
        assert shape_key(rotate(l_shape, 2)) == "11|01|01"

    def test_swaps_dimensions(self):
        """Odd rotations swap width and height."""
        shape = make_shape([[1, 1, 1], [1, 0, 0]])
        assert dimensions(shape) == (3, 2)
        assert dimensions(rotate(shape, 1)) == (2, 3)
        assert dimensions(rotate(shape, 2)) == (3, 2)

    @pytest.mark.parametrize("times", [0, 1, 2, 3])
    def test_four_turns_identity(self, times):
        """Four extra quarter turns change nothing, for every catalog patch."""
        for patch in PATCH_DEFINITIONS:
            once = rotate(patch.shape, times)
            assert shapes_equal(rotate(once, 4), once)
            assert shapes_equal(rotate(rotate(rotate(rotate(patch.shape, 1), 1), 1), 1), patch.shape)

    def test_negative_and_large_counts_wrap(self, corner):
        """Rotation count is taken mod 4."""
        assert shapes_equal(rotate(corner, -1), rotate(corner, 3))
        assert shapes_equal(rotate(corner, 5), rotate(corner, 1))

    def test_input_untouched(self, corner):
        """Rotating returns a new array."""
        before = corner.copy()
        rotate(corner, 1)
        assert np.array_equal(corner, before)


class TestReflect:
    """Horizontal mirror tests."""

    def test_reverses_rows(self, corner):
        """Each row is reversed."""
        assert shape_key(reflect(corner)) == "10|11"

    def test_involution(self):
        """Reflecting twice restores every catalog shape."""
        for patch in PATCH_DEFINITIONS:
            assert shapes_equal(reflect(reflect(patch.shape)), patch.shape)


class TestTransform:
    """Combined rotate-then-reflect tests."""

    def test_rotate_then_reflect(self):
        """Reflection is applied after rotation."""
        shape = make_shape([[1, 1], [1, 0], [1, 0]])
        assert shapes_equal(transform(shape, 1, True), reflect(rotate(shape, 1)))
        assert not shapes_equal(transform(shape, 1, True), rotate(reflect(shape), 1))

    def test_identity(self, corner):
        """No rotation and no reflection keeps the shape."""
        assert shapes_equal(transform(corner, 0, False), corner)

    def test_result_read_only(self, corner):
        """Transformed shapes are frozen too."""
        assert not transform(corner, 3, True).flags.writeable


class TestQueries:
    """Shape query tests."""

    def test_filled_cells(self, corner):
        """Filled cells come back as (col, row), row-major."""
        assert filled_cells(corner) == [(1, 0), (0, 1), (1, 1)]

    def test_cell_count_preserved(self):
        """Transforms keep the number of cells."""
        for patch in PATCH_DEFINITIONS:
            for rotation in range(4):
                for reflected in (False, True):
                    assert cell_count(transform(patch.shape, rotation, reflected)) == cell_count(patch.shape)

    def test_leading_offset(self, corner):
        """First filled column and row."""
        assert leading_offset(corner) == (0, 0)
        assert leading_offset(make_shape([[0, 0], [0, 1]])) == (1, 1)
        assert leading_offset(make_shape([[0]])) == (0, 0)

    def test_shapes_equal_needs_same_dimensions(self, bar):
        """Different dimensions are never equal."""
        assert not shapes_equal(bar, rotate(bar, 1))
