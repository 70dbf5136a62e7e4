"""Tests for the Grid module."""

import dataclasses

import numpy as np
import pytest

from tick_snake.grid import Grid, wrap


class TestWrap:
    def test_in_range_unchanged(self):
        assert wrap(3, 10) == 3

    def test_negative_wraps_to_far_edge(self):
        assert wrap(-1, 50) == 49

    def test_overflow_wraps_to_zero(self):
        assert wrap(50, 50) == 0
        assert wrap(101, 50) == 1

    def test_non_positive_extent(self):
        with pytest.raises(ValueError, match="positive"):
            wrap(0, 0)


class TestGridInit:
    def test_custom_dimensions(self):
        grid = Grid(width=10, height=8)
        assert grid.width == 10
        assert grid.height == 8
        assert grid.size == 80

    def test_positive_size_enforced(self):
        with pytest.raises(ValueError, match="positive"):
            Grid(width=0, height=4)
        with pytest.raises(ValueError, match="positive"):
            Grid(width=4, height=-1)

    def test_one_by_one_is_valid(self):
        assert Grid(1, 1).size == 1

    def test_immutable(self):
        grid = Grid(5, 5)
        with pytest.raises(dataclasses.FrozenInstanceError):
            grid.width = 6

    def test_center(self):
        assert Grid(10, 10).center() == (5, 5)
        assert Grid(7, 3).center() == (3, 1)


class TestGridOperations:
    def test_contains(self):
        grid = Grid(width=5, height=4)
        assert grid.contains(0, 0)
        assert grid.contains(4, 3)
        assert not grid.contains(-1, 0)
        assert not grid.contains(5, 0)
        assert not grid.contains(0, 4)

    def test_wrap_both_axes(self):
        grid = Grid(width=5, height=4)
        assert grid.wrap(-1, 0) == (4, 0)
        assert grid.wrap(0, -1) == (0, 3)
        assert grid.wrap(5, 4) == (0, 0)

    def test_occupancy_is_row_major(self):
        grid = Grid(width=4, height=3)
        mask = grid.occupancy([(3, 0), (1, 2)])
        assert mask.shape == (3, 4)
        assert mask[0, 3]
        assert mask[2, 1]
        assert mask.sum() == 2

    def test_free_cells(self):
        grid = Grid(width=4, height=4)
        assert len(grid.free_cells([])) == 16
        free = grid.free_cells([(0, 0), (1, 1)])
        assert len(free) == 14
        assert (0, 0) not in free
        assert (1, 0) in free

    def test_free_cells_when_full(self):
        grid = Grid(width=2, height=2)
        assert grid.free_cells([(0, 0), (1, 0), (0, 1), (1, 1)]) == []

    def test_occupancy_dtype(self):
        assert Grid(3, 3).occupancy([]).dtype == np.bool_
