"""Tests for spatial_growth.domain.occupancy."""

from __future__ import annotations

import numpy as np
import pytest

from spatial_growth.domain.occupancy import Occupancy, manhattan_offsets, neighbor_count_field


class TestOccupancy:
    def test_empty_grid_has_no_marks(self) -> None:
        occ = Occupancy.empty(5)
        assert occ.n_occupied == 0
        assert occ.cells.shape == (5, 5)
        assert len(occ.free_cells()) == 25

    def test_bounds_are_one_based(self) -> None:
        occ = Occupancy.empty(5)
        assert occ.in_bounds(1, 1)
        assert occ.in_bounds(5, 5)
        assert not occ.in_bounds(0, 3)
        assert not occ.in_bounds(3, 6)

    def test_mark_and_clear(self) -> None:
        occ = Occupancy.empty(4)
        occ.mark(2, 3)
        assert occ.is_occupied(2, 3)
        assert not occ.is_free(2, 3)
        assert occ.occupied_cells() == {(2, 3)}
        occ.clear(2, 3)
        assert occ.n_occupied == 0

    def test_mark_rejects_blocked_and_occupied_cells(self) -> None:
        occ = Occupancy.empty(4, frozenset({(1, 1)}))
        with pytest.raises(ValueError):
            occ.mark(1, 1)
        occ.mark(2, 2)
        with pytest.raises(ValueError):
            occ.mark(2, 2)

    def test_relocate_moves_the_mark(self) -> None:
        occ = Occupancy.empty(4)
        occ.mark(1, 1)
        occ.relocate((1, 1), (1, 2))
        assert occ.occupied_cells() == {(1, 2)}

    def test_free_neighbors_follow_direction_order(self) -> None:
        occ = Occupancy.empty(5)
        assert occ.free_neighbors(3, 3) == [(3, 4), (3, 2), (4, 3), (2, 3)]

    def test_free_neighbors_skip_edges_blocks_and_agents(self) -> None:
        occ = Occupancy.empty(5, frozenset({(2, 1)}))
        occ.mark(1, 2)
        assert occ.free_neighbors(1, 1) == []

    def test_touches_blocked(self) -> None:
        occ = Occupancy.empty(5, frozenset({(3, 3)}))
        assert occ.touches_blocked(3, 4)
        assert occ.touches_blocked(2, 3)
        assert not occ.touches_blocked(2, 2)

    def test_free_cells_are_row_major_and_skip_blocked(self) -> None:
        occ = Occupancy.empty(2, frozenset({(1, 2)}))
        occ.mark(2, 1)
        assert occ.free_cells() == [(1, 1), (2, 2)]


class TestManhattanOffsets:
    def test_radius_zero_is_empty(self) -> None:
        assert manhattan_offsets(0) == []

    def test_radius_one_is_von_neumann(self) -> None:
        assert sorted(manhattan_offsets(1)) == [(-1, 0), (0, -1), (0, 1), (1, 0)]

    def test_radius_two_diamond_size(self) -> None:
        offsets = manhattan_offsets(2)
        assert len(offsets) == 12
        assert all(0 < abs(dx) + abs(dy) <= 2 for dx, dy in offsets)


class TestNeighborCountField:
    def test_excludes_self(self) -> None:
        cells = np.zeros((5, 5), dtype=bool)
        cells[2, 2] = True
        field = neighbor_count_field(cells, 2)
        assert field[2, 2] == 0
        assert field[2, 4] == 1
        assert field[3, 3] == 1
        assert field[4, 4] == 0

    def test_matches_brute_force(self) -> None:
        rng = np.random.default_rng(0)
        cells = rng.random((7, 7)) < 0.4
        radius = 2
        field = neighbor_count_field(cells, radius)
        for x in range(7):
            for y in range(7):
                expected = sum(
                    int(cells[i, j])
                    for i in range(7)
                    for j in range(7)
                    if 0 < abs(i - x) + abs(j - y) <= radius
                )
                assert field[x, y] == expected

    def test_non_toroidal_edges(self) -> None:
        cells = np.zeros((4, 4), dtype=bool)
        cells[0, 0] = True
        field = neighbor_count_field(cells, 1)
        assert field[3, 0] == 0
        assert field[0, 3] == 0
        assert field[1, 0] == 1
