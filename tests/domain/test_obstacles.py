"""Tests for spatial_growth.domain.obstacles."""

from __future__ import annotations

from random import Random

import pytest

from spatial_growth.config.types import ConfigurationError, ObstacleLayout
from spatial_growth.domain.obstacles import (
    block_corners,
    expand_blocks,
    generate_holes,
    in_any_hole,
    resolve_blocked_cells,
)


class TestBlocks:
    def test_corners_are_distinct_and_in_range(self) -> None:
        corners = block_corners(10, 3, 6, Random(0))
        assert len(set(corners)) == 6
        for x, y in corners:
            assert 1 <= x <= 8
            assert 1 <= y <= 8

    def test_too_many_blocks_raise(self) -> None:
        with pytest.raises(ConfigurationError, match="num_blocks"):
            block_corners(3, 2, 5, Random(0))

    def test_expand_single_cell_blocks(self) -> None:
        assert expand_blocks([(1, 1), (3, 2)], 1, 5) == {(1, 1), (3, 2)}

    def test_expand_square_block(self) -> None:
        cells = expand_blocks([(2, 2)], 2, 5)
        assert cells == {(2, 2), (2, 3), (3, 2), (3, 3)}

    def test_expand_clips_to_grid(self) -> None:
        cells = expand_blocks([(4, 4)], 3, 5)
        assert cells == {(4, 4), (4, 5), (5, 4), (5, 5)}

    def test_overlapping_blocks_merge(self) -> None:
        cells = expand_blocks([(1, 1), (2, 2)], 2, 5)
        assert len(cells) == 7


class TestResolveBlockedCells:
    def test_no_layout_returns_explicit_cells(self) -> None:
        explicit = frozenset({(2, 2)})
        assert resolve_blocked_cells(5, None, explicit, Random(0)) == explicit

    def test_explicit_corners_are_expanded(self) -> None:
        layout = ObstacleLayout(block_size=2, corners=((1, 1),))
        blocked = resolve_blocked_cells(5, layout, frozenset({(5, 5)}), Random(0))
        assert blocked == frozenset({(1, 1), (1, 2), (2, 1), (2, 2), (5, 5)})

    def test_random_layout_is_seed_deterministic(self) -> None:
        layout = ObstacleLayout(block_size=2, num_blocks=4)
        a = resolve_blocked_cells(12, layout, frozenset(), Random(7))
        b = resolve_blocked_cells(12, layout, frozenset(), Random(7))
        assert a == b
        assert 4 <= len(a) <= 16

    def test_result_is_frozen(self) -> None:
        blocked = resolve_blocked_cells(5, ObstacleLayout(num_blocks=2), frozenset(), Random(0))
        assert isinstance(blocked, frozenset)
        assert len(blocked) == 2


class TestHoles:
    def test_holes_do_not_overlap(self) -> None:
        holes = generate_holes(5, 5.0, 100.0, Random(3))
        assert len(holes) == 5
        for i, a in enumerate(holes):
            assert 0.0 <= a.x < 100.0 and 0.0 <= a.y < 100.0
            for b in holes[i + 1 :]:
                assert (a.x - b.x) ** 2 + (a.y - b.y) ** 2 > (2 * 5.0) ** 2

    def test_zero_holes(self) -> None:
        assert generate_holes(0, 5.0, 100.0, Random(0)) == ()

    def test_impossible_layout_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="could not place"):
            generate_holes(10, 50.0, 100.0, Random(0))

    def test_in_any_hole(self) -> None:
        holes = generate_holes(1, 2.0, 50.0, Random(1))
        hole = holes[0]
        assert in_any_hole(hole.x, hole.y, holes)
        assert not in_any_hole(hole.x + 2.5, hole.y, holes)
        assert not in_any_hole(1.0, 1.0, ())
