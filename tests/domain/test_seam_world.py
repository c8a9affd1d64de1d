"""Tests for spatial_growth.domain.seam_world."""

from __future__ import annotations

from random import Random

import pytest

from spatial_growth.config.types import ConfigurationError, ObstacleLayout, SeamConfig
from spatial_growth.domain.occupancy import Occupancy
from spatial_growth.domain.seam_world import SeamWorld, crosses_seam, jump_offsets
from spatial_growth.domain.stepper import place_agents


def _world_at(
    config: SeamConfig, cells: list[tuple[int, int]], blocked: frozenset[tuple[int, int]]
) -> SeamWorld:
    occupancy = Occupancy.empty(config.grid_size, blocked)
    population = place_agents(cells, occupancy)
    return SeamWorld(
        config=config,
        occupancy=occupancy,
        population=population,
        max_population=config.ceiling(len(blocked)),
    )


class TestHelpers:
    def test_radius_one_uses_axis_neighbours(self) -> None:
        assert set(jump_offsets(1)) == {(0, 1), (0, -1), (1, 0), (-1, 0)}

    def test_larger_radius_uses_square(self) -> None:
        offsets = jump_offsets(2)
        assert len(offsets) == 24
        assert (0, 0) not in offsets
        assert (2, -2) in offsets

    @pytest.mark.parametrize(
        ("src", "dst", "expected"),
        [
            ((5, 3), (6, 3), True),
            ((6, 3), (5, 3), True),
            ((3, 5), (3, 6), True),
            ((4, 3), (5, 3), False),
            ((6, 3), (7, 3), False),
            ((4, 1), (6, 1), True),
            ((6, 6), (4, 7), True),
        ],
    )
    def test_crosses_seam(
        self, src: tuple[int, int], dst: tuple[int, int], expected: bool
    ) -> None:
        assert crosses_seam(src, dst, 5) is expected


class TestSeamWorldCreate:
    def test_places_initial_population(self) -> None:
        world = SeamWorld.create(SeamConfig(), Random(0))
        assert len(world.population) == 10
        assert world.occupancy.occupied_cells() == set(world.positions())
        assert world.max_population == 100

    def test_ceiling_accounts_for_blocked_cells(self) -> None:
        config = SeamConfig(obstacles=ObstacleLayout(block_size=1, num_blocks=7))
        world = SeamWorld.create(config, Random(0))
        assert len(world.blocked_cells) == 7
        assert world.max_population == 93

    def test_too_few_free_cells_raise(self) -> None:
        blocked = frozenset((x, y) for x in range(1, 4) for y in range(1, 4) if (x, y) != (1, 1))
        config = SeamConfig(grid_size=3, seam=1, initial_population=2, blocked_cells=blocked)
        with pytest.raises(ConfigurationError, match="free cells"):
            SeamWorld.create(config, Random(0))


class TestSeamWorldStep:
    def test_crossing_places_a_newborn(self) -> None:
        config = SeamConfig(grid_size=10, initial_population=1)
        blocked = frozenset({(4, 3), (5, 4), (5, 2)})
        world = _world_at(config, [(5, 3)], blocked)
        world.step(Random(0))
        assert world.population[0].position == (6, 3)
        assert len(world.population) == 2
        baby = world.population[1].position
        assert baby in {(6, 4), (6, 2), (7, 3), (5, 3)}
        assert world.occupancy.occupied_cells() == {(6, 3), baby}

    def test_ceiling_blocks_the_birth(self) -> None:
        config = SeamConfig(grid_size=10, initial_population=1, max_population=1)
        blocked = frozenset({(4, 3), (5, 4), (5, 2)})
        world = _world_at(config, [(5, 3)], blocked)
        world.step(Random(0))
        assert world.positions() == ((6, 3),)

    def test_move_on_one_side_does_not_reproduce(self) -> None:
        config = SeamConfig(grid_size=10, initial_population=1)
        blocked = frozenset({(1, 3), (2, 4), (2, 2)})
        world = _world_at(config, [(2, 3)], blocked)
        world.step(Random(0))
        assert world.positions() == ((3, 3),)

    def test_population_bounded_and_monotone(self) -> None:
        config = SeamConfig(initial_population=10, max_population=25, steps=200)
        rng = Random(3)
        world = SeamWorld.create(config, rng)
        previous = len(world.population)
        for _ in range(config.steps):
            world.step(rng)
            size = len(world.population)
            assert previous <= size <= 25
            assert world.occupancy.occupied_cells() == set(world.positions())
            assert len(set(world.positions())) == size
            previous = size
        assert previous > 10

    def test_jump_radius_two_keeps_invariants(self) -> None:
        config = SeamConfig(grid_size=12, seam=6, initial_population=8, jump_radius=2)
        rng = Random(1)
        world = SeamWorld.create(config, rng)
        for _ in range(50):
            world.step(rng)
            positions = world.positions()
            assert world.occupancy.occupied_cells() == set(positions)
            assert len(positions) <= world.max_population

    def test_seed_determinism(self) -> None:
        def run(seed: int) -> tuple[tuple[int, int], ...]:
            rng = Random(seed)
            world = SeamWorld.create(SeamConfig(), rng)
            for _ in range(30):
                world.step(rng)
            return world.positions()

        assert run(4) == run(4)
