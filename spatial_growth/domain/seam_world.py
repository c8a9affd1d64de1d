"""Seam-triggered cellular automaton.

Each step every agent, in shuffled order, tries its jump offsets in a fresh
random order and takes the first free target. A move across the seam (the
boundary between row/column ``seam`` and ``seam + 1``) immediately places a
newborn next to the agent's new cell, unless the population ceiling has been
reached. Newborns join the population after the scan.
"""

from __future__ import annotations

from dataclasses import dataclass
from random import Random

from spatial_growth.config.constants import DIRECTIONS
from spatial_growth.config.types import ConfigurationError, SeamConfig
from spatial_growth.domain.agents import Agent
from spatial_growth.domain.obstacles import resolve_blocked_cells
from spatial_growth.domain.occupancy import Cell, Occupancy
from spatial_growth.domain.stepper import place_agents


def jump_offsets(jump_radius: int) -> tuple[Cell, ...]:
    """Axis neighbours for radius 1, otherwise the full square minus the origin."""
    if jump_radius == 1:
        return DIRECTIONS
    return tuple(
        (dx, dy)
        for dx in range(-jump_radius, jump_radius + 1)
        for dy in range(-jump_radius, jump_radius + 1)
        if (dx, dy) != (0, 0)
    )


def crosses_seam(src: Cell, dst: Cell, seam: int) -> bool:
    """True if the move passes the seam on either axis, in either direction."""
    for a, b in zip(src, dst, strict=True):
        if a <= seam < b or b <= seam < a:
            return True
    return False


@dataclass
class SeamWorld:
    """Grid automaton whose only births come from seam crossings."""

    config: SeamConfig
    occupancy: Occupancy
    population: list[Agent]
    max_population: int

    @classmethod
    def create(cls, config: SeamConfig, rng: Random) -> SeamWorld:
        blocked = resolve_blocked_cells(
            config.grid_size, config.obstacles, config.blocked_cells, rng
        )
        occupancy = Occupancy.empty(config.grid_size, blocked)
        free = occupancy.free_cells()
        if config.initial_population > len(free):
            raise ConfigurationError(
                f"initial_population={config.initial_population} exceeds the "
                f"{len(free)} free cells left after blocking"
            )
        max_population = config.ceiling(len(blocked))
        if config.initial_population > max_population:
            raise ConfigurationError("initial_population exceeds max_population")
        rng.shuffle(free)
        population = place_agents(free[: config.initial_population], occupancy)
        return cls(
            config=config,
            occupancy=occupancy,
            population=population,
            max_population=max_population,
        )

    @property
    def blocked_cells(self) -> frozenset[Cell]:
        return self.occupancy.blocked

    def step(self, rng: Random) -> None:
        """Advance one step; the population order becomes the shuffled order."""
        order = list(self.population)
        rng.shuffle(order)
        offsets = list(jump_offsets(self.config.jump_radius))
        newborns: list[Agent] = []
        for agent in order:
            rng.shuffle(offsets)
            for dx, dy in offsets:
                target = (agent.x + dx, agent.y + dy)
                if not self.occupancy.is_free(*target):
                    continue
                src = agent.position
                self.occupancy.relocate(src, target)
                agent.x, agent.y = target
                if (
                    crosses_seam(src, target, self.config.seam)
                    and len(order) + len(newborns) < self.max_population
                ):
                    cells = self.occupancy.free_neighbors(*target)
                    if cells:
                        baby = rng.choice(cells)
                        self.occupancy.mark(*baby)
                        newborns.append(Agent(*baby))
                break
        self.population = order + newborns

    def positions(self) -> tuple[Cell, ...]:
        return tuple(agent.position for agent in self.population)
