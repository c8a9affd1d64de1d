"""Discrete-grid population stepper: movement phase, then reproduction phase.

One step processes every agent's movement in a freshly shuffled order, then
scans the moved population once for births. Newborns are appended only after
the scan, so they never count toward crowding or mating in the step that
created them; the cell a newborn takes is, however, unavailable to every
later birth in the same scan.

All randomness is drawn from the ``Random`` passed in.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from random import Random

from spatial_growth.config.constants import DIRECTIONS
from spatial_growth.config.types import ConfigurationError, GridConfig, MovementRule
from spatial_growth.domain.agents import Agent
from spatial_growth.domain.obstacles import resolve_blocked_cells
from spatial_growth.domain.occupancy import Cell, Occupancy, neighbor_count_field

# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------


def place_agents(positions: list[Cell], occupancy: Occupancy) -> list[Agent]:
    """Create fresh agents at ``positions`` and mark them on ``occupancy``."""
    population: list[Agent] = []
    for x, y in positions:
        occupancy.mark(x, y)
        population.append(Agent(x, y))
    return population


def initialize(config: GridConfig, rng: Random) -> tuple[list[Agent], Occupancy]:
    """Resolve the blocked set and place the initial population on free cells.

    Raises :class:`ConfigurationError` when there are fewer free cells than
    requested agents.
    """
    blocked = resolve_blocked_cells(config.grid_size, config.obstacles, config.blocked_cells, rng)
    occupancy = Occupancy.empty(config.grid_size, blocked)
    free = occupancy.free_cells()
    if config.initial_population > len(free):
        raise ConfigurationError(
            f"initial_population={config.initial_population} exceeds the "
            f"{len(free)} free cells left after blocking"
        )
    rng.shuffle(free)
    return place_agents(free[: config.initial_population], occupancy), occupancy


# ---------------------------------------------------------------------------
# Movement phase
# ---------------------------------------------------------------------------


def _relocate(agent: Agent, dst: Cell, occupancy: Occupancy) -> None:
    prev_x, prev_y = agent.x, agent.y
    occupancy.relocate((prev_x, prev_y), dst)
    agent.x, agent.y = dst
    agent.record_crossings(prev_x, prev_y, occupancy.grid_size // 2)


def _move_free(agent: Agent, occupancy: Occupancy, rng: Random) -> None:
    candidates = occupancy.free_neighbors(agent.x, agent.y)
    if candidates:
        _relocate(agent, rng.choice(candidates), occupancy)


def _move_trap(agent: Agent, occupancy: Occupancy, config: GridConfig, rng: Random) -> None:
    """Free movement, except that touching an obstacle costs ``trap_wait`` idle steps."""
    if agent.trap_timer > 0:
        agent.trap_timer -= 1
        agent.was_trapped = True
        return
    # Just-released agents get one free move before they can be trapped again
    if occupancy.touches_blocked(agent.x, agent.y) and not agent.was_trapped:
        agent.trap_timer = config.trap_wait - 1
        agent.was_trapped = True
        return
    agent.was_trapped = False
    _move_free(agent, occupancy, rng)


def _move_sticky(agent: Agent, occupancy: Occupancy, config: GridConfig, rng: Random) -> None:
    """Try one random direction; bumping into an obstacle pauses the agent."""
    if agent.pause > 0:
        agent.pause -= 1
        return
    dx, dy = rng.choice(DIRECTIONS)
    nx_, ny_ = agent.x + dx, agent.y + dy
    if not occupancy.in_bounds(nx_, ny_):
        return
    if occupancy.is_blocked(nx_, ny_):
        agent.pause = config.pause_time
    elif not occupancy.is_occupied(nx_, ny_):
        _relocate(agent, (nx_, ny_), occupancy)


def move_agent(agent: Agent, occupancy: Occupancy, config: GridConfig, rng: Random) -> None:
    """Apply the configured movement rule to one agent."""
    rule = config.movement_rule
    if rule == MovementRule.TRAP:
        _move_trap(agent, occupancy, config, rng)
    elif rule == MovementRule.STICKY:
        _move_sticky(agent, occupancy, config, rng)
    else:
        _move_free(agent, occupancy, rng)


def move_population(
    population: list[Agent], occupancy: Occupancy, config: GridConfig, rng: Random
) -> None:
    """Move every agent once, in a freshly shuffled order (in-place)."""
    order = list(population)
    rng.shuffle(order)
    for agent in order:
        move_agent(agent, occupancy, config, rng)


# ---------------------------------------------------------------------------
# Reproduction phase
# ---------------------------------------------------------------------------


def birth_probability(config: GridConfig, population_size: int, n_blocked: int) -> float:
    """Logistic term ``r * (1 - N / K)``; zero or negative at or above capacity."""
    return config.growth_rate * (1.0 - population_size / config.capacity(n_blocked))


def crowded_birth_probability(p_birth: float, crowding_alpha: float, n_local: int) -> float:
    """Damp the logistic term by ``exp(-alpha * n_local)`` for local crowding."""
    return p_birth * math.exp(-crowding_alpha * n_local)


def reproduce_population(
    population: list[Agent], occupancy: Occupancy, config: GridConfig, rng: Random
) -> list[Agent]:
    """Scan the moved population once and return this step's newborns.

    Newborns are marked on ``occupancy`` as they are created but are not
    added to ``population``.
    """
    p_birth = birth_probability(config, len(population), len(occupancy.blocked))
    gate = config.reproduction_gate
    # Crowding is read from the pre-birth grid, which holds exactly the moved population
    crowding = neighbor_count_field(occupancy.cells, config.crowding_radius)
    newborns: list[Agent] = []
    for agent in population:
        if agent.trap_timer > 0:
            continue
        if gate.needs_crossing and not agent.has_crossed:
            continue
        n_local = int(crowding[agent.x - 1, agent.y - 1])
        if gate.needs_mate and n_local == 0:
            continue
        p_local = crowded_birth_probability(p_birth, config.crowding_alpha, n_local)
        candidates = occupancy.free_neighbors(agent.x, agent.y)
        if candidates and rng.random() < p_local:
            x, y = rng.choice(candidates)
            occupancy.mark(x, y)
            newborns.append(Agent(x, y))
    return newborns


def step(
    population: list[Agent], occupancy: Occupancy, config: GridConfig, rng: Random
) -> list[Agent]:
    """Advance one step and return the new population (movers then newborns)."""
    move_population(population, occupancy, config, rng)
    newborns = reproduce_population(population, occupancy, config, rng)
    return [*population, *newborns]


# ---------------------------------------------------------------------------
# Stateful wrapper
# ---------------------------------------------------------------------------


@dataclass
class GridWorld:
    """Population, occupancy and config of one grid run."""

    config: GridConfig
    occupancy: Occupancy
    population: list[Agent]

    @classmethod
    def create(cls, config: GridConfig, rng: Random) -> GridWorld:
        population, occupancy = initialize(config, rng)
        return cls(config=config, occupancy=occupancy, population=population)

    @classmethod
    def from_positions(
        cls, config: GridConfig, positions: list[Cell], blocked: frozenset[Cell]
    ) -> GridWorld:
        """Build a world with a given blocked set and initial positions."""
        occupancy = Occupancy.empty(config.grid_size, blocked)
        return cls(
            config=config, occupancy=occupancy, population=place_agents(positions, occupancy)
        )

    @property
    def blocked_cells(self) -> frozenset[Cell]:
        return self.occupancy.blocked

    @property
    def carrying_capacity(self) -> int:
        return self.config.capacity(len(self.occupancy.blocked))

    def step(self, rng: Random) -> None:
        self.population = step(self.population, self.occupancy, self.config, rng)

    def positions(self) -> tuple[Cell, ...]:
        return tuple(agent.position for agent in self.population)
