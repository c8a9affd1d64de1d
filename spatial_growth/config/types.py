"""Configuration dataclasses, rule enums and result containers.

All frozen dataclasses that parameterise the grid stepper, the seam automaton
and the continuous-space model live here. Every config validates itself in
``__post_init__`` and raises :class:`ConfigurationError` before any
simulation step can run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from spatial_growth.config.constants import (
    CONTINUOUS_DOMAIN_SIZE,
    CONTINUOUS_MAX_POPULATION,
    CONTINUOUS_REPRO_DISTANCE,
    CONTINUOUS_STEP_SIZE,
    CONTINUOUS_STEPS,
    CROWDING_ALPHA,
    CROWDING_RADIUS,
    GRID_SIZE,
    GROWTH_RATE,
    HOLE_RADIUS,
    INITIAL_POPULATION,
    NEWBORN_MAX_OFFSET,
    NUM_HOLES,
    NUM_STEPS,
    SEAM_GRID_SIZE,
    SEAM_POSITION,
    SEAM_STEPS,
    STICKY_PAUSE,
    TRAP_WAIT,
)

__all__ = [
    "ConfigurationError",
    "MovementRule",
    "ReproductionGate",
    "ObstacleLayout",
    "Hole",
    "GridConfig",
    "SeamConfig",
    "ContinuousConfig",
    "SimulationConfig",
    "SimulationResult",
]

Cell = tuple[int, int]


class ConfigurationError(ValueError):
    """Raised when a configuration cannot produce a valid simulation."""


# ---------------------------------------------------------------------------
# Rule enums
# ---------------------------------------------------------------------------


class MovementRule(Enum):
    """How an agent chooses its move during the movement phase."""

    FREE = "free"
    TRAP = "trap"
    STICKY = "sticky"


class ReproductionGate(Enum):
    """Preconditions an agent must satisfy before it may attempt a birth."""

    ASEXUAL = "asexual"
    SEXUAL = "sexual"
    CROSSING = "crossing"
    CROSSING_SEXUAL = "crossing_sexual"

    @property
    def needs_mate(self) -> bool:
        return self in (ReproductionGate.SEXUAL, ReproductionGate.CROSSING_SEXUAL)

    @property
    def needs_crossing(self) -> bool:
        return self in (ReproductionGate.CROSSING, ReproductionGate.CROSSING_SEXUAL)


# ---------------------------------------------------------------------------
# Obstacle descriptions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ObstacleLayout:
    """Square obstacle blocks placed by their top-left corner.

    Either ``corners`` lists the corners explicitly, or ``num_blocks`` corners
    are drawn at random (without replacement) when a run is initialized.
    """

    block_size: int = 1
    num_blocks: int = 0
    corners: tuple[Cell, ...] | None = None

    def __post_init__(self) -> None:
        if self.block_size < 1:
            raise ConfigurationError("block_size must be >= 1")
        if self.num_blocks < 0:
            raise ConfigurationError("num_blocks must be >= 0")
        if self.corners is not None and self.num_blocks:
            raise ConfigurationError("use either corners or num_blocks, not both")


@dataclass(frozen=True)
class Hole:
    """A circular region of the continuous plane that particles cannot enter."""

    x: float
    y: float
    radius: float

    def __post_init__(self) -> None:
        if self.radius <= 0.0:
            raise ConfigurationError("hole radius must be > 0")

    def contains(self, x: float, y: float) -> bool:
        return (self.x - x) ** 2 + (self.y - y) ** 2 < self.radius**2


def _validate_blocked_cells(cells: frozenset[Cell], grid_size: int) -> None:
    for x, y in cells:
        if not (1 <= x <= grid_size and 1 <= y <= grid_size):
            raise ConfigurationError(f"blocked cell {(x, y)} lies outside the grid")


# ---------------------------------------------------------------------------
# Model configs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GridConfig:
    """Runtime parameters for the discrete-grid logistic model."""

    grid_size: int = GRID_SIZE
    initial_population: int = INITIAL_POPULATION
    steps: int = NUM_STEPS
    growth_rate: float = GROWTH_RATE
    """Intrinsic growth rate ``r``."""
    crowding_radius: int = CROWDING_RADIUS
    """Manhattan radius used for both crowding counts and mate detection."""
    crowding_alpha: float = CROWDING_ALPHA
    movement_rule: MovementRule = MovementRule.FREE
    reproduction_gate: ReproductionGate = ReproductionGate.ASEXUAL
    trap_wait: int = TRAP_WAIT
    pause_time: int = STICKY_PAUSE
    obstacles: ObstacleLayout | None = None
    blocked_cells: frozenset[Cell] = field(default_factory=frozenset)
    carrying_capacity: int | None = None
    """Override for K; defaults to the number of unblocked cells."""

    def __post_init__(self) -> None:
        if self.grid_size < 1:
            raise ConfigurationError("grid_size must be >= 1")
        if self.initial_population < 1:
            raise ConfigurationError("initial_population must be >= 1")
        if self.initial_population > self.grid_size**2:
            raise ConfigurationError("initial_population cannot exceed grid cells")
        if self.steps < 1:
            raise ConfigurationError("steps must be >= 1")
        if self.growth_rate < 0.0:
            raise ConfigurationError("growth_rate must be >= 0")
        if self.crowding_radius < 0:
            raise ConfigurationError("crowding_radius must be >= 0")
        if self.crowding_alpha < 0.0:
            raise ConfigurationError("crowding_alpha must be >= 0")
        if self.trap_wait < 1:
            raise ConfigurationError("trap_wait must be >= 1")
        if self.pause_time < 0:
            raise ConfigurationError("pause_time must be >= 0")
        if self.carrying_capacity is not None and self.carrying_capacity < 1:
            raise ConfigurationError("carrying_capacity must be >= 1")
        if self.obstacles is not None and self.obstacles.block_size > self.grid_size:
            raise ConfigurationError("block_size cannot exceed grid_size")
        _validate_blocked_cells(self.blocked_cells, self.grid_size)

    def capacity(self, n_blocked: int) -> int:
        """Carrying capacity K for a grid with ``n_blocked`` blocked cells."""
        if self.carrying_capacity is not None:
            return self.carrying_capacity
        return self.grid_size**2 - n_blocked


@dataclass(frozen=True)
class SeamConfig:
    """Runtime parameters for the seam-triggered cellular automaton."""

    grid_size: int = SEAM_GRID_SIZE
    initial_population: int = INITIAL_POPULATION
    steps: int = SEAM_STEPS
    seam: int = SEAM_POSITION
    """Crossing between row/column ``seam`` and ``seam + 1`` triggers a birth."""
    jump_radius: int = 1
    """1 uses the four axis neighbours; larger values use the full square."""
    max_population: int | None = None
    """Hard ceiling; defaults to the number of unblocked cells."""
    obstacles: ObstacleLayout | None = None
    blocked_cells: frozenset[Cell] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.grid_size < 2:
            raise ConfigurationError("grid_size must be >= 2")
        if self.initial_population < 1:
            raise ConfigurationError("initial_population must be >= 1")
        if self.initial_population > self.grid_size**2:
            raise ConfigurationError("initial_population cannot exceed grid cells")
        if self.steps < 1:
            raise ConfigurationError("steps must be >= 1")
        if not 1 <= self.seam < self.grid_size:
            raise ConfigurationError("seam must be in [1, grid_size - 1]")
        if self.jump_radius < 1:
            raise ConfigurationError("jump_radius must be >= 1")
        if self.max_population is not None and self.max_population < self.initial_population:
            raise ConfigurationError("max_population must be >= initial_population")
        if self.obstacles is not None and self.obstacles.block_size > self.grid_size:
            raise ConfigurationError("block_size cannot exceed grid_size")
        _validate_blocked_cells(self.blocked_cells, self.grid_size)

    def ceiling(self, n_blocked: int) -> int:
        if self.max_population is not None:
            return self.max_population
        return self.grid_size**2 - n_blocked


@dataclass(frozen=True)
class ContinuousConfig:
    """Runtime parameters for the continuous torus with circular holes."""

    domain_size: float = CONTINUOUS_DOMAIN_SIZE
    initial_population: int = INITIAL_POPULATION
    steps: int = CONTINUOUS_STEPS
    step_size: float = CONTINUOUS_STEP_SIZE
    repro_distance: float = CONTINUOUS_REPRO_DISTANCE
    max_population: int = CONTINUOUS_MAX_POPULATION
    num_holes: int = NUM_HOLES
    hole_radius: float = HOLE_RADIUS
    newborn_max_offset: float = NEWBORN_MAX_OFFSET
    holes: tuple[Hole, ...] | None = None
    """Explicit holes; when set, ``num_holes``/``hole_radius`` are ignored."""

    def __post_init__(self) -> None:
        if self.domain_size <= 0.0:
            raise ConfigurationError("domain_size must be > 0")
        if self.initial_population < 1:
            raise ConfigurationError("initial_population must be >= 1")
        if self.steps < 1:
            raise ConfigurationError("steps must be >= 1")
        if self.step_size < 0.0:
            raise ConfigurationError("step_size must be >= 0")
        if self.repro_distance < 0.0:
            raise ConfigurationError("repro_distance must be >= 0")
        if self.max_population < self.initial_population:
            raise ConfigurationError("max_population must be >= initial_population")
        if self.num_holes < 0:
            raise ConfigurationError("num_holes must be >= 0")
        if self.num_holes > 0 and self.hole_radius <= 0.0:
            raise ConfigurationError("hole_radius must be > 0")
        if self.newborn_max_offset < 0.0:
            raise ConfigurationError("newborn_max_offset must be >= 0")


SimulationConfig = GridConfig | SeamConfig | ContinuousConfig


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SimulationResult:
    """Data products of one run: population counts and per-step positions."""

    run_id: str
    seed: int
    initial_population: int
    history: tuple[int, ...]
    """Population size after each completed step."""
    snapshots: tuple[tuple[tuple[float, float], ...], ...]
    """Agent positions after each completed step."""
    blocked_cells: frozenset[Cell] = frozenset()
    holes: tuple[Hole, ...] = ()

    @property
    def final_population(self) -> int:
        return self.history[-1] if self.history else self.initial_population
