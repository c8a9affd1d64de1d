"""Configuration layer: default constants and typed config dataclasses."""

from spatial_growth.config.constants import (
    CROWDING_ALPHA,
    CROWDING_RADIUS,
    DEFAULT_SEED,
    DIRECTIONS,
    FLUSH_THRESHOLD,
    GRID_SIZE,
    GROWTH_RATE,
    INITIAL_POPULATION,
    NUM_STEPS,
    TRAP_WAIT,
)
from spatial_growth.config.types import (
    ConfigurationError,
    ContinuousConfig,
    GridConfig,
    Hole,
    MovementRule,
    ObstacleLayout,
    ReproductionGate,
    SeamConfig,
    SimulationConfig,
    SimulationResult,
)

__all__ = [
    "CROWDING_ALPHA",
    "CROWDING_RADIUS",
    "ConfigurationError",
    "ContinuousConfig",
    "DEFAULT_SEED",
    "DIRECTIONS",
    "FLUSH_THRESHOLD",
    "GRID_SIZE",
    "GROWTH_RATE",
    "GridConfig",
    "Hole",
    "INITIAL_POPULATION",
    "MovementRule",
    "NUM_STEPS",
    "ObstacleLayout",
    "ReproductionGate",
    "SeamConfig",
    "SimulationConfig",
    "SimulationResult",
    "TRAP_WAIT",
]
