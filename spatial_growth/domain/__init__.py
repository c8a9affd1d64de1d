"""Domain layer: agents, occupancy, obstacles and the three world models."""

from spatial_growth.domain.agents import Agent, Particle
from spatial_growth.domain.continuous_world import ContinuousWorld
from spatial_growth.domain.obstacles import generate_holes, resolve_blocked_cells
from spatial_growth.domain.occupancy import Occupancy, neighbor_count_field
from spatial_growth.domain.seam_world import SeamWorld
from spatial_growth.domain.stepper import GridWorld, initialize, step

__all__ = [
    "Agent",
    "ContinuousWorld",
    "GridWorld",
    "Occupancy",
    "Particle",
    "SeamWorld",
    "generate_holes",
    "initialize",
    "neighbor_count_field",
    "resolve_blocked_cells",
    "step",
]
