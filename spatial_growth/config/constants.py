"""Centralized defaults for the spatial growth models.

Values match the parameter sets the models are usually explored with.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

GRID_SIZE = 28
"""Default grid side length in cells."""

INITIAL_POPULATION = 10
"""Default number of agents placed before the first step."""

NUM_STEPS = 300
"""Default number of simulation steps."""

GROWTH_RATE = 0.4
"""Default intrinsic growth rate ``r`` of the logistic birth term."""

CROWDING_RADIUS = 2
"""Default Manhattan radius for crowding and mate detection."""

CROWDING_ALPHA = 0.1
"""Default crowding strength in ``exp(-alpha * n_local)``."""

TRAP_WAIT = 5
"""Total non-moving steps an agent spends in a trap."""

STICKY_PAUSE = 1
"""Steps an agent pauses after trying to step into a blocked cell."""

DEFAULT_SEED = 1234
"""Default master seed for a run."""

DIRECTIONS: tuple[tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))
"""Von Neumann step offsets, in the order neighbor queries report them."""

SEAM_GRID_SIZE = 10
"""Default grid side length for the seam automaton."""

SEAM_POSITION = 5
"""Default seam: the boundary between rows/columns 5 and 6."""

SEAM_STEPS = 100
"""Default number of seam-automaton steps."""

CONTINUOUS_DOMAIN_SIZE = 100.0
"""Default side length of the continuous torus."""

CONTINUOUS_STEPS = 500
"""Default number of continuous-space steps."""

CONTINUOUS_STEP_SIZE = 2.0
"""Distance a particle travels per step."""

CONTINUOUS_REPRO_DISTANCE = 1.0
"""Pairs closer than this reproduce."""

CONTINUOUS_MAX_POPULATION = 200
"""Default population ceiling for the continuous model."""

NEWBORN_MAX_OFFSET = 1.5
"""Largest distance between a newborn particle and its parent."""

NUM_HOLES = 10
"""Default number of circular holes in the continuous model."""

HOLE_RADIUS = 10.0
"""Default radius of each circular hole."""

MAX_SAMPLING_ATTEMPTS = 100_000
"""Rejection-sampling cap for hole and particle placement."""

FLUSH_THRESHOLD = 8_192
"""Flush snapshot rows to Parquet once this in-memory row count is reached."""
