"""Obstacle generation: square blocked-cell layouts and circular holes.

Blocked sets and holes are built once, before the first step, from the run's
own ``Random`` so a whole run stays reproducible from a single seed.
"""

from __future__ import annotations

from random import Random

from spatial_growth.config.constants import MAX_SAMPLING_ATTEMPTS
from spatial_growth.config.types import ConfigurationError, Hole, ObstacleLayout

Cell = tuple[int, int]


def block_corners(grid_size: int, block_size: int, num_blocks: int, rng: Random) -> list[Cell]:
    """Draw ``num_blocks`` distinct top-left corners for ``block_size`` squares."""
    span = grid_size - block_size + 1
    candidates = [(x, y) for y in range(1, span + 1) for x in range(1, span + 1)]
    if num_blocks > len(candidates):
        raise ConfigurationError(
            f"num_blocks={num_blocks} exceeds the {len(candidates)} possible block corners"
        )
    rng.shuffle(candidates)
    return candidates[:num_blocks]


def expand_blocks(
    corners: list[Cell] | tuple[Cell, ...], block_size: int, grid_size: int
) -> set[Cell]:
    """Expand block corners into the cells they cover, clipped to the grid."""
    cells: set[Cell] = set()
    for bx, by in corners:
        for dx in range(block_size):
            for dy in range(block_size):
                x, y = bx + dx, by + dy
                if 1 <= x <= grid_size and 1 <= y <= grid_size:
                    cells.add((x, y))
    return cells


def resolve_blocked_cells(
    grid_size: int,
    layout: ObstacleLayout | None,
    explicit: frozenset[Cell],
    rng: Random,
) -> frozenset[Cell]:
    """Combine explicit blocked cells with an obstacle layout into one frozen set."""
    cells = set(explicit)
    if layout is not None:
        if layout.corners is not None:
            corners: list[Cell] | tuple[Cell, ...] = layout.corners
        else:
            corners = block_corners(grid_size, layout.block_size, layout.num_blocks, rng)
        cells |= expand_blocks(corners, layout.block_size, grid_size)
    return frozenset(cells)


def generate_holes(
    num_holes: int, radius: float, domain_size: float, rng: Random
) -> tuple[Hole, ...]:
    """Rejection-sample non-overlapping holes (centres more than two radii apart)."""
    holes: list[Hole] = []
    attempts = 0
    min_sq = (2.0 * radius) ** 2
    while len(holes) < num_holes:
        attempts += 1
        if attempts > MAX_SAMPLING_ATTEMPTS:
            raise ConfigurationError(
                f"could not place {num_holes} holes of radius {radius} "
                f"in a domain of size {domain_size}"
            )
        x, y = rng.random() * domain_size, rng.random() * domain_size
        if all((h.x - x) ** 2 + (h.y - y) ** 2 > min_sq for h in holes):
            holes.append(Hole(x=x, y=y, radius=radius))
    return tuple(holes)


def in_any_hole(x: float, y: float, holes: tuple[Hole, ...]) -> bool:
    return any(hole.contains(x, y) for hole in holes)
