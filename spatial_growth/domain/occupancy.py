"""Occupancy grid for the discrete models.

Cells are addressed with 1-based ``(x, y)`` coordinates in ``[1, L] x [1, L]``.
Invariant: a cell is marked iff exactly one agent sits on it. Blocked cells
live in a separate frozen set and are never marked.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from spatial_growth.config.constants import DIRECTIONS

Cell = tuple[int, int]


@dataclass
class Occupancy:
    """Boolean ``L x L`` occupancy plus the run's fixed blocked set."""

    grid_size: int
    blocked: frozenset[Cell]
    cells: np.ndarray  # bool, shape (L, L), indexed [x - 1, y - 1]

    @classmethod
    def empty(cls, grid_size: int, blocked: frozenset[Cell] = frozenset()) -> Occupancy:
        return cls(
            grid_size=grid_size,
            blocked=frozenset(blocked),
            cells=np.zeros((grid_size, grid_size), dtype=bool),
        )

    def in_bounds(self, x: int, y: int) -> bool:
        return 1 <= x <= self.grid_size and 1 <= y <= self.grid_size

    def is_blocked(self, x: int, y: int) -> bool:
        return (x, y) in self.blocked

    def is_occupied(self, x: int, y: int) -> bool:
        return bool(self.cells[x - 1, y - 1])

    def is_free(self, x: int, y: int) -> bool:
        """In bounds, unblocked and unoccupied."""
        return self.in_bounds(x, y) and (x, y) not in self.blocked and not self.cells[x - 1, y - 1]

    def mark(self, x: int, y: int) -> None:
        if not self.is_free(x, y):
            raise ValueError(f"cell {(x, y)} is not free")
        self.cells[x - 1, y - 1] = True

    def clear(self, x: int, y: int) -> None:
        self.cells[x - 1, y - 1] = False

    def relocate(self, src: Cell, dst: Cell) -> None:
        """Vacate ``src`` and mark ``dst``; ``dst`` must be free."""
        self.clear(*src)
        self.mark(*dst)

    def free_neighbors(
        self, x: int, y: int, offsets: tuple[Cell, ...] = DIRECTIONS
    ) -> list[Cell]:
        """Return free cells at ``offsets`` from ``(x, y)``, in offset order."""
        return [(x + dx, y + dy) for dx, dy in offsets if self.is_free(x + dx, y + dy)]

    def touches_blocked(self, x: int, y: int) -> bool:
        """True if any in-bounds axis neighbour of ``(x, y)`` is blocked."""
        for dx, dy in DIRECTIONS:
            nx_, ny_ = x + dx, y + dy
            if self.in_bounds(nx_, ny_) and (nx_, ny_) in self.blocked:
                return True
        return False

    def free_cells(self) -> list[Cell]:
        """All unblocked, unoccupied cells in row-major ``(x, y)`` order."""
        return [
            (x, y)
            for x in range(1, self.grid_size + 1)
            for y in range(1, self.grid_size + 1)
            if (x, y) not in self.blocked and not self.cells[x - 1, y - 1]
        ]

    def occupied_cells(self) -> set[Cell]:
        return {(int(i) + 1, int(j) + 1) for i, j in np.argwhere(self.cells)}

    @property
    def n_occupied(self) -> int:
        return int(self.cells.sum())


def manhattan_offsets(radius: int) -> list[Cell]:
    """Offsets within Manhattan distance ``radius`` of the origin, origin excluded.

    Iterates only the diamond, not the enclosing square.
    """
    offsets: list[Cell] = []
    for dx in range(-radius, radius + 1):
        y_radius = radius - abs(dx)
        for dy in range(-y_radius, y_radius + 1):
            if dx == 0 and dy == 0:
                continue
            offsets.append((dx, dy))
    return offsets


def neighbor_count_field(cells: np.ndarray, radius: int) -> np.ndarray:
    """Count marked cells within Manhattan ``radius`` of every cell, excluding itself.

    Non-toroidal: cells beyond the edge count as empty. Reading the field at an
    agent's own cell gives the number of *other* agents around it.
    """
    size_x, size_y = cells.shape
    padded = np.zeros((size_x + 2 * radius, size_y + 2 * radius), dtype=np.int32)
    padded[radius : radius + size_x, radius : radius + size_y] = cells
    field = np.zeros((size_x, size_y), dtype=np.int32)
    for dx, dy in manhattan_offsets(radius):
        field += padded[radius + dx : radius + dx + size_x, radius + dy : radius + dy + size_y]
    return field
