"""Agent records for the grid and continuous models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class Agent:
    """A single agent on the grid.

    Identity-compared: two agents never share a cell, but crowding counts
    exclude an agent by identity rather than by position.
    """

    x: int
    y: int
    trap_timer: int = 0
    was_trapped: bool = False
    pause: int = 0
    crossed_lr: bool = False
    crossed_rl: bool = False
    crossed_tb: bool = False
    crossed_bt: bool = False

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def has_crossed(self) -> bool:
        """True once any midline crossing has been recorded."""
        return self.crossed_lr or self.crossed_rl or self.crossed_tb or self.crossed_bt

    def record_crossings(self, prev_x: int, prev_y: int, midline: int) -> None:
        """Raise crossing flags for a move from ``(prev_x, prev_y)``. Flags never reset."""
        if prev_x <= midline < self.x:
            self.crossed_lr = True
        if self.x <= midline < prev_x:
            self.crossed_rl = True
        if prev_y <= midline < self.y:
            self.crossed_tb = True
        if self.y <= midline < prev_y:
            self.crossed_bt = True


@dataclass(eq=False)
class Particle:
    """A single agent in continuous space."""

    x: float
    y: float

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)
