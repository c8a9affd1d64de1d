"""Continuous-space population on a torus with circular holes.

Particles take fixed-length steps in uniformly random directions; a step
whose (wrapped) destination falls inside a hole is rejected and the particle
stays put. Any pair of particles closer than ``repro_distance`` produces one
newborn near a randomly chosen parent, up to a global population ceiling.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from random import Random

import numpy as np

from spatial_growth.config.constants import MAX_SAMPLING_ATTEMPTS
from spatial_growth.config.types import ConfigurationError, ContinuousConfig, Hole
from spatial_growth.domain.agents import Particle
from spatial_growth.domain.obstacles import generate_holes, in_any_hole

TWO_PI = 2.0 * math.pi


def wrap(value: float, domain_size: float) -> float:
    """Map ``value`` onto ``[0, domain_size)``."""
    wrapped = value % domain_size
    # Tiny negative inputs round up to exactly domain_size
    return 0.0 if wrapped >= domain_size else wrapped


def close_pairs(particles: list[Particle], threshold: float) -> list[tuple[int, int]]:
    """Index pairs ``(i, j)``, ``i < j``, closer than ``threshold`` (plain Euclidean).

    Pairs are returned in lexicographic order.
    """
    if len(particles) < 2:
        return []
    pos = np.array([p.position for p in particles], dtype=np.float64)
    diff = pos[:, None, :] - pos[None, :, :]
    dist_sq = (diff**2).sum(axis=-1)
    mask = np.triu(dist_sq < threshold**2, k=1)
    return [(int(i), int(j)) for i, j in np.argwhere(mask)]


@dataclass
class ContinuousWorld:
    """Particles, holes and config of one continuous-space run."""

    config: ContinuousConfig
    holes: tuple[Hole, ...]
    population: list[Particle]

    @classmethod
    def create(cls, config: ContinuousConfig, rng: Random) -> ContinuousWorld:
        if config.holes is not None:
            holes = config.holes
        else:
            holes = generate_holes(config.num_holes, config.hole_radius, config.domain_size, rng)
        population: list[Particle] = []
        attempts = 0
        while len(population) < config.initial_population:
            attempts += 1
            if attempts > MAX_SAMPLING_ATTEMPTS:
                raise ConfigurationError("could not place initial particles outside the holes")
            x = rng.random() * config.domain_size
            y = rng.random() * config.domain_size
            if not in_any_hole(x, y, holes):
                population.append(Particle(x, y))
        return cls(config=config, holes=holes, population=population)

    def _move(self, rng: Random) -> None:
        size = self.config.domain_size
        for particle in self.population:
            theta = rng.random() * TWO_PI
            x_new = wrap(particle.x + self.config.step_size * math.cos(theta), size)
            y_new = wrap(particle.y + self.config.step_size * math.sin(theta), size)
            if not in_any_hole(x_new, y_new, self.holes):
                particle.x, particle.y = x_new, y_new

    def _reproduce(self, rng: Random) -> list[Particle]:
        size = self.config.domain_size
        n = len(self.population)
        newborns: list[Particle] = []
        for i, j in close_pairs(self.population, self.config.repro_distance):
            if n + len(newborns) >= self.config.max_population:
                break
            angle = rng.random() * TWO_PI
            offset = rng.random() * self.config.newborn_max_offset
            parent = self.population[i] if rng.random() < 0.5 else self.population[j]
            x_new = wrap(parent.x + offset * math.cos(angle), size)
            y_new = wrap(parent.y + offset * math.sin(angle), size)
            if not in_any_hole(x_new, y_new, self.holes):
                newborns.append(Particle(x_new, y_new))
        return newborns

    def step(self, rng: Random) -> None:
        self._move(rng)
        self.population.extend(self._reproduce(rng))

    def positions(self) -> tuple[tuple[float, float], ...]:
        return tuple(p.position for p in self.population)
