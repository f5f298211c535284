"""The particle swarm and its update rule."""

import logging
import math
from typing import Callable, List, Optional, Tuple

import numpy as np

from .particle import Particle
from .settings import StepSettings
from .vector import Dimensioned, Vector

logger = logging.getLogger(__name__)

DEFAULT_SEED = 0xCAFEF00DD15EA5E5

Scorer = Callable[[Vector], float]


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Return the PCG64 stream used to seed swarms (``DEFAULT_SEED`` unless given)."""
    return np.random.Generator(np.random.PCG64(DEFAULT_SEED if seed is None else seed))


def _as_score(value) -> float:
    # Scores are single precision; NaN stays NaN and never compares lower.
    return float(np.float32(value))


class ParticleWorld(Dimensioned):
    """A swarm of ``Particle[D]`` and the best solution found so far.

    Use ``ParticleWorld[D](particle_count, distribution)``. The swarm is drawn
    from a single generator, one particle after another and one coordinate
    after another, so the same arguments always give the same swarm. Pass
    ``rng`` to draw from a different stream.

    The world has one owner and is not safe to step from several threads.
    """

    DEFAULT_SEED = DEFAULT_SEED

    def __init__(
        self,
        particle_count: int,
        distribution: float,
        rng: Optional[np.random.Generator] = None,
    ):
        dimension = self._require_dimension()
        if rng is None:
            rng = make_rng()

        particle_type = Particle[dimension]
        self.particles: List[Particle] = [
            particle_type.spawn(rng, distribution) for _ in range(particle_count)
        ]
        self._global_best_position = Vector[dimension].zeros()
        self._global_best_score = math.inf
        self.steps_taken = 0

        logger.info(
            "Created %s with %d particles, spawn distribution %s",
            type(self).__name__, particle_count, distribution,
        )

    def __len__(self) -> int:
        return len(self.particles)

    @property
    def global_best_position(self) -> Vector:
        return self._global_best_position

    @property
    def global_best_score(self) -> float:
        return self._global_best_score

    def step(self, scorer: Scorer, settings: Optional[StepSettings] = None):
        """Move every particle once, in order, and update the bests.

        For each particle: advance the position by the speed, score it, record
        a strictly better personal best (and then, if it also beats the swarm,
        the global best), and recompute the speed from the updated bests.

        A global best found by one particle already attracts the particles
        after it in the same sweep.

        ``scorer`` must be side-effect free. A NaN score never counts as an
        improvement.
        """
        if settings is None:
            settings = StepSettings()

        for particle in self.particles:
            particle.position = particle.position + particle.speed
            score = _as_score(scorer(particle.position))

            if score < particle.best_score:
                particle.best_position = particle.position
                particle.best_score = score
                if score < self._global_best_score:
                    self._global_best_position = particle.position
                    self._global_best_score = score

            particle.speed = (
                particle.speed * settings.inertia_factor
                + (particle.best_position - particle.position) * settings.my_position_factor
                + (self._global_best_position - particle.position) * settings.swarm_position_factor
            )

        self.steps_taken += 1
        logger.debug(
            "Step %d: best score %s at %r",
            self.steps_taken, self._global_best_score, self._global_best_position,
        )

    def best_solution(self) -> Tuple[float, Vector]:
        """Return ``(score, position)`` of the best point seen by the swarm."""
        return self._global_best_score, self._global_best_position

    def positions(self) -> np.ndarray:
        """Current particle positions as an ``(n, D)`` array, in particle order."""
        dimension = self._require_dimension()
        if not self.particles:
            return np.zeros((0, dimension), dtype=np.float32)
        return np.stack([p.position.to_numpy() for p in self.particles])

    def centroid(self) -> Vector:
        """Mean particle position; the zero vector for an empty swarm."""
        vector_type = Vector[self._require_dimension()]
        if not self.particles:
            return vector_type.zeros()
        return vector_type.from_iterable(self.positions().mean(axis=0))
