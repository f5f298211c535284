"""Particle state for the swarm."""

import math
from dataclasses import dataclass

import numpy as np

from .vector import Dimensioned, Vector


@dataclass
class Particle(Dimensioned):
    """One candidate solution and the best place it has been.

    ``best_score`` is the score observed at ``best_position``. Before the
    first evaluation it is ``+inf`` and ``best_position`` is the zero vector.
    """

    position: Vector
    speed: Vector
    best_position: Vector
    best_score: float = math.inf

    def __post_init__(self):
        vector_type = Vector[self._require_dimension()]
        for name in ("position", "speed", "best_position"):
            value = getattr(self, name)
            if type(value) is not vector_type:
                raise TypeError(
                    f"{type(self).__name__}.{name} must be {vector_type.__name__}, "
                    f"got {type(value).__name__}"
                )

    @classmethod
    def spawn(cls, rng: np.random.Generator, distribution: float) -> "Particle":
        """Create a particle at a uniformly random point of ``[-distribution, distribution]^D``.

        Coordinates are drawn from ``rng`` one after another in index order.
        """
        vector_type = Vector[cls._require_dimension()]
        # uniform() samples [-r, r); rounding to float32 may land on r, which closes the interval
        position = vector_type.from_fn(lambda _: rng.uniform(-distribution, distribution))
        return cls(
            position=position,
            speed=vector_type.zeros(),
            best_position=vector_type.zeros(),
            best_score=math.inf,
        )
