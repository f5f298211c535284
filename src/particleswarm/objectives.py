"""Benchmark objective functions.

Every objective maps a position to a single precision score, lower is better.
Objectives handed to :meth:`ParticleWorld.step` must be pure: no side effects
and no dependence on call order.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Union

import numpy as np

from .vector import Vector

Position = Union[Vector, Sequence[float], np.ndarray]


def _components(position: Position) -> np.ndarray:
    if isinstance(position, Vector):
        return position.to_numpy()
    return np.asarray(position, dtype=np.float32)


def himmelblau(position: Position) -> float:
    """Himmelblau's function, ``(x^2 + y - 11)^2 + (x + y^2 - 7)^2``.

    Two dimensional, four global minima of value 0, e.g. at (3, 2).
    """
    x, y = _components(position)
    return float((x * x + y - np.float32(11.0)) ** 2 + (x + y * y - np.float32(7.0)) ** 2)


def sphere(position: Position) -> float:
    x = _components(position)
    return float(np.sum(x * x))


def rosenbrock(position: Position) -> float:
    """Rosenbrock valley; minimum 0 at (1, ..., 1)."""
    x = _components(position)
    head, tail = x[:-1], x[1:]
    return float(np.sum(np.float32(100.0) * (tail - head * head) ** 2 + (np.float32(1.0) - head) ** 2))


def rastrigin(position: Position) -> float:
    """Rastrigin function; highly multimodal, minimum 0 at the origin."""
    x = _components(position)
    a = np.float32(10.0)
    return float(a * x.size + np.sum(x * x - a * np.cos(np.float32(2.0 * np.pi) * x)))


@dataclass(frozen=True)
class Objective:
    """A named benchmark function."""
    name: str
    function: Callable[[Position], float]
    dimension: Optional[int] = None  # None means any dimension
    description: str = ""

    def __call__(self, position: Position) -> float:
        return self.function(position)

    def supports(self, dimension: int) -> bool:
        return self.dimension is None or self.dimension == dimension


OBJECTIVES: Dict[str, Objective] = {
    objective.name: objective
    for objective in (
        Objective("himmelblau", himmelblau, 2, "Four global minima of 0, e.g. at (3, 2)"),
        Objective("sphere", sphere, None, "Sum of squares, minimum 0 at the origin"),
        Objective("rosenbrock", rosenbrock, None, "Curved valley, minimum 0 at (1, ..., 1)"),
        Objective("rastrigin", rastrigin, None, "Multimodal, minimum 0 at the origin"),
    )
}


def get_objective(name: str) -> Objective:
    try:
        return OBJECTIVES[name]
    except KeyError:
        raise KeyError(
            f"Unknown objective {name!r}; available: {', '.join(sorted(OBJECTIVES))}"
        ) from None
