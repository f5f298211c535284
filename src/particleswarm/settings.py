"""Weights of the velocity update."""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict


@dataclass(frozen=True)
class StepSettings:
    """Weights applied by :meth:`ParticleWorld.step`.

    No range is enforced. Zero, negative and non-finite weights are all
    accepted and simply produce the corresponding (possibly degenerate) motion.
    """
    my_position_factor: float = 1.5     # cognitive
    swarm_position_factor: float = 1.5  # social
    inertia_factor: float = 0.7

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StepSettings":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown step settings: {', '.join(sorted(unknown))}")
        return cls(**{key: float(value) for key, value in data.items()})
