"""
particleswarm - Particle Swarm Optimization
===========================================

A small, deterministic particle swarm optimizer for continuous
D-dimensional search spaces.

Example Usage:
    from particleswarm import ParticleWorld, StepSettings, himmelblau

    world = ParticleWorld[2](128, 5.0)
    for _ in range(100):
        world.step(himmelblau, StepSettings())

    score, position = world.best_solution()
"""

import logging

from .vector import Vector
from .particle import Particle
from .settings import StepSettings
from .world import ParticleWorld, DEFAULT_SEED, make_rng
from .objectives import Objective, OBJECTIVES, get_objective, himmelblau, sphere, rosenbrock, rastrigin
from .config import SwarmConfig, load_config, create_world

__version__ = "0.1.0"

__all__ = [
    # Core types
    "Vector",
    "Particle",
    "StepSettings",
    "ParticleWorld",
    "DEFAULT_SEED",
    "make_rng",

    # Objectives
    "Objective",
    "OBJECTIVES",
    "get_objective",
    "himmelblau",
    "sphere",
    "rosenbrock",
    "rastrigin",

    # Configuration
    "SwarmConfig",
    "load_config",
    "create_world",
    "configure_logging",
]


def configure_logging(level="INFO", format_string=None):
    """Configure logging for particleswarm components."""
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    logging.getLogger("particleswarm").setLevel(getattr(logging, level.upper()))
