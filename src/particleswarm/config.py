"""
Configuration management for particleswarm runs.
"""

import os
import yaml
import logging
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, asdict, fields, replace
from pathlib import Path

from .objectives import get_objective
from .settings import StepSettings
from .world import ParticleWorld, make_rng


logger = logging.getLogger(__name__)


@dataclass
class SwarmConfig:
    """Configuration of a swarm run."""

    # Swarm shape
    dimension: int = 2
    particle_count: int = 128
    distribution: float = 5.0
    seed: Optional[int] = None  # None uses ParticleWorld.DEFAULT_SEED

    # Run
    objective: str = "himmelblau"
    steps: int = 100
    report_every: int = 10

    step_settings: StepSettings = field(default_factory=StepSettings)

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING"))

    def __post_init__(self):
        if isinstance(self.step_settings, dict):
            self.step_settings = StepSettings.from_dict(self.step_settings)
        self._validate()

    def _validate(self):
        """Validate configuration settings."""
        if self.dimension < 1:
            raise ValueError("dimension must be at least 1")

        if self.particle_count < 0:
            raise ValueError("particle_count must not be negative")

        if self.steps < 0:
            raise ValueError("steps must not be negative")

        if self.report_every < 1:
            raise ValueError("report_every must be positive")

        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise ValueError(f"Unknown log level {self.log_level!r}")

        if self.distribution < 0:
            logger.warning(
                "Negative spawn distribution %s; particles spawn in [%s, %s]",
                self.distribution, self.distribution, -self.distribution,
            )

        objective = get_objective(self.objective)
        if not objective.supports(self.dimension):
            raise ValueError(
                f"Objective {objective.name!r} needs dimension {objective.dimension}, "
                f"configured dimension is {self.dimension}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SwarmConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "SwarmConfig":
        """Load configuration from YAML file."""
        config_path = Path(config_path)

        if not config_path.exists():
            logger.warning(f"Config file {config_path} not found, using defaults")
            return cls()

        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)

        if not config_data:
            logger.warning("Empty config file, using defaults")
            return cls()

        if not isinstance(config_data, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")

        logger.info(f"Loaded configuration from {config_path}")
        return cls.from_dict(config_data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def to_file(self, config_path: Union[str, Path]):
        """Save configuration to YAML file."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, indent=2, sort_keys=False)

        logger.info(f"Configuration saved to {config_path}")

    def update_from_env(self):
        """Update configuration from environment variables."""
        env_mappings = {
            "PARTICLESWARM_DIMENSION": ("dimension", int),
            "PARTICLESWARM_PARTICLES": ("particle_count", int),
            "PARTICLESWARM_DISTRIBUTION": ("distribution", float),
            "PARTICLESWARM_STEPS": ("steps", int),
            "PARTICLESWARM_OBJECTIVE": ("objective", str),
            "PARTICLESWARM_SEED": ("seed", lambda x: int(x, 0)),
            "PARTICLESWARM_INERTIA": ("step_settings.inertia_factor", float),
            "PARTICLESWARM_MY_FACTOR": ("step_settings.my_position_factor", float),
            "PARTICLESWARM_SWARM_FACTOR": ("step_settings.swarm_position_factor", float),
        }

        updates = {}
        for env_var, (attr_path, converter) in env_mappings.items():
            value = os.getenv(env_var)
            if value is None:
                continue
            try:
                updates[env_var] = (attr_path, converter(value))
            except ValueError as e:
                logger.error(f"Ignoring {env_var}={value!r}: {e}")

        if not updates:
            return

        # Overrides may only be valid together (e.g. dimension with objective)
        try:
            candidate = self._updated(updates.values())
        except (ValueError, KeyError):
            candidate = self
            for env_var, update in updates.items():
                try:
                    candidate = candidate._updated([update])
                except (ValueError, KeyError) as e:
                    logger.error(f"Ignoring {env_var}={update[1]!r}: {e}")

        for f in fields(self):
            setattr(self, f.name, getattr(candidate, f.name))
        logger.info(f"Applied environment overrides from {', '.join(updates)}")

    def _updated(self, updates) -> "SwarmConfig":
        """Return a validated copy with ``(attr_path, value)`` pairs applied."""
        values = {}
        settings = {}
        for attr_path, value in updates:
            if "." in attr_path:
                # StepSettings is frozen, so nested values replace the whole object
                settings[attr_path.split(".", 1)[1]] = value
            else:
                values[attr_path] = value
        if settings:
            values["step_settings"] = replace(self.step_settings, **settings)
        return replace(self, **values)


def load_config(config_path: Optional[Union[str, Path]] = None) -> SwarmConfig:
    """
    Load configuration from file or environment.

    Args:
        config_path: Path to configuration file (optional)

    Returns:
        Loaded configuration object
    """
    if config_path:
        config = SwarmConfig.from_file(config_path)
    else:
        # Look for config file in standard locations
        possible_paths = [
            "swarm.yaml",
            "config/swarm.yaml",
            os.path.expanduser("~/.particleswarm/swarm.yaml"),
        ]

        config = None
        for path in possible_paths:
            if os.path.exists(path):
                config = SwarmConfig.from_file(path)
                break

        if config is None:
            config = SwarmConfig()

    config.update_from_env()

    return config


def create_world(config: SwarmConfig) -> ParticleWorld:
    """Build the swarm described by ``config``."""
    rng = None if config.seed is None else make_rng(config.seed)
    return ParticleWorld[config.dimension](config.particle_count, config.distribution, rng=rng)
