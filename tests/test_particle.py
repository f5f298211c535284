"""
Tests for particle construction.
"""

import math

import pytest

from particleswarm.particle import Particle
from particleswarm.vector import Vector
from particleswarm.world import make_rng


class ScriptedRng:
    """Stand-in generator returning scripted uniform draws."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def uniform(self, low, high):
        self.calls.append((low, high))
        return self.values.pop(0)


class TestParticleSpawn:
    """Tests for Particle.spawn."""

    def test_initial_state(self):
        particle = Particle[2].spawn(make_rng(), 5.0)

        assert particle.speed == Vector[2].zeros()
        assert particle.best_position == Vector[2].zeros()
        assert math.isinf(particle.best_score) and particle.best_score > 0

    def test_draws_one_value_per_coordinate_in_order(self):
        rng = ScriptedRng([0.25, -1.5, 2.0])

        particle = Particle[3].spawn(rng, 2.0)

        assert list(particle.position) == [0.25, -1.5, 2.0]
        assert rng.calls == [(-2.0, 2.0)] * 3

    def test_coordinates_within_distribution(self):
        rng = make_rng()
        for _ in range(200):
            particle = Particle[3].spawn(rng, 2.5)
            assert all(-2.5 <= c <= 2.5 for c in particle.position)

    def test_zero_distribution_spawns_at_origin(self):
        particle = Particle[2].spawn(make_rng(), 0.0)
        assert particle.position == Vector[2].zeros()


class TestParticleTypes:
    """Tests for dimension checks on particles."""

    def test_rejects_vectors_of_other_dimension(self):
        with pytest.raises(TypeError):
            Particle[2](
                position=Vector[3].zeros(),
                speed=Vector[2].zeros(),
                best_position=Vector[2].zeros(),
            )

    def test_unspecialized_particle(self):
        with pytest.raises(TypeError):
            Particle.spawn(make_rng(), 1.0)
