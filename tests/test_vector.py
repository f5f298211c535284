"""
Tests for fixed-dimension vectors.
"""

import pytest
import numpy as np

from particleswarm.vector import Vector


class TestVectorTypes:
    """Tests for dimension specialization."""

    def test_specialization_is_cached(self):
        """The same dimension always gives the same class."""
        assert Vector[2] is Vector[2]
        assert Vector[2] is not Vector[3]
        assert Vector[3].dimension == 3

    def test_unspecialized_vector_cannot_be_built(self):
        with pytest.raises(TypeError):
            Vector(1.0, 2.0)
        with pytest.raises(TypeError):
            Vector.zeros()

    @pytest.mark.parametrize("dimension", [0, -1, 2.0, "2", True])
    def test_invalid_dimension(self, dimension):
        with pytest.raises(TypeError):
            Vector[dimension]

    def test_cannot_specialize_twice(self):
        with pytest.raises(TypeError):
            Vector[2][3]


class TestVectorConstruction:
    """Tests for vector constructors."""

    def test_components(self):
        v = Vector[3](1, 2.5, -3)
        assert list(v) == [1.0, 2.5, -3.0]
        assert len(v) == 3
        assert v.x == 1.0 and v.y == 2.5 and v.z == -3.0

    def test_wrong_component_count(self):
        with pytest.raises(ValueError):
            Vector[2](1.0, 2.0, 3.0)
        with pytest.raises(ValueError):
            Vector[2].from_iterable([1.0])

    def test_zeros(self):
        assert list(Vector[4].zeros()) == [0.0, 0.0, 0.0, 0.0]

    def test_from_fn_calls_in_index_order(self):
        """Components are produced once each, first to last."""
        calls = []

        def component(i):
            calls.append(i)
            return i * 10

        v = Vector[3].from_fn(component)

        assert calls == [0, 1, 2]
        assert list(v) == [0.0, 10.0, 20.0]

    def test_stored_as_float32(self):
        v = Vector[1](0.1)
        assert v[0] == float(np.float32(0.1))
        assert v.to_numpy().dtype == np.float32

    def test_immutable(self):
        v = Vector[2](1.0, 2.0)
        with pytest.raises(AttributeError):
            v.foo = 1
        with pytest.raises(ValueError):
            v._data[0] = 5.0

    def test_to_numpy_returns_copy(self):
        v = Vector[2](1.0, 2.0)
        array = v.to_numpy()
        array[0] = 42.0
        assert v[0] == 1.0


class TestVectorArithmetic:
    """Tests for vector arithmetic."""

    def test_add_and_subtract(self):
        a = Vector[2](1.0, 2.0)
        b = Vector[2](0.5, -4.0)
        assert a + b == Vector[2](1.5, -2.0)
        assert a - b == Vector[2](0.5, 6.0)
        assert -a == Vector[2](-1.0, -2.0)

    def test_scalar_multiply_both_sides(self):
        a = Vector[2](1.0, -2.0)
        assert a * 2 == Vector[2](2.0, -4.0)
        assert 2 * a == Vector[2](2.0, -4.0)
        assert np.float32(0.5) * a == Vector[2](0.5, -1.0)
        assert a * 0.0 == Vector[2].zeros()

    def test_divide(self):
        assert Vector[2](2.0, 4.0) / 2 == Vector[2](1.0, 2.0)

    def test_result_keeps_type(self):
        a = Vector[2](1.0, 2.0)
        assert type(a + a) is Vector[2]
        assert type(a * 3) is Vector[2]

    def test_dimension_mismatch(self):
        with pytest.raises(TypeError):
            Vector[2](1.0, 2.0) + Vector[3](1.0, 2.0, 3.0)
        with pytest.raises(TypeError):
            Vector[2](1.0, 2.0) - Vector[1](1.0)

    def test_unsupported_operands(self):
        with pytest.raises(TypeError):
            Vector[2](1.0, 2.0) + 1.0
        with pytest.raises(TypeError):
            Vector[2](1.0, 2.0) * Vector[2](1.0, 2.0)


class TestVectorValueSemantics:
    """Tests for equality and hashing."""

    def test_equality(self):
        assert Vector[2](1.0, 2.0) == Vector[2](1.0, 2.0)
        assert Vector[2](1.0, 2.0) != Vector[2](2.0, 1.0)
        assert Vector[1](1.0) != Vector[2](1.0, 0.0)

    def test_hash(self):
        assert hash(Vector[2](1.0, 2.0)) == hash(Vector[2](1.0, 2.0))
        assert hash(Vector[2](0.0, 0.0)) == hash(Vector[2](-0.0, 0.0))
        assert len({Vector[2](1.0, 2.0), Vector[2](1.0, 2.0)}) == 1

    def test_repr(self):
        assert repr(Vector[2](3.0, 2.0)) == "Vector[2](3.0, 2.0)"
