"""Fixed-dimension vectors for the swarm.

Every vector type is specialized by its dimension, ``Vector[2]``, ``Vector[3]``
and so on. Each specialization is a distinct class, so arithmetic between
vectors of different dimensions is rejected instead of silently broadcast.
"""

import numbers
from typing import Any, Callable, ClassVar, Dict, Iterable, Iterator, Optional

import numpy as np


class Dimensioned:
    """Base for types parameterized by an integer dimension, e.g. ``Vector[2]``."""

    dimension: ClassVar[Optional[int]] = None
    _specializations: ClassVar[Dict[int, type]]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if "dimension" not in cls.__dict__:
            cls._specializations = {}

    def __class_getitem__(cls, dimension: int) -> type:
        if cls.dimension is not None:
            raise TypeError(f"{cls.__name__} is already specialized")
        if isinstance(dimension, bool) or not isinstance(dimension, numbers.Integral):
            raise TypeError(f"dimension must be an integer, got {dimension!r}")
        dimension = int(dimension)
        if dimension < 1:
            raise TypeError(f"dimension must be at least 1, got {dimension}")

        specialized = cls._specializations.get(dimension)
        if specialized is None:
            name = f"{cls.__name__}[{dimension}]"
            specialized = type(cls)(name, (cls,), {
                "dimension": dimension,
                "__module__": cls.__module__,
                "__qualname__": name,
            })
            cls._specializations[dimension] = specialized
        return specialized

    @classmethod
    def _require_dimension(cls) -> int:
        if cls.dimension is None:
            raise TypeError(
                f"{cls.__name__} needs a dimension, use {cls.__name__}[D] with D >= 1"
            )
        return cls.dimension


class Vector(Dimensioned):
    """Immutable float32 vector with a dimension fixed by its type."""

    # Make numpy defer to our reflected operators (np.float32(2) * v).
    __array_ufunc__ = None

    _data: np.ndarray

    def __init__(self, *components: float):
        dimension = self._require_dimension()
        if len(components) != dimension:
            raise ValueError(
                f"{type(self).__name__} takes {dimension} components, got {len(components)}"
            )
        self._set_data(np.array(components, dtype=np.float32))

    def _set_data(self, data: np.ndarray):
        data.flags.writeable = False
        object.__setattr__(self, "_data", data)

    @classmethod
    def _wrap(cls, data: np.ndarray) -> "Vector":
        vector = cls.__new__(cls)
        vector._set_data(np.asarray(data, dtype=np.float32).copy())
        return vector

    @classmethod
    def zeros(cls) -> "Vector":
        return cls._wrap(np.zeros(cls._require_dimension(), dtype=np.float32))

    @classmethod
    def from_fn(cls, fn: Callable[[int], float]) -> "Vector":
        """Build a vector whose component ``i`` is ``fn(i)``.

        ``fn`` is called exactly once per component, in index order, which
        keeps draws from a shared random stream reproducible.
        """
        dimension = cls._require_dimension()
        return cls._wrap(np.array([fn(i) for i in range(dimension)], dtype=np.float32))

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> "Vector":
        return cls(*values)

    def to_numpy(self) -> np.ndarray:
        return self._data.copy()

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"{type(self).__name__} is immutable")

    # Sequence protocol

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[float]:
        return (float(c) for c in self._data)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    @property
    def x(self) -> float:
        return self[0]

    @property
    def y(self) -> float:
        return self[1]

    @property
    def z(self) -> float:
        return self[2]

    # Arithmetic

    def _other_data(self, other: Any) -> Optional[np.ndarray]:
        if not isinstance(other, Vector):
            return None
        if type(other) is not type(self):
            raise TypeError(
                f"dimension mismatch: {type(self).__name__} and {type(other).__name__}"
            )
        return other._data

    def __add__(self, other: Any) -> "Vector":
        data = self._other_data(other)
        if data is None:
            return NotImplemented
        return self._wrap(self._data + data)

    def __sub__(self, other: Any) -> "Vector":
        data = self._other_data(other)
        if data is None:
            return NotImplemented
        return self._wrap(self._data - data)

    def __mul__(self, scalar: Any) -> "Vector":
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return self._wrap(self._data * np.float32(scalar))

    __rmul__ = __mul__

    def __truediv__(self, scalar: Any) -> "Vector":
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return self._wrap(self._data / np.float32(scalar))

    def __neg__(self) -> "Vector":
        return self._wrap(-self._data)

    # Value semantics

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return type(other) is type(self) and bool(np.array_equal(self._data, other._data))

    def __hash__(self) -> int:
        return hash((type(self).dimension, tuple(float(c) for c in self._data)))

    def __repr__(self) -> str:
        components = ", ".join(repr(c) for c in self)
        return f"{type(self).__name__}({components})"
