"""
Fixed-dimension vectors for the physics code.

A PhysicsVector always holds exactly ``dim`` float components. Literal lists
of the wrong length are zero-padded or truncated on construction, but
arithmetic between vectors of different dimension fails instead of quietly
resizing either side.
"""

from __future__ import annotations

import math
import numbers
import sys
from typing import Iterable, Iterator, List, Optional

import numpy as np

X, Y, Z = 0, 1, 2

# Zero threshold used when normalising.
EPSILON = sys.float_info.epsilon

# Index pairs (i, j) such that component k of the 7D cross product is
# sum(a[k+i] * b[k+j] - a[k+j] * b[k+i]) with indices taken mod 7.
_FANO_PAIRS = ((1, 3), (2, 6), (4, 5))


class DimensionError(ValueError):
    """Raised when an operation is used with an incompatible vector dimension."""


def format_number(value: float, precision: int = 6) -> str:
    return f"{value:.{precision}g}"


def format_vector(vector: PhysicsVector, precision: int = 6) -> str:
    """Render a vector as ``(c0,c1,...)``."""
    return "(" + ",".join(format_number(c, precision) for c in vector) + ")"


class PhysicsVector:
    """
    A vector of ``dim`` real components. Component 0 is X, 1 is Y and 2 is Z.

    Operators return new vectors; ``+=``, ``-=`` and ``scale_vector`` mutate
    in place.
    """

    def __init__(self, dim: int, components: Optional[Iterable[float]] = None) -> None:
        if isinstance(dim, bool) or not isinstance(dim, int) or dim < 1:
            raise ValueError(f"dimension must be a positive integer, got {dim!r}")
        values = [float(c) for c in components] if components is not None else []
        if len(values) > dim:
            values = values[:dim]
        elif len(values) < dim:
            values.extend([0.0] * (dim - len(values)))
        self._dim = dim
        self._components = np.array(values, dtype=float)

    def _new(self, components: np.ndarray) -> PhysicsVector:
        out = object.__new__(type(self))
        out._dim = self._dim
        out._components = components
        return out

    def _check_dimension(self, other: PhysicsVector) -> None:
        if other._dim != self._dim:
            raise DimensionError(
                f"dimension mismatch: {self._dim} and {other._dim}"
            )

    def dimension(self) -> int:
        return self._dim

    def copy(self) -> PhysicsVector:
        return self._new(self._components.copy())

    def to_array(self) -> np.ndarray:
        return self._components.copy()

    def tolist(self) -> List[float]:
        return [float(c) for c in self._components]

    # Access

    def get_at(self, index: int) -> float:
        """Bounds-checked read; raises IndexError outside ``0..dim-1``."""
        if not 0 <= index < self._dim:
            raise IndexError(
                f"component {index} out of range for a {self._dim}-dimensional vector"
            )
        return float(self._components[index])

    at = get_at

    def set_at(self, index: int, value: float) -> None:
        if not 0 <= index < self._dim:
            raise IndexError(
                f"component {index} out of range for a {self._dim}-dimensional vector"
            )
        self._components[index] = float(value)

    def __getitem__(self, index: int) -> float:
        # Unchecked: indexes the backing array as-is.
        return float(self._components[index])

    def __len__(self) -> int:
        return self._dim

    def __iter__(self) -> Iterator[float]:
        return (float(c) for c in self._components)

    @property
    def x(self) -> float:
        return self.get_at(X)

    @x.setter
    def x(self, value: float) -> None:
        self.set_at(X, value)

    @property
    def y(self) -> float:
        return self.get_at(Y)

    @y.setter
    def y(self, value: float) -> None:
        self.set_at(Y, value)

    @property
    def z(self) -> float:
        return self.get_at(Z)

    @z.setter
    def z(self, value: float) -> None:
        self.set_at(Z, value)

    # Comparison

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PhysicsVector):
            return NotImplemented
        if other is self:
            return True
        if other._dim != self._dim:
            return False
        return bool(np.array_equal(self._components, other._components))

    __hash__ = None  # type: ignore[assignment]

    # numpy scalars defer to __rmul__ instead of treating the vector as a sequence.
    __array_ufunc__ = None

    # Arithmetic

    def __neg__(self) -> PhysicsVector:
        # Exact zeros stay +0.0 rather than becoming -0.0.
        c = self._components
        return self._new(np.where(c != 0.0, -c, 0.0))

    def __add__(self, other: PhysicsVector) -> PhysicsVector:
        if not isinstance(other, PhysicsVector):
            return NotImplemented
        self._check_dimension(other)
        return self._new(self._components + other._components)

    def __sub__(self, other: PhysicsVector) -> PhysicsVector:
        if not isinstance(other, PhysicsVector):
            return NotImplemented
        self._check_dimension(other)
        return self._new(self._components - other._components)

    def __iadd__(self, other: PhysicsVector) -> PhysicsVector:
        if not isinstance(other, PhysicsVector):
            return NotImplemented
        self._check_dimension(other)
        self._components += other._components
        return self

    def __isub__(self, other: PhysicsVector) -> PhysicsVector:
        if not isinstance(other, PhysicsVector):
            return NotImplemented
        self._check_dimension(other)
        self._components -= other._components
        return self

    def __mul__(self, scalar: float) -> PhysicsVector:
        if isinstance(scalar, PhysicsVector) or not isinstance(scalar, numbers.Real):
            return NotImplemented
        return self.scaled_by(scalar)

    __rmul__ = __mul__

    def scale_vector(self, value: float) -> PhysicsVector:
        """Scale in place and return self."""
        self._components *= float(value)
        return self

    def scaled_by(self, value: float) -> PhysicsVector:
        return self.copy().scale_vector(value)

    # Vector calculus

    def length_squared(self) -> float:
        return float(np.dot(self._components, self._components))

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    magnitude = length

    def inner_product(self, other: PhysicsVector) -> float:
        self._check_dimension(other)
        return float(np.dot(self._components, other._components))

    def get_unit_vector(self) -> PhysicsVector:
        """
        Return V/|V|, or the zero vector when |V| is at or below machine
        epsilon.
        """
        magnitude = self.magnitude()
        if magnitude <= EPSILON:
            return self._new(np.zeros(self._dim, dtype=float))
        return self.scaled_by(1 / magnitude)

    def vector_product(self, other: PhysicsVector) -> PhysicsVector:
        """
        Cross product. Defined for 3 dimensions, and for 7 dimensions using
        the Fano-plane multiplication table.
        """
        self._check_dimension(other)
        a = self._components
        b = other._components
        if self._dim == 3:
            return self._new(
                np.array(
                    [
                        a[1] * b[2] - a[2] * b[1],
                        a[2] * b[0] - a[0] * b[2],
                        a[0] * b[1] - a[1] * b[0],
                    ],
                    dtype=float,
                )
            )
        if self._dim == 7:
            out = np.zeros(7, dtype=float)
            for k in range(7):
                total = 0.0
                for i, j in _FANO_PAIRS:
                    p, q = (k + i) % 7, (k + j) % 7
                    total += a[p] * b[q] - a[q] * b[p]
                out[k] = total
            return self._new(out)
        raise DimensionError("Vector product only defined for 3- and 7-dimensional vectors")

    @staticmethod
    def inner(a: PhysicsVector, b: PhysicsVector) -> float:
        return a.inner_product(b)

    @staticmethod
    def cross(a: PhysicsVector, b: PhysicsVector) -> PhysicsVector:
        return a.vector_product(b)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.tolist()})"

    def __str__(self) -> str:
        return format_vector(self)


class Vector3(PhysicsVector):
    """Three-dimensional PhysicsVector used for positions, velocities and accelerations."""

    def __init__(self, components: Optional[Iterable[float]] = (0.0, 0.0, 0.0)) -> None:
        super().__init__(3, components)
