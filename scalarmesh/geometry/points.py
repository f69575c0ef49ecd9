"""Point value types and tolerance-based equality.

Two kinds of points are used throughout the package:

* :class:`GeometricPoint` — a plain 3-D position.
* :class:`ScalarPoint` — a position paired with a scalar field value (for
  example the grey level of a volume voxel).

Both are frozen dataclasses, so ``==`` and ``hash`` compare coordinates
exactly. Coordinates coming out of independent triangle insertions rarely
match bit for bit, so every geometric comparison in the pipeline goes
through :func:`approx_equals` instead, which treats two points as equal when
their Euclidean distance is at most ``tol``.

Approximate equality is **not** transitive: ``a ~ b`` and ``b ~ c`` do not
imply ``a ~ c``. Callers must apply it per pair.
"""

import math
from dataclasses import dataclass, field

import numpy as np

#: Default tolerance for positional and scalar equality. Suited to
#: float32 coordinates of order one; pass a different ``tol`` for meshes at
#: other scales.
EPSILON = 1e-5


@dataclass(frozen=True)
class GeometricPoint:
    """Immutable 3-D point."""

    x: float
    y: float
    z: float

    @classmethod
    def from_array(cls, arr):
        """Build a point from a length-3 sequence, rounding through float32."""
        x, y, z = np.asarray(arr, dtype=np.float32).reshape(3)
        return cls(float(x), float(y), float(z))

    def as_tuple(self):
        return (self.x, self.y, self.z)

    def distance(self, other):
        return distance(self, other)

    def approx_equals(self, other, tol=EPSILON):
        return approx_equals(self, other, tol)

    def __str__(self):
        return f"({self.x:g},{self.y:g},{self.z:g})"


@dataclass(frozen=True)
class ScalarPoint:
    """A :class:`GeometricPoint` carrying a scalar field value.

    Parameters
    ----------
    position : GeometricPoint
        Location of the sample.
    value : float, default=0.0
        Field value at ``position``.
    """

    position: GeometricPoint
    value: float = field(default=0.0)

    @classmethod
    def from_coords(cls, x, y, z, value=0.0):
        return cls(GeometricPoint(float(x), float(y), float(z)), float(value))

    @property
    def x(self):
        return self.position.x

    @property
    def y(self):
        return self.position.y

    @property
    def z(self):
        return self.position.z

    def approx_equals(self, other, tol=EPSILON):
        """Return True if positions and values both agree within ``tol``."""
        return (
            approx_equals(self.position, other.position, tol)
            and abs(self.value - other.value) <= tol
        )

    def __str__(self):
        return f"{self.position}: {self.value:g}"


def distance(a, b):
    """Return the Euclidean distance between two points.

    NaN coordinates propagate to a NaN result.
    """
    dx = b.x - a.x
    dy = b.y - a.y
    dz = b.z - a.z
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def approx_equals(a, b, tol=EPSILON):
    """Return True if ``a`` and ``b`` lie within ``tol`` of each other.

    Parameters
    ----------
    a, b : GeometricPoint
        Points to compare. Any object with ``x``, ``y`` and ``z`` attributes
        is accepted.
    tol : float, default=EPSILON
        Maximum distance at which the points are considered equal.

    Returns
    -------
    bool
        ``distance(a, b) <= tol``. Always False when a coordinate is NaN.
    """
    return distance(a, b) <= tol


def check_tolerance(tol):
    """Validate a tolerance value and return it as ``float``.

    Raises
    ------
    ValueError
        If ``tol`` is not a finite positive number.
    """
    tol = float(tol)
    if not math.isfinite(tol) or tol <= 0:
        raise ValueError(f"Tolerance must be a finite positive number, got {tol!r}.")
    return tol
