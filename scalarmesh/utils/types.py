"""Contains the types used in scalarmesh.

This module defines the small enumeration types shared by the geometry
pipeline and the command-line tools.

Classes
-------
AdjacencyMethod
    Lookup strategy used when merging coincident corners into one vertex.
CriticalPointType
    Classification of a vertex relative to its one-ring neighbours.
"""

import enum


class AdjacencyMethod(enum.Enum):
    """Enum to select how coincident corners are looked up.

    Attributes
    ----------
    SCAN : int
        Linear scan over every distinct vertex seen so far.
    GRID : int
        Spatial hash with cells of edge length ``2 * tol``; only the 27
        cells around a query point are inspected. Produces the same result
        as ``SCAN``.
    """
    SCAN = 1
    GRID = 2

    @classmethod
    def from_value(cls, value):
        """Return the member for an enum instance or a case-insensitive name.

        Raises
        ------
        ValueError
            If *value* does not name a member.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).upper()]
        except KeyError:
            choices = ", ".join(m.name.lower() for m in cls)
            raise ValueError(
                f"Unknown adjacency method {value!r}; expected one of: {choices}."
            ) from None


class CriticalPointType(enum.Enum):
    """Enum describing how a vertex compares to all of its neighbours.

    Attributes
    ----------
    REGULAR : int
        At least one neighbour is higher and one is lower, or the height
        is NaN.
    MINIMUM : int
        No neighbour is lower, at least one is higher.
    MAXIMUM : int
        No neighbour is higher, at least one is lower.
    PLATEAU : int
        No neighbour is higher or lower. Includes isolated vertices.
    """
    REGULAR = 0
    MINIMUM = 1
    MAXIMUM = 2
    PLATEAU = 3

    @property
    def is_min(self):
        return self in (CriticalPointType.MINIMUM, CriticalPointType.PLATEAU)

    @property
    def is_max(self):
        return self in (CriticalPointType.MAXIMUM, CriticalPointType.PLATEAU)
