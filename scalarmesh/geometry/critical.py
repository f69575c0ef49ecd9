"""Discrete critical-point classification on a vertex adjacency.

The scalar field is the vertex height (``y`` coordinate). A vertex is a
local maximum when no neighbour is higher and a local minimum when no
neighbour is lower. Boundary behaviour follows directly from that rule:

* a vertex with no neighbours is both a minimum and a maximum;
* a vertex whose neighbours all share its height (a plateau) is both;
* a vertex whose own height is NaN is neither;
* neighbours with NaN height never make a vertex non-extremal, since every
  comparison with NaN is false.

Saddle detection (sign changes around the ordered one-ring) is not
performed; :attr:`CriticalPoints.saddles` is always empty.
"""

import logging
import math
from dataclasses import dataclass, field

from ..utils.types import CriticalPointType

# Module logger
logger = logging.getLogger(__name__)


@dataclass
class CriticalPoints:
    """Result of :func:`find_critical_points`."""

    minima: list = field(default_factory=list)
    maxima: list = field(default_factory=list)
    saddles: list = field(default_factory=list)


def classify_vertex(vertex, neighbors):
    """Classify *vertex* against the heights of its *neighbors*.

    Parameters
    ----------
    vertex : GeometricPoint
        Vertex under test.
    neighbors : iterable of GeometricPoint
        Its one-ring.

    Returns
    -------
    CriticalPointType
    """
    if math.isnan(vertex.y):
        return CriticalPointType.REGULAR
    is_max = True
    is_min = True
    for n in neighbors:
        if n.y > vertex.y:
            is_max = False
        if n.y < vertex.y:
            is_min = False
        if not (is_max or is_min):
            return CriticalPointType.REGULAR
    if is_max and is_min:
        return CriticalPointType.PLATEAU
    return CriticalPointType.MAXIMUM if is_max else CriticalPointType.MINIMUM


def find_critical_points(adjacency):
    """Split the vertices of *adjacency* into height minima and maxima.

    Parameters
    ----------
    adjacency : Adjacency or iterable of (vertex, neighbors)
        Finalised adjacency, typically from
        :func:`~scalarmesh.geometry.adjacency.build_adjacency`.

    Returns
    -------
    CriticalPoints
        ``minima`` and ``maxima`` in adjacency order; plateau and isolated
        vertices appear in both lists.
    """
    result = CriticalPoints()
    for vertex, neighbors in adjacency:
        kind = classify_vertex(vertex, neighbors)
        if kind.is_min:
            result.minima.append(vertex)
        if kind.is_max:
            result.maxima.append(vertex)
    logger.info(
        "Found %d minima and %d maxima.", len(result.minima), len(result.maxima)
    )
    return result
