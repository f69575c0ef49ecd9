"""Triangle mesh container and the analysis pipeline entry points.

A :class:`Mesh` is filled append-only with :meth:`Mesh.add_triangle`, then
analysed in two strictly sequential passes:

1. :meth:`Mesh.analyze_vertices` rebuilds the vertex adjacency from every
   triangle added so far.
2. :meth:`Mesh.find_critical_points` classifies the distinct vertices into
   height minima and maxima.

Corners are never shared at insertion time: every triangle appends three
fresh vertices, and the index buffer is the identity. Coincident corners are
merged by the adjacency pass only.
"""

import logging
from dataclasses import dataclass

import numpy as np

from ..utils.types import AdjacencyMethod
from .adjacency import Adjacency, build_adjacency
from .critical import find_critical_points
from .points import EPSILON, check_tolerance

# Module logger
logger = logging.getLogger(__name__)

#: Debug colours assigned to corners v0, v1 and v2 of every triangle.
CORNER_PALETTE = (
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
)


@dataclass(frozen=True)
class Triangle:
    """Three corners of one face. Winding order is not significant."""

    v0: object
    v1: object
    v2: object

    def corners(self):
        return (self.v0, self.v1, self.v2)


class Mesh:
    """Append-only triangle soup with adjacency and critical-point results.

    Parameters
    ----------
    tol : float, default=EPSILON
        Equality tolerance used when merging coincident corners.
    method : AdjacencyMethod or str, default=AdjacencyMethod.SCAN
        Corner lookup strategy for :meth:`analyze_vertices`.

    Attributes
    ----------
    vertices : list of GeometricPoint
        One entry per inserted corner.
    triangle_indices : list of int
        Index buffer into ``vertices``; three entries per triangle.
    face_colors : list of float
        Flat RGB triples, one per corner.
    adjacency : Adjacency
        Result of the last :meth:`analyze_vertices` call.
    minima, maxima, saddles : list of GeometricPoint
        Results of the last :meth:`find_critical_points` call. ``saddles``
        is never populated.
    """

    def __init__(self, tol=EPSILON, method=AdjacencyMethod.SCAN):
        self.tol = check_tolerance(tol)
        self.method = AdjacencyMethod.from_value(method)
        self.vertices = []
        self.triangle_indices = []
        self.face_colors = []
        self.adjacency = Adjacency(self.tol)
        self.minima = []
        self.maxima = []
        self.saddles = []
        self._analyzed = False

    def __repr__(self):
        return (
            f"{type(self).__name__}(n_triangles={self.n_triangles}, "
            f"n_vertices={len(self.vertices)}, tol={self.tol:g})"
        )

    @property
    def n_triangles(self):
        return len(self.triangle_indices) // 3

    def add_triangle(self, triangle):
        """Append the three corners of *triangle* with the corner palette."""
        for corner, color in zip(triangle.corners(), CORNER_PALETTE):
            self.add_vertex(corner, color)

    def add_triangles(self, triangles):
        for triangle in triangles:
            self.add_triangle(triangle)

    def add_vertex(self, vertex, color):
        """Append one corner, its index and its RGB colour."""
        self.vertices.append(vertex)
        self.triangle_indices.append(len(self.vertices) - 1)
        self.face_colors.extend(color)
        self._analyzed = False

    def triangles(self):
        """Yield the stored faces as :class:`Triangle` values."""
        idx = self.triangle_indices
        for i in range(0, len(idx) - 2, 3):
            yield Triangle(
                self.vertices[idx[i]], self.vertices[idx[i + 1]], self.vertices[idx[i + 2]]
            )

    def analyze_vertices(self):
        """Rebuild the vertex adjacency from scratch.

        Returns
        -------
        Adjacency
            The new adjacency, also stored as :attr:`adjacency`.
        """
        self.adjacency = build_adjacency(self.triangles(), tol=self.tol, method=self.method)
        self._analyzed = True
        return self.adjacency

    def find_critical_points(self):
        """Classify the distinct vertices into height minima and maxima.

        Runs :meth:`analyze_vertices` first if triangles were added since the
        last adjacency build.

        Returns
        -------
        CriticalPoints
        """
        if not self._analyzed:
            logger.debug("Adjacency is stale; rebuilding before classification.")
            self.analyze_vertices()
        result = find_critical_points(self.adjacency)
        self.minima = result.minima
        self.maxima = result.maxima
        self.saddles = result.saddles
        return result

    def vertex_array(self):
        """Return vertices as a float32 array of shape (N, 3)."""
        arr = np.array([(v.x, v.y, v.z) for v in self.vertices], dtype=np.float32)
        return arr.reshape(-1, 3)

    def index_array(self):
        """Return the index buffer as a uint32 array of shape (M, 3)."""
        return np.asarray(self.triangle_indices, dtype=np.uint32).reshape(-1, 3)

    def color_array(self):
        """Return corner colours as a float32 array of shape (N, 3)."""
        return np.asarray(self.face_colors, dtype=np.float32).reshape(-1, 3)
