"""Vertex adjacency construction for unstructured triangle soups.

Corners are merged by tolerance equality rather than by index, so a mesh in
which every triangle carries private copies of its corners still produces one
adjacency entry per distinct position. Each entry stores the positions that
share a triangle edge with it.

Two lookup strategies are available (see
:class:`~scalarmesh.utils.types.AdjacencyMethod`):

* ``SCAN`` walks the list of distinct vertices for every corner. Cost is
  ``O(T * V)`` for ``T`` triangles and ``V`` distinct vertices.
* ``GRID`` buckets distinct vertices by ``floor(coord / (2 * tol))`` and
  only inspects the 27 cells surrounding a query. Any point within ``tol``
  of the query lies in one of those cells, and the lowest matching index is
  chosen, so the output is identical to ``SCAN``. Coordinates too large to
  bucket fall back to a linear scan.
"""

import logging
import math
from collections import defaultdict
from itertools import product

from ..utils.types import AdjacencyMethod
from .points import EPSILON, approx_equals, check_tolerance

# Module logger
logger = logging.getLogger(__name__)

_CELL_OFFSETS = tuple(product((-1, 0, 1), repeat=3))

# Scaled coordinates beyond this magnitude cannot be floored exactly enough.
_MAX_SCALED = 2.0 ** 50


class Adjacency:
    """Distinct mesh vertices and their neighbour lists.

    ``vertices[k]`` is the canonical position of entry ``k`` (the first
    corner seen at that position) and ``neighbors[k]`` lists the positions
    sharing an edge with it, without approximate duplicates and never
    containing the vertex itself.

    Parameters
    ----------
    tol : float, default=EPSILON
        Tolerance used to match points against entries.
    """

    def __init__(self, tol=EPSILON):
        self.tol = check_tolerance(tol)
        self.vertices = []
        self.neighbors = []

    def __len__(self):
        return len(self.vertices)

    def __iter__(self):
        return iter(zip(self.vertices, self.neighbors))

    def __repr__(self):
        return f"{type(self).__name__}(n_vertices={len(self)}, tol={self.tol:g})"

    def find(self, point):
        """Return the index of the first entry approximately equal to *point*, or -1."""
        return _first_match(self.vertices, point, self.tol)

    def neighbors_of(self, point):
        """Return the neighbour list of the entry matching *point*.

        Raises
        ------
        KeyError
            If no entry lies within ``tol`` of *point*.
        """
        k = self.find(point)
        if k < 0:
            raise KeyError(point)
        return self.neighbors[k]

    def as_dict(self):
        """Return a ``{vertex: tuple_of_neighbors}`` snapshot."""
        return {v: tuple(n) for v, n in self}


def _first_match(vertices, point, tol):
    for k, vertex in enumerate(vertices):
        if approx_equals(point, vertex, tol):
            return k
    return -1


class _ScanIndex:
    def __init__(self, vertices, tol):
        self._vertices = vertices
        self._tol = tol

    def find(self, point):
        return _first_match(self._vertices, point, self._tol)

    def add(self, point, k):
        pass


class _GridIndex:
    """Spatial hash with cells of edge ``2 * tol``.

    Points within ``tol`` differ by at most half a cell per axis, so they
    always fall in adjacent cells. Points whose scaled coordinates are
    non-finite or too large to floor exactly get no cell; they are kept in
    an overflow list that every query inspects, and querying with such a
    point falls back to a full scan.
    """

    def __init__(self, vertices, tol):
        self._vertices = vertices
        self._tol = tol
        self._size = 2.0 * tol
        self._cells = defaultdict(list)
        self._overflow = []

    def _cell(self, point):
        scaled = (point.x / self._size, point.y / self._size, point.z / self._size)
        if not all(math.isfinite(s) and abs(s) < _MAX_SCALED for s in scaled):
            return None
        return tuple(math.floor(s) for s in scaled)

    def find(self, point):
        cell = self._cell(point)
        if cell is None:
            return _first_match(self._vertices, point, self._tol)
        cx, cy, cz = cell
        best = -1
        candidates = [self._overflow]
        candidates.extend(
            self._cells.get((cx + dx, cy + dy, cz + dz), ()) for dx, dy, dz in _CELL_OFFSETS
        )
        for bucket in candidates:
            for k in bucket:
                if (best < 0 or k < best) and approx_equals(point, self._vertices[k], self._tol):
                    best = k
        return best

    def add(self, point, k):
        cell = self._cell(point)
        if cell is None:
            self._overflow.append(k)
        else:
            self._cells[cell].append(k)


_INDEXES = {
    AdjacencyMethod.SCAN: _ScanIndex,
    AdjacencyMethod.GRID: _GridIndex,
}


def _add_neighbor(neighbors, candidate, vertex, canonical, tol):
    """Append *candidate* unless it is the vertex itself or already listed.

    Listed neighbours are matched by tolerance or, for points with NaN
    coordinates that never match by tolerance, by identity.
    """
    if approx_equals(candidate, canonical, tol) or approx_equals(candidate, vertex, tol):
        return
    for existing in neighbors:
        if existing is candidate or approx_equals(candidate, existing, tol):
            return
    neighbors.append(candidate)


def build_adjacency(triangles, tol=EPSILON, method=AdjacencyMethod.SCAN):
    """Build the undirected vertex adjacency of a triangle soup.

    For every triangle, each corner is matched to the first distinct vertex
    within ``tol`` (or registered as a new one), and the two other corners
    are added to its neighbour list unless an approximately equal neighbour
    is already present. Corners coinciding with the vertex itself, as in
    degenerate triangles, are skipped.

    Parameters
    ----------
    triangles : iterable of Triangle
        Faces to process. Plain three-point sequences are accepted too.
    tol : float, default=EPSILON
        Equality tolerance for merging corners and deduplicating neighbours.
    method : AdjacencyMethod or str, default=AdjacencyMethod.SCAN
        Lookup strategy; ``"scan"`` and ``"grid"`` give identical results.

    Returns
    -------
    Adjacency
        Distinct vertices in first-seen order with their neighbour lists.

    Raises
    ------
    ValueError
        If ``tol`` is not a finite positive number or ``method`` is unknown.
    """
    method = AdjacencyMethod.from_value(method)
    adjacency = Adjacency(tol)
    tol = adjacency.tol
    vertices, neighbors = adjacency.vertices, adjacency.neighbors
    index = _INDEXES[method](vertices, tol)

    triangles = list(triangles)
    logger.info(
        "Building vertex adjacency from %d triangles (%d corners, %s lookup).",
        len(triangles), 3 * len(triangles), method.name.lower(),
    )
    for triangle in triangles:
        corners = tuple(triangle.corners()) if hasattr(triangle, "corners") else tuple(triangle)
        for j in range(3):
            v = corners[j]
            k = index.find(v)
            if k < 0:
                k = len(vertices)
                vertices.append(v)
                neighbors.append([])
                index.add(v, k)
            canonical = vertices[k]
            for o in (corners[(j + 1) % 3], corners[(j + 2) % 3]):
                _add_neighbor(neighbors[k], o, v, canonical, tol)

    logger.info("%d unique vertices.", len(vertices))
    return adjacency
