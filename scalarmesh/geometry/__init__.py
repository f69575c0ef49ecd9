"""Geometry subpackage — points, meshes, adjacency and critical points.

Architecture
------------
The subpackage has three layers:

**Layer 1 — value types and IO**:

* :mod:`~scalarmesh.geometry.points` — ``GeometricPoint``, ``ScalarPoint``,
  ``distance``, ``approx_equals`` and the default tolerance ``EPSILON``.
* :mod:`~scalarmesh.geometry.mesh_io` — ASCII PLY (``read_ply_ascii``),
  OFF (``read_off``) and GIfTI surface (``read_gifti_surface``) readers with
  the extension dispatcher ``read_mesh``.
* :mod:`~scalarmesh.geometry.points_io` — ``write_points`` /
  ``read_points`` for critical-point output.

**Layer 2 — mesh and analysis** (:mod:`~scalarmesh.geometry.mesh`,
:mod:`~scalarmesh.geometry.adjacency`, :mod:`~scalarmesh.geometry.critical`):

``Mesh`` collects triangles append-only; ``build_adjacency`` merges
coincident corners by tolerance and relates them to their edge neighbours;
``find_critical_points`` splits the distinct vertices into height minima
and maxima.

**Layer 3 — resolvers** (:mod:`~scalarmesh.geometry.inputs`):

``resolve_mesh`` and ``load_mesh`` turn a path, an array pair or a ``Mesh``
into validated arrays or a populated ``Mesh``.
"""
from .adjacency import Adjacency, build_adjacency
from .critical import CriticalPoints, classify_vertex, find_critical_points
from .inputs import load_mesh, resolve_mesh, triangles_from_arrays
from .mesh import CORNER_PALETTE, Mesh, Triangle
from .mesh_io import read_gifti_surface, read_mesh, read_off, read_ply_ascii
from .points import EPSILON, GeometricPoint, ScalarPoint, approx_equals, distance
from .points_io import read_points, write_points

__all__ = [
    # Layer 3 — resolvers
    'load_mesh',
    'resolve_mesh',
    'triangles_from_arrays',
    # Layer 2 — mesh and analysis
    'Mesh',
    'Triangle',
    'CORNER_PALETTE',
    'Adjacency',
    'build_adjacency',
    'CriticalPoints',
    'classify_vertex',
    'find_critical_points',
    # Layer 1 — value types
    'EPSILON',
    'GeometricPoint',
    'ScalarPoint',
    'approx_equals',
    'distance',
    # Layer 1 — IO
    'read_mesh',
    'read_ply_ascii',
    'read_off',
    'read_gifti_surface',
    'read_points',
    'write_points',
]
