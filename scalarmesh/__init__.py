"""scalarmesh: vertex adjacency and height-field critical points of triangle meshes.

scalarmesh takes a triangle soup, merges coincident corners by tolerance
equality into a vertex adjacency, and classifies every distinct vertex as a
local minimum or maximum of its height (``y`` coordinate). It includes:

- **Mesh pipeline**: ``Mesh.add_triangle`` → ``Mesh.analyze_vertices`` →
  ``Mesh.find_critical_points``
- **Mesh IO**: ASCII PLY, OFF and GIfTI surface readers
- **Volumes**: ``Dataset`` stacks image layers into a scalar grid
- **CLI tools**: ``scalarmesh-critpoints`` and ``scalarmesh-sys_info``

Typical use::

    from scalarmesh import load_mesh

    mesh = load_mesh('path/to/surface.ply')
    mesh.analyze_vertices()
    result = mesh.find_critical_points()
    print(len(result.minima), len(result.maxima))

"""

from ._config import sys_info  # noqa: F401
from ._version import __version__  # noqa: F401
from .geometry import (  # noqa: F401
    EPSILON,
    GeometricPoint,
    Mesh,
    ScalarPoint,
    Triangle,
    build_adjacency,
    find_critical_points,
    load_mesh,
)
from .utils.types import AdjacencyMethod, CriticalPointType  # noqa: F401
from .volume import Dataset  # noqa: F401

# Export list
__all__ = [
    "__version__",
    "sys_info",
    "EPSILON",
    "GeometricPoint",
    "ScalarPoint",
    "Triangle",
    "Mesh",
    "build_adjacency",
    "find_critical_points",
    "load_mesh",
    "AdjacencyMethod",
    "CriticalPointType",
    "Dataset",
]
