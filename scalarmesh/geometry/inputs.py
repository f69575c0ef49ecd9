"""Input resolver functions for building meshes.

This module is the single entry point for turning user-facing mesh inputs
(file paths, array pairs, existing :class:`~scalarmesh.geometry.mesh.Mesh`
objects) into validated arrays or a populated ``Mesh``. The CLI and the
package-level helpers go through these resolvers rather than calling the
format readers directly.
"""

import logging

import numpy as np

from ..utils.types import AdjacencyMethod
from .mesh import Mesh, Triangle
from .mesh_io import read_mesh
from .points import EPSILON, GeometricPoint

# Module logger
logger = logging.getLogger(__name__)


def resolve_mesh(mesh):
    """Resolve a mesh input to ``(vertices, faces)`` numpy arrays.

    Parameters
    ----------
    mesh : str, Mesh, or tuple/list of two array-likes
        * ``str`` — path to a ``.ply``, ``.off`` or ``.gii`` file.
        * :class:`Mesh` — its vertex and index buffers are returned.
        * Two-element tuple/list — ``(vertices, faces)`` array-likes
          converted to ``float32`` and ``uint32`` numpy arrays respectively.

    Returns
    -------
    vertices : numpy.ndarray
        Vertex coordinate array of shape (N, 3), dtype float32.
    faces : numpy.ndarray
        Triangle index array of shape (M, 3), dtype uint32.

    Raises
    ------
    TypeError
        If *mesh* is not one of the accepted input kinds.
    ValueError
        If the arrays have the wrong shapes or face indices are out of range.
    """
    if isinstance(mesh, str):
        vertices, faces = read_mesh(mesh)
    elif isinstance(mesh, Mesh):
        vertices, faces = mesh.vertex_array(), mesh.index_array()
    elif isinstance(mesh, (tuple, list)) and len(mesh) == 2:
        vertices = np.asarray(mesh[0], dtype=np.float32)
        faces = np.asarray(mesh[1])
        if faces.size > 0 and int(faces.min()) < 0:
            raise ValueError(f"Face indices must be non-negative, got min={int(faces.min())}.")
        faces = faces.astype(np.uint32)
    else:
        raise TypeError(
            f"mesh must be a file path (str), a Mesh, or a (vertices, faces) tuple/list, "
            f"got {type(mesh).__name__!r}."
        )

    if vertices.size == 0:
        vertices = vertices.reshape(0, 3)
    if faces.size == 0:
        faces = faces.reshape(0, 3)
    if vertices.ndim != 2 or vertices.shape[1] != 3:
        raise ValueError(f"vertices must be an array of shape (N, 3), got shape {vertices.shape}.")
    if faces.ndim != 2 or faces.shape[1] != 3:
        raise ValueError(f"faces must be an array of shape (M, 3), got shape {faces.shape}.")
    n_verts = vertices.shape[0]
    if faces.size > 0 and int(faces.max()) >= n_verts:
        raise ValueError(
            f"Face indices out of range [0, {n_verts}): max={int(faces.max())}."
        )
    return vertices, faces


def triangles_from_arrays(vertices, faces):
    """Yield one :class:`Triangle` per row of *faces*.

    Parameters
    ----------
    vertices : numpy.ndarray, shape (N, 3)
    faces : numpy.ndarray, shape (M, 3)
        Indices into *vertices*.
    """
    points = [GeometricPoint.from_array(row) for row in vertices]
    for i, j, k in faces:
        yield Triangle(points[i], points[j], points[k])


def load_mesh(mesh, tol=EPSILON, method=AdjacencyMethod.SCAN):
    """Build a :class:`Mesh` from any input accepted by :func:`resolve_mesh`.

    Every face is inserted through :meth:`Mesh.add_triangle`, so shared
    vertices in the input are duplicated per corner and only merged again by
    :meth:`Mesh.analyze_vertices`.

    Parameters
    ----------
    mesh : str, Mesh, or tuple/list of two array-likes
        Mesh input.
    tol : float, default=EPSILON
        Equality tolerance for the returned mesh.
    method : AdjacencyMethod or str, default=AdjacencyMethod.SCAN
        Corner lookup strategy for the returned mesh.

    Returns
    -------
    Mesh
    """
    vertices, faces = resolve_mesh(mesh)
    result = Mesh(tol=tol, method=method)
    result.add_triangles(triangles_from_arrays(vertices, faces))
    logger.info("Loaded mesh: %d vertices, %d faces", vertices.shape[0], faces.shape[0])
    return result
