"""Writers and readers for lists of points (critical-point output).

* **ASCII text** (``.txt``, ``.csv``) — one ``x y z`` row per point, with a
  ``#`` header line. CSV files use commas.
* **NumPy array** (``.npy``) — ``float32`` array of shape ``(N, 3)``.
"""

import os

import numpy as np

from .points import GeometricPoint

_TEXT_EXTS = {".txt": " ", ".csv": ","}


def check_points_path(path):
    """Return the lower-case extension of *path* if it is a supported point format.

    Raises
    ------
    ValueError
        If the extension is not ``.txt``, ``.csv`` or ``.npy``.
    """
    ext = os.path.splitext(path)[1].lower()
    if ext not in _TEXT_EXTS and ext != ".npy":
        raise ValueError(
            f"Unsupported point file extension {ext!r} for {path!r}.  "
            f"Supported formats: .csv, .npy, .txt."
        )
    return ext


def points_to_array(points):
    """Stack points into a float32 array of shape (N, 3)."""
    return np.array([(p.x, p.y, p.z) for p in points], dtype=np.float32).reshape(-1, 3)


def write_points(path, points):
    """Write *points* to *path*; the format follows the extension.

    Raises
    ------
    ValueError
        If the extension is not ``.txt``, ``.csv`` or ``.npy``.
    """
    ext = check_points_path(path)
    arr = points_to_array(points)
    if ext == ".npy":
        np.save(path, arr)
    else:
        delimiter = _TEXT_EXTS[ext]
        np.savetxt(path, arr, fmt="%.7g", delimiter=delimiter, header=delimiter.join("xyz"))


def read_points(path):
    """Read a point file written by :func:`write_points`.

    Returns
    -------
    list of GeometricPoint
    """
    ext = check_points_path(path)
    if ext == ".npy":
        arr = np.load(path)
    else:
        arr = np.loadtxt(path, dtype=np.float32, delimiter=_TEXT_EXTS[ext].strip() or None, ndmin=2)
    arr = np.asarray(arr, dtype=np.float32).reshape(-1, 3)
    return [GeometricPoint.from_array(row) for row in arr]
