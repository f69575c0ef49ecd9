"""Readers for polygon mesh files.

Supported formats:

* **PLY** — Stanford PLY, ASCII encoding (``.ply``)
* **OFF** — Object File Format, plain ASCII (``.off``)
* **GIfTI** — surface geometry via nibabel (``.gii``, ``.surf.gii``)

All readers return ``(vertices, faces)`` where

* ``vertices`` — ``float32`` array of shape ``(N, 3)``
* ``faces``    — ``uint32``  array of shape ``(M, 3)``

Polygons with more than three corners are split into a triangle fan
around their first corner. The dispatcher :func:`read_mesh` routes by file
extension.
"""

import logging
import os

import numpy as np

# Module logger
logger = logging.getLogger(__name__)

# GIfTI intent codes
_INTENT_POINTSET = 1008
_INTENT_TRIANGLE = 1009


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _data_lines(path):
    """Return ``(lineno, stripped_line)`` for non-empty, non-comment lines."""
    with open(path, encoding="utf-8", errors="replace") as fh:
        return [
            (lineno, line.strip())
            for lineno, line in enumerate(fh, start=1)
            if line.strip() and not line.lstrip().startswith("#")
        ]


def _fan(indices):
    """Split a polygon given by corner *indices* into triangles."""
    return [(indices[0], indices[k], indices[k + 1]) for k in range(1, len(indices) - 1)]


def _parse_polygon(tokens, path, lineno, fmt):
    """Parse ``count i0 i1 ...`` and return its triangle fan."""
    try:
        count = int(tokens[0])
        indices = [int(t) for t in tokens[1:count + 1]]
    except (ValueError, IndexError) as exc:
        raise ValueError(
            f"Could not parse {fmt} face on line {lineno} of {path!r}: {' '.join(tokens)!r}"
        ) from exc
    if count < 3 or len(indices) != count:
        raise ValueError(
            f"{fmt} face on line {lineno} of {path!r} declares {count} corners "
            f"but lists {len(indices)}; at least 3 are required."
        )
    return _fan(indices)


def _finish(vertices, triangles, path, fmt):
    """Convert parsed data to arrays and bounds-check the face indices."""
    faces = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    n_verts = vertices.shape[0]
    if faces.size > 0 and (int(faces.max()) >= n_verts or int(faces.min()) < 0):
        raise ValueError(f"{fmt} face indices out of range [0, {n_verts}) in {path!r}.")
    logger.debug("Read %d vertices and %d triangles from %s", n_verts, faces.shape[0], path)
    return vertices, faces.astype(np.uint32)


# ---------------------------------------------------------------------------
# PLY ASCII reader
# ---------------------------------------------------------------------------

def read_ply_ascii(path):
    """Read an ASCII PLY polygon mesh.

    Only the ``vertex`` and ``face`` elements are interpreted; other
    elements declared in the header are skipped in order. Extra per-vertex
    properties (normals, colours, ...) are ignored.

    Parameters
    ----------
    path : str
        Path to the ``.ply`` file.

    Returns
    -------
    vertices : numpy.ndarray, shape (N, 3), dtype float32
    faces : numpy.ndarray, shape (M, 3), dtype uint32

    Raises
    ------
    ValueError
        If the file is not ASCII PLY, the header lacks vertex x/y/z or a face
        element, or the body does not match the header.
    IOError
        If the file cannot be opened.
    """
    lines = _data_lines(path)
    if not lines or lines[0][1] != "ply":
        raise ValueError(f"File does not start with 'ply' magic; not a PLY file: {path!r}.")

    elements = []  # [name, count, [property names]]
    body_start = None
    for pos, (lineno, line) in enumerate(lines[1:], start=1):
        tokens = line.split()
        keyword = tokens[0].lower()
        if keyword == "format":
            if len(tokens) < 2 or tokens[1].lower() != "ascii":
                raise ValueError(
                    f"PLY binary format not supported; only ASCII PLY is accepted: {path!r}."
                )
        elif keyword == "element":
            try:
                elements.append([tokens[1], int(tokens[2]), []])
            except (IndexError, ValueError) as exc:
                raise ValueError(
                    f"Malformed PLY element declaration on line {lineno} of {path!r}."
                ) from exc
        elif keyword == "property" and elements:
            elements[-1][2].append(tokens[-1])
        elif keyword == "end_header":
            body_start = pos + 1
            break
    if body_start is None:
        raise ValueError(f"PLY header has no 'end_header' line: {path!r}.")

    names = [e[0] for e in elements]
    if "vertex" not in names:
        raise ValueError(f"No 'element vertex' found in PLY header: {path!r}.")
    if "face" not in names:
        raise ValueError(f"No 'element face' found in PLY header: {path!r}.")

    body = lines[body_start:]
    needed = sum(e[1] for e in elements)
    if len(body) < needed:
        raise ValueError(
            f"PLY file has {len(body)} data lines but its header declares {needed} in {path!r}."
        )

    vertices = None
    triangles = []
    cursor = 0
    for name, count, props in elements:
        rows = body[cursor:cursor + count]
        cursor += count
        if name == "vertex":
            try:
                xi, yi, zi = props.index("x"), props.index("y"), props.index("z")
            except ValueError as exc:
                raise ValueError(
                    f"PLY vertex element missing x/y/z properties in {path!r}; found: {props!r}."
                ) from exc
            vertices = np.empty((count, 3), dtype=np.float32)
            for i, (lineno, line) in enumerate(rows):
                tokens = line.split()
                try:
                    vertices[i] = [float(tokens[xi]), float(tokens[yi]), float(tokens[zi])]
                except (ValueError, IndexError) as exc:
                    raise ValueError(
                        f"Could not parse PLY vertex on line {lineno} of {path!r}: {line!r}"
                    ) from exc
        elif name == "face":
            for lineno, line in rows:
                triangles.extend(_parse_polygon(line.split(), path, lineno, "PLY"))

    return _finish(vertices, triangles, path, "PLY")


# ---------------------------------------------------------------------------
# OFF reader
# ---------------------------------------------------------------------------

def read_off(path):
    """Read a plain ASCII OFF polygon mesh.

    Parameters
    ----------
    path : str
        Path to the ``.off`` file.

    Returns
    -------
    vertices : numpy.ndarray, shape (N, 3), dtype float32
    faces : numpy.ndarray, shape (M, 3), dtype uint32

    Raises
    ------
    ValueError
        If the header is not ``OFF``, the counts are malformed, or fewer data
        lines follow than declared.
    IOError
        If the file cannot be opened.
    """
    lines = _data_lines(path)
    if not lines:
        raise ValueError(f"OFF file is empty: {path!r}")
    if lines[0][1].upper() != "OFF":
        raise ValueError(
            f"Expected 'OFF' header on first non-comment line, got {lines[0][1]!r} in {path!r}."
        )
    if len(lines) < 2:
        raise ValueError(f"OFF file has no count line after header: {path!r}")
    try:
        n_verts, n_faces = (int(t) for t in lines[1][1].split()[:2])
    except ValueError as exc:
        raise ValueError(f"Could not parse OFF count line {lines[1][1]!r} in {path!r}.") from exc

    body = lines[2:]
    if len(body) < n_verts + n_faces:
        raise ValueError(
            f"OFF file declares {n_verts} vertices and {n_faces} faces "
            f"but only {len(body)} data lines follow in {path!r}."
        )

    vertices = np.empty((n_verts, 3), dtype=np.float32)
    for i, (lineno, line) in enumerate(body[:n_verts]):
        try:
            vertices[i] = [float(c) for c in line.split()[:3]]
        except ValueError as exc:
            raise ValueError(
                f"Could not parse OFF vertex on line {lineno} of {path!r}: {line!r}"
            ) from exc

    triangles = []
    for lineno, line in body[n_verts:n_verts + n_faces]:
        triangles.extend(_parse_polygon(line.split(), path, lineno, "OFF"))

    return _finish(vertices, triangles, path, "OFF")


# ---------------------------------------------------------------------------
# GIfTI surface reader
# ---------------------------------------------------------------------------

def read_gifti_surface(path):
    """Read a GIfTI surface (POINTSET + TRIANGLE data arrays).

    Parameters
    ----------
    path : str
        Path to a ``.surf.gii`` or ``.gii`` file.

    Returns
    -------
    vertices : numpy.ndarray, shape (N, 3), dtype float32
    faces : numpy.ndarray, shape (M, 3), dtype uint32

    Raises
    ------
    ImportError
        If ``nibabel`` is not installed.
    ValueError
        If the file has no POINTSET or no TRIANGLE array.
    """
    try:
        import nibabel as nib  # noqa: PLC0415
    except ImportError as exc:
        raise ImportError(
            "Reading GIfTI files requires nibabel. Install with: pip install nibabel"
        ) from exc

    img = nib.load(path)
    darrays = getattr(img, "darrays", None) or []
    points = [da for da in darrays if da.intent == _INTENT_POINTSET]
    tris = [da for da in darrays if da.intent == _INTENT_TRIANGLE]
    if not points:
        raise ValueError(f"GIfTI file {path!r} has no POINTSET data array.")
    if not tris:
        raise ValueError(f"GIfTI file {path!r} has no TRIANGLE data array.")

    vertices = np.asarray(points[0].data, dtype=np.float32).reshape(-1, 3)
    triangles = np.asarray(tris[0].data, dtype=np.int64).reshape(-1, 3)
    return _finish(vertices, triangles, path, "GIfTI")


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

_READERS = {
    ".ply": read_ply_ascii,
    ".off": read_off,
    ".gii": read_gifti_surface,
}

_SUPPORTED = ", ".join(sorted(_READERS))


def read_mesh(path):
    """Read a triangle mesh, choosing the reader from the file extension.

    Parameters
    ----------
    path : str
        Path to a mesh file with extension ``.ply``, ``.off``, ``.gii`` or
        ``.surf.gii`` (case-insensitive).

    Returns
    -------
    vertices : numpy.ndarray, shape (N, 3), dtype float32
    faces : numpy.ndarray, shape (M, 3), dtype uint32

    Raises
    ------
    ValueError
        If the extension is not recognised.
    FileNotFoundError
        If *path* does not exist.
    """
    ext = os.path.splitext(path)[1].lower()
    reader = _READERS.get(ext)
    if reader is None:
        raise ValueError(
            f"Unsupported mesh file extension {ext!r} for {path!r}.  "
            f"Supported formats: {_SUPPORTED}."
        )
    if not os.path.exists(path):
        raise FileNotFoundError(f"Mesh file not found: {path!r}")
    return reader(path)
