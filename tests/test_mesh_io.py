"""Tests for scalarmesh/geometry/mesh_io.py and the resolvers in inputs.py.

All tests use in-memory strings written to temporary files so no external
data is required (except the bundled tetra.ply sample).
"""

import os
import tempfile

import numpy as np
import pytest

from scalarmesh.geometry.inputs import load_mesh, resolve_mesh, triangles_from_arrays
from scalarmesh.geometry.mesh import Mesh, Triangle
from scalarmesh.geometry.mesh_io import read_gifti_surface, read_mesh, read_off, read_ply_ascii
from scalarmesh.geometry.points import GeometricPoint

# ---------------------------------------------------------------------------
# Shared sample content strings
# ---------------------------------------------------------------------------

_TETRA_OFF = """\
OFF
# tetrahedron
4 4 6
0.0 0.0 0.0
1.0 0.0 0.0
0.0 1.0 0.0
0.0 0.0 1.0
3 0 2 1
3 0 1 3
3 0 3 2
3 1 2 3
"""

_TETRA_PLY = """\
ply
format ascii 1.0
comment tetrahedron
element vertex 4
property float x
property float y
property float z
element face 4
property list uchar int vertex_indices
end_header
0.0 0.0 0.0
1.0 0.0 0.0
0.0 1.0 0.0
0.0 0.0 1.0
3 0 2 1
3 0 1 3
3 0 3 2
3 1 2 3
"""

_QUAD_PLY = """\
ply
format ascii 1.0
element vertex 4
property float x
property float y
property float z
element face 1
property list uchar int vertex_indices
end_header
0 0 0
1 0 0
1 0 1
0 0 1
4 0 1 2 3
"""


def _write_tmp(content, suffix):
    """Write *content* to a named temp file, return its path."""
    fd, path = tempfile.mkstemp(suffix=suffix)
    with os.fdopen(fd, "w") as fh:
        fh.write(content)
    return path


def _expected_verts():
    return np.array(
        [[0, 0, 0], [1, 0, 0], [0, 1, 0], [0, 0, 1]], dtype=np.float32
    )


def _expected_faces():
    return np.array(
        [[0, 2, 1], [0, 1, 3], [0, 3, 2], [1, 2, 3]], dtype=np.uint32
    )


# ---------------------------------------------------------------------------
# read_ply_ascii
# ---------------------------------------------------------------------------

class TestReadPlyAscii:
    def test_basic(self):
        path = _write_tmp(_TETRA_PLY, ".ply")
        try:
            v, f = read_ply_ascii(path)
        finally:
            os.unlink(path)
        assert v.dtype == np.float32 and f.dtype == np.uint32
        np.testing.assert_array_equal(v, _expected_verts())
        np.testing.assert_array_equal(f, _expected_faces())

    def test_bundled_sample(self):
        """Verify the bundled tests/data/tetra.ply file loads correctly."""
        sample = os.path.join(os.path.dirname(__file__), "data", "tetra.ply")
        v, f = read_ply_ascii(sample)
        assert v.shape == (4, 3)
        assert f.shape == (4, 3)

    def test_quad_is_fan_triangulated(self):
        path = _write_tmp(_QUAD_PLY, ".ply")
        try:
            _, f = read_ply_ascii(path)
        finally:
            os.unlink(path)
        np.testing.assert_array_equal(f, [[0, 1, 2], [0, 2, 3]])

    def test_extra_properties_and_elements(self):
        content = """\
ply
format ascii 1.0
element vertex 3
property float nx
property float x
property float y
property float z
element edge 1
property int vertex1
property int vertex2
element face 1
property list uchar int vertex_indices
end_header
9 0.0 0.0 0.0
9 1.0 0.0 0.0
9 0.0 1.0 0.0
0 1
3 0 1 2
"""
        path = _write_tmp(content, ".ply")
        try:
            v, f = read_ply_ascii(path)
        finally:
            os.unlink(path)
        np.testing.assert_array_equal(v, [[0, 0, 0], [1, 0, 0], [0, 1, 0]])
        np.testing.assert_array_equal(f, [[0, 1, 2]])

    def test_binary_ply_raises(self):
        content = "ply\nformat binary_little_endian 1.0\nelement vertex 4\nend_header\n"
        path = _write_tmp(content, ".ply")
        try:
            with pytest.raises(ValueError, match="binary"):
                read_ply_ascii(path)
        finally:
            os.unlink(path)

    def test_not_ply_raises(self):
        path = _write_tmp(_TETRA_OFF, ".ply")
        try:
            with pytest.raises(ValueError, match="ply"):
                read_ply_ascii(path)
        finally:
            os.unlink(path)

    def test_missing_face_element_raises(self):
        content = (
            "ply\nformat ascii 1.0\nelement vertex 1\nproperty float x\n"
            "property float y\nproperty float z\nend_header\n0 0 0\n"
        )
        path = _write_tmp(content, ".ply")
        try:
            with pytest.raises(ValueError, match="element face"):
                read_ply_ascii(path)
        finally:
            os.unlink(path)

    def test_truncated_body_raises(self):
        path = _write_tmp(_TETRA_PLY.rsplit("3 1 2 3", 1)[0], ".ply")
        try:
            with pytest.raises(ValueError, match="data lines"):
                read_ply_ascii(path)
        finally:
            os.unlink(path)

    def test_out_of_range_indices_raises(self):
        path = _write_tmp(_TETRA_PLY.replace("3 1 2 3", "3 1 2 9"), ".ply")
        try:
            with pytest.raises(ValueError, match="out of range"):
                read_ply_ascii(path)
        finally:
            os.unlink(path)


# ---------------------------------------------------------------------------
# read_off
# ---------------------------------------------------------------------------

class TestReadOff:
    def test_basic(self):
        path = _write_tmp(_TETRA_OFF, ".off")
        try:
            v, f = read_off(path)
        finally:
            os.unlink(path)
        np.testing.assert_array_equal(v, _expected_verts())
        np.testing.assert_array_equal(f, _expected_faces())

    def test_pentagon_is_fan_triangulated(self):
        content = "OFF\n5 1 0\n0 0 0\n1 0 0\n2 0 1\n1 0 2\n0 0 1\n5 0 1 2 3 4\n"
        path = _write_tmp(content, ".off")
        try:
            _, f = read_off(path)
        finally:
            os.unlink(path)
        assert f.shape == (3, 3)
        np.testing.assert_array_equal(f[:, 0], 0)

    def test_bad_header_raises(self):
        path = _write_tmp(_TETRA_OFF.replace("OFF", "NOFF", 1), ".off")
        try:
            with pytest.raises(ValueError, match="OFF"):
                read_off(path)
        finally:
            os.unlink(path)

    def test_empty_file_raises(self):
        path = _write_tmp("", ".off")
        try:
            with pytest.raises(ValueError, match="empty"):
                read_off(path)
        finally:
            os.unlink(path)

    def test_two_corner_face_raises(self):
        content = "OFF\n3 1 0\n0 0 0\n1 0 0\n0 1 0\n2 0 1\n"
        path = _write_tmp(content, ".off")
        try:
            with pytest.raises(ValueError, match="at least 3"):
                read_off(path)
        finally:
            os.unlink(path)


# ---------------------------------------------------------------------------
# GIfTI surface reader
# ---------------------------------------------------------------------------

def _make_surf_gii(verts, faces, suffix=".surf.gii", with_triangles=True):
    """Write a minimal GIfTI surface file and return its path."""
    import nibabel as nib
    darrays = [
        nib.gifti.GiftiDataArray(
            data=verts.astype(np.float32), intent=1008, datatype="NIFTI_TYPE_FLOAT32"
        )
    ]
    if with_triangles:
        darrays.append(
            nib.gifti.GiftiDataArray(
                data=faces.astype(np.int32), intent=1009, datatype="NIFTI_TYPE_INT32"
            )
        )
    fd, path = tempfile.mkstemp(suffix=suffix)
    os.close(fd)
    nib.save(nib.gifti.GiftiImage(darrays=darrays), path)
    return path


class TestReadGiftiSurface:
    def test_surf_gii_basic(self):
        path = _make_surf_gii(_expected_verts(), _expected_faces())
        try:
            v, f = read_gifti_surface(path)
        finally:
            os.unlink(path)
        np.testing.assert_allclose(v, _expected_verts(), atol=1e-6)
        np.testing.assert_array_equal(f, _expected_faces())
        assert f.dtype == np.uint32

    def test_no_triangle_raises(self):
        path = _make_surf_gii(_expected_verts(), None, ".gii", with_triangles=False)
        try:
            with pytest.raises(ValueError, match="TRIANGLE"):
                read_gifti_surface(path)
        finally:
            os.unlink(path)


# ---------------------------------------------------------------------------
# read_mesh dispatcher
# ---------------------------------------------------------------------------

class TestReadMeshDispatcher:
    @pytest.mark.parametrize("content, suffix", [(_TETRA_OFF, ".off"), (_TETRA_PLY, ".PLY")])
    def test_dispatch(self, content, suffix):
        path = _write_tmp(content, suffix)
        try:
            v, _ = read_mesh(path)
        finally:
            os.unlink(path)
        assert v.shape == (4, 3)

    def test_surf_gii_dispatched(self):
        path = _make_surf_gii(_expected_verts(), _expected_faces())
        try:
            v, _ = read_mesh(path)
        finally:
            os.unlink(path)
        assert v.shape == (4, 3)

    def test_unknown_extension_raises(self):
        with pytest.raises(ValueError, match="Unsupported"):
            read_mesh("/some/file.stl")

    def test_missing_file_raises(self):
        with pytest.raises(FileNotFoundError):
            read_mesh("/does/not/exist.ply")


# ---------------------------------------------------------------------------
# Resolvers
# ---------------------------------------------------------------------------

class TestResolveMesh:
    def test_path(self):
        path = _write_tmp(_TETRA_PLY, ".ply")
        try:
            v, f = resolve_mesh(path)
        finally:
            os.unlink(path)
        assert v.shape == (4, 3) and f.shape == (4, 3)

    def test_array_pair(self):
        v, f = resolve_mesh((_expected_verts().tolist(), _expected_faces().tolist()))
        assert v.dtype == np.float32 and f.dtype == np.uint32

    def test_mesh_object(self):
        mesh = Mesh()
        mesh.add_triangle(Triangle(GeometricPoint(0, 0, 0), GeometricPoint(1, 0, 0), GeometricPoint(0, 1, 0)))
        v, f = resolve_mesh(mesh)
        assert v.shape == (3, 3)
        np.testing.assert_array_equal(f, [[0, 1, 2]])

    def test_empty_pair(self):
        v, f = resolve_mesh(([], []))
        assert v.shape == (0, 3) and f.shape == (0, 3)

    def test_wrong_type_raises(self):
        with pytest.raises(TypeError):
            resolve_mesh(42)

    def test_wrong_shape_raises(self):
        with pytest.raises(ValueError):
            resolve_mesh((np.ones((4, 4)), _expected_faces()))
        with pytest.raises(ValueError):
            resolve_mesh((_expected_verts(), np.ones((2, 4), dtype=int)))

    def test_out_of_range_raises(self):
        with pytest.raises(ValueError, match="out of range"):
            resolve_mesh((_expected_verts(), [[0, 1, 99]]))
        with pytest.raises(ValueError, match="non-negative"):
            resolve_mesh((_expected_verts(), [[0, 1, -1]]))


class TestLoadMesh:
    def test_triangles_from_arrays(self):
        triangles = list(triangles_from_arrays(_expected_verts(), _expected_faces()))
        assert len(triangles) == 4
        assert triangles[0] == Triangle(
            GeometricPoint(0, 0, 0), GeometricPoint(0, 1, 0), GeometricPoint(1, 0, 0)
        )

    def test_bundled_tetra_pipeline(self):
        sample = os.path.join(os.path.dirname(__file__), "data", "tetra.ply")
        mesh = load_mesh(sample, method="grid")
        assert mesh.n_triangles == 4
        assert len(mesh.vertices) == 12
        assert len(mesh.analyze_vertices()) == 4
        result = mesh.find_critical_points()
        assert result.maxima == [GeometricPoint(0, 1, 0)]
        assert len(result.minima) == 3
        assert GeometricPoint(0, 1, 0) not in result.minima

    def test_tolerance_forwarded(self):
        mesh = load_mesh((_expected_verts(), _expected_faces()), tol=0.5)
        assert mesh.tol == 0.5
