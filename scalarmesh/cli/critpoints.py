#!/usr/bin/env python3
"""CLI entry point for height-field critical points of a triangle mesh.

Loads a mesh, merges coincident corners into a vertex adjacency and reports
the vertices that are local minima or maxima of their ``y`` coordinate.

The mesh can be an ASCII PLY file (``mesh.ply``), an ASCII OFF file
(``mesh.off``) or a GIfTI surface (``mesh.surf.gii``).

Usage::

    # Count minima and maxima
    scalarmesh-critpoints --mesh terrain.ply

    # Coarser tolerance, grid lookup, write both point lists
    scalarmesh-critpoints --mesh terrain.off --tolerance 1e-3 --method grid \\
        --minima minima.txt --maxima maxima.npy

See ``scalarmesh-critpoints --help`` for the full list of options.
"""

import argparse
import logging
import os

if __name__ == "__main__" and __package__ is None:
    import sys
    os.execv(sys.executable, [sys.executable, "-m", "scalarmesh.cli.critpoints"] + sys.argv[1:])

from .._version import __version__
from ..geometry.inputs import load_mesh
from ..geometry.points import EPSILON
from ..geometry.points_io import check_points_path, write_points
from ..utils.types import AdjacencyMethod

logger = logging.getLogger(__name__)

_METHOD_CHOICES = {m.name.lower(): m for m in AdjacencyMethod}


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="scalarmesh-critpoints",
        description=(
            "Find the vertices of a triangle mesh that are local minima or "
            "maxima of their height (y coordinate)."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--mesh",
        type=str,
        required=True,
        help="Path to the mesh file (.ply, .off, .gii, .surf.gii).",
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=EPSILON,
        help=f"Distance at which corners are merged (default: {EPSILON:g}).",
    )
    parser.add_argument(
        "--method",
        type=str,
        default="scan",
        choices=list(_METHOD_CHOICES),
        help="Corner lookup strategy (default: scan).",
    )
    parser.add_argument("--minima", type=str, default=None,
                        help="Write minima to this .txt, .csv or .npy file.")
    parser.add_argument("--maxima", type=str, default=None,
                        help="Write maxima to this .txt, .csv or .npy file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def run(argv=None):
    """Command-line entry point for critical-point extraction.

    Parameters
    ----------
    argv : list of str or None, default=None
        Arguments to parse; ``None`` reads ``sys.argv``.

    Returns
    -------
    CriticalPoints
        The classification result, for programmatic callers.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    logger.debug("Parsed args: %s", vars(args))

    try:
        # Reject bad output paths before any file is written.
        for path in (args.minima, args.maxima):
            if path:
                check_points_path(path)
        mesh = load_mesh(args.mesh, tol=args.tolerance, method=_METHOD_CHOICES[args.method])
        mesh.analyze_vertices()
        result = mesh.find_critical_points()
        if args.minima:
            write_points(args.minima, result.minima)
            logger.info("Minima saved to %s", args.minima)
        if args.maxima:
            write_points(args.maxima, result.maxima)
            logger.info("Maxima saved to %s", args.maxima)
    except (FileNotFoundError, ValueError, ImportError) as e:
        parser.error(str(e))

    print(f"{len(mesh.adjacency)} unique vertices, "
          f"{len(result.minima)} minima, {len(result.maxima)} maxima")
    return result


if __name__ == "__main__":
    run()
