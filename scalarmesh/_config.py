"""Configuration and system-info helpers (top-level module)."""

import platform
import re
import sys
from functools import partial
from importlib.metadata import requires, version
from pathlib import Path
from typing import IO, Callable, Optional

import psutil

_SPECIFIERS = re.compile(r"(~=|==|!=|<=|>=|<|>|===)")


def _declared_requirements(package: str, extra: Optional[str] = None) -> list[str]:
    """Return requirement strings from installed metadata or ``pyproject.toml``.

    Parameters
    ----------
    package : str
        Distribution name.
    extra : str or None, default=None
        Optional-dependency group; ``None`` selects the core dependencies.
    """
    try:
        raw = requires(package) or []
    except Exception:
        raw = []
    if raw:
        if extra is None:
            return [r.split(";")[0].rstrip() for r in raw if "extra" not in r]
        return [
            r.split(";")[0].rstrip()
            for r in raw
            if f"extra == '{extra}'" in r or f'extra == "{extra}"' in r
        ]

    # Source checkout without metadata: read pyproject.toml.
    try:
        import tomllib as _toml
    except ImportError:
        return []
    pyproject_path = Path(__file__).resolve().parents[1] / "pyproject.toml"
    if not pyproject_path.exists():
        return []
    with pyproject_path.open("rb") as fh:
        proj = _toml.load(fh).get("project", {})
    if extra is None:
        return list(proj.get("dependencies", []))
    return list(proj.get("optional-dependencies", {}).get(extra, []))


def sys_info(fid: Optional[IO] = None, developer: bool = False):
    """Print the system information for debugging.

    Parameters
    ----------
    fid : file-like, default=None
        The file to write to, passed to :func:`print`.
        Can be None to use :data:`sys.stdout`.
    developer : bool, default=False
        If True, display information about the test dependencies.
    """
    ljust = 26
    out = partial(print, end="", file=fid)
    package = __package__.split(".")[0]

    out("Platform:".ljust(ljust) + platform.platform() + "\n")
    out("Python:".ljust(ljust) + sys.version.replace("\n", " ") + "\n")
    out("Executable:".ljust(ljust) + sys.executable + "\n")
    out("CPU:".ljust(ljust) + platform.processor() + "\n")
    out("Physical cores:".ljust(ljust) + str(psutil.cpu_count(False)) + "\n")
    out("Logical cores:".ljust(ljust) + str(psutil.cpu_count(True)) + "\n")
    out("RAM:".ljust(ljust))
    out(f"{psutil.virtual_memory().total / float(2 ** 30):0.1f} GB\n")

    out("\nDependencies info\n")
    try:
        pkg_version = version(package)
    except Exception:
        pkg_version = "Not installed."
    out(f"{package}:".ljust(ljust) + pkg_version + "\n")
    _list_dependencies_info(out, ljust, _declared_requirements(package))

    if developer:
        dependencies = _declared_requirements(package, extra="test")
        if dependencies:
            out("\nOptional 'test' info\n")
            _list_dependencies_info(out, ljust, dependencies)


def _list_dependencies_info(out: Callable, ljust: int, dependencies: list[str]):
    """List dependencies names and versions.

    Parameters
    ----------
    out : Callable
        output function
    ljust : int
         length of returned string
    dependencies : List[str]
        list of requirement strings, version specifiers allowed
    """
    for dep in dependencies:
        dep = _SPECIFIERS.split(dep)[0].strip()
        if "[" in dep:
            dep = dep.split("[")[0]
        try:
            version_ = version(dep)
        except Exception:
            version_ = "Not found."
        out(f"{dep}:".ljust(ljust) + version_ + "\n")
