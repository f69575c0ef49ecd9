"""Version number."""

try:
    from importlib.metadata import version
    __version__ = version(__package__)
except Exception:
    # Package metadata is missing when running from a source checkout.
    __version__ = "0.3.0-dev"
