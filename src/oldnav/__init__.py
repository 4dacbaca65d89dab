"""OldNav - navigation data and geospatial primitives."""

from oldnav.version import __version__

__all__ = ["__version__"]
