"""Vector math shared by the navigation code."""

from oldnav.physics.vectors import Vector3

__all__ = ["Vector3"]
