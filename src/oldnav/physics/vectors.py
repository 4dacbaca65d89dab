"""Three dimensional vectors.

Cartesian positions are expressed in metres with the origin at the centre
of the sphere.
"""

import math
from dataclasses import dataclass

import numpy as np


@dataclass
class Vector3:
    """Cartesian 3-vector.

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.

    Examples:
        >>> Vector3(3.0, 4.0, 0.0).magnitude()
        5.0
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __mul__(self, scalar: float) -> "Vector3":
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def dot(self, other: "Vector3") -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        """Cross product with another vector."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def to_array(self) -> np.ndarray:
        """Convert to a numpy array of shape (3,)."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)
