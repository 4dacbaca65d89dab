"""Spherical and geographic coordinates.

A SphericalCoordinate stores a position as (r, theta, phi) on a sphere of
mean sea level radius EARTH_MSL_RADIUS. The mapping from geographic values
is:

    r     = altitude + EARTH_MSL_RADIUS
    theta = radians(longitude) + pi
    phi   = radians(latitude) + pi / 2

The canonical ranges, enforced on construction and by every setter, are:

    | name  | range       |
    |-------|-------------|
    | r     | 0 -> inf    |
    | theta | [0, 2pi)    |
    | phi   | [0, pi]     |

The sphere is a deliberate simplification; distances are approximate and
no attempt is made to model the WGS-84 ellipsoid.

Typical usage:
    from oldnav.navdata.coord import SphericalCoordinate

    melbourne = SphericalCoordinate.from_geographic(0.0, -37.67, 144.84)
    sydney = SphericalCoordinate.from_geographic(0.0, -33.95, 151.18)
    melbourne.arc_distance(sydney)  # ~705 km, in metres
"""

import copy
import math
from dataclasses import dataclass
from typing import Self

from oldnav.navdata import geohash
from oldnav.navdata.bounds import LATLON_BOUNDS, Position
from oldnav.physics.vectors import Vector3

TWO_PI = math.pi * 2.0
HALF_PI = math.pi / 2.0

# Mean sea level radius of the earth, in metres
EARTH_MSL_RADIUS = 6371000.0

_POLE_EPSILON = 1e-12


def _wrap_angle(angle: float) -> float:
    """Wrap an angle into [0, 2pi)."""
    angle %= TWO_PI
    # Tiny negative inputs round up to exactly 2pi.
    if angle >= TWO_PI:
        angle = 0.0
    return angle


@dataclass
class SphericalCoordinate:
    """A coordinate in the spherical coordinate system.

    See http://mathworld.wolfram.com/SphericalCoordinates.html for details.
    Instances are rectified as soon as they are created, so theta and phi
    are always within their canonical ranges.

    Attributes:
        r: Radius, metres from the centre of the sphere.
        theta: Azimuthal angle in radians.
        phi: Polar angle in radians.
    """

    r: float
    theta: float
    phi: float

    def __post_init__(self) -> None:
        self.rectify_bounds_inplace()

    @classmethod
    def from_geographic(cls, alt: float, lat: float, lon: float) -> "SphericalCoordinate":
        """Create a coordinate from geographic values.

        Args:
            alt: Metres above the surface defined by EARTH_MSL_RADIUS.
            lat: Latitude in degrees.
            lon: Longitude in degrees.
        """
        return cls(
            r=alt + EARTH_MSL_RADIUS,
            theta=math.radians(lon) + math.pi,
            phi=math.radians(lat) + HALF_PI,
        )

    @classmethod
    def from_cartesian(cls, v: Vector3) -> "SphericalCoordinate":
        """Create a coordinate from a cartesian vector.

        The vector is in metres, relative to the centre of the sphere. On the
        polar axis (x = y = 0) theta is undefined and is set to 0.
        """
        r = v.magnitude()

        if v.x > 0.0:
            theta = math.atan(v.y / v.x)
        elif v.x < 0.0:
            if v.y > 0.0:
                theta = math.atan(v.y / v.x) + math.pi
            elif v.y < 0.0:
                theta = math.atan(v.y / v.x) - math.pi
            else:
                theta = math.pi
        elif v.y > 0.0:
            theta = math.pi
        elif v.y < 0.0:
            theta = -math.pi
        else:
            theta = 0.0

        if r == 0.0:
            phi = 0.0
        else:
            phi = math.acos(max(-1.0, min(1.0, v.z / r)))

        return cls(r, theta, phi)

    def to_cartesian(self) -> Vector3:
        """Get the cartesian vector for this coordinate, in metres."""
        return self.r_cart_uv() * self.r

    def copy(self) -> "SphericalCoordinate":
        """Return an independent copy of this coordinate."""
        return copy.copy(self)

    def rectify_bounds_inplace(self) -> None:
        """Bring r, theta and phi back into their canonical ranges.

        A negative r denotes the antipodal direction, so it is folded onto
        the antipode with a positive radius. A phi past pi means the point
        went over a pole, so it is reflected and theta turned half way around.
        """
        if self.r < 0.0:
            self.r = -self.r
            self.theta += math.pi
            self.phi = math.pi - self.phi

        phi = _wrap_angle(self.phi)
        theta = self.theta

        # Rounding just past the pole (e.g. latitude 90) is not a crossing.
        if math.pi < phi <= math.pi + _POLE_EPSILON:
            phi = math.pi
        elif phi > math.pi:
            phi = TWO_PI - phi
            theta += math.pi

        self.phi = phi
        self.theta = _wrap_angle(theta)

    def rectify_bounds(self) -> "SphericalCoordinate":
        """Get a rectified copy of this coordinate."""
        rectified = self.copy()
        rectified.rectify_bounds_inplace()
        return rectified

    def alt(self) -> float:
        """Get the altitude above MSL (in metres)."""
        return self.r - EARTH_MSL_RADIUS

    def set_alt(self, alt: float) -> None:
        """Set the altitude above MSL (in metres)."""
        self.r = alt + EARTH_MSL_RADIUS
        self.rectify_bounds_inplace()

    def lat(self) -> float:
        """Get the latitude (in degrees)."""
        return math.degrees(self.phi - HALF_PI)

    def set_lat(self, lat: float) -> None:
        """Set the latitude (in degrees)."""
        self.phi = math.radians(lat) + HALF_PI
        self.rectify_bounds_inplace()

    def lon(self) -> float:
        """Get the longitude (in degrees)."""
        return math.degrees(self.theta - math.pi)

    def set_lon(self, lon: float) -> None:
        """Set the longitude (in degrees)."""
        self.theta = math.radians(lon) + math.pi
        self.rectify_bounds_inplace()

    def r_cart_uv(self) -> Vector3:
        """Get the r (radial) cartesian unit vector."""
        return Vector3(
            x=math.cos(self.theta) * math.sin(self.phi),
            y=math.sin(self.theta) * math.sin(self.phi),
            z=math.cos(self.phi),
        )

    def phi_cart_uv(self) -> Vector3:
        """Get the phi cartesian unit vector."""
        return Vector3(
            x=math.cos(self.phi) * math.cos(self.theta),
            y=math.cos(self.phi) * math.sin(self.theta),
            z=-math.sin(self.phi),
        )

    def theta_cart_uv(self) -> Vector3:
        """Get the theta cartesian unit vector."""
        return Vector3(x=-math.sin(self.theta), y=math.cos(self.theta), z=0.0)

    def arc_distance(self, other: "SphericalCoordinate") -> float:
        """Arc distance between two points along the surface of the sphere.

        Uses this coordinate's radius, and is accurate to about 5 metres at
        the surface of the earth. Not a substitute for an ellipsoidal
        formula.

        Args:
            other: The other coordinate.

        Returns:
            Distance in metres.
        """
        a = self.r_cart_uv()
        b = other.r_cart_uv()
        # Same angle as acos(a . b), without losing precision for close points.
        return self.r * math.atan2(a.cross(b).magnitude(), a.dot(b))

    def angle_difference_heuristic(self, other: "SphericalCoordinate") -> float:
        """Euclidean distance in (theta, phi) space.

        Cheap, and only good for coarse ordering; it is not a distance on the
        sphere.
        """
        return math.hypot(self.theta - other.theta, self.phi - other.phi)

    def approx_eq(self, other: "SphericalCoordinate", epsilon: float) -> bool:
        """Componentwise comparison of (r, theta, phi) within epsilon."""
        return (
            abs(self.r - other.r) <= epsilon
            and abs(self.theta - other.theta) <= epsilon
            and abs(self.phi - other.phi) <= epsilon
        )

    def encode(self, precision: int) -> int:
        """Encode the (longitude, latitude) of this coordinate as a geohash."""
        return geohash.encode(Position(x=self.lon(), y=self.lat()), precision, LATLON_BOUNDS)

    @classmethod
    def decode(cls, gh: int) -> Self:
        """Decode a geohash into the coordinate at the centre of its cell, at altitude 0."""
        mid = geohash.decode(gh, LATLON_BOUNDS).mid()
        return cls.from_geographic(0.0, mid.y, mid.x)

    def fmt_geographic(self) -> str:
        """Format as a geographical point string (altitude, latitude and longitude)."""
        return f"Point {{alt: {self.alt()}, lat: {self.lat()}, lon: {self.lon()}}}"

    def __str__(self) -> str:
        return f"SphericalCoordinate {{r: {self.r}, theta: {self.theta}, phi: {self.phi}}}"

    __repr__ = __str__
