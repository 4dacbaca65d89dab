"""Navigation data and geospatial primitives.

This package provides the spherical coordinate model, the integer geohash
codec and the navigation database built on top of them.

Typical usage:
    from oldnav.navdata import LATLON_BOUNDS, SphericalCoordinate, geohash

    pos = SphericalCoordinate.from_geographic(0.0, -37.67, 144.84)
    gh = pos.encode(24)
    cell = geohash.decode(gh, LATLON_BOUNDS)
"""

from oldnav.navdata import geohash
from oldnav.navdata.airac import AiracCycle
from oldnav.navdata.bounds import LATLON_BOUNDS, Bounds, Position, spherical_rectify
from oldnav.navdata.coord import EARTH_MSL_RADIUS, SphericalCoordinate
from oldnav.navdata.country import Country
from oldnav.navdata.database import NavDatabase
from oldnav.navdata.geohash import (
    GeohashError,
    Geohashable,
    InvalidPrecisionError,
    PrecisionExceededError,
)
from oldnav.navdata.multihash import MultiHash
from oldnav.navdata.route import Leg, Route
from oldnav.navdata.waypoint import Airport, Waypoint, WaypointInterface

__all__ = [
    "AiracCycle",
    "Airport",
    "Bounds",
    "Country",
    "EARTH_MSL_RADIUS",
    "GeohashError",
    "Geohashable",
    "InvalidPrecisionError",
    "LATLON_BOUNDS",
    "Leg",
    "MultiHash",
    "NavDatabase",
    "Position",
    "PrecisionExceededError",
    "Route",
    "SphericalCoordinate",
    "Waypoint",
    "WaypointInterface",
    "geohash",
    "spherical_rectify",
]
