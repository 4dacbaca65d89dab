"""Waypoints and airports.

Typical usage:
    from oldnav.navdata.coord import SphericalCoordinate
    from oldnav.navdata.country import Country
    from oldnav.navdata.waypoint import Waypoint

    country = Country("AG", "Solomon Islands")
    pos = SphericalCoordinate.from_geographic(0.0, -9.66483, 161.02166)
    waypoint = Waypoint("ERVOS", "ERVOS", pos, country)
"""

from dataclasses import dataclass
from typing import Protocol

from oldnav.navdata.coord import SphericalCoordinate
from oldnav.navdata.country import Country


class WaypointInterface(Protocol):
    """Anything which can provide waypoint information."""

    code: str
    name: str
    pos: SphericalCoordinate


def distance_between(a: WaypointInterface, b: WaypointInterface) -> float:
    """Arc distance between two waypoints, in metres."""
    return a.pos.arc_distance(b.pos)


@dataclass
class Airport:
    """An airport on earth.

    Attributes:
        code: ICAO airport code (e.g., "YMML").
        name: Airport name.
        pos: Position of the airport reference point; altitude is the
            field elevation.
        country: Country the airport is in, when known.
    """

    code: str
    name: str
    pos: SphericalCoordinate
    country: Country | None = None

    def __str__(self) -> str:
        return (
            f"Airport: {{code: {self.code}, name: {self.name}, "
            f"pos: [{self.pos.lat()}, {self.pos.lon()}]}}"
        )


@dataclass
class Waypoint:
    """An ICAO waypoint (fix).

    Attributes:
        code: ICAO code of the fix. Codes are not globally unique.
        name: Name of the fix (usually the same as the code).
        pos: Position of the fix.
        country: Country the fix is registered in, when known.
        airport: Airport whose terminal area contains this fix, if any.
    """

    code: str
    name: str
    pos: SphericalCoordinate
    country: Country | None = None
    airport: Airport | None = None

    def is_within(self, pos: SphericalCoordinate, distance_m: float) -> bool:
        """Check whether a position lies within distance_m of this waypoint."""
        return self.pos.arc_distance(pos) <= distance_m

    def __str__(self) -> str:
        country = self.country.code if self.country else "None"
        return (
            f"Waypoint {{code: {self.code}, name: {self.name}, "
            f"pos: [{self.pos.lat()},{self.pos.lon()}], country: {country}}}"
        )
