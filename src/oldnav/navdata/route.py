"""Routes (such as airways) made of legs between waypoints."""

from dataclasses import dataclass, field

from oldnav.navdata.waypoint import WaypointInterface, distance_between


@dataclass
class Leg:
    """A leg of a route.

    Attributes:
        start: Start waypoint of the leg.
        end: End waypoint of the leg.
    """

    start: WaypointInterface
    end: WaypointInterface

    def distance(self) -> float:
        """Length of the leg, in metres."""
        return distance_between(self.start, self.end)


@dataclass
class Route:
    """A named route.

    Attributes:
        name: Name of the route (e.g., airway "A576").
        legs: Legs in flying order.
    """

    name: str
    legs: list[Leg] = field(default_factory=list)

    def total_distance(self) -> float:
        """Sum of all leg lengths, in metres."""
        return sum(leg.distance() for leg in self.legs)

    def waypoints(self) -> list[WaypointInterface]:
        """Waypoints along the route in order.

        The start of a leg is skipped when it is the end of the previous leg.
        """
        result: list[WaypointInterface] = []
        for leg in self.legs:
            if not result or result[-1] is not leg.start:
                result.append(leg.start)
            result.append(leg.end)
        return result

    def __len__(self) -> int:
        return len(self.legs)
