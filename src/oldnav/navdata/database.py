"""Navigation database loaded from X-Plane GNS430 navigation data.

The database reads the ICAO country list from the resources directory and
the fixes, airports, airways and AIRAC cycle information from an X-Plane
GNS430 navdata directory:

    Waypoints.txt   CODE,LAT,LON,COUNTRY
    Airports.txt    A,CODE,NAME,LAT,LON,ELEVATION_FT,...   (R,... runway lines ignored)
    ATS.txt         A,AIRWAY,N_SEGMENTS
                    S,FROM,LAT,LON,TO,LAT,LON,...           (one per segment)
    cycle_info.txt  AIRAC cycle metadata

Fixes are indexed spatially by their integer geohash so that nearby fixes
can be found without scanning the whole database.

Typical usage:
    from oldnav.navdata.database import NavDatabase

    db = NavDatabase("navdata", "resources")
    db.load()

    fixes = db.get_fixes("ERVOS")
    airway = db.get_route("A576")
    close = db.find_nearby(position, radius_m=20000.0)
"""

import math
from pathlib import Path

import numpy as np

from oldnav.core.logging_system import get_logger
from oldnav.navdata import geohash
from oldnav.navdata.airac import AiracCycle, read_airac_cycle
from oldnav.navdata.bounds import LATLON_BOUNDS
from oldnav.navdata.coord import EARTH_MSL_RADIUS, SphericalCoordinate
from oldnav.navdata.country import Country, read_countries
from oldnav.navdata.multihash import MultiHash
from oldnav.navdata.route import Leg, Route
from oldnav.navdata.waypoint import Airport, Waypoint

logger = get_logger(__name__)

COUNTRIES_FILE = "icao_countries.txt"
WAYPOINTS_FILE = "Waypoints.txt"
AIRPORTS_FILE = "Airports.txt"
AIRWAYS_FILE = "ATS.txt"
CYCLE_FILE = "cycle_info.txt"

DEFAULT_INDEX_PRECISION = 20
DEFAULT_MATCH_TOLERANCE_M = 5000.0

FEET_TO_METRES = 0.3048
METRES_PER_DEGREE = EARTH_MSL_RADIUS * math.pi / 180.0

# Beyond this many rings of index cells a linear scan is cheaper.
MAX_SEARCH_RINGS = 8


class NavDatabase:
    """A navigation database.

    Attributes:
        navdata_dir: Directory holding the GNS430 navigation data.
        resources_dir: Directory holding icao_countries.txt.
        index_precision: Geohash precision of the spatial index.
        match_tolerance_m: Maximum distance between an airway segment end
            and the fix it is matched to.
        countries: Countries by ICAO code.
        fixes: All fixes, in file order.
        airports: Airports by ICAO code.
        routes: Airways by name.
        airac: AIRAC cycle of the data, if cycle_info.txt was present.
    """

    def __init__(
        self,
        navdata_dir: Path | str,
        resources_dir: Path | str,
        index_precision: int = DEFAULT_INDEX_PRECISION,
        match_tolerance_m: float = DEFAULT_MATCH_TOLERANCE_M,
    ) -> None:
        """Initialize an empty database.

        Args:
            navdata_dir: Directory holding the GNS430 navigation data.
            resources_dir: Directory holding icao_countries.txt.
            index_precision: Geohash precision of the spatial index.
            match_tolerance_m: Airway matching tolerance in metres.

        Raises:
            InvalidPrecisionError: If index_precision is out of range.
        """
        if not geohash.PRECISION_MIN <= index_precision <= geohash.PRECISION_MAX:
            raise geohash.InvalidPrecisionError(
                f"Index precision must be in the range of {geohash.PRECISION_MIN} to "
                f"{geohash.PRECISION_MAX}, got {index_precision}"
            )

        self.navdata_dir = Path(navdata_dir)
        self.resources_dir = Path(resources_dir)
        self.index_precision = index_precision
        self.match_tolerance_m = match_tolerance_m

        self.countries: dict[str, Country] = {}
        self.fixes: list[Waypoint] = []
        self.airports: dict[str, Airport] = {}
        self.routes: dict[str, Route] = {}
        self.airac: AiracCycle | None = None

        self._fixes_by_code: MultiHash[str, Waypoint] = MultiHash()
        self._spatial_index: MultiHash[int, Waypoint] = MultiHash()

        # Lazily built (unit vectors, radii) of self.fixes for vectorised queries
        self._fix_arrays: tuple[np.ndarray, np.ndarray] | None = None

    def load(self) -> None:
        """Load everything available from the data directories.

        Only Waypoints.txt is mandatory; the other files are skipped with a
        warning when missing.

        Raises:
            FileNotFoundError: If Waypoints.txt does not exist.
        """
        countries_path = self.resources_dir / COUNTRIES_FILE
        if countries_path.exists():
            self.countries = read_countries(countries_path)
        else:
            logger.warning("Country file not found: %s", countries_path)

        waypoints_path = self.navdata_dir / WAYPOINTS_FILE
        if not waypoints_path.exists():
            raise FileNotFoundError(f"Waypoint file not found: {waypoints_path}")
        self._read_fixes(waypoints_path)

        airports_path = self.navdata_dir / AIRPORTS_FILE
        if airports_path.exists():
            self._read_airports(airports_path)
        else:
            logger.warning("Airport file not found: %s", airports_path)

        airways_path = self.navdata_dir / AIRWAYS_FILE
        if airways_path.exists():
            self._read_airways(airways_path)
        else:
            logger.warning("Airway file not found: %s", airways_path)

        cycle_path = self.navdata_dir / CYCLE_FILE
        if cycle_path.exists():
            try:
                self.airac = read_airac_cycle(cycle_path)
            except ValueError as e:
                logger.warning("Ignoring unreadable cycle info %s: %s", cycle_path, e)

        logger.info("Loaded %r", self)

    def add_fix(self, fix: Waypoint) -> None:
        """Add a fix to the database and its indexes."""
        self.fixes.append(fix)
        self._fixes_by_code.insert(fix.code, fix)
        self._spatial_index.insert(fix.pos.encode(self.index_precision), fix)
        self._fix_arrays = None

    def _read_fixes(self, path: Path) -> None:
        """Read Waypoints.txt from X-Plane's GNS430 nav data."""
        skipped = 0
        with open(path, encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue

                parts = [part.strip() for part in line.split(",")]
                try:
                    code = parts[0]
                    lat = float(parts[1])
                    lon = float(parts[2])
                except (IndexError, ValueError):
                    logger.warning("Skipping malformed waypoint line %d: %r", line_number, line)
                    skipped += 1
                    continue

                country = self.countries.get(parts[3]) if len(parts) > 3 else None
                pos = SphericalCoordinate.from_geographic(0.0, lat, lon)
                self.add_fix(Waypoint(code=code, name=code, pos=pos, country=country))

        logger.info("Loaded %d fixes from %s (%d skipped)", len(self.fixes), path, skipped)

    def _read_airports(self, path: Path) -> None:
        """Read the airport records of Airports.txt, ignoring runways."""
        with open(path, encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                parts = [part.strip() for part in line.strip().split(",")]
                if parts[0] != "A":
                    continue

                try:
                    code = parts[1].upper()
                    name = parts[2]
                    lat = float(parts[3])
                    lon = float(parts[4])
                    elevation_ft = float(parts[5]) if len(parts) > 5 and parts[5] else 0.0
                except (IndexError, ValueError):
                    logger.warning("Skipping malformed airport line %d: %r", line_number, line)
                    continue

                pos = SphericalCoordinate.from_geographic(elevation_ft * FEET_TO_METRES, lat, lon)
                self.airports[code] = Airport(
                    code=code,
                    name=name,
                    pos=pos,
                    country=self._country_for_code(code),
                )

        logger.info("Loaded %d airports from %s", len(self.airports), path)

    def _read_airways(self, path: Path) -> None:
        """Read ATS.txt and stitch each airway segment onto known fixes."""
        route: Route | None = None
        with open(path, encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                parts = [part.strip() for part in line.strip().split(",")]
                record = parts[0]

                if record == "A":
                    if len(parts) < 2 or not parts[1]:
                        logger.warning("Skipping malformed airway line %d: %r", line_number, line)
                        route = None
                        continue
                    route = self.routes.setdefault(parts[1], Route(name=parts[1]))

                elif record == "S":
                    if route is None:
                        logger.warning("Segment outside of an airway at line %d", line_number)
                        continue
                    try:
                        start_pos = SphericalCoordinate.from_geographic(
                            0.0, float(parts[2]), float(parts[3])
                        )
                        end_pos = SphericalCoordinate.from_geographic(
                            0.0, float(parts[5]), float(parts[6])
                        )
                    except (IndexError, ValueError):
                        logger.warning("Skipping malformed segment line %d: %r", line_number, line)
                        continue

                    route.legs.append(
                        Leg(
                            start=self.match_waypoint(parts[1], start_pos),
                            end=self.match_waypoint(parts[4], end_pos),
                        )
                    )

        logger.info("Loaded %d airways from %s", len(self.routes), path)

    def _country_for_code(self, code: str) -> Country | None:
        """Find the country of an ICAO location code by its 2 or 1 letter prefix."""
        for prefix_length in (2, 1):
            country = self.countries.get(code[:prefix_length])
            if country is not None:
                return country
        return None

    def match_waypoint(self, code: str, pos: SphericalCoordinate) -> Waypoint:
        """Find the fix called `code` closest to an expected position.

        Fix codes are reused around the world, so a code alone is ambiguous.
        When no fix with that code lies within match_tolerance_m a new,
        unindexed waypoint is created at the expected position.

        Args:
            code: ICAO code of the fix.
            pos: Position the fix is expected at.

        Returns:
            The matching fix, or a new waypoint.
        """
        candidates = self._fixes_by_code.get(code)
        if candidates:
            best = min(candidates, key=lambda fix: fix.pos.arc_distance(pos))
            if best.is_within(pos, self.match_tolerance_m):
                return best

        logger.warning(
            "No fix %s within %.0fm of %s", code, self.match_tolerance_m, pos.fmt_geographic()
        )
        return Waypoint(code=code, name=code, pos=pos)

    def get_fixes(self, code: str) -> list[Waypoint]:
        """Get all fixes with a given code."""
        return list(self._fixes_by_code.get(code))

    def get_airport(self, code: str) -> Airport | None:
        """Get an airport by ICAO code."""
        return self.airports.get(code.upper())

    def get_route(self, name: str) -> Route | None:
        """Get an airway by name."""
        return self.routes.get(name)

    def find_nearby(self, pos: SphericalCoordinate, radius_m: float) -> list[Waypoint]:
        """Find all fixes within radius_m of a position, nearest first.

        Args:
            pos: Centre of the search.
            radius_m: Search radius in metres.

        Returns:
            Fixes within the radius, sorted by distance.
        """
        cells = self._search_cells(pos, radius_m)
        if cells is None:
            candidates = self._scan_within(pos, radius_m)
        else:
            candidates = [
                fix
                for cell in cells
                for fix in self._spatial_index.get(cell)
                if fix.is_within(pos, radius_m)
            ]

        candidates.sort(key=lambda fix: fix.pos.arc_distance(pos))
        return candidates

    def _search_cells(self, pos: SphericalCoordinate, radius_m: float) -> set[int] | None:
        """Get the index cells covering a search circle.

        Returns None when the circle spans too many cells (large radius, or
        close to a pole where cells get narrow).
        """
        center = pos.encode(self.index_precision)
        cell = geohash.decode(center, LATLON_BOUNDS)

        height_m = cell.y_range() * METRES_PER_DEGREE
        reach_deg = radius_m / METRES_PER_DEGREE
        max_abs_lat = max(abs(cell.y_min), abs(cell.y_max)) + reach_deg
        if max_abs_lat >= 90.0:
            return None
        width_m = cell.x_range() * METRES_PER_DEGREE * math.cos(math.radians(max_abs_lat))

        # One extra ring: great circles bulge poleward of parallels.
        rings = math.ceil(radius_m / min(height_m, width_m)) + 1
        if rings > MAX_SEARCH_RINGS:
            return None

        return {
            geohash.neighbor(center, (dx, dy), LATLON_BOUNDS, spherical=True)
            for dy in range(-rings, rings + 1)
            for dx in range(-rings, rings + 1)
        }

    def _arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """Get (unit vectors, radii) of every fix as numpy arrays."""
        if self._fix_arrays is None:
            vectors = np.array(
                [fix.pos.r_cart_uv().to_array() for fix in self.fixes], dtype=np.float64
            ).reshape(-1, 3)
            radii = np.array([fix.pos.r for fix in self.fixes], dtype=np.float64)
            self._fix_arrays = (vectors, radii)
        return self._fix_arrays

    def _distances(self, pos: SphericalCoordinate) -> np.ndarray:
        """Arc distance from every fix to pos, measured like Waypoint.is_within."""
        vectors, radii = self._arrays()
        target = pos.r_cart_uv().to_array()
        sin_angles = np.linalg.norm(np.cross(vectors, target), axis=1)
        return radii * np.arctan2(sin_angles, vectors @ target)

    def _scan_within(self, pos: SphericalCoordinate, radius_m: float) -> list[Waypoint]:
        distances = self._distances(pos)
        return [self.fixes[i] for i in np.flatnonzero(distances <= radius_m)]

    def nearest(self, pos: SphericalCoordinate) -> Waypoint | None:
        """Find the fix closest to a position.

        Returns:
            The nearest fix, or None if the database has no fixes.
        """
        if not self.fixes:
            return None
        return self.fixes[int(np.argmin(self._distances(pos)))]

    def __repr__(self) -> str:
        return (
            f"NavDatabase: {{n_fixes: {len(self.fixes)}, n_airports: {len(self.airports)}, "
            f"n_countries: {len(self.countries)}, n_routes: {len(self.routes)}}}"
        )
