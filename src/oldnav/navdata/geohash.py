"""An integer based geohash.

The hash is an unsigned 64 bit integer. The low PRECISION_BITS (6) bits
store the precision minus one, and the following `precision` bits store the
bisection decisions, alternating between the x and y axes (x first). A set
bit means the position was in the upper half of the current bounds.

Unlike the public base-32 geohash, the precision is explicit and the hash
does not remember which bounds produced it: the same integer decodes to
different cells under different bounds.

Typical usage:
    from oldnav.navdata.bounds import LATLON_BOUNDS, Position
    from oldnav.navdata import geohash

    gh = geohash.encode(Position(x=121.473, y=31.23), 8, LATLON_BOUNDS)
    geohash.hash_to_string(gh)  # "11100110"
    cell = geohash.decode(gh, LATLON_BOUNDS)
"""

from typing import Protocol, Self

from oldnav.core.logging_system import get_logger
from oldnav.navdata.bounds import Bounds, Position, spherical_rectify

logger = get_logger(__name__)

# Maximum value for the precision of a geohash
PRECISION_MAX = 58

# Minimum value for the precision of a geohash
PRECISION_MIN = 1

# Number of low bits reserved for the precision
PRECISION_BITS = 6

PRECISION_MASK = 0b111111

HASH_BITS = 64


class GeohashError(ValueError):
    """Raised when a geohash cannot be encoded, decoded or parsed."""


class InvalidPrecisionError(GeohashError):
    """Raised when a precision falls outside PRECISION_MIN..PRECISION_MAX."""


class PrecisionExceededError(GeohashError):
    """Raised when decoding at a finer precision than the hash carries."""


class Geohashable(Protocol):
    """An object which is able to be geohashed."""

    def encode(self, precision: int) -> int:
        """Encode this object into an unsigned integer geohash."""
        ...

    @classmethod
    def decode(cls, geohash: int) -> Self:
        """Decode an object of this type from an integer geohash."""
        ...


def _check_precision(precision: int) -> None:
    if not PRECISION_MIN <= precision <= PRECISION_MAX:
        raise InvalidPrecisionError(
            f"Precision must be in the range of {PRECISION_MIN} to {PRECISION_MAX}, "
            f"got {precision}"
        )


def _check_hash(geohash: int) -> None:
    if not 0 <= geohash < (1 << HASH_BITS):
        raise GeohashError(f"Geohash {geohash} is not an unsigned {HASH_BITS} bit integer")
    _check_precision(hash_precision(geohash))


def hash_precision(geohash: int) -> int:
    """Get the precision value for an integer geohash.

    Examples:
        >>> hash_precision(hash_from_string("1010"))
        4
    """
    return (geohash & PRECISION_MASK) + 1


def encode(position: Position, precision: int, bounds: Bounds) -> int:
    """Encode a position into an unsigned integer geohash.

    Args:
        position: Position to encode.
        precision: Number of bisection steps (PRECISION_MIN..PRECISION_MAX).
        bounds: Domain the position lives in. Not modified.

    Returns:
        Integer geohash.

    Raises:
        InvalidPrecisionError: If precision is out of range.
    """
    _check_precision(precision)

    current = bounds.copy()
    geohash = precision - 1
    do_x = True

    for bit in range(PRECISION_BITS, PRECISION_BITS + precision):
        mid = current.mid()
        if do_x:
            if position.x > mid.x:
                geohash |= 1 << bit
                current.x_min = mid.x
            else:
                current.x_max = mid.x
        else:
            if position.y > mid.y:
                geohash |= 1 << bit
                current.y_min = mid.y
            else:
                current.y_max = mid.y
        do_x = not do_x

    return geohash


def decode_precision_nocheck(geohash: int, precision: int, bounds: Bounds) -> Bounds:
    """Decode the first `precision` bits of a geohash without validation.

    Args:
        geohash: Integer geohash.
        precision: Number of bisection steps to replay.
        bounds: Domain the hash was encoded against.

    Returns:
        The cell denoted by the truncated hash.
    """
    current = bounds.copy()
    do_x = True

    for bit in range(PRECISION_BITS, PRECISION_BITS + precision):
        mid = current.mid()
        upper = geohash & (1 << bit)
        if do_x:
            if upper:
                current.x_min = mid.x
            else:
                current.x_max = mid.x
        else:
            if upper:
                current.y_min = mid.y
            else:
                current.y_max = mid.y
        do_x = not do_x

    return current


def decode(geohash: int, bounds: Bounds) -> Bounds:
    """Decode an integer geohash into the cell it represents.

    Examples:
        >>> from oldnav.navdata.bounds import LATLON_BOUNDS
        >>> p = Position(x=148.234, y=-38.12)
        >>> decode(encode(p, 40, LATLON_BOUNDS), LATLON_BOUNDS).contains(p)
        True

    Raises:
        GeohashError: If the hash is not a valid 64 bit geohash.
    """
    _check_hash(geohash)
    return decode_precision_nocheck(geohash, hash_precision(geohash), bounds)


def decode_precision(geohash: int, precision: int, bounds: Bounds) -> Bounds:
    """Decode an integer geohash at a coarser precision than it was encoded with.

    Args:
        geohash: Integer geohash.
        precision: Precision to decode at, at most hash_precision(geohash).
        bounds: Domain the hash was encoded against.

    Returns:
        The enclosing cell at the requested precision.

    Raises:
        InvalidPrecisionError: If precision is below PRECISION_MIN.
        PrecisionExceededError: If precision exceeds the hash's own precision.
    """
    _check_hash(geohash)
    _check_precision(precision)
    stored = hash_precision(geohash)
    if precision > stored:
        raise PrecisionExceededError(
            f"Requested precision {precision} exceeds the geohash precision {stored}"
        )
    return decode_precision_nocheck(geohash, precision, bounds)


def hash_to_string(geohash: int) -> str:
    """Render the payload bits of a geohash as a string of '0' and '1'.

    The first encoded bit comes first.

    Examples:
        >>> hash_to_string(hash_from_string("11101011"))
        '11101011'
    """
    precision = hash_precision(geohash)
    return "".join(
        "1" if geohash & (1 << bit) else "0"
        for bit in range(PRECISION_BITS, PRECISION_BITS + precision)
    )


def hash_from_string(string: str) -> int:
    """Create an integer geohash from a string of '0' and '1'.

    Raises:
        InvalidPrecisionError: If the string length is out of range.
        GeohashError: If the string contains anything but '0' and '1'.
    """
    precision = len(string)
    if not PRECISION_MIN <= precision <= PRECISION_MAX:
        raise InvalidPrecisionError(
            f"String length must be in the range of {PRECISION_MIN} to {PRECISION_MAX}, "
            f"got {precision}"
        )

    geohash = precision - 1
    for bit, char in enumerate(string, start=PRECISION_BITS):
        if char == "1":
            geohash |= 1 << bit
        elif char != "0":
            raise GeohashError(f"Invalid geohash character {char!r} in {string!r}")

    return geohash


def neighbor(
    geohash: int,
    offset: tuple[int, int],
    bounds: Bounds,
    spherical: bool,
) -> int:
    """Get the geohash of a cell adjacent to this one.

    Args:
        geohash: Integer geohash of the starting cell.
        offset: (dx, dy) in whole cells, usually -1, 0 or 1.
        bounds: Domain the hash was encoded against.
        spherical: Wrap around the edges of bounds as if they were
            longitude/latitude (see spherical_rectify).

    Returns:
        Geohash of the neighbouring cell, at the same precision.
    """
    dx, dy = offset
    cell = decode(geohash, bounds)
    point = cell.mid()
    point.x += dx * cell.x_range()
    point.y += dy * cell.y_range()

    if spherical:
        spherical_rectify(point, bounds)

    return encode(point, hash_precision(geohash), bounds)


def neighbors(geohash: int, bounds: Bounds, spherical: bool = True) -> list[int]:
    """Get the geohashes of the eight cells surrounding this one.

    Duplicates (which happen near the poles and at very low precision) are
    removed, and the cell itself is never included.
    """
    result: list[int] = []
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            cell = neighbor(geohash, (dx, dy), bounds, spherical)
            if cell != geohash and cell not in result:
                result.append(cell)

    logger.debug("Geohash %s has %d distinct neighbours", hash_to_string(geohash), len(result))
    return result
