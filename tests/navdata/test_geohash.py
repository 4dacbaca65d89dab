"""Tests for the integer geohash codec."""

import pytest

from oldnav.navdata import geohash
from oldnav.navdata.bounds import LATLON_BOUNDS, Bounds, Position
from oldnav.navdata.geohash import (
    PRECISION_BITS,
    PRECISION_MAX,
    PRECISION_MIN,
    GeohashError,
    InvalidPrecisionError,
    PrecisionExceededError,
)

SAMPLE_POSITIONS = [
    Position(x=121.473, y=31.23),
    Position(x=148.234, y=-38.12),
    Position(x=-122.374889, y=37.618972),
    Position(x=0.0, y=0.0),
    Position(x=-180.0, y=-90.0),
    Position(x=180.0, y=90.0),
    Position(x=179.999, y=-89.999),
]


class TestEncode:
    """Test encoding positions."""

    def test_known_hash(self) -> None:
        """Test encoding Shanghai at precision 8."""
        gh = geohash.encode(Position(x=121.473, y=31.23), 8, LATLON_BOUNDS)

        assert geohash.hash_to_string(gh) == "11100110"
        assert geohash.hash_precision(gh) == 8

    def test_precision_stored_in_low_bits(self) -> None:
        """Test that the low bits hold precision - 1."""
        gh = geohash.encode(Position(x=10.0, y=10.0), 17, LATLON_BOUNDS)

        assert gh & 0b111111 == 16

    @pytest.mark.parametrize("precision", [0, -1, PRECISION_MAX + 1, 64])
    def test_invalid_precision(self, precision: int) -> None:
        """Test precisions outside 1..58 are rejected."""
        with pytest.raises(InvalidPrecisionError):
            geohash.encode(Position(x=0.0, y=0.0), precision, LATLON_BOUNDS)

    def test_invalid_precision_is_value_error(self) -> None:
        """Test that codec errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            geohash.encode(Position(x=0.0, y=0.0), 0, LATLON_BOUNDS)

    def test_bounds_not_modified(self) -> None:
        """Test encoding leaves the caller's bounds alone."""
        bounds = Bounds(-10.0, 10.0, -5.0, 5.0)
        geohash.encode(Position(x=3.0, y=-2.0), 30, bounds)

        assert bounds == Bounds(-10.0, 10.0, -5.0, 5.0)

    def test_midpoint_goes_to_lower_half(self) -> None:
        """Test that a point exactly on the midpoint encodes as 0."""
        gh = geohash.encode(Position(x=0.0, y=0.0), 2, LATLON_BOUNDS)

        assert geohash.hash_to_string(gh) == "00"

    def test_fits_in_64_bits(self) -> None:
        """Test the largest hash fits in an unsigned 64 bit integer."""
        gh = geohash.encode(Position(x=180.0, y=90.0), PRECISION_MAX, LATLON_BOUNDS)

        assert gh < 2**64
        assert geohash.hash_to_string(gh) == "1" * PRECISION_MAX


class TestDecode:
    """Test decoding hashes into cells."""

    @pytest.mark.parametrize("precision", [1, 2, 8, 25, 40, PRECISION_MAX])
    @pytest.mark.parametrize("position", SAMPLE_POSITIONS)
    def test_cell_contains_position(self, position: Position, precision: int) -> None:
        """Test decode(encode(p)) contains p."""
        gh = geohash.encode(position, precision, LATLON_BOUNDS)

        assert geohash.decode(gh, LATLON_BOUNDS).contains(position)

    def test_precision_one(self) -> None:
        """Test a single bit selects half of the x axis."""
        cell = geohash.decode(geohash.hash_from_string("1"), LATLON_BOUNDS)

        assert cell == Bounds(0.0, 180.0, -90.0, 90.0)

    def test_known_cell(self) -> None:
        """Test the cell of a known hash."""
        cell = geohash.decode(geohash.hash_from_string("11100110"), LATLON_BOUNDS)

        assert cell == Bounds(112.5, 135.0, 22.5, 33.75)

    def test_same_hash_other_bounds(self) -> None:
        """Test a hash decodes relative to the bounds given."""
        cell = geohash.decode(geohash.hash_from_string("10"), Bounds(0.0, 4.0, 0.0, 2.0))

        assert cell == Bounds(2.0, 4.0, 0.0, 1.0)

    def test_cell_size_halves(self) -> None:
        """Test each extra bit halves one axis."""
        p = Position(x=148.234, y=-38.12)
        cell = geohash.decode(geohash.encode(p, 20, LATLON_BOUNDS), LATLON_BOUNDS)

        assert cell.x_range() == pytest.approx(360.0 / 2**10)
        assert cell.y_range() == pytest.approx(180.0 / 2**10)

    def test_stored_precision_too_large(self) -> None:
        """Test a hash claiming precision 64 is rejected."""
        with pytest.raises(InvalidPrecisionError):
            geohash.decode(0b111111, LATLON_BOUNDS)

    @pytest.mark.parametrize("gh", [-1, 2**64])
    def test_out_of_range_hash(self, gh: int) -> None:
        """Test values that are not unsigned 64 bit integers are rejected."""
        with pytest.raises(GeohashError):
            geohash.decode(gh, LATLON_BOUNDS)


class TestDecodePrecision:
    """Test truncated decoding."""

    def test_coarser_cell(self) -> None:
        """Test decoding fewer bits than were encoded."""
        gh = geohash.hash_from_string("11100110")

        coarse = geohash.decode_precision(gh, 4, LATLON_BOUNDS)

        assert coarse == geohash.decode(geohash.hash_from_string("1110"), LATLON_BOUNDS)

    def test_full_precision_matches_decode(self) -> None:
        """Test decoding at the stored precision equals decode."""
        gh = geohash.encode(Position(x=148.234, y=-38.12), 33, LATLON_BOUNDS)

        assert geohash.decode_precision(gh, 33, LATLON_BOUNDS) == geohash.decode(
            gh, LATLON_BOUNDS
        )

    def test_coarse_cell_contains_fine_cell(self) -> None:
        """Test the truncated cell encloses the full one."""
        p = Position(x=-122.374889, y=37.618972)
        gh = geohash.encode(p, 40, LATLON_BOUNDS)

        coarse = geohash.decode_precision(gh, 11, LATLON_BOUNDS)
        fine = geohash.decode(gh, LATLON_BOUNDS)

        assert coarse.contains(Position(fine.x_min, fine.y_min))
        assert coarse.contains(Position(fine.x_max, fine.y_max))
        assert coarse.contains(p)

    def test_precision_exceeded(self) -> None:
        """Test asking for more bits than the hash has."""
        gh = geohash.hash_from_string("1110")

        with pytest.raises(PrecisionExceededError):
            geohash.decode_precision(gh, 5, LATLON_BOUNDS)

    def test_precision_below_minimum(self) -> None:
        """Test asking for zero bits."""
        gh = geohash.hash_from_string("1110")

        with pytest.raises(InvalidPrecisionError):
            geohash.decode_precision(gh, 0, LATLON_BOUNDS)

    def test_nocheck_skips_validation(self) -> None:
        """Test the unchecked decode replays whatever bits it is asked for."""
        gh = geohash.hash_from_string("1")

        cell = geohash.decode_precision_nocheck(gh, 2, LATLON_BOUNDS)

        assert cell == Bounds(0.0, 180.0, -90.0, 0.0)


class TestStrings:
    """Test string conversion."""

    @pytest.mark.parametrize(
        "bits",
        ["0", "1", "1111", "1010", "00000000", "11101011", "0110" * 10, "1" * PRECISION_MAX],
    )
    def test_round_trip(self, bits: str) -> None:
        """Test hash_to_string(hash_from_string(s)) == s."""
        gh = geohash.hash_from_string(bits)

        assert geohash.hash_to_string(gh) == bits
        assert geohash.hash_precision(gh) == len(bits)

    def test_from_string_value(self) -> None:
        """Test the exact integer built from a string."""
        assert geohash.hash_from_string("1111") == 3 | (0b1111 << PRECISION_BITS)

    def test_first_bit_is_lowest_payload_bit(self) -> None:
        """Test the first character maps to the first encoded bit."""
        assert geohash.hash_from_string("10") == 1 | (1 << PRECISION_BITS)

    @pytest.mark.parametrize("length", [0, PRECISION_MAX + 1])
    def test_invalid_length(self, length: int) -> None:
        """Test strings that are empty or too long."""
        with pytest.raises(InvalidPrecisionError):
            geohash.hash_from_string("1" * length)

    def test_invalid_character(self) -> None:
        """Test characters other than 0 and 1."""
        with pytest.raises(GeohashError):
            geohash.hash_from_string("10a1")

    @pytest.mark.parametrize("precision", [PRECISION_MIN, 7, PRECISION_MAX])
    def test_hash_precision(self, precision: int) -> None:
        """Test precision is read back from the hash."""
        assert geohash.hash_precision(geohash.hash_from_string("0" * precision)) == precision


class TestNeighbor:
    """Test finding adjacent cells."""

    def test_same_cell_for_zero_offset(self) -> None:
        """Test a zero offset returns the hash itself."""
        gh = geohash.encode(Position(x=121.473, y=31.23), 20, LATLON_BOUNDS)

        assert geohash.neighbor(gh, (0, 0), LATLON_BOUNDS, spherical=True) == gh

    @pytest.mark.parametrize("offset", [(1, 0), (-1, 0), (0, 1), (0, -1), (1, 1), (-1, -1)])
    def test_adjacent_cells(self, offset: tuple[int, int]) -> None:
        """Test neighbours share an edge or corner with the cell."""
        dx, dy = offset
        gh = geohash.encode(Position(x=121.473, y=31.23), 20, LATLON_BOUNDS)
        cell = geohash.decode(gh, LATLON_BOUNDS)

        other = geohash.decode(
            geohash.neighbor(gh, offset, LATLON_BOUNDS, spherical=False), LATLON_BOUNDS
        )

        assert other.x_min == pytest.approx(cell.x_min + dx * cell.x_range())
        assert other.y_min == pytest.approx(cell.y_min + dy * cell.y_range())
        assert other.x_range() == pytest.approx(cell.x_range())

    def test_keeps_precision(self) -> None:
        """Test the neighbour has the same precision."""
        gh = geohash.encode(Position(x=10.0, y=10.0), 31, LATLON_BOUNDS)

        assert geohash.hash_precision(geohash.neighbor(gh, (1, -1), LATLON_BOUNDS, True)) == 31

    def test_larger_offset(self) -> None:
        """Test offsets of more than one cell."""
        gh = geohash.encode(Position(x=10.0, y=10.0), 10, LATLON_BOUNDS)
        cell = geohash.decode(gh, LATLON_BOUNDS)

        other = geohash.decode(geohash.neighbor(gh, (3, 0), LATLON_BOUNDS, False), LATLON_BOUNDS)

        assert other.x_min == pytest.approx(cell.x_min + 3 * cell.x_range())

    def test_wraps_antimeridian(self) -> None:
        """Test going east of 180 degrees comes back at -180."""
        gh = geohash.encode(Position(x=179.9, y=10.0), 10, LATLON_BOUNDS)

        east = geohash.decode(geohash.neighbor(gh, (1, 0), LATLON_BOUNDS, True), LATLON_BOUNDS)

        assert east.x_min == pytest.approx(-180.0)

    def test_flat_stops_at_edge(self) -> None:
        """Test that without wrapping the edge cell is its own east neighbour."""
        gh = geohash.encode(Position(x=179.9, y=10.0), 10, LATLON_BOUNDS)

        assert geohash.neighbor(gh, (1, 0), LATLON_BOUNDS, False) == gh

    def test_crosses_pole(self) -> None:
        """Test going north over the pole lands on the far side of the earth."""
        gh = geohash.encode(Position(x=5.0, y=89.0), 10, LATLON_BOUNDS)

        north = geohash.decode(geohash.neighbor(gh, (0, 1), LATLON_BOUNDS, True), LATLON_BOUNDS)

        assert north.y_max == pytest.approx(90.0)
        assert north.x_min == pytest.approx(-180.0)
        assert north.x_max == pytest.approx(-168.75)


class TestNeighbors:
    """Test the ring of eight neighbours."""

    def test_eight_distinct_neighbours(self) -> None:
        """Test a mid latitude cell has eight neighbours."""
        gh = geohash.encode(Position(x=121.473, y=31.23), 20, LATLON_BOUNDS)

        result = geohash.neighbors(gh, LATLON_BOUNDS)

        assert len(result) == 8
        assert len(set(result)) == 8
        assert gh not in result

    def test_low_precision_deduplicated(self) -> None:
        """Test duplicates are removed when cells are huge."""
        gh = geohash.hash_from_string("1")

        result = geohash.neighbors(gh, LATLON_BOUNDS)

        assert result == [geohash.hash_from_string("0")]
