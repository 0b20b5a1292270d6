"""Unit tests for the coordinate tree helpers."""

import math

from co2_atlas.lib.geometry.coords import (
    as_pair,
    first_position,
    is_finite_pair,
    is_valid_wgs84,
    iter_positions,
    map_positions,
)


class TestMapPositions:
    """Tests for map_positions."""

    def test_point_leaf(self) -> None:
        """A Point's coordinates are themselves the leaf."""
        assert map_positions([1, 2], lambda p: [p[0] * 10, p[1] * 10]) == [10, 20]

    def test_preserves_polygon_nesting(self) -> None:
        """Polygon rings keep their shape while every leaf is mapped."""
        rings = [[[0, 0], [1, 0], [1, 1], [0, 0]]]
        result = map_positions(rings, lambda p: [p[0] + 1, p[1]])
        assert result == [[[1, 0], [2, 0], [2, 1], [1, 0]]]

    def test_multipolygon_depth(self) -> None:
        """Depth-three trees are walked fully."""
        coords = [[[[0, 0], [1, 1], [0, 0]]], [[[5, 5], [6, 6], [5, 5]]]]
        assert len(iter_positions(coords)) == 6

    def test_tuples_become_lists(self) -> None:
        """Tuples from shapely mappings are rebuilt as lists."""
        result = map_positions(((0.0, 1.0), (2.0, 3.0)), list)
        assert result == [[0.0, 1.0], [2.0, 3.0]]

    def test_malformed_leaf_reaches_func(self) -> None:
        """Scalars in place of positions are still passed to func."""
        assert iter_positions([[1, 2], 3]) == [[1, 2], 3]


class TestPairs:
    """Tests for pair predicates."""

    def test_as_pair_accepts_ints_and_floats(self) -> None:
        """Integers and floats both qualify."""
        assert as_pair([13, 47.5]) == (13.0, 47.5)

    def test_as_pair_rejects_booleans(self) -> None:
        """Booleans are not coordinates."""
        assert as_pair([True, 1.0]) is None

    def test_as_pair_rejects_wrong_arity(self) -> None:
        """Three-element positions are rejected."""
        assert as_pair([1.0, 2.0, 3.0]) is None

    def test_as_pair_rejects_strings(self) -> None:
        """Numeric strings are not coordinates."""
        assert as_pair([13.0, "47.5"]) is None

    def test_is_finite_pair_rejects_nan_and_inf(self) -> None:
        """NaN and infinities fail the finiteness check."""
        assert not is_finite_pair([math.nan, 1.0])
        assert not is_finite_pair([1.0, math.inf])
        assert is_finite_pair([1.0, 2.0])

    def test_is_valid_wgs84_range(self) -> None:
        """Longitude within ±180 and latitude within ±90, inclusive."""
        assert is_valid_wgs84([180, -90])
        assert not is_valid_wgs84([180.1, 0])
        assert not is_valid_wgs84([0, 90.5])
        assert not is_valid_wgs84([math.nan, 0])


class TestFirstPosition:
    """Tests for first_position."""

    def test_point(self) -> None:
        """A Point yields its own position."""
        assert first_position({"type": "Point", "coordinates": [13.0, 47.0]}) == [13.0, 47.0]

    def test_multipoint(self) -> None:
        """A MultiPoint yields its first member."""
        geometry = {"type": "MultiPoint", "coordinates": [[13.0, 47.0], [14.0, 48.0]]}
        assert first_position(geometry) == [13.0, 47.0]

    def test_missing(self) -> None:
        """No geometry or empty coordinates yield None."""
        assert first_position(None) is None
        assert first_position({"type": "Point", "coordinates": []}) is None
