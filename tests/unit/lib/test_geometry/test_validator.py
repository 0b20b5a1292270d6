"""Unit tests for geometry validation and simplification."""

import math

from co2_atlas.lib.geometry.validator import as_multi, complexity, geometry_bbox, is_valid_geojson, simplify


def _circle(n: int, radius: float = 0.1, lon: float = 13.0, lat: float = 47.5) -> dict:
    """A closed polygon ring with n vertices."""
    ring = [
        [lon + radius * math.cos(2 * math.pi * i / n), lat + radius * math.sin(2 * math.pi * i / n)] for i in range(n)
    ]
    ring.append(ring[0])
    return {"type": "Polygon", "coordinates": [ring]}


class TestIsValidGeoJSON:
    """Tests for the structural validity gate."""

    def test_accepts_point(self) -> None:
        """A finite Point is valid."""
        assert is_valid_geojson({"type": "Point", "coordinates": [13.0, 47.0]})

    def test_accepts_any_depth(self) -> None:
        """Deeply nested finite pairs are valid."""
        geometry = {"type": "MultiPolygon", "coordinates": [[[[0, 0], [1, 0], [1, 1], [0, 0]]]]}
        assert is_valid_geojson(geometry)

    def test_rejects_missing_type(self) -> None:
        """A geometry without a type is invalid."""
        assert not is_valid_geojson({"coordinates": [1.0, 2.0]})

    def test_rejects_empty_coordinates(self) -> None:
        """Empty coordinate arrays are invalid."""
        assert not is_valid_geojson({"type": "LineString", "coordinates": []})

    def test_rejects_non_numeric_leaf(self) -> None:
        """A string inside a coordinate fails."""
        assert not is_valid_geojson({"type": "LineString", "coordinates": [[0, 0], [13.0, "x"]]})

    def test_rejects_nan_and_infinity(self) -> None:
        """Non-finite numbers fail."""
        assert not is_valid_geojson({"type": "Point", "coordinates": [math.nan, 47.0]})
        assert not is_valid_geojson({"type": "Point", "coordinates": [13.0, math.inf]})

    def test_rejects_wrong_arity(self) -> None:
        """Three-number positions fail."""
        assert not is_valid_geojson({"type": "LineString", "coordinates": [[0, 0, 5], [1, 1, 5]]})

    def test_rejects_non_dict(self) -> None:
        """None and other non-mappings fail."""
        assert not is_valid_geojson(None)
        assert not is_valid_geojson([13.0, 47.0])


class TestComplexityAndBBox:
    """Tests for vertex counting and bounding boxes."""

    def test_complexity_counts_leaves(self) -> None:
        """Every ring vertex counts, closing vertex included."""
        assert complexity(_circle(10)) == 11

    def test_bbox(self) -> None:
        """Bounding box spans all positions."""
        geometry = {"type": "LineString", "coordinates": [[13.0, 47.0], [14.5, 46.5], [12.0, 48.0]]}
        assert geometry_bbox(geometry) == (12.0, 46.5, 14.5, 48.0)

    def test_bbox_none_without_positions(self) -> None:
        """No usable positions means no box."""
        assert geometry_bbox(None) is None
        assert geometry_bbox({"type": "Point", "coordinates": ["a", "b"]}) is None


class TestSimplify:
    """Tests for simplify."""

    def test_reduces_large_polygon(self) -> None:
        """A 1500-vertex polygon never grows and usually shrinks."""
        polygon = _circle(1500)
        result = simplify(polygon, 0.001)
        assert result["type"] == "Polygon"
        assert complexity(result) <= complexity(polygon)
        assert complexity(result) < 1500

    def test_returns_lists(self) -> None:
        """Output coordinates are plain lists."""
        result = simplify(_circle(50), 0.001)
        assert isinstance(result["coordinates"][0][0], list)

    def test_unprocessable_geometry_returned_unchanged(self) -> None:
        """Garbage in, the same garbage out, without raising."""
        garbage = {"type": "Polygon", "coordinates": [["not", "a", "ring"]]}
        assert simplify(garbage, 0.001) is garbage

    def test_unknown_type_returned_unchanged(self) -> None:
        """Unsupported types are returned as-is."""
        weird = {"type": "Hexagon", "coordinates": [[0, 0]]}
        assert simplify(weird, 0.001) is weird


class TestAsMulti:
    """Tests for as_multi."""

    def test_polygon_promoted(self) -> None:
        """Polygon becomes a one-member MultiPolygon."""
        polygon = _circle(4)
        multi = as_multi(polygon)
        assert multi["type"] == "MultiPolygon"
        assert multi["coordinates"] == [polygon["coordinates"]]

    def test_linestring_promoted(self) -> None:
        """LineString becomes MultiLineString."""
        line = {"type": "LineString", "coordinates": [[0, 0], [1, 1]]}
        assert as_multi(line) == {"type": "MultiLineString", "coordinates": [[[0, 0], [1, 1]]]}

    def test_multi_passthrough(self) -> None:
        """Multi* geometries are returned unchanged."""
        multi = {"type": "MultiLineString", "coordinates": [[[0, 0], [1, 1]]]}
        assert as_multi(multi) is multi
