"""Unit tests for the unsuitable-area and transport importers."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

from co2_atlas.lib.importer import PRODUCTION_CAPS
from co2_atlas.lib.source_reader import SourceRecord
from co2_atlas.services.feature_import import ImportContext
from co2_atlas.services.polygon_layer_service import (
    conservation_row,
    groundwater_row,
    import_conservation_areas,
    import_groundwater_areas,
    import_settlement_areas,
    settlement_row,
)
from co2_atlas.services.transport_service import highway_row, import_highways, import_railways, railway_row

SQUARE = {
    "type": "Polygon",
    "coordinates": [[[13.0, 47.5], [13.1, 47.5], [13.1, 47.6], [13.0, 47.6], [13.0, 47.5]]],
}
ROAD = {"type": "LineString", "coordinates": [[13.0, 47.8], [13.1, 47.9]]}


class TestPolygonRows:
    """Tests for the polygon row builders."""

    def test_defaults(self) -> None:
        """Blank attributes fall back to the layer's placeholder values."""
        assert groundwater_row({}) == {"name": "Groundwater Protection Area", "protection_zone": "Protected"}
        assert conservation_row({})["area_type"] == "Nature Reserve"
        assert settlement_row({}) == {"name": "Residential Area", "area_type": "Residential", "population": 0}

    def test_values_kept(self) -> None:
        row = conservation_row({"Name": "Tennengebirge", "Protection": "Naturschutzgebiet", "Type": "Alpine"})
        assert row == {"name": "Tennengebirge", "protection_level": "Naturschutzgebiet", "area_type": "Alpine"}


class TestTransportRows:
    """Tests for the highway and railway row builders."""

    def test_highway_name_falls_back_to_ref(self) -> None:
        row = highway_row({"ref": "A1"})
        assert row == {"name": "A1", "highway_number": "A1", "road_type": "Primary Road"}

    def test_railway_defaults(self) -> None:
        assert railway_row({}) == {"name": "Railway Line", "railway_type": "Main Line", "operator": "ÖBB"}


class TestImportCappedLayers:
    """Tests for the capped multi-file layers."""

    @patch("co2_atlas.services.feature_import.load_records")
    async def test_groundwater_reads_each_file_with_cap(
        self, mock_load: object, context: ImportContext, fake_session, touch: Callable[[Path], Path]
    ) -> None:
        """Every groundwater file is read with the mode's cap."""
        for path in context.layout.groundwater_files():
            touch(path)
        mock_load.return_value = [SourceRecord({"Name": "Zone"}, SQUARE)]  # type: ignore[attr-defined]

        stats = await import_groundwater_areas(context)

        assert stats.imported == 2
        assert fake_session.count("groundwater_protection") == 2
        for call in mock_load.call_args_list:  # type: ignore[attr-defined]
            assert call.kwargs["max_features"] == context.caps.groundwater

    @patch("co2_atlas.services.feature_import.load_records")
    async def test_conservation_production_cap(
        self, mock_load: object, context: ImportContext, touch: Callable[[Path], Path]
    ) -> None:
        """Production mode passes the smaller conservation cap."""
        context.caps = PRODUCTION_CAPS
        path = touch(context.layout.conservation_files()[3])
        mock_load.return_value = []  # type: ignore[attr-defined]

        await import_conservation_areas(context)

        mock_load.assert_called_once_with(path, max_features=2000)  # type: ignore[attr-defined]

    @patch("co2_atlas.services.feature_import.load_records")
    async def test_settlement_filtered_outside(
        self, mock_load: object, context: ImportContext, touch: Callable[[Path], Path]
    ) -> None:
        """Settlement polygons outside the area are filtered."""
        touch(context.layout.settlement_files()[0])
        far = {"type": "Polygon", "coordinates": [[[16.3, 48.1], [16.4, 48.1], [16.4, 48.2], [16.3, 48.1]]]}
        mock_load.return_value = [SourceRecord({}, SQUARE), SourceRecord({}, far)]  # type: ignore[attr-defined]

        stats = await import_settlement_areas(context)

        assert (stats.imported, stats.filtered) == (1, 1)

    @patch("co2_atlas.services.feature_import.load_records")
    async def test_roads_and_railways(
        self, mock_load: object, context: ImportContext, fake_session, touch: Callable[[Path], Path]
    ) -> None:
        """Roads and railways are stored as MultiLineString rows with their caps."""
        touch(context.layout.road_files()[0])
        touch(context.layout.railway_files()[1])
        mock_load.return_value = [SourceRecord({"ref": "A10"}, ROAD)]  # type: ignore[attr-defined]

        highways = await import_highways(context)
        railways = await import_railways(context)

        assert highways.imported == 1
        assert railways.imported == 1
        assert fake_session.rows["highways"][0]["highway_number"] == "A10"
        caps = [call.kwargs["max_features"] for call in mock_load.call_args_list]  # type: ignore[attr-defined]
        assert caps == [context.caps.highways, context.caps.railways]
