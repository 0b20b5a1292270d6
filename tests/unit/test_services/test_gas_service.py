"""Unit tests for the gas infrastructure service."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from co2_atlas.lib.importer import GAS_MANIFEST, GasSourceEntry
from co2_atlas.lib.source_reader import SourceRecord
from co2_atlas.services.feature_import import ImportContext
from co2_atlas.services.gas_service import (
    GAS_DESTINATIONS,
    gas_distribution_row,
    gas_pipeline_row,
    gas_storage_row,
    import_gas_infrastructure,
    import_gas_source,
)

PIPELINE = {"type": "LineString", "coordinates": [[13.0, 47.8], [13.4, 48.0]]}
STORAGE_POINT = {"type": "Point", "coordinates": [13.2, 48.1]}


def _records_for(path: Path, max_features: int | None = None) -> list[SourceRecord]:
    """Serve fixture records by file name, as the reader would per shapefile."""
    if path.name == "Gas Network Lines.shp":
        return [SourceRecord({"Pipeline": "WAG", "Diameter": "1200", "Operator": "GCA"}, PIPELINE)]
    if path.name == "Gas Storage Facilities.shp":
        return [SourceRecord({"Name": "Haidach", "Capacity": "2.9"}, STORAGE_POINT)]
    return [SourceRecord({"Name": "Outside"}, {"type": "Point", "coordinates": [16.5, 48.3]})]


class TestGasRows:
    """Tests for the gas row builders."""

    def test_pipeline_row(self) -> None:
        row = gas_pipeline_row({"Pipeline": "WAG", "Diameter": "1200 mm", "Pressure": "70 bar"})
        assert row["name"] == "WAG"
        assert row["diameter"] == 1200
        assert row["pressure_level"] == "70 bar"
        assert row["pipeline_type"] == "Gas Pipeline"

    def test_pipeline_name_fallback(self) -> None:
        row = gas_pipeline_row({"name": "Penta West", "Diameter": ""})
        assert row["name"] == "Penta West"
        assert row["diameter"] is None

    def test_storage_row(self) -> None:
        assert gas_storage_row({"Name": "Haidach", "Capacity": "2.9 bcm"})["capacity_bcm"] == 2.9

    def test_distribution_row_type(self) -> None:
        assert gas_distribution_row({"Name": "Station"})["type"] == "Distribution Point"

    def test_every_manifest_table_mapped(self) -> None:
        """Each manifest entry has a column mapping."""
        assert {entry.table for entry in GAS_MANIFEST} == set(GAS_DESTINATIONS)


class TestImportGasInfrastructure:
    """Tests for import_gas_infrastructure."""

    @patch("co2_atlas.services.feature_import.load_records", side_effect=_records_for)
    async def test_dispatch_by_manifest(
        self, mock_load: object, context: ImportContext, fake_session, touch: Callable[[Path], Path]
    ) -> None:
        """Each file lands in its own table with its own geometry kind."""
        for entry in GAS_MANIFEST:
            touch(context.layout.gas_file(entry))

        results = await import_gas_infrastructure(context)

        by_layer = {stats.layer: stats for stats in results}
        assert [stats.layer for stats in results] == [entry.table for entry in GAS_MANIFEST]
        assert by_layer["gas_pipelines"].imported == 1
        assert by_layer["gas_storage_sites"].imported == 1
        assert by_layer["gas_distribution_points"].filtered == 1
        assert by_layer["compressor_stations"].filtered == 1
        assert fake_session.rows["gas_pipelines"][0]["diameter"] == 1200
        assert fake_session.rows["gas_storage_sites"][0]["capacity_bcm"] == 2.9

    async def test_missing_files(self, context: ImportContext) -> None:
        """Missing gas files yield empty statistics for each entry."""
        results = await import_gas_infrastructure(context)
        assert len(results) == 4
        assert sum(stats.imported for stats in results) == 0

    async def test_unknown_table(self, context: ImportContext) -> None:
        """A manifest entry for an unmapped table is a configuration error."""
        entry = GasSourceEntry(filename="Gas Valves.shp", table="gas_valves", kind="point")
        with pytest.raises(ValueError, match="gas_valves"):
            await import_gas_source(context, entry)

    @patch("co2_atlas.services.feature_import.load_records", side_effect=_records_for)
    async def test_wrong_kind_is_error(
        self, mock_load: object, context: ImportContext, touch: Callable[[Path], Path]
    ) -> None:
        """A point file declared as lines is rejected record by record."""
        entry = GasSourceEntry(filename="Gas Storage Facilities.shp", table="gas_pipelines", kind="line")
        touch(context.layout.gas_file(entry))
        stats = await import_gas_source(context, entry)
        assert stats.errors == 1
        assert stats.imported == 0
