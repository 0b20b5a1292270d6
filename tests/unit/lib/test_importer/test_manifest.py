"""Unit tests for the source manifest and layout."""

from pathlib import Path

from co2_atlas.lib.importer.manifest import (
    DESTINATION_TABLES,
    GAS_MANIFEST,
    SOURCE_DIRECTORIES,
    SourceLayout,
    get_gas_manifest,
)
from co2_atlas.models import Base


class TestGasManifest:
    """Tests for the gas manifest."""

    def test_entries(self) -> None:
        """Four files dispatch to four tables; only pipelines are lines."""
        assert {e.table: e.kind for e in GAS_MANIFEST} == {
            "gas_pipelines": "line",
            "gas_storage_sites": "point",
            "gas_distribution_points": "point",
            "compressor_stations": "point",
        }

    def test_get_returns_copy(self) -> None:
        """Callers cannot mutate the shared manifest."""
        entries = get_gas_manifest()
        entries.clear()
        assert len(GAS_MANIFEST) == 4


class TestDestinationTables:
    """Tests for the truncation list."""

    def test_fifteen_tables_all_mapped(self) -> None:
        """Every destination table has an ORM model."""
        assert len(DESTINATION_TABLES) == 15
        assert set(DESTINATION_TABLES) <= set(Base.metadata.tables)


class TestSourceLayout:
    """Tests for SourceLayout."""

    def test_paths(self, tmp_path: Path) -> None:
        """Files resolve under their source directories."""
        layout = SourceLayout(tmp_path)
        assert layout.co2_file == tmp_path / "zurich_data" / "CO2 sources.xlsx"
        assert layout.voting_file == tmp_path / "Shapefiles" / "updated_commune.shp"
        assert layout.area_of_interest_files()[0] == tmp_path / "Area Of Interest" / "salzburg.shp"

    def test_conservation_tiles(self, tmp_path: Path) -> None:
        """Salzburg plus the 24 Upper Austria tiles."""
        files = SourceLayout(tmp_path).conservation_files()
        assert len(files) == 25
        assert files[-1].name == "u24.shp"

    def test_check_directories(self, tmp_path: Path) -> None:
        """Existing and missing directories are both reported."""
        (tmp_path / "Shapefiles").mkdir()
        found = SourceLayout(tmp_path).check_directories()
        assert set(found) == set(SOURCE_DIRECTORIES)
        assert found["Shapefiles"] is True
        assert found["roads"] is False
