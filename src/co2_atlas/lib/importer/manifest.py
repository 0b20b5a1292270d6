"""Source file manifest — where each layer's files live under the data directory."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from loguru import logger

GeometryKind = Literal["point", "line"]

SOURCE_DIRECTORIES: tuple[str, ...] = (
    "zurich_data",
    "Shapefiles",
    "Unsuitable",
    "roads",
    "railway",
    "Area Of Interest",
)


@dataclass(frozen=True)
class GasSourceEntry:
    """Maps one gas network shapefile to its destination table and geometry kind."""

    filename: str
    table: str
    kind: GeometryKind
    description: str = ""


GAS_MANIFEST: list[GasSourceEntry] = [
    GasSourceEntry(
        filename="Gas Network Lines.shp",
        table="gas_pipelines",
        kind="line",
        description="Transmission and distribution pipelines",
    ),
    GasSourceEntry(
        filename="Gas Storage Facilities.shp",
        table="gas_storage_sites",
        kind="point",
        description="Underground gas storage sites",
    ),
    GasSourceEntry(
        filename="Gas Distribution Points.shp",
        table="gas_distribution_points",
        kind="point",
        description="Distribution and metering points",
    ),
    GasSourceEntry(
        filename="Compressor station.shp",
        table="compressor_stations",
        kind="point",
        description="Compressor stations",
    ),
]

AREA_OF_INTEREST_FILES: tuple[str, ...] = ("salzburg.shp", "upper_austria.shp")

GROUNDWATER_FILES: tuple[str, ...] = (
    "GroundWater/salzburg_water/reprojected_salzburg_water.shp",
    "GroundWater/upper_austria_water/reprojected_upper_austria_water.shp",
)

CONSERVATION_FILES: tuple[str, ...] = (
    "NatureConservation/salzburg_nature/reprojected_salzburg_nature.shp",
    *(f"NatureConservation/upper_austria_nature/u{i}.shp" for i in range(1, 25)),
)

SETTLEMENT_FILES: tuple[str, ...] = (
    "Residential/salzburg_residential/Salzburg_Residential_BAEW_Only.shp",
    "Residential/upper_austria_residential/Upper_Austria_Residential_Official.shp",
)

ROAD_FILES: tuple[str, ...] = (
    "salzburg_roads/salzburg_primary_roads.shp",
    "upper_austria_roads/upper_austria_primary_roads.shp",
)

RAILWAY_FILES: tuple[str, ...] = (
    "salzburg_railway/salzburg_railway.shp",
    "upper_austria_railway/upper_austria_railway.shp",
)

# Destination tables cleared before every full import
DESTINATION_TABLES: tuple[str, ...] = (
    "co2_sources",
    "voting_districts",
    "landfills",
    "gravel_pits",
    "wastewater_plants",
    "gas_pipelines",
    "gas_storage_sites",
    "gas_distribution_points",
    "compressor_stations",
    "study_area_boundaries",
    "groundwater_protection",
    "conservation_areas",
    "settlement_areas",
    "highways",
    "railways",
)


@dataclass(frozen=True)
class SourceLayout:
    """Resolves source file locations relative to the data directory."""

    data_dir: Path

    @property
    def tabular_dir(self) -> Path:
        return self.data_dir / "zurich_data"

    @property
    def shapefile_dir(self) -> Path:
        return self.data_dir / "Shapefiles"

    @property
    def unsuitable_dir(self) -> Path:
        return self.data_dir / "Unsuitable"

    @property
    def roads_dir(self) -> Path:
        return self.data_dir / "roads"

    @property
    def railway_dir(self) -> Path:
        return self.data_dir / "railway"

    @property
    def area_of_interest_dir(self) -> Path:
        return self.data_dir / "Area Of Interest"

    @property
    def boundary_file(self) -> Path:
        return self.shapefile_dir / "sal_aus_communes.shp"

    @property
    def voting_file(self) -> Path:
        return self.shapefile_dir / "updated_commune.shp"

    @property
    def co2_file(self) -> Path:
        return self.tabular_dir / "CO2 sources.xlsx"

    @property
    def landfill_file(self) -> Path:
        return self.tabular_dir / "LandfiilsDeponien.csv"

    @property
    def gravel_pit_file(self) -> Path:
        return self.tabular_dir / "Gravel pits  stone quarries.csv.csv"

    @property
    def wastewater_file(self) -> Path:
        return self.tabular_dir / "Kläranlagen  Wastewater treatment plants.csv"

    def area_of_interest_files(self) -> list[Path]:
        return [self.area_of_interest_dir / name for name in AREA_OF_INTEREST_FILES]

    def gas_file(self, entry: GasSourceEntry) -> Path:
        return self.shapefile_dir / entry.filename

    def groundwater_files(self) -> list[Path]:
        return [self.unsuitable_dir / name for name in GROUNDWATER_FILES]

    def conservation_files(self) -> list[Path]:
        return [self.unsuitable_dir / name for name in CONSERVATION_FILES]

    def settlement_files(self) -> list[Path]:
        return [self.unsuitable_dir / name for name in SETTLEMENT_FILES]

    def road_files(self) -> list[Path]:
        return [self.roads_dir / name for name in ROAD_FILES]

    def railway_files(self) -> list[Path]:
        return [self.railway_dir / name for name in RAILWAY_FILES]

    def check_directories(self) -> dict[str, bool]:
        """Report which of the expected source directories exist.

        Missing directories are logged, never fatal.

        Returns:
            Mapping of directory name to whether it exists.
        """
        found: dict[str, bool] = {}
        for name in SOURCE_DIRECTORIES:
            path = self.data_dir / name
            found[name] = path.is_dir()
            if found[name]:
                logger.info(f"Found {name} directory")
            else:
                logger.warning(f"Missing {name} directory: {path}")
        return found


def get_gas_manifest() -> list[GasSourceEntry]:
    """Return a copy of the gas infrastructure manifest."""
    return list(GAS_MANIFEST)
