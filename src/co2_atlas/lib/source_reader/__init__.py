"""Source reader library — per-format adapters yielding raw source records.

Public API:
    - SourceRecord: Raw attributes plus optional GeoJSON geometry
    - read_shapefile: Shapefile reader (GeoPandas/pyogrio), optional feature cap
    - read_csv_records: CSV reader
    - read_spreadsheet_records: Excel reader (pandas)
    - load_records: Auto-detect format by suffix
"""

from pathlib import Path

from co2_atlas.lib.source_reader.csv_loader import read_csv_records
from co2_atlas.lib.source_reader.shapefile import SourceRecord, read_shapefile
from co2_atlas.lib.source_reader.spreadsheet import read_spreadsheet_records


def load_records(file_path: Path, max_features: int | None = None) -> list[SourceRecord]:
    """Load source records from a file with automatic format detection.

    Supports .shp, .csv, .xlsx and .xls.

    Args:
        file_path: Path to the source file.
        max_features: Optional cap, honoured for shapefiles only.

    Returns:
        List of SourceRecord objects.

    Raises:
        ValueError: If the file format is not supported.
    """
    suffix = file_path.suffix.lower()

    if suffix == ".shp":
        return read_shapefile(file_path, max_features=max_features)
    if suffix == ".csv":
        return read_csv_records(file_path)
    if suffix in (".xlsx", ".xls"):
        return read_spreadsheet_records(file_path)

    msg = f"Unsupported source file format: {suffix}. Supported: .shp, .csv, .xlsx, .xls"
    raise ValueError(msg)


__all__ = [
    "SourceRecord",
    "load_records",
    "read_csv_records",
    "read_shapefile",
    "read_spreadsheet_records",
]
