"""CSV reader for point-layer source tables (landfills, gravel pits, wastewater plants)."""

import csv
from pathlib import Path

from loguru import logger

from co2_atlas.lib.source_reader.shapefile import SourceRecord


def read_csv_records(file_path: Path) -> list[SourceRecord]:
    """Read a CSV file into raw source records keyed by header name.

    Values are kept as the raw strings from the file; a UTF-8 byte order
    mark on the first header is stripped.

    Args:
        file_path: Path to the CSV file.

    Returns:
        List of SourceRecord objects without geometry.

    Raises:
        ValueError: If the CSV has no header row.
    """
    logger.info(f"Reading CSV: {file_path}")

    records: list[SourceRecord] = []

    with Path.open(file_path, newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None:
            msg = f"CSV file has no header row: {file_path}"
            raise ValueError(msg)

        for row in reader:
            props = {key.strip(): value for key, value in row.items() if key is not None}
            records.append(SourceRecord(properties=props))

    logger.info(f"Read {len(records)} rows from {file_path.name}")
    return records
