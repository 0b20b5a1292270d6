"""Excel reader for spreadsheet-delivered point layers (CO₂ sources)."""

from pathlib import Path

import pandas as pd
from loguru import logger

from co2_atlas.lib.source_reader.shapefile import SourceRecord, serialize_value


def read_spreadsheet_records(file_path: Path, sheet: int | str = 0) -> list[SourceRecord]:
    """Read one worksheet into raw source records keyed by column header.

    Empty cells become None rather than NaN.

    Args:
        file_path: Path to the .xlsx workbook.
        sheet: Sheet index or name; defaults to the first sheet.

    Returns:
        List of SourceRecord objects without geometry.
    """
    logger.info(f"Reading spreadsheet: {file_path}")

    df = pd.read_excel(file_path, sheet_name=sheet)

    records = [
        SourceRecord(properties={str(col): serialize_value(value) for col, value in row.items()})
        for row in df.to_dict(orient="records")
    ]

    logger.info(f"Read {len(records)} rows from {file_path.name}")
    return records
