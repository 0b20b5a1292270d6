"""Importer library — source manifest, feature caps, derived attributes, and run statistics.

Public API:
    - SourceLayout: Resolves source files under the data directory
    - GasSourceEntry / GAS_MANIFEST / get_gas_manifest: Gas shapefile dispatch table
    - DESTINATION_TABLES: Tables truncated before a full import
    - FeatureCaps / caps_for_mode: Per-layer feature caps by resource mode
    - LayerStats / ImportReport / Outcome: Run statistics
    - voting_figures / VotingFigures / voting_color: Voting district derivations
    - is_prominent: CO₂ source prominence
    - parse_number / parse_integer / text_or_none / first_present: Cell normalization
"""

from co2_atlas.lib.importer.caps import (
    DEVELOPMENT_CAPS,
    PRODUCTION_CAPS,
    UNRESTRICTED_CAPS,
    FeatureCaps,
    caps_for_mode,
)
from co2_atlas.lib.importer.derive import (
    NO_DATA_COLOR,
    VotingFigures,
    first_present,
    is_prominent,
    parse_integer,
    parse_number,
    text_or_none,
    voting_color,
    voting_figures,
)
from co2_atlas.lib.importer.manifest import (
    DESTINATION_TABLES,
    GAS_MANIFEST,
    GasSourceEntry,
    SourceLayout,
    get_gas_manifest,
)
from co2_atlas.lib.importer.stats import ImportReport, LayerStats, Outcome

__all__ = [
    "DESTINATION_TABLES",
    "DEVELOPMENT_CAPS",
    "GAS_MANIFEST",
    "NO_DATA_COLOR",
    "PRODUCTION_CAPS",
    "UNRESTRICTED_CAPS",
    "FeatureCaps",
    "GasSourceEntry",
    "ImportReport",
    "LayerStats",
    "Outcome",
    "SourceLayout",
    "VotingFigures",
    "caps_for_mode",
    "first_present",
    "get_gas_manifest",
    "is_prominent",
    "parse_integer",
    "parse_number",
    "text_or_none",
    "voting_color",
    "voting_figures",
]
