"""Attribute normalization and derived fields for imported layers.

Source tables mix numeric cells, numeric strings with trailing units and
blanks. :func:`parse_number` reads the leading numeric prefix of a value
and falls back to a default, so ``"1200 t"`` reads as 1200 and an empty
cell as 0.
"""

import math
import re
from dataclasses import dataclass
from numbers import Real
from typing import Any

PROMINENT_CO2_THRESHOLD_T = 50_000

NO_DATA_COLOR = "#cccccc"

# Ordered (lower bound, color) pairs; the first bound the value reaches wins.
CHOROPLETH_BUCKETS: tuple[tuple[float, str], ...] = (
    (60, "#00AA00"),
    (50, "#22BB22"),
    (40, "#44CC44"),
    (30, "#66DD66"),
    (20, "#88EE88"),
    (15, "#AAAA00"),
    (10, "#CCCC00"),
    (5, "#DDAA00"),
)
LOWEST_BUCKET_COLOR = "#EE8800"

# Voting shapefile column for each party share
PARTY_COLUMNS: dict[str, str] = {
    "spo_percent": "SPO_perc",
    "ovp_percent": "OEVP_perc",
    "fpo_percent": "FPOE_perc",
    "grune_percent": "GRUENE_per",
    "kpo_percent": "KPOE_perc",
    "neos_percent": "NEOS_perce",
}

LEFT_GREEN_PARTIES: tuple[str, ...] = ("spo_percent", "grune_percent", "kpo_percent")

_NUMERIC_PREFIX = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_INTEGER_PREFIX = re.compile(r"^\s*[-+]?\d+")


def parse_number(value: Any, default: float = 0.0) -> float:
    """Read a float from a cell value, returning ``default`` when there is none."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Real):
        number = float(value)
        return number if math.isfinite(number) else default
    match = _NUMERIC_PREFIX.match(str(value))
    if match is None:
        return default
    return float(match.group(0))


def parse_integer(value: Any, default: int | None = 0) -> int | None:
    """Read an integer from a cell value, truncating decimals."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Real):
        number = float(value)
        return int(number) if math.isfinite(number) else default
    match = _INTEGER_PREFIX.match(str(value))
    if match is None:
        return default
    return int(match.group(0))


def text_or_none(value: Any) -> str | None:
    """Return a stripped string, or None for blank cells."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def first_present(properties: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first non-blank value among ``keys``."""
    for key in keys:
        value = properties.get(key)
        if value is not None and str(value).strip():
            return value
    return default


def is_prominent(total_co2_t: float) -> bool:
    """A CO₂ source is prominent above 50 000 t per year (strictly greater)."""
    return total_co2_t > PROMINENT_CO2_THRESHOLD_T


def voting_color(percentage: float | None) -> str:
    """Map a left+green vote share to its choropleth color."""
    if percentage is None or percentage <= 0:
        return NO_DATA_COLOR
    for lower_bound, color in CHOROPLETH_BUCKETS:
        if percentage >= lower_bound:
            return color
    return LOWEST_BUCKET_COLOR


@dataclass(frozen=True)
class VotingFigures:
    """Party shares and the fields derived from them for one district."""

    spo_percent: float
    ovp_percent: float
    fpo_percent: float
    grune_percent: float
    kpo_percent: float
    neos_percent: float

    @property
    def left_green_combined(self) -> float:
        return sum(getattr(self, party) for party in LEFT_GREEN_PARTIES)

    @property
    def has_voting_data(self) -> bool:
        return any(getattr(self, party) > 0 for party in PARTY_COLUMNS)

    @property
    def choropleth_color(self) -> str:
        if not self.has_voting_data:
            return NO_DATA_COLOR
        return voting_color(self.left_green_combined)

    def as_columns(self) -> dict[str, Any]:
        """Column values for the voting_districts table."""
        columns: dict[str, Any] = {party: getattr(self, party) for party in PARTY_COLUMNS}
        columns["left_green_combined"] = self.left_green_combined
        columns["choropleth_color"] = self.choropleth_color
        columns["has_voting_data"] = self.has_voting_data
        return columns


def voting_figures(properties: dict[str, Any]) -> VotingFigures:
    """Read the six party shares from a commune feature's attributes."""
    return VotingFigures(**{party: parse_number(properties.get(column)) for party, column in PARTY_COLUMNS.items()})
