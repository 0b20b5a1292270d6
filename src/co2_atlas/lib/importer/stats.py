"""Import statistics — per-layer counters folded into a run report."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class Outcome(StrEnum):
    """What happened to a single source record."""

    IMPORTED = "imported"
    FILTERED = "filtered"
    ERROR = "error"


@dataclass
class LayerStats:
    """Counters for one destination layer."""

    layer: str
    imported: int = 0
    filtered: int = 0
    errors: int = 0

    def record(self, outcome: Outcome) -> None:
        if outcome is Outcome.IMPORTED:
            self.imported += 1
        elif outcome is Outcome.FILTERED:
            self.filtered += 1
        else:
            self.errors += 1

    def merge(self, other: "LayerStats") -> "LayerStats":
        """Return the sum of two counters for the same layer."""
        return LayerStats(
            layer=self.layer,
            imported=self.imported + other.imported,
            filtered=self.filtered + other.filtered,
            errors=self.errors + other.errors,
        )


@dataclass
class ImportReport:
    """Summary of a full import run."""

    resource_mode: str
    layers: dict[str, LayerStats] = field(default_factory=dict)
    fatal_error: str | None = None

    def add(self, stats: LayerStats) -> None:
        existing = self.layers.get(stats.layer)
        self.layers[stats.layer] = stats if existing is None else existing.merge(stats)

    @property
    def total_imported(self) -> int:
        return sum(s.imported for s in self.layers.values())

    @property
    def total_filtered(self) -> int:
        return sum(s.filtered for s in self.layers.values())

    @property
    def total_errors(self) -> int:
        return sum(s.errors for s in self.layers.values()) + (1 if self.fatal_error else 0)

    @property
    def succeeded(self) -> bool:
        return self.fatal_error is None

    def as_dict(self) -> dict[str, Any]:
        """JSON-safe form of the report for the run history log."""
        return {
            "resource_mode": self.resource_mode,
            "layers": {
                name: {"imported": s.imported, "filtered": s.filtered, "errors": s.errors}
                for name, s in self.layers.items()
            },
            "total_imported": self.total_imported,
            "total_filtered": self.total_filtered,
            "total_errors": self.total_errors,
            "fatal_error": self.fatal_error,
        }

    def summary_lines(self) -> list[str]:
        """Render the end-of-run console summary."""
        lines = [
            "=== IMPORT SUMMARY ===",
            f"Resource mode: {self.resource_mode}",
            "=" * 37,
        ]
        lines.extend(f"{LAYER_LABELS.get(name, name)}: {stats.imported}" for name, stats in self.layers.items())
        lines.append(f"Total Filtered by Area: {self.total_filtered}")
        lines.append(f"Errors: {self.total_errors}")
        lines.append("=" * 37)
        lines.append(f"Total Features Imported: {self.total_imported}")
        if self.fatal_error:
            lines.append(f"Import aborted: {self.fatal_error}")
        return lines


LAYER_LABELS: dict[str, str] = {
    "study_area_boundaries": "Study Area Boundaries",
    "voting_districts": "Voting Districts",
    "co2_sources": "CO₂ Sources",
    "landfills": "Landfills",
    "gravel_pits": "Gravel Pits",
    "wastewater_plants": "Wastewater Plants",
    "gas_pipelines": "Gas Pipelines",
    "gas_storage_sites": "Gas Storage",
    "gas_distribution_points": "Gas Distribution",
    "compressor_stations": "Compressor Stations",
    "groundwater_protection": "Groundwater Areas",
    "conservation_areas": "Conservation Areas",
    "settlement_areas": "Residential Areas",
    "highways": "Roads",
    "railways": "Railways",
}
