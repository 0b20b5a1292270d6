"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

import re
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from co2_atlas.lib.geometry.transformer import KNOWN_PROJECTIONS
from co2_atlas.lib.importer.caps import FeatureCaps, caps_for_mode

ResourceMode = Literal["production", "development", "unrestricted"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str | None = Field(
        default=None,
        description="PostgreSQL+PostGIS async connection string (required by import all and db commands)",
    )
    database_schema: str | None = Field(
        default=None,
        description="PostgreSQL schema for isolated environments (e.g., staging)",
    )

    @field_validator("database_schema")
    @classmethod
    def validate_database_schema(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not re.match(r"^[a-z_][a-z0-9_]{0,62}$", v):
            msg = "Invalid database_schema: must match ^[a-z_][a-z0-9_]{0,62}$"
            raise ValueError(msg)
        return v

    # Source data
    data_dir: Path = Field(
        default=Path("."),
        description="Root directory holding zurich_data, Shapefiles, Unsuitable, roads, railway, Area Of Interest",
    )
    resource_mode: ResourceMode = Field(
        default="development",
        description="Feature cap profile for the large national layers (production, development, unrestricted)",
    )

    # Geometry processing
    crs_candidates: str = Field(
        default="EPSG:31287,EPSG:31259",
        description="Comma-separated projected CRS codes tried, in order, for non-geographic coordinates",
    )
    geographic_window: str | None = Field(
        default=None,
        description=(
            "Optional 'min_lon,min_lat,max_lon,max_lat' window; when set, only coordinates inside it "
            "are accepted as already geographic, and reprojected coordinates must also land inside it"
        ),
    )
    simplify_tolerance: float = Field(
        default=0.001,
        description="Douglas-Peucker tolerance in degrees for over-complex polygons",
        gt=0,
    )

    @field_validator("crs_candidates")
    @classmethod
    def validate_crs_candidates(cls, v: str) -> str:
        codes = [c.strip().upper() for c in v.split(",") if c.strip()]
        if not codes:
            msg = "crs_candidates must name at least one projection"
            raise ValueError(msg)
        unknown = [c for c in codes if c not in KNOWN_PROJECTIONS]
        if unknown:
            msg = f"Unknown projection(s) in crs_candidates: {', '.join(unknown)}"
            raise ValueError(msg)
        return ",".join(codes)

    @field_validator("geographic_window")
    @classmethod
    def validate_geographic_window(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        parts = [p.strip() for p in v.split(",")]
        try:
            min_lon, min_lat, max_lon, max_lat = (float(p) for p in parts)
        except ValueError:
            msg = "geographic_window must be four comma-separated numbers"
            raise ValueError(msg) from None
        if min_lon > max_lon or min_lat > max_lat:
            msg = "geographic_window minimums must not exceed maximums"
            raise ValueError(msg)
        return ",".join(parts)

    def require_database_url(self) -> str:
        """Return the database URL, or raise when commands that need it run without one.

        Raises:
            ValueError: If DATABASE_URL is not configured.
        """
        if not self.database_url:
            msg = "DATABASE_URL is not set"
            raise ValueError(msg)
        return self.database_url

    @property
    def crs_candidate_list(self) -> list[str]:
        """Parse the candidate projection string into an ordered list of codes."""
        return [c.strip() for c in self.crs_candidates.split(",") if c.strip()]

    @property
    def geographic_window_bbox(self) -> tuple[float, float, float, float] | None:
        """Parse the geographic window into a bounding box tuple."""
        if self.geographic_window is None:
            return None
        min_lon, min_lat, max_lon, max_lat = (float(p) for p in self.geographic_window.split(","))
        return (min_lon, min_lat, max_lon, max_lat)

    @property
    def feature_caps(self) -> FeatureCaps:
        """Per-layer feature caps for the configured resource mode."""
        return caps_for_mode(self.resource_mode)

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()  # type: ignore[call-arg]
