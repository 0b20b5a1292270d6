"""Point layer models — emission sources, waste sites and gas network nodes.

Every point table carries the same marker styling columns (pin size, pin
color, icon URL and opacity) with per-layer defaults so the map client can
render a layer without a separate style lookup.
"""

from typing import Any

from geoalchemy2 import Geometry
from sqlalchemy import Boolean, Index, Integer, Numeric, String, Text, false, text
from sqlalchemy.orm import Mapped, mapped_column

from co2_atlas.models.base import Base, IdMixin, PropertiesMixin, TimestampMixin


def _pin_size(default: int = 2) -> Mapped[int]:
    return mapped_column(Integer, nullable=False, default=default, server_default=text(str(default)))


def _pin_color(default: str) -> Mapped[str]:
    return mapped_column(String(7), nullable=False, default=default, server_default=default)


def _opacity(default: float) -> Mapped[float]:
    return mapped_column(
        Numeric(3, 2, asdecimal=False), nullable=False, default=default, server_default=text(str(default))
    )


def _icon_url() -> Mapped[str | None]:
    return mapped_column(String(500), nullable=True)


def _point_geom() -> Mapped[Any]:
    return mapped_column(Geometry(geometry_type="POINT", srid=4326, spatial_index=False), nullable=True)


def _tonnes() -> Mapped[float]:
    return mapped_column(Numeric(12, 2, asdecimal=False), nullable=False, default=0, server_default=text("0"))


class CO2Source(Base, IdMixin, PropertiesMixin, TimestampMixin):
    """Industrial CO₂ emitter with annual emission totals."""

    __tablename__ = "co2_sources"

    plant_name: Mapped[str] = mapped_column(String(255), nullable=False)
    plant_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    total_co2_t: Mapped[float] = _tonnes()
    fossil_co2_t: Mapped[float] = _tonnes()
    biogenic_co2_t: Mapped[float] = _tonnes()
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_prominent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    pin_size: Mapped[int] = _pin_size()
    pin_color: Mapped[str] = _pin_color("#ff4444")
    icon_url: Mapped[str | None] = _icon_url()
    opacity: Mapped[float] = _opacity(1.0)
    geom: Mapped[Any] = _point_geom()

    __table_args__ = (Index("idx_co2_sources_geom", "geom", postgresql_using="gist"),)


class Landfill(Base, IdMixin, PropertiesMixin, TimestampMixin):
    """Landfill site from the federal waste register."""

    __tablename__ = "landfills"

    company_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    district: Mapped[str | None] = mapped_column(String(100), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    facility_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    pin_size: Mapped[int] = _pin_size()
    pin_color: Mapped[str] = _pin_color("#ff8800")
    icon_url: Mapped[str | None] = _icon_url()
    opacity: Mapped[float] = _opacity(0.8)
    geom: Mapped[Any] = _point_geom()

    __table_args__ = (Index("idx_landfills_geom", "geom", postgresql_using="gist"),)


class GravelPit(Base, IdMixin, PropertiesMixin, TimestampMixin):
    """Gravel pit or stone quarry."""

    __tablename__ = "gravel_pits"

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    resource: Mapped[str | None] = mapped_column(String(255), nullable=True)
    tags: Mapped[str | None] = mapped_column(Text, nullable=True)
    pin_size: Mapped[int] = _pin_size()
    pin_color: Mapped[str] = _pin_color("#8855aa")
    icon_url: Mapped[str | None] = _icon_url()
    opacity: Mapped[float] = _opacity(0.7)
    geom: Mapped[Any] = _point_geom()

    __table_args__ = (Index("idx_gravel_pits_geom", "geom", postgresql_using="gist"),)


class WastewaterPlant(Base, IdMixin, PropertiesMixin, TimestampMixin):
    """Wastewater treatment plant with its design capacity."""

    __tablename__ = "wastewater_plants"

    pk: Mapped[str | None] = mapped_column(String(50), nullable=True)
    label: Mapped[str | None] = mapped_column(String(255), nullable=True)
    treatment_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    pin_size: Mapped[int] = _pin_size()
    pin_color: Mapped[str] = _pin_color("#3388ff")
    icon_url: Mapped[str | None] = _icon_url()
    opacity: Mapped[float] = _opacity(0.6)
    geom: Mapped[Any] = _point_geom()

    __table_args__ = (Index("idx_wastewater_plants_geom", "geom", postgresql_using="gist"),)


class GasStorageSite(Base, IdMixin, PropertiesMixin, TimestampMixin):
    """Underground gas storage facility."""

    __tablename__ = "gas_storage_sites"

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    operator: Mapped[str | None] = mapped_column(String(255), nullable=True)
    storage_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    capacity_bcm: Mapped[float | None] = mapped_column(Numeric(10, 3, asdecimal=False), nullable=True)
    pin_size: Mapped[int] = _pin_size()
    pin_color: Mapped[str] = _pin_color("#00cc88")
    icon_url: Mapped[str | None] = _icon_url()
    opacity: Mapped[float] = _opacity(0.5)
    geom: Mapped[Any] = _point_geom()

    __table_args__ = (Index("idx_gas_storage_sites_geom", "geom", postgresql_using="gist"),)


class GasDistributionPoint(Base, IdMixin, PropertiesMixin, TimestampMixin):
    """Gas distribution or metering point."""

    __tablename__ = "gas_distribution_points"

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    operator: Mapped[str | None] = mapped_column(String(255), nullable=True)
    pin_size: Mapped[int] = _pin_size(1)
    pin_color: Mapped[str] = _pin_color("#00aa44")
    icon_url: Mapped[str | None] = _icon_url()
    opacity: Mapped[float] = _opacity(0.4)
    geom: Mapped[Any] = _point_geom()

    __table_args__ = (Index("idx_gas_distribution_points_geom", "geom", postgresql_using="gist"),)


class CompressorStation(Base, IdMixin, PropertiesMixin, TimestampMixin):
    """Gas compressor station."""

    __tablename__ = "compressor_stations"

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    operator: Mapped[str | None] = mapped_column(String(255), nullable=True)
    capacity_info: Mapped[str | None] = mapped_column(Text, nullable=True)
    pin_size: Mapped[int] = _pin_size()
    pin_color: Mapped[str] = _pin_color("#ffaa00")
    icon_url: Mapped[str | None] = _icon_url()
    opacity: Mapped[float] = _opacity(0.3)
    geom: Mapped[Any] = _point_geom()

    __table_args__ = (Index("idx_compressor_stations_geom", "geom", postgresql_using="gist"),)
