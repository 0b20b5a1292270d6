"""Polygon layer models — areas unsuitable for storage sites."""

from typing import Any

from geoalchemy2 import Geometry
from sqlalchemy import Index, Integer, Numeric, String, text
from sqlalchemy.orm import Mapped, mapped_column

from co2_atlas.models.base import Base, IdMixin, PropertiesMixin, TimestampMixin


def _polygon_geom() -> Mapped[Any]:
    return mapped_column(Geometry(geometry_type="MULTIPOLYGON", srid=4326, spatial_index=False), nullable=True)


def _color(default: str) -> Mapped[str]:
    return mapped_column(String(7), nullable=False, default=default, server_default=default)


def _fill_opacity() -> Mapped[float]:
    return mapped_column(Numeric(3, 2, asdecimal=False), nullable=False, default=0.3, server_default=text("0.3"))


def _border_weight() -> Mapped[int]:
    return mapped_column(Integer, nullable=False, default=2, server_default=text("2"))


class GroundwaterProtectionArea(Base, IdMixin, PropertiesMixin, TimestampMixin):
    """Groundwater protection zone."""

    __tablename__ = "groundwater_protection"

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    protection_zone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    fill_color: Mapped[str] = _color("#0066ff")
    fill_opacity: Mapped[float] = _fill_opacity()
    border_color: Mapped[str] = _color("#0044cc")
    border_weight: Mapped[int] = _border_weight()
    geom: Mapped[Any] = _polygon_geom()
    simplified_geom: Mapped[Any] = _polygon_geom()

    __table_args__ = (
        Index("idx_groundwater_geom", "geom", postgresql_using="gist"),
        Index("idx_groundwater_simplified_geom", "simplified_geom", postgresql_using="gist"),
    )


class ConservationArea(Base, IdMixin, PropertiesMixin, TimestampMixin):
    """Nature conservation or landscape protection area."""

    __tablename__ = "conservation_areas"

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    protection_level: Mapped[str | None] = mapped_column(String(100), nullable=True)
    area_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    fill_color: Mapped[str] = _color("#00ff00")
    fill_opacity: Mapped[float] = _fill_opacity()
    border_color: Mapped[str] = _color("#00cc00")
    border_weight: Mapped[int] = _border_weight()
    geom: Mapped[Any] = _polygon_geom()
    simplified_geom: Mapped[Any] = _polygon_geom()

    __table_args__ = (
        Index("idx_conservation_geom", "geom", postgresql_using="gist"),
        Index("idx_conservation_simplified_geom", "simplified_geom", postgresql_using="gist"),
    )


class SettlementArea(Base, IdMixin, PropertiesMixin, TimestampMixin):
    """Residential settlement area."""

    __tablename__ = "settlement_areas"

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    area_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    population: Mapped[int | None] = mapped_column(Integer, nullable=True)
    fill_color: Mapped[str] = _color("#ff0000")
    fill_opacity: Mapped[float] = _fill_opacity()
    border_color: Mapped[str] = _color("#cc0000")
    border_weight: Mapped[int] = _border_weight()
    geom: Mapped[Any] = _polygon_geom()
    simplified_geom: Mapped[Any] = _polygon_geom()

    __table_args__ = (
        Index("idx_settlement_geom", "geom", postgresql_using="gist"),
        Index("idx_settlement_simplified_geom", "simplified_geom", postgresql_using="gist"),
    )
