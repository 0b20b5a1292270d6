"""Line layer models — gas pipelines, primary roads and railways."""

from typing import Any

from geoalchemy2 import Geometry
from sqlalchemy import Index, Integer, Numeric, String, text
from sqlalchemy.orm import Mapped, mapped_column

from co2_atlas.models.base import Base, IdMixin, PropertiesMixin, TimestampMixin


def _line_geom() -> Mapped[Any]:
    return mapped_column(Geometry(geometry_type="MULTILINESTRING", srid=4326, spatial_index=False), nullable=True)


def _line_color(default: str) -> Mapped[str]:
    return mapped_column(String(7), nullable=False, default=default, server_default=default)


def _line_weight(default: int) -> Mapped[int]:
    return mapped_column(Integer, nullable=False, default=default, server_default=text(str(default)))


def _line_opacity(default: float) -> Mapped[float]:
    return mapped_column(
        Numeric(3, 2, asdecimal=False), nullable=False, default=default, server_default=text(str(default))
    )


class GasPipeline(Base, IdMixin, PropertiesMixin, TimestampMixin):
    """Gas transmission or distribution pipeline."""

    __tablename__ = "gas_pipelines"

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    operator: Mapped[str | None] = mapped_column(String(255), nullable=True)
    diameter: Mapped[int | None] = mapped_column(Integer, nullable=True)
    pressure_level: Mapped[str | None] = mapped_column(String(50), nullable=True)
    pipeline_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    line_color: Mapped[str] = _line_color("#00aa44")
    line_weight: Mapped[int] = _line_weight(4)
    line_opacity: Mapped[float] = _line_opacity(0.8)
    geom: Mapped[Any] = _line_geom()
    simplified_geom: Mapped[Any] = _line_geom()

    __table_args__ = (
        Index("idx_gas_pipelines_geom", "geom", postgresql_using="gist"),
        Index("idx_gas_pipelines_simplified_geom", "simplified_geom", postgresql_using="gist"),
    )


class Highway(Base, IdMixin, PropertiesMixin, TimestampMixin):
    """Primary road segment."""

    __tablename__ = "highways"

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    highway_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    road_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    line_color: Mapped[str] = _line_color("#666666")
    line_weight: Mapped[int] = _line_weight(3)
    line_opacity: Mapped[float] = _line_opacity(0.7)
    geom: Mapped[Any] = _line_geom()
    simplified_geom: Mapped[Any] = _line_geom()

    __table_args__ = (
        Index("idx_highways_geom", "geom", postgresql_using="gist"),
        Index("idx_highways_simplified_geom", "simplified_geom", postgresql_using="gist"),
    )


class Railway(Base, IdMixin, PropertiesMixin, TimestampMixin):
    """Railway line segment."""

    __tablename__ = "railways"

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    railway_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    operator: Mapped[str | None] = mapped_column(String(255), nullable=True)
    line_color: Mapped[str] = _line_color("#8B4513")
    line_weight: Mapped[int] = _line_weight(3)
    line_opacity: Mapped[float] = _line_opacity(0.8)
    geom: Mapped[Any] = _line_geom()
    simplified_geom: Mapped[Any] = _line_geom()

    __table_args__ = (
        Index("idx_railways_geom", "geom", postgresql_using="gist"),
        Index("idx_railways_simplified_geom", "simplified_geom", postgresql_using="gist"),
    )
