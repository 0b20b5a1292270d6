"""Voting district model — commune polygons with party vote shares."""

from typing import Any

from geoalchemy2 import Geometry
from sqlalchemy import Boolean, Index, Integer, Numeric, String, UniqueConstraint, false, text
from sqlalchemy.orm import Mapped, mapped_column

from co2_atlas.models.base import Base, IdMixin, PropertiesMixin, TimestampMixin


def _percent_column() -> Mapped[float]:
    return mapped_column(Numeric(5, 2, asdecimal=False), nullable=False, default=0, server_default=text("0"))


class VotingDistrict(Base, IdMixin, PropertiesMixin, TimestampMixin):
    """Commune with election results and its precomputed choropleth color."""

    __tablename__ = "voting_districts"

    gkz: Mapped[int | None] = mapped_column(Integer, nullable=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    spo_percent: Mapped[float] = _percent_column()
    ovp_percent: Mapped[float] = _percent_column()
    fpo_percent: Mapped[float] = _percent_column()
    grune_percent: Mapped[float] = _percent_column()
    kpo_percent: Mapped[float] = _percent_column()
    neos_percent: Mapped[float] = _percent_column()
    left_green_combined: Mapped[float] = _percent_column()

    choropleth_color: Mapped[str | None] = mapped_column(String(7), nullable=True)
    geom: Mapped[Any] = mapped_column(
        Geometry(geometry_type="MULTIPOLYGON", srid=4326, spatial_index=False), nullable=True
    )
    center_point: Mapped[Any] = mapped_column(
        Geometry(geometry_type="POINT", srid=4326, spatial_index=False), nullable=True
    )
    has_voting_data: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    geometry_valid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    __table_args__ = (
        UniqueConstraint("gkz", name="uq_voting_districts_gkz"),
        Index("idx_voting_districts_geom", "geom", postgresql_using="gist"),
        Index("idx_voting_districts_center", "center_point", postgresql_using="gist"),
    )
