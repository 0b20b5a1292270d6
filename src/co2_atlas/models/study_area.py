"""Study-area boundary model — commune polygons outlining the atlas region."""

from typing import Any

from geoalchemy2 import Geometry
from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from co2_atlas.models.base import Base, IdMixin, PropertiesMixin, TimestampMixin


class StudyAreaBoundary(Base, IdMixin, PropertiesMixin, TimestampMixin):
    """Administrative commune boundary, keyed on its commune identifier."""

    __tablename__ = "study_area_boundaries"

    g_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    g_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    geom: Mapped[Any] = mapped_column(
        Geometry(geometry_type="MULTIPOLYGON", srid=4326, spatial_index=False), nullable=True
    )

    __table_args__ = (
        UniqueConstraint("g_id", name="uq_study_area_boundaries_g_id"),
        Index("idx_study_area_geom", "geom", postgresql_using="gist"),
    )
