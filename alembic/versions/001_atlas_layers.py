"""Create atlas layer tables.

Revision ID: 001
Revises:
Create Date: 2026-10-17
"""

import geoalchemy2  # noqa: F401
import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "001"
down_revision = None
branch_labels = None
depends_on = None

POINT_LAYERS = (
    "co2_sources",
    "landfills",
    "gravel_pits",
    "wastewater_plants",
    "gas_storage_sites",
    "gas_distribution_points",
    "compressor_stations",
)
LINE_LAYERS = ("gas_pipelines", "highways", "railways")
POLYGON_LAYERS = ("groundwater_protection", "conservation_areas", "settlement_areas")


def _geometry(name: str, geometry_type: str) -> sa.Column:
    return sa.Column(
        name,
        geoalchemy2.types.Geometry(geometry_type=geometry_type, srid=4326, spatial_index=False),
        nullable=True,
    )


def _common() -> list[sa.Column]:
    return [
        sa.Column("properties", postgresql.JSONB(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _pin_style(color: str, opacity: str, size: int = 2) -> list[sa.Column]:
    return [
        sa.Column("pin_size", sa.Integer(), server_default=sa.text(str(size)), nullable=False),
        sa.Column("pin_color", sa.String(7), server_default=color, nullable=False),
        sa.Column("icon_url", sa.String(500), nullable=True),
        sa.Column("opacity", sa.Numeric(3, 2), server_default=sa.text(opacity), nullable=False),
    ]


def _line_style(color: str, weight: int, opacity: str) -> list[sa.Column]:
    return [
        sa.Column("line_color", sa.String(7), server_default=color, nullable=False),
        sa.Column("line_weight", sa.Integer(), server_default=sa.text(str(weight)), nullable=False),
        sa.Column("line_opacity", sa.Numeric(3, 2), server_default=sa.text(opacity), nullable=False),
    ]


def _fill_style(fill: str, border: str) -> list[sa.Column]:
    return [
        sa.Column("fill_color", sa.String(7), server_default=fill, nullable=False),
        sa.Column("fill_opacity", sa.Numeric(3, 2), server_default=sa.text("0.3"), nullable=False),
        sa.Column("border_color", sa.String(7), server_default=border, nullable=False),
        sa.Column("border_weight", sa.Integer(), server_default=sa.text("2"), nullable=False),
    ]


def _percent(name: str) -> sa.Column:
    return sa.Column(name, sa.Numeric(5, 2), server_default=sa.text("0"), nullable=False)


def _tonnes(name: str) -> sa.Column:
    return sa.Column(name, sa.Numeric(12, 2), server_default=sa.text("0"), nullable=False)


def _id() -> sa.Column:
    return sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True)


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS postgis")

    op.create_table(
        "study_area_boundaries",
        _id(),
        sa.Column("g_id", sa.String(50), nullable=True),
        sa.Column("g_name", sa.String(255), nullable=True),
        sa.Column("state", sa.String(100), nullable=True),
        _geometry("geom", "MULTIPOLYGON"),
        *_common(),
        sa.UniqueConstraint("g_id", name="uq_study_area_boundaries_g_id"),
    )

    op.create_table(
        "voting_districts",
        _id(),
        sa.Column("gkz", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        _percent("spo_percent"),
        _percent("ovp_percent"),
        _percent("fpo_percent"),
        _percent("grune_percent"),
        _percent("kpo_percent"),
        _percent("neos_percent"),
        _percent("left_green_combined"),
        sa.Column("choropleth_color", sa.String(7), nullable=True),
        _geometry("geom", "MULTIPOLYGON"),
        _geometry("center_point", "POINT"),
        sa.Column("has_voting_data", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("geometry_valid", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_common(),
        sa.UniqueConstraint("gkz", name="uq_voting_districts_gkz"),
    )

    op.create_table(
        "co2_sources",
        _id(),
        sa.Column("plant_name", sa.String(255), nullable=False),
        sa.Column("plant_type", sa.String(100), nullable=True),
        _tonnes("total_co2_t"),
        _tonnes("fossil_co2_t"),
        _tonnes("biogenic_co2_t"),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("is_prominent", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_pin_style("#ff4444", "1.0"),
        _geometry("geom", "POINT"),
        *_common(),
    )

    op.create_table(
        "landfills",
        _id(),
        sa.Column("company_name", sa.String(255), nullable=True),
        sa.Column("location_name", sa.String(255), nullable=True),
        sa.Column("district", sa.String(100), nullable=True),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("facility_type", sa.String(255), nullable=True),
        *_pin_style("#ff8800", "0.8"),
        _geometry("geom", "POINT"),
        *_common(),
    )

    op.create_table(
        "gravel_pits",
        _id(),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("resource", sa.String(255), nullable=True),
        sa.Column("tags", sa.Text(), nullable=True),
        *_pin_style("#8855aa", "0.7"),
        _geometry("geom", "POINT"),
        *_common(),
    )

    op.create_table(
        "wastewater_plants",
        _id(),
        sa.Column("pk", sa.String(50), nullable=True),
        sa.Column("label", sa.String(255), nullable=True),
        sa.Column("treatment_type", sa.String(100), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=True),
        *_pin_style("#3388ff", "0.6"),
        _geometry("geom", "POINT"),
        *_common(),
    )

    op.create_table(
        "gas_storage_sites",
        _id(),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("operator", sa.String(255), nullable=True),
        sa.Column("storage_type", sa.String(100), nullable=True),
        sa.Column("capacity_bcm", sa.Numeric(10, 3), nullable=True),
        *_pin_style("#00cc88", "0.5"),
        _geometry("geom", "POINT"),
        *_common(),
    )

    op.create_table(
        "gas_distribution_points",
        _id(),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("type", sa.String(100), nullable=True),
        sa.Column("operator", sa.String(255), nullable=True),
        *_pin_style("#00aa44", "0.4", size=1),
        _geometry("geom", "POINT"),
        *_common(),
    )

    op.create_table(
        "compressor_stations",
        _id(),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("operator", sa.String(255), nullable=True),
        sa.Column("capacity_info", sa.Text(), nullable=True),
        *_pin_style("#ffaa00", "0.3"),
        _geometry("geom", "POINT"),
        *_common(),
    )

    op.create_table(
        "gas_pipelines",
        _id(),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("operator", sa.String(255), nullable=True),
        sa.Column("diameter", sa.Integer(), nullable=True),
        sa.Column("pressure_level", sa.String(50), nullable=True),
        sa.Column("pipeline_type", sa.String(100), nullable=True),
        *_line_style("#00aa44", 4, "0.8"),
        _geometry("geom", "MULTILINESTRING"),
        _geometry("simplified_geom", "MULTILINESTRING"),
        *_common(),
    )

    op.create_table(
        "highways",
        _id(),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("highway_number", sa.String(50), nullable=True),
        sa.Column("road_type", sa.String(50), nullable=True),
        *_line_style("#666666", 3, "0.7"),
        _geometry("geom", "MULTILINESTRING"),
        _geometry("simplified_geom", "MULTILINESTRING"),
        *_common(),
    )

    op.create_table(
        "railways",
        _id(),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("railway_type", sa.String(50), nullable=True),
        sa.Column("operator", sa.String(255), nullable=True),
        *_line_style("#8B4513", 3, "0.8"),
        _geometry("geom", "MULTILINESTRING"),
        _geometry("simplified_geom", "MULTILINESTRING"),
        *_common(),
    )

    op.create_table(
        "groundwater_protection",
        _id(),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("protection_zone", sa.String(50), nullable=True),
        *_fill_style("#0066ff", "#0044cc"),
        _geometry("geom", "MULTIPOLYGON"),
        _geometry("simplified_geom", "MULTIPOLYGON"),
        *_common(),
    )

    op.create_table(
        "conservation_areas",
        _id(),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("protection_level", sa.String(100), nullable=True),
        sa.Column("area_type", sa.String(100), nullable=True),
        *_fill_style("#00ff00", "#00cc00"),
        _geometry("geom", "MULTIPOLYGON"),
        _geometry("simplified_geom", "MULTIPOLYGON"),
        *_common(),
    )

    op.create_table(
        "settlement_areas",
        _id(),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("area_type", sa.String(50), nullable=True),
        sa.Column("population", sa.Integer(), nullable=True),
        *_fill_style("#ff0000", "#cc0000"),
        _geometry("geom", "MULTIPOLYGON"),
        _geometry("simplified_geom", "MULTIPOLYGON"),
        *_common(),
    )

    for name, table, column in _spatial_indexes():
        op.create_index(name, table, [column], postgresql_using="gist")


def _spatial_indexes() -> list[tuple[str, str, str]]:
    indexes = [
        ("idx_study_area_geom", "study_area_boundaries", "geom"),
        ("idx_voting_districts_geom", "voting_districts", "geom"),
        ("idx_voting_districts_center", "voting_districts", "center_point"),
        ("idx_groundwater_geom", "groundwater_protection", "geom"),
        ("idx_groundwater_simplified_geom", "groundwater_protection", "simplified_geom"),
        ("idx_conservation_geom", "conservation_areas", "geom"),
        ("idx_conservation_simplified_geom", "conservation_areas", "simplified_geom"),
        ("idx_settlement_geom", "settlement_areas", "geom"),
        ("idx_settlement_simplified_geom", "settlement_areas", "simplified_geom"),
    ]
    indexes.extend((f"idx_{table}_geom", table, "geom") for table in POINT_LAYERS)
    for table in LINE_LAYERS:
        indexes.append((f"idx_{table}_geom", table, "geom"))
        indexes.append((f"idx_{table}_simplified_geom", table, "simplified_geom"))
    return indexes


def downgrade() -> None:
    op.execute("DROP MATERIALIZED VIEW IF EXISTS mv_voting_choropleth")
    for name, table, _column in reversed(_spatial_indexes()):
        op.drop_index(name, table_name=table)
    for table in (*LINE_LAYERS, *POLYGON_LAYERS, *POINT_LAYERS, "voting_districts", "study_area_boundaries"):
        op.drop_table(table)
