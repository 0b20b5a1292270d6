"""ORM model registry — import all models so Alembic autogenerate discovers them."""

from co2_atlas.models.base import Base
from co2_atlas.models.line_layers import GasPipeline, Highway, Railway
from co2_atlas.models.point_layers import (
    CO2Source,
    CompressorStation,
    GasDistributionPoint,
    GasStorageSite,
    GravelPit,
    Landfill,
    WastewaterPlant,
)
from co2_atlas.models.polygon_layers import ConservationArea, GroundwaterProtectionArea, SettlementArea
from co2_atlas.models.study_area import StudyAreaBoundary
from co2_atlas.models.voting_district import VotingDistrict

__all__ = [
    "Base",
    "CO2Source",
    "CompressorStation",
    "ConservationArea",
    "GasDistributionPoint",
    "GasPipeline",
    "GasStorageSite",
    "GravelPit",
    "GroundwaterProtectionArea",
    "Highway",
    "Landfill",
    "Railway",
    "SettlementArea",
    "StudyAreaBoundary",
    "VotingDistrict",
    "WastewaterPlant",
]
