"""Reprojection of source geometries into WGS84 (EPSG:4326).

Austrian source datasets arrive in a mix of geographic coordinates and
national grids, usually without a reliable ``.prj``. The transformer
therefore decides per position: positions already inside the WGS84 range
pass through, everything else is tried against an ordered list of
candidate projections and the first candidate producing a valid WGS84
position wins. When no candidate does, the position is returned untouched
and the geometry validator rejects it downstream.

Only the range check decides "already geographic". A projected position
with small magnitudes (e.g. a local grid near its false origin) is
indistinguishable from lon/lat by range alone; ``geographic_window``
narrows the pass-through to a plausible regional window when the data
allows it, and candidate results must land in the same window.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from loguru import logger
from pyproj import CRS, Transformer

from co2_atlas.lib.geometry.coords import Position, as_pair, is_valid_wgs84, map_positions

_BESSEL_TOWGS84 = "+ellps=bessel +towgs84=577.326,90.129,463.919,5.137,1.474,5.297,2.4232 +units=m +no_defs"

# MGI / Austria Lambert, MGI / Austria GK M28, MGI / Austria GK M34
KNOWN_PROJECTIONS: dict[str, str] = {
    "EPSG:31287": (
        "+proj=lcc +lat_1=49 +lat_2=46 +lat_0=47.5 +lon_0=13.33333333333333 +x_0=400000 +y_0=400000 "
        + _BESSEL_TOWGS84
    ),
    "EPSG:31259": "+proj=tmerc +lat_0=0 +lon_0=10.33333333333333 +k=1 +x_0=150000 +y_0=-5000000 " + _BESSEL_TOWGS84,
    "EPSG:3416": "+proj=tmerc +lat_0=0 +lon_0=16 +k=1 +x_0=500000 +y_0=-5000000 " + _BESSEL_TOWGS84,
}

DEFAULT_CANDIDATE_CODES: tuple[str, ...] = ("EPSG:31287", "EPSG:31259")


class ProjectionCandidate(Protocol):
    """A source projection the transformer may try for a position."""

    name: str

    def transform(self, x: float, y: float) -> Position: ...


class ProjCandidate:
    """Forward projection from a proj4 definition to WGS84 lon/lat."""

    def __init__(self, name: str, definition: str) -> None:
        self.name = name
        self._transformer = Transformer.from_crs(
            CRS.from_proj4(definition),
            CRS.from_epsg(4326),
            always_xy=True,
        )

    def transform(self, x: float, y: float) -> Position:
        lon, lat = self._transformer.transform(x, y)
        return (float(lon), float(lat))

    def __repr__(self) -> str:
        return f"ProjCandidate({self.name!r})"


def build_candidates(codes: Sequence[str] = DEFAULT_CANDIDATE_CODES) -> list[ProjCandidate]:
    """Build projection candidates for the given codes, preserving order.

    Raises:
        KeyError: If a code has no known projection definition.
    """
    return [ProjCandidate(code, KNOWN_PROJECTIONS[code]) for code in codes]


@dataclass
class CoordinateTransformer:
    """Converts GeoJSON geometries of unknown projection into WGS84.

    Attributes:
        candidates: Projections tried in order for non-geographic positions.
        geographic_window: Optional (min_lon, min_lat, max_lon, max_lat);
            when set, a position only passes through untransformed if it
            lies inside this window, and a candidate result is only
            accepted if it lands inside it. A lon/lat outside the window
            that no candidate maps into it is returned unchanged.
    """

    candidates: list[ProjectionCandidate] = field(default_factory=build_candidates)
    geographic_window: tuple[float, float, float, float] | None = None

    def is_geographic(self, position: Any) -> bool:
        if not is_valid_wgs84(position):
            return False
        if self.geographic_window is None:
            return True
        lon, lat = position
        min_lon, min_lat, max_lon, max_lat = self.geographic_window
        return min_lon <= lon <= max_lon and min_lat <= lat <= max_lat

    def transform_position(self, position: Any) -> Any:
        """Transform one leaf position, falling back to the input when nothing fits."""
        if self.is_geographic(position):
            return position
        pair = as_pair(position)
        if pair is None:
            return position

        for candidate in self.candidates:
            try:
                result = candidate.transform(*pair)
            except Exception as e:
                logger.debug(f"Projection {candidate.name} failed for {pair}: {e}")
                continue
            if self.is_geographic(result):
                return [result[0], result[1]]

        return position

    def transform_geometry(self, geometry: dict | None) -> dict | None:
        """Return a reprojected copy of a GeoJSON geometry.

        The input is not modified. Geometries without coordinates are
        returned as-is for the validator to reject.
        """
        if not geometry:
            return None
        if "coordinates" not in geometry:
            return dict(geometry)
        transformed = dict(geometry)
        transformed["coordinates"] = map_positions(geometry["coordinates"], self.transform_position)
        return transformed
