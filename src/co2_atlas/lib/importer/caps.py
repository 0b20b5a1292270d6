"""Per-layer feature caps for the large national datasets.

Caps apply per source file and truncate reading after N records. The
``production`` profile keeps import runtime bounded on small hosts, the
``development`` profile allows larger extracts, and ``unrestricted``
imports every feature.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FeatureCaps:
    """Maximum features read per source file for each capped layer (None = no cap)."""

    groundwater: int | None = None
    conservation: int | None = None
    settlement: int | None = None
    highways: int | None = None
    railways: int | None = None


PRODUCTION_CAPS = FeatureCaps(groundwater=5000, conservation=2000, settlement=3000, highways=1000, railways=500)
DEVELOPMENT_CAPS = FeatureCaps(groundwater=50000, conservation=10000, settlement=15000, highways=5000, railways=2000)
UNRESTRICTED_CAPS = FeatureCaps()

_CAPS_BY_MODE: dict[str, FeatureCaps] = {
    "production": PRODUCTION_CAPS,
    "development": DEVELOPMENT_CAPS,
    "unrestricted": UNRESTRICTED_CAPS,
}


def caps_for_mode(mode: str) -> FeatureCaps:
    """Resolve a resource mode name to its feature caps.

    Raises:
        ValueError: If the mode is unknown.
    """
    try:
        return _CAPS_BY_MODE[mode.lower()]
    except KeyError:
        msg = f"Unknown resource mode: {mode}. Expected one of: {', '.join(_CAPS_BY_MODE)}"
        raise ValueError(msg) from None
