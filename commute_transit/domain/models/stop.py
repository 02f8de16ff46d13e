from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Stop:
    """A station/platform from stops.txt.

    Coordinates are WGS84 degrees. Unparseable values are kept as NaN.
    """

    stop_id: str
    name: str
    lat: float
    lon: float
    code: str | None = None


@dataclass(frozen=True, slots=True)
class NearbyStop:
    stop: Stop
    distance_miles: float
