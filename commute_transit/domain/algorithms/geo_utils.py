from __future__ import annotations

import math
from typing import Iterable

from commute_transit.domain.models import NearbyStop, Stop

EARTH_RADIUS_MILES = 3959.0


def haversine_distance_miles(
    lat1: float, lon1: float, lat2: float, lon2: float
) -> float:
    """Great-circle distance in statute miles."""

    d_lat = (lat2 - lat1) * math.pi / 180.0
    d_lon = (lon2 - lon1) * math.pi / 180.0

    a = (
        math.sin(d_lat / 2.0) * math.sin(d_lat / 2.0)
        + math.cos(lat1 * math.pi / 180.0)
        * math.cos(lat2 * math.pi / 180.0)
        * math.sin(d_lon / 2.0)
        * math.sin(d_lon / 2.0)
    )
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_MILES * c


def rank_stops_by_distance(
    stops: Iterable[Stop], *, lat: float, lon: float, limit: int
) -> list[NearbyStop]:
    """Return the `limit` stops closest to (lat, lon), nearest first.

    list.sort() is stable, so equal distances keep their input order.
    Stops with NaN coordinates (malformed rows) rank after every real one.
    """

    if limit <= 0:
        return []

    scored = [
        NearbyStop(
            stop=stop,
            distance_miles=haversine_distance_miles(lat, lon, stop.lat, stop.lon),
        )
        for stop in stops
    ]
    scored.sort(key=lambda x: (math.isnan(x.distance_miles), x.distance_miles))
    return scored[:limit]
