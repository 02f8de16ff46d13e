from __future__ import annotations

import math
from typing import Mapping

from commute_transit.domain.models import Route, Stop, StopTime, TransitFeed, Trip

from .csv_records import parse_csv_records

TABLE_NAMES = ("stops", "routes", "trips", "stop_times")


def _float_or_nan(raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        return math.nan


def _int_or_none(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def stops_from_records(records: list[dict[str, str]]) -> tuple[Stop, ...]:
    out: list[Stop] = []
    for row in records:
        stop_id = row.get("stop_id", "")
        if not stop_id:
            continue
        out.append(
            Stop(
                stop_id=stop_id,
                name=row.get("stop_name", ""),
                lat=_float_or_nan(row.get("stop_lat", "")),
                lon=_float_or_nan(row.get("stop_lon", "")),
                code=row.get("stop_code") or None,
            )
        )
    return tuple(out)


def routes_from_records(records: list[dict[str, str]]) -> tuple[Route, ...]:
    return tuple(
        Route(
            route_id=row["route_id"],
            short_name=row.get("route_short_name", ""),
            long_name=row.get("route_long_name", ""),
            route_type=row.get("route_type", ""),
        )
        for row in records
        if row.get("route_id")
    )


def trips_from_records(records: list[dict[str, str]]) -> tuple[Trip, ...]:
    out: list[Trip] = []
    for row in records:
        trip_id = row.get("trip_id", "")
        if not trip_id:
            continue
        direction = _int_or_none(row.get("direction_id", ""))
        out.append(
            Trip(
                trip_id=trip_id,
                route_id=row.get("route_id", ""),
                service_id=row.get("service_id", ""),
                headsign=row.get("trip_headsign", ""),
                direction_id=direction if direction in (0, 1) else None,
            )
        )
    return tuple(out)


def stop_times_from_records(records: list[dict[str, str]]) -> tuple[StopTime, ...]:
    # Dangling trip/stop references are kept; lookups degrade to None.
    return tuple(
        StopTime(
            trip_id=row.get("trip_id", ""),
            arrival_time=row.get("arrival_time", ""),
            departure_time=row.get("departure_time", ""),
            stop_id=row["stop_id"],
            stop_sequence=_int_or_none(row.get("stop_sequence", "")),
        )
        for row in records
        if row.get("stop_id")
    )


def build_transit_feed(tables: Mapping[str, str]) -> TransitFeed:
    """Build a feed from raw table text keyed by table name ('stops', ...).

    Missing tables are treated as empty.
    """

    def records(name: str) -> list[dict[str, str]]:
        return parse_csv_records(tables.get(name) or "")

    return TransitFeed.from_tables(
        stops=stops_from_records(records("stops")),
        routes=routes_from_records(records("routes")),
        trips=trips_from_records(records("trips")),
        stop_times=stop_times_from_records(records("stop_times")),
    )
