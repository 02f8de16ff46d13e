from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .stop import Stop


class TransitMode(str, Enum):
    TRAM = "tram"
    SUBWAY = "subway"
    RAIL = "rail"
    BUS = "bus"
    FERRY = "ferry"
    CABLE_TRAM = "cable_tram"
    AERIAL_LIFT = "aerial_lift"
    FUNICULAR = "funicular"
    TROLLEYBUS = "trolleybus"
    MONORAIL = "monorail"


# Basic GTFS route_type codes.
_MODE_BY_ROUTE_TYPE: dict[str, TransitMode] = {
    "0": TransitMode.TRAM,
    "1": TransitMode.SUBWAY,
    "2": TransitMode.RAIL,
    "3": TransitMode.BUS,
    "4": TransitMode.FERRY,
    "5": TransitMode.CABLE_TRAM,
    "6": TransitMode.AERIAL_LIFT,
    "7": TransitMode.FUNICULAR,
    "11": TransitMode.TROLLEYBUS,
    "12": TransitMode.MONORAIL,
}


@dataclass(frozen=True, slots=True)
class Route:
    """Transit line metadata (subset of GTFS routes.txt)."""

    route_id: str
    short_name: str = ""
    long_name: str = ""
    route_type: str = ""

    @property
    def mode(self) -> TransitMode | None:
        return _MODE_BY_ROUTE_TYPE.get(self.route_type)


@dataclass(frozen=True, slots=True)
class Trip:
    trip_id: str
    route_id: str = ""
    service_id: str = ""
    headsign: str = ""
    direction_id: int | None = None  # 0/1 per GTFS


@dataclass(frozen=True, slots=True)
class StopTime:
    """One scheduled visit of a trip to a stop.

    Times are the raw GTFS 'HH:MM:SS' strings; HH may exceed 23 for service
    running past midnight on the same service day.
    """

    trip_id: str
    arrival_time: str
    departure_time: str
    stop_id: str
    stop_sequence: int | None = None


@dataclass(frozen=True, slots=True)
class Departure:
    stop_time: StopTime
    display_time: str
    trip: Trip | None = None
    route: Route | None = None


@dataclass(frozen=True, slots=True)
class TransitFeed:
    """In-memory transit tables. Read-only once built."""

    stops: tuple[Stop, ...] = ()
    routes: tuple[Route, ...] = ()
    trips: tuple[Trip, ...] = ()
    stop_times: tuple[StopTime, ...] = ()

    stops_by_id: dict[str, Stop] = field(default_factory=dict, compare=False)
    routes_by_id: dict[str, Route] = field(default_factory=dict, compare=False)
    trips_by_id: dict[str, Trip] = field(default_factory=dict, compare=False)

    @staticmethod
    def empty() -> "TransitFeed":
        return TransitFeed()

    @staticmethod
    def from_tables(
        *,
        stops: tuple[Stop, ...] = (),
        routes: tuple[Route, ...] = (),
        trips: tuple[Trip, ...] = (),
        stop_times: tuple[StopTime, ...] = (),
    ) -> "TransitFeed":
        # Later rows win on duplicate ids; the tuples keep first-seen order.
        stops_by_id: dict[str, Stop] = {}
        for s in stops:
            stops_by_id[s.stop_id] = s
        routes_by_id = {r.route_id: r for r in routes}
        trips_by_id = {t.trip_id: t for t in trips}

        return TransitFeed(
            stops=tuple(stops_by_id.values()),
            routes=tuple(routes_by_id.values()),
            trips=tuple(trips_by_id.values()),
            stop_times=tuple(stop_times),
            stops_by_id=stops_by_id,
            routes_by_id=routes_by_id,
            trips_by_id=trips_by_id,
        )
