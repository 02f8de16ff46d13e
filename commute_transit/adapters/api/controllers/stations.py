from __future__ import annotations

import math

from fastapi import APIRouter, Depends, Query

from commute_transit.adapters.api.dependencies import get_transit_schedule_service
from commute_transit.adapters.api.schemas.stations import (
    DatasetLoadResponseSchema,
    DepartureSchema,
    DeparturesResponseSchema,
    NearbyStationSchema,
)
from commute_transit.app.services.transit_schedule_service import (
    TransitScheduleService,
)
from commute_transit.domain.algorithms.schedule import DEFAULT_CURRENT_TIME
from commute_transit.domain.models import Departure, NearbyStop

router = APIRouter(tags=["stations"])

_TIME_PATTERN = r"^\d{2,}:\d{2}:\d{2}$"


def _finite(value: float) -> float | None:
    # JSON has no NaN; malformed feed coordinates surface as null.
    return value if math.isfinite(value) else None


def _nearby_to_schema(item: NearbyStop) -> NearbyStationSchema:
    return NearbyStationSchema(
        stop_id=item.stop.stop_id,
        name=item.stop.name,
        lat=_finite(item.stop.lat),
        lon=_finite(item.stop.lon),
        code=item.stop.code,
        distance_miles=_finite(item.distance_miles),
    )


def _departure_to_schema(dep: Departure) -> DepartureSchema:
    return DepartureSchema(
        trip_id=dep.stop_time.trip_id,
        departure_time=dep.stop_time.departure_time,
        arrival_time=dep.stop_time.arrival_time,
        display_time=dep.display_time,
        headsign=dep.trip.headsign if dep.trip else None,
        direction_id=dep.trip.direction_id if dep.trip else None,
        route_id=dep.route.route_id if dep.route else None,
        route_short_name=dep.route.short_name if dep.route else None,
        route_long_name=dep.route.long_name if dep.route else None,
        mode=dep.route.mode.value if dep.route and dep.route.mode else None,
    )


@router.post("/dataset/load", response_model=DatasetLoadResponseSchema)
def load_dataset(
    service: TransitScheduleService = Depends(get_transit_schedule_service),
) -> DatasetLoadResponseSchema:
    loaded = service.load_dataset()
    feed = service.feed
    return DatasetLoadResponseSchema(
        loaded=loaded,
        stops=len(feed.stops),
        routes=len(feed.routes),
        trips=len(feed.trips),
        stop_times=len(feed.stop_times),
    )


@router.get("/stations/nearest", response_model=list[NearbyStationSchema])
def nearest_stations(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lon: float = Query(..., ge=-180.0, le=180.0),
    limit: int = Query(default=3, ge=1, le=50),
    service: TransitScheduleService = Depends(get_transit_schedule_service),
) -> list[NearbyStationSchema]:
    return [
        _nearby_to_schema(item)
        for item in service.find_nearest_stations(lat, lon, limit=limit)
    ]


@router.get("/stations/{stop_id}/departures", response_model=DeparturesResponseSchema)
def station_departures(
    stop_id: str,
    current_time: str = Query(default=DEFAULT_CURRENT_TIME, pattern=_TIME_PATTERN),
    limit: int = Query(default=5, ge=1, le=5),
    service: TransitScheduleService = Depends(get_transit_schedule_service),
) -> DeparturesResponseSchema:
    departures = service.get_next_departures(stop_id, current_time, limit=limit)
    return DeparturesResponseSchema(
        stop_id=stop_id,
        current_time=current_time,
        departures=[_departure_to_schema(d) for d in departures],
    )


@router.get("/stations/{stop_id}/next-trains", response_model=list[str])
def next_trains(
    stop_id: str,
    current_time: str = Query(default=DEFAULT_CURRENT_TIME, pattern=_TIME_PATTERN),
    service: TransitScheduleService = Depends(get_transit_schedule_service),
) -> list[str]:
    return service.get_next_trains(stop_id, current_time)
