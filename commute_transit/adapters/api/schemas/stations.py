from __future__ import annotations

from pydantic import BaseModel


class NearbyStationSchema(BaseModel):
    stop_id: str
    name: str
    lat: float | None = None
    lon: float | None = None
    code: str | None = None
    distance_miles: float | None = None


class DepartureSchema(BaseModel):
    trip_id: str
    departure_time: str
    arrival_time: str
    display_time: str
    headsign: str | None = None
    direction_id: int | None = None
    route_id: str | None = None
    route_short_name: str | None = None
    route_long_name: str | None = None
    mode: str | None = None


class DeparturesResponseSchema(BaseModel):
    stop_id: str
    current_time: str
    departures: list[DepartureSchema]


class DatasetLoadResponseSchema(BaseModel):
    loaded: bool
    stops: int
    routes: int
    trips: int
    stop_times: int
