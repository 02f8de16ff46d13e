from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

import httpx
import pytest

from commute_transit.adapters.api.dependencies import (
    get_error_reporting_service,
    get_transit_schedule_service,
)
from commute_transit.app.services.error_reporting_service import ErrorReportingService
from commute_transit.app.services.transit_schedule_service import (
    TransitScheduleService,
)
from commute_transit.main import app

TABLES = {
    "stops": (
        "stop_id,stop_name,stop_lat,stop_lon,stop_code\n"
        "WP,White Plains,41.0339,-73.7629,WPL\n"
        "SC,Scarsdale,40.9889,-73.8087,\n"
        "BAD,Broken,,\n"
    ),
    "routes": "route_id,route_short_name,route_long_name,route_type\nHAR,HAR,Harlem Line,2\n",
    "trips": "route_id,service_id,trip_id,trip_headsign,direction_id\nHAR,WKD,T1,Grand Central,1\n",
    "stop_times": (
        "trip_id,arrival_time,departure_time,stop_id,stop_sequence\n"
        "T1,08:14:00,08:15:00,WP,1\n"
        "T1,13:29:00,13:30:00,WP,1\n"
    ),
}


@dataclass(slots=True)
class FakeGtfsRepository:
    tables: Mapping[str, str]

    def read_tables(self) -> Mapping[str, str]:
        return self.tables


def _client() -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def schedule_service():
    service = TransitScheduleService(gtfs_repository=FakeGtfsRepository(TABLES))
    app.dependency_overrides[get_transit_schedule_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


@pytest.mark.unit
@pytest.mark.anyio
async def test_health() -> None:
    async with _client() as client:
        resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.unit
@pytest.mark.anyio
async def test_load_dataset_reports_table_sizes(schedule_service) -> None:
    async with _client() as client:
        resp = await client.post("/dataset/load")

    assert resp.status_code == 200
    assert resp.json() == {
        "loaded": True,
        "stops": 3,
        "routes": 1,
        "trips": 1,
        "stop_times": 2,
    }
    assert schedule_service.is_loaded


@pytest.mark.unit
@pytest.mark.anyio
async def test_nearest_stations_before_load_is_empty(schedule_service) -> None:
    async with _client() as client:
        resp = await client.get("/stations/nearest", params={"lat": 41.0, "lon": -73.78})

    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.unit
@pytest.mark.anyio
async def test_nearest_stations_ranks_by_distance(schedule_service) -> None:
    schedule_service.load_dataset()

    async with _client() as client:
        resp = await client.get(
            "/stations/nearest", params={"lat": 41.0, "lon": -73.78, "limit": 2}
        )

    assert resp.status_code == 200
    payload = resp.json()
    assert [s["stop_id"] for s in payload] == ["SC", "WP"]
    assert payload[1]["code"] == "WPL"
    assert payload[0]["distance_miles"] < payload[1]["distance_miles"]


@pytest.mark.unit
@pytest.mark.anyio
async def test_nearest_stations_serializes_nan_coordinates_as_null(
    schedule_service,
) -> None:
    schedule_service.load_dataset()

    async with _client() as client:
        resp = await client.get(
            "/stations/nearest", params={"lat": 41.0, "lon": -73.78, "limit": 3}
        )

    assert resp.status_code == 200
    broken = [s for s in resp.json() if s["stop_id"] == "BAD"]
    assert broken and broken[0]["lat"] is None and broken[0]["distance_miles"] is None


@pytest.mark.unit
@pytest.mark.anyio
@pytest.mark.parametrize(
    "params",
    [
        {"lat": 91.0, "lon": 0.0},
        {"lat": 0.0, "lon": -181.0},
        {"lat": 0.0, "lon": 0.0, "limit": 0},
    ],
)
async def test_nearest_stations_validates_query(schedule_service, params) -> None:
    async with _client() as client:
        resp = await client.get("/stations/nearest", params=params)

    assert resp.status_code == 422


@pytest.mark.unit
@pytest.mark.anyio
async def test_departures_include_trip_and_route(schedule_service) -> None:
    schedule_service.load_dataset()

    async with _client() as client:
        resp = await client.get(
            "/stations/WP/departures", params={"current_time": "08:00:00"}
        )

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["stop_id"] == "WP"
    assert payload["current_time"] == "08:00:00"
    first = payload["departures"][0]
    assert first["display_time"] == "8:15 AM"
    assert first["departure_time"] == "08:15:00"
    assert first["headsign"] == "Grand Central"
    assert first["route_long_name"] == "Harlem Line"
    assert first["mode"] == "rail"


@pytest.mark.unit
@pytest.mark.anyio
async def test_next_trains_defaults_and_unknown_station(schedule_service) -> None:
    schedule_service.load_dataset()

    async with _client() as client:
        default_resp = await client.get("/stations/WP/next-trains")
        later_resp = await client.get(
            "/stations/WP/next-trains", params={"current_time": "12:00:00"}
        )
        unknown_resp = await client.get("/stations/NOPE/next-trains")

    assert default_resp.json() == ["8:15 AM", "1:30 PM"]
    assert later_resp.json() == ["1:30 PM"]
    assert unknown_resp.status_code == 200
    assert unknown_resp.json() == []


@pytest.mark.unit
@pytest.mark.anyio
async def test_next_trains_rejects_malformed_time(schedule_service) -> None:
    async with _client() as client:
        resp = await client.get(
            "/stations/WP/next-trains", params={"current_time": "8am"}
        )

    assert resp.status_code == 422


@pytest.mark.unit
@pytest.mark.anyio
async def test_unhandled_error_returns_json_and_is_recorded() -> None:
    class _BrokenService:
        def find_nearest_stations(self, lat: float, lng: float, limit: int = 3):
            raise RuntimeError("store corrupted")

    errors = ErrorReportingService()
    app.dependency_overrides[get_transit_schedule_service] = lambda: _BrokenService()
    app.dependency_overrides[get_error_reporting_service] = lambda: errors

    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/stations/nearest", params={"lat": 41.0, "lon": -73.78})

    app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"detail": "store corrupted"}
    stored = errors.stored_errors()
    assert len(stored) == 1
    assert stored[0].message == "RuntimeError: store corrupted"
    assert stored[0].url.endswith("/stations/nearest?lat=41.0&lon=-73.78")
