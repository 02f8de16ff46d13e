from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from commute_transit.app.ports.output import IGtfsRepository
from commute_transit.domain.algorithms.feed_builder import build_transit_feed
from commute_transit.domain.algorithms.geo_utils import rank_stops_by_distance
from commute_transit.domain.algorithms.schedule import (
    DEFAULT_CURRENT_TIME,
    MAX_NEXT_DEPARTURES,
    format_time_12h,
    next_stop_times,
)
from commute_transit.domain.exceptions import FeedLoadError
from commute_transit.domain.models import Departure, NearbyStop, TransitFeed

logger = logging.getLogger(__name__)

DEFAULT_NEAREST_LIMIT = 3


@dataclass(slots=True)
class TransitScheduleService:
    """Nearest-station and next-departure lookups over an in-memory feed.

    The feed starts empty and is populated by an explicit `load_dataset()`.
    A load builds a complete new feed before swapping the single reference,
    so readers never see a partially loaded store.
    """

    gtfs_repository: IGtfsRepository

    _feed: TransitFeed = field(default_factory=TransitFeed.empty)
    _loaded_at: datetime | None = None

    @property
    def feed(self) -> TransitFeed:
        return self._feed

    @property
    def is_loaded(self) -> bool:
        return self._loaded_at is not None

    @property
    def loaded_at(self) -> datetime | None:
        return self._loaded_at

    def load_dataset(self) -> bool:
        """Load (or reload) the feed. Returns False on failure, never raises.

        On failure the previous feed stays in place.
        """

        try:
            tables = self.gtfs_repository.read_tables()
            feed = build_transit_feed(tables)
        except (FeedLoadError, OSError, ValueError):
            logger.exception("Failed to load transit dataset")
            return False

        if not tables:
            logger.info("No transit feed files supplied; store is empty")

        self._feed = feed
        self._loaded_at = datetime.now(timezone.utc)
        logger.info(
            "Transit dataset loaded: %d stops, %d routes, %d trips, %d stop times",
            len(feed.stops),
            len(feed.routes),
            len(feed.trips),
            len(feed.stop_times),
        )
        return True

    def find_nearest_stations(
        self, lat: float, lng: float, limit: int = DEFAULT_NEAREST_LIMIT
    ) -> list[NearbyStop]:
        return rank_stops_by_distance(self._feed.stops, lat=lat, lon=lng, limit=limit)

    def get_next_departures(
        self,
        station_id: str,
        current_time: str = DEFAULT_CURRENT_TIME,
        *,
        limit: int = MAX_NEXT_DEPARTURES,
    ) -> list[Departure]:
        feed = self._feed
        departures: list[Departure] = []
        for st in next_stop_times(
            feed.stop_times,
            stop_id=station_id,
            current_time=current_time,
            limit=limit,
        ):
            trip = feed.trips_by_id.get(st.trip_id)
            route = feed.routes_by_id.get(trip.route_id) if trip else None
            departures.append(
                Departure(
                    stop_time=st,
                    display_time=format_time_12h(st.departure_time),
                    trip=trip,
                    route=route,
                )
            )
        return departures

    def get_next_trains(
        self, station_id: str, current_time: str = DEFAULT_CURRENT_TIME
    ) -> list[str]:
        return [
            d.display_time for d in self.get_next_departures(station_id, current_time)
        ]
