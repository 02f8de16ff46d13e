from __future__ import annotations

import os
from functools import lru_cache

from commute_transit.adapters.persistence.local_gtfs_repository import (
    LocalGtfsRepository,
)
from commute_transit.adapters.persistence.s3_gtfs_repository import S3GtfsRepository
from commute_transit.adapters.telemetry.webhook_error_sink import WebhookErrorSink
from commute_transit.app.ports.output import IGtfsRepository
from commute_transit.app.services.error_reporting_service import ErrorReportingService
from commute_transit.app.services.transit_schedule_service import (
    TransitScheduleService,
)


# One instance per process: the feed is loaded once and shared by requests.
@lru_cache(maxsize=1)
def get_transit_schedule_service() -> TransitScheduleService:
    gtfs_repo: IGtfsRepository = LocalGtfsRepository()
    if os.getenv("GTFS_S3_BUCKET"):
        gtfs_repo = S3GtfsRepository()
    return TransitScheduleService(gtfs_repository=gtfs_repo)


@lru_cache(maxsize=1)
def get_error_reporting_service() -> ErrorReportingService:
    max_stored = int(os.getenv("MAX_STORED_ERRORS") or 10)
    return ErrorReportingService(sink=WebhookErrorSink(), max_stored=max_stored)
