from .error_report import ErrorReport
from .gtfs import Departure, Route, StopTime, TransitFeed, TransitMode, Trip
from .stop import NearbyStop, Stop

__all__ = [
    "Departure",
    "ErrorReport",
    "NearbyStop",
    "Route",
    "Stop",
    "StopTime",
    "TransitFeed",
    "TransitMode",
    "Trip",
]
