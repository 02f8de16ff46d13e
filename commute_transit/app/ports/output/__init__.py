from .error_report_sink import IErrorReportSink
from .gtfs_repository import IGtfsRepository

__all__ = [
    "IErrorReportSink",
    "IGtfsRepository",
]
