from .local_gtfs_repository import LocalGtfsRepository
from .s3_gtfs_repository import S3GtfsRepository

__all__ = [
    "LocalGtfsRepository",
    "S3GtfsRepository",
]
