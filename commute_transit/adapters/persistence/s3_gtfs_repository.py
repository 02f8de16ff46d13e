from __future__ import annotations

import os
from dataclasses import dataclass

from botocore.exceptions import BotoCoreError, ClientError

from commute_transit.adapters.aws import s3_client
from commute_transit.app.ports.output import IGtfsRepository
from commute_transit.domain.algorithms.feed_builder import TABLE_NAMES
from commute_transit.domain.exceptions import FeedLoadError

_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


@dataclass(slots=True)
class S3GtfsRepository(IGtfsRepository):
    """Reads GTFS tables stored as <prefix>/<table>.txt objects in S3.

    Env vars:
      - GTFS_S3_BUCKET: bucket name
      - GTFS_S3_PREFIX: key prefix (default: gtfs)
      - ENDPOINT_URL / USE_LOCALSTACK / AWS_REGION: see adapters.aws

    Objects that do not exist are skipped, like missing local files.
    """

    bucket: str | None = None
    prefix: str | None = None

    def _bucket(self) -> str:
        value = self.bucket or os.getenv("GTFS_S3_BUCKET")
        if not value:
            raise FeedLoadError("Missing GTFS_S3_BUCKET")
        return value

    def _prefix(self) -> str:
        return (self.prefix or os.getenv("GTFS_S3_PREFIX") or "gtfs").strip("/")

    def _key(self, table: str) -> str:
        prefix = self._prefix()
        return f"{prefix}/{table}.txt" if prefix else f"{table}.txt"

    def read_tables(self) -> dict[str, str]:
        bucket = self._bucket()
        try:
            s3 = s3_client()
        except BotoCoreError as exc:
            raise FeedLoadError(f"Cannot create S3 client: {exc}") from exc

        tables: dict[str, str] = {}
        for name in TABLE_NAMES:
            key = self._key(name)
            try:
                obj = s3.get_object(Bucket=bucket, Key=key)
                body = obj["Body"].read()
            except ClientError as exc:
                code = str(exc.response.get("Error", {}).get("Code", ""))
                if code in _MISSING_KEY_CODES:
                    continue
                raise FeedLoadError(f"Cannot read s3://{bucket}/{key}: {exc}") from exc
            except BotoCoreError as exc:
                raise FeedLoadError(f"Cannot read s3://{bucket}/{key}: {exc}") from exc

            try:
                tables[name] = body.decode("utf-8-sig")
            except UnicodeDecodeError as exc:
                raise FeedLoadError(f"s3://{bucket}/{key} is not UTF-8") from exc
        return tables
