from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from commute_transit.app.ports.output import IGtfsRepository
from commute_transit.domain.algorithms.feed_builder import TABLE_NAMES
from commute_transit.domain.exceptions import FeedLoadError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LocalGtfsRepository(IGtfsRepository):
    """Reads GTFS tables from a directory of .txt files.

    Env vars:
      - GTFS_PATH: directory containing stops.txt, routes.txt, trips.txt,
        stop_times.txt (default: data/gtfs)

    A missing directory or missing file is not an error: that table is
    just not returned.
    """

    base_path: str | Path | None = None

    def _base(self) -> Path:
        value = self.base_path or os.getenv("GTFS_PATH") or "data/gtfs"
        return Path(value)

    def read_tables(self) -> dict[str, str]:
        base = self._base()
        if not base.is_dir():
            logger.info("GTFS directory %s not found; no feed files supplied", base)
            return {}

        tables: dict[str, str] = {}
        for name in TABLE_NAMES:
            path = base / f"{name}.txt"
            if not path.exists():
                continue
            try:
                tables[name] = path.read_text(encoding="utf-8-sig")
            except (OSError, UnicodeDecodeError) as exc:
                raise FeedLoadError(f"Cannot read {path}: {exc}") from exc
        return tables
