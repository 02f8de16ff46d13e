from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping


class IGtfsRepository(ABC):
    """Port for reading raw GTFS table text.

    Keys are table names without extension ('stops', 'routes', 'trips',
    'stop_times'). Tables that are not available are simply absent.
    """

    @abstractmethod
    def read_tables(self) -> Mapping[str, str]:
        """Return raw table text, raising FeedLoadError if the source fails."""
