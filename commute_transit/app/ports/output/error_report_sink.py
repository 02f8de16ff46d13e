from __future__ import annotations

from abc import ABC, abstractmethod

from commute_transit.domain.models import ErrorReport


class IErrorReportSink(ABC):
    """Port for forwarding error reports to an external collector."""

    @abstractmethod
    async def send(self, report: ErrorReport) -> None:
        raise NotImplementedError
