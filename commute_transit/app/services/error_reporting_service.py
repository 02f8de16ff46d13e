from __future__ import annotations

import logging
import threading
import traceback
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping

from commute_transit.app.ports.output import IErrorReportSink
from commute_transit.domain.models import ErrorReport

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ErrorReportingService:
    """Collects error reports for the running process.

    - Keeps the most recent `max_stored` reports in memory (debug view).
    - Forwards each report to an optional sink (e.g. a webhook).

    Sink failures are logged and never propagate to the caller.
    """

    sink: IErrorReportSink | None = None
    max_stored: int = 10

    _reports: deque[ErrorReport] = field(init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self._reports = deque(maxlen=max(1, int(self.max_stored)))

    async def report_error(
        self,
        message: str | None = None,
        *,
        stack: str | None = None,
        url: str | None = None,
        user_agent: str | None = None,
        component_stack: str | None = None,
        error_info: Mapping[str, Any] | None = None,
    ) -> ErrorReport:
        report = self.record_error(
            message,
            stack=stack,
            url=url,
            user_agent=user_agent,
            component_stack=component_stack,
            error_info=error_info,
        )
        await self.forward(report)
        return report

    def record_error(
        self,
        message: str | None = None,
        *,
        stack: str | None = None,
        url: str | None = None,
        user_agent: str | None = None,
        component_stack: str | None = None,
        error_info: Mapping[str, Any] | None = None,
    ) -> ErrorReport:
        """Log and store a report without forwarding it.

        HTTP callers pair this with `forward` in a background task so the
        response does not wait on the sink.
        """

        report = ErrorReport(
            message=message or "Unknown error",
            timestamp=datetime.now(timezone.utc),
            url=url or "unknown",
            user_agent=user_agent or "unknown",
            stack=stack,
            component_stack=component_stack,
            error_info=error_info,
        )

        logger.error(
            "Error report: %s",
            report.message,
            extra={"report_url": report.url, "error_info": report.error_info},
        )

        with self._lock:
            self._reports.append(report)
        return report

    async def forward(self, report: ErrorReport) -> None:
        if self.sink is None:
            return
        try:
            await self.sink.send(report)
        except Exception:
            logger.warning("Failed to forward error report", exc_info=True)

    async def report_map_error(self, context: str, error: BaseException | str) -> ErrorReport:
        return await self.report_error(
            f"Map Error in {context}: {error}",
            stack=_stack_of(error),
            error_info={"context": context, "error": str(error)},
        )

    async def report_component_error(
        self,
        component_name: str,
        error: BaseException | str,
        *,
        component_stack: str | None = None,
    ) -> ErrorReport:
        return await self.report_error(
            f"Component Error in {component_name}: {error}",
            stack=_stack_of(error),
            component_stack=component_stack,
            error_info={"component_name": component_name, "error": str(error)},
        )

    def stored_errors(self) -> tuple[ErrorReport, ...]:
        with self._lock:
            return tuple(self._reports)

    def clear_stored_errors(self) -> None:
        with self._lock:
            self._reports.clear()
        logger.info("Stored error reports cleared")


def _stack_of(error: BaseException | str) -> str | None:
    if not isinstance(error, BaseException) or error.__traceback__ is None:
        return None

    return "".join(traceback.format_exception(type(error), error, error.__traceback__))
