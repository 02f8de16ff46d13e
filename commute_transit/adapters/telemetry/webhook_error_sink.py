from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import httpx

from commute_transit.app.ports.output import IErrorReportSink
from commute_transit.domain.models import ErrorReport

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class WebhookErrorSink(IErrorReportSink):
    """POSTs error reports as JSON to a webhook.

    Env vars:
      - ERROR_WEBHOOK_URL: target URL (if unset, reports are not sent)
      - ERROR_WEBHOOK_TIMEOUT_S: request timeout (default 5)
      - ERROR_REPORT_SOURCE: value of the 'source' field (default commute-transit)
    """

    url: str | None = None
    timeout_s: float = 5.0
    source: str | None = None
    transport: httpx.AsyncBaseTransport | None = None

    def __post_init__(self) -> None:
        if self.url is None:
            self.url = os.getenv("ERROR_WEBHOOK_URL")
        raw_timeout = os.getenv("ERROR_WEBHOOK_TIMEOUT_S")
        if raw_timeout:
            try:
                self.timeout_s = float(raw_timeout)
            except ValueError:
                logger.warning(
                    "Ignoring invalid ERROR_WEBHOOK_TIMEOUT_S=%r; using %.1fs",
                    raw_timeout,
                    self.timeout_s,
                )
        if self.source is None:
            self.source = os.getenv("ERROR_REPORT_SOURCE") or "commute-transit"

    async def send(self, report: ErrorReport) -> None:
        if not self.url:
            return

        payload = {
            "source": self.source,
            "error": report.to_dict(),
            "app_url": report.url,
        }
        async with httpx.AsyncClient(
            timeout=self.timeout_s, transport=self.transport
        ) as client:
            resp = await client.post(self.url, json=payload)

        if resp.is_success:
            logger.debug("Error report sent to webhook")
        else:
            logger.warning("Error report webhook returned HTTP %d", resp.status_code)
