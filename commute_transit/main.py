from __future__ import annotations

import logging
import os
import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.background import BackgroundTask

from commute_transit.adapters.api.controllers.errors import router as errors_router
from commute_transit.adapters.api.controllers.stations import router as stations_router
from commute_transit.adapters.api.dependencies import get_error_reporting_service

app = FastAPI(title="Commute Transit")
app.include_router(stations_router)
app.include_router(errors_router)


def _reveal_errors() -> bool:
    return (os.getenv("COMMUTE_TRANSIT_REVEAL_ERRORS") or "").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return JSON for unhandled errors and record them in the error history."""

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    provider = app.dependency_overrides.get(
        get_error_reporting_service, get_error_reporting_service
    )
    service = provider()
    report = service.record_error(
        f"{type(exc).__name__}: {exc}",
        stack="".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        url=str(request.url),
        user_agent=request.headers.get("user-agent"),
    )

    if _reveal_errors() or isinstance(exc, (FileNotFoundError, RuntimeError, ValueError)):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(
        status_code=500,
        content={"detail": detail},
        background=BackgroundTask(service.forward, report),
    )


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
