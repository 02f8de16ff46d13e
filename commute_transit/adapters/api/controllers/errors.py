from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, Response

from commute_transit.adapters.api.dependencies import get_error_reporting_service
from commute_transit.adapters.api.schemas.errors import (
    ErrorReportRequestSchema,
    ErrorReportSchema,
)
from commute_transit.app.services.error_reporting_service import ErrorReportingService
from commute_transit.domain.models import ErrorReport

router = APIRouter(prefix="/errors", tags=["errors"])


def _report_to_schema(report: ErrorReport) -> ErrorReportSchema:
    return ErrorReportSchema(
        message=report.message,
        timestamp=report.timestamp,
        url=report.url,
        user_agent=report.user_agent,
        stack=report.stack,
        component_stack=report.component_stack,
        error_info=dict(report.error_info) if report.error_info else None,
    )


@router.post("", response_model=ErrorReportSchema)
def report_error(
    req: ErrorReportRequestSchema,
    background_tasks: BackgroundTasks,
    service: ErrorReportingService = Depends(get_error_reporting_service),
) -> ErrorReportSchema:
    report = service.record_error(
        req.message,
        stack=req.stack,
        url=req.url,
        user_agent=req.user_agent,
        component_stack=req.component_stack,
        error_info=req.error_info,
    )
    background_tasks.add_task(service.forward, report)
    return _report_to_schema(report)


@router.get("", response_model=list[ErrorReportSchema])
def list_errors(
    service: ErrorReportingService = Depends(get_error_reporting_service),
) -> list[ErrorReportSchema]:
    return [_report_to_schema(r) for r in service.stored_errors()]


@router.delete("", status_code=204)
def clear_errors(
    service: ErrorReportingService = Depends(get_error_reporting_service),
) -> Response:
    service.clear_stored_errors()
    return Response(status_code=204)
