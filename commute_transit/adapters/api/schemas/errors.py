from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class ErrorReportRequestSchema(BaseModel):
    message: str | None = None
    stack: str | None = None
    url: str | None = None
    user_agent: str | None = None
    component_stack: str | None = None
    error_info: dict[str, Any] | None = None


class ErrorReportSchema(BaseModel):
    message: str
    timestamp: datetime
    url: str
    user_agent: str
    stack: str | None = None
    component_stack: str | None = None
    error_info: dict[str, Any] | None = None
