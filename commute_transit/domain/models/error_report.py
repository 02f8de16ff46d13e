from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class ErrorReport:
    message: str
    timestamp: datetime
    url: str = "unknown"
    user_agent: str = "unknown"
    stack: str | None = None
    component_stack: str | None = None
    error_info: Mapping[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "stack": self.stack,
            "url": self.url,
            "user_agent": self.user_agent,
            "timestamp": self.timestamp.isoformat(),
            "component_stack": self.component_stack,
            "error_info": dict(self.error_info) if self.error_info else None,
        }
