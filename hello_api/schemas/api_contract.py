from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: Literal["ok"] = Field("ok", description="Always 'ok' while the process is serving requests")
    timestamp: str = Field(..., description="ISO-8601 UTC time at which the check ran")
    uptime: float = Field(..., ge=0, description="Seconds elapsed since process start")


class ErrorBody(BaseModel):
    code: str
    message: str
    details: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    error: ErrorBody
