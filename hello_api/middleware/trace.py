from __future__ import annotations

import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from hello_api.core.logging_utils import log_event


class TraceMiddleware(BaseHTTPMiddleware):
    """Logs one ``request_done`` event per request, including failed ones."""

    def __init__(self, app, logger_name: str = "hello_api.request") -> None:
        super().__init__(app)
        self.logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:
        t0 = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            return response
        finally:
            log_event(
                self.logger,
                "request_done",
                request_id=getattr(request.state, "request_id", None),
                method=request.method,
                path=request.url.path,
                status_code=response.status_code if response is not None else 500,
                ms_total=int((time.perf_counter() - t0) * 1000),
            )
