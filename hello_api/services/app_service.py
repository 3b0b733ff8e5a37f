from __future__ import annotations

from hello_api.core.uptime import ProcessClock, process_clock
from hello_api.schemas.api_contract import HealthResponse

GREETING = "Hello World! This is a dockerized NestJS application."


class AppService:
    def __init__(self, clock: ProcessClock | None = None) -> None:
        self._clock = clock or process_clock()

    def get_hello(self) -> str:
        return GREETING

    def get_health(self) -> HealthResponse:
        return HealthResponse(
            status="ok",
            timestamp=self._clock.now_iso(),
            uptime=self._clock.uptime(),
        )


_APP_SERVICE = AppService()


def get_app_service() -> AppService:
    return _APP_SERVICE
