from __future__ import annotations

from fastapi import APIRouter, Depends

from hello_api.schemas.api_contract import HealthResponse
from hello_api.services.app_service import AppService, get_app_service

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
def get_health(service: AppService = Depends(get_app_service)) -> HealthResponse:
    return service.get_health()
