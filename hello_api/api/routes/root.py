from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from hello_api.services.app_service import AppService, get_app_service

router = APIRouter()


@router.get("/", response_class=PlainTextResponse, summary="Greeting")
def get_hello(service: AppService = Depends(get_app_service)) -> str:
    return service.get_hello()
