from __future__ import annotations

import logging

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_APP_ENVS = {"dev", "test", "prod"}
# levels both logging and uvicorn accept
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = Field("Hello API", alias="APP_NAME")
    app_version: str = Field("0.1.0", alias="APP_VERSION")
    app_env: str = Field("dev", alias="APP_ENV")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, alias="PORT", ge=1, le=65535)
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_origin: str = Field("", alias="CORS_ORIGIN")

    @field_validator("app_env", mode="before")
    @classmethod
    def _normalize_app_env(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower() or "dev"
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v: object) -> object:
        """
        Accept any casing ("debug", "Info") and aliases like WARN; reject anything
        uvicorn can't run with (NOTSET, custom names).
        """
        if not isinstance(v, str):
            return v
        number = logging.getLevelName(v.strip().upper())
        # WARN -> WARNING, FATAL -> CRITICAL
        level = logging.getLevelName(number) if isinstance(number, int) else None
        if level not in _LOG_LEVELS:
            raise ValueError(f"log level must be one of {sorted(_LOG_LEVELS)}, got {v!r}")
        return level

    @model_validator(mode="after")
    def _validate_env(self) -> "Settings":
        if self.app_env not in _APP_ENVS:
            raise ValueError(f"APP_ENV must be one of {sorted(_APP_ENVS)}, got {self.app_env!r}")
        return self

    @property
    def cors_origins(self) -> list[str]:
        return [o for o in (_clean_origin(raw) for raw in self.cors_origin.split(",")) if o]


def _clean_origin(value: str) -> str:
    cleaned = value.strip()
    while cleaned.endswith("/") and cleaned != "/":
        cleaned = cleaned[:-1]
    return cleaned


settings = Settings()
