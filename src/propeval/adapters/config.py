# src/propeval/adapters/config.py
import logging
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")
    LOG_STREAM: Literal["stdout", "stderr"] = Field(default="stdout")

    # -----------------------------
    # HTTP API
    # -----------------------------
    API_VERSION: str = Field(default="1.0.0")
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=5000)

    # Browser origin allowed to call the API (the web client)
    CORS_ORIGIN: str = Field(default="http://localhost:3000")

    model_config = SettingsConfigDict(
        env_prefix="PROPEVAL_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _known_level(cls, v: Any) -> Any:
        level = str(v).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown LOG_LEVEL: {v}")
        return level

    @field_validator("PORT")
    @classmethod
    def _port_range(cls, v: int) -> int:
        if not (0 < v < 65536):
            raise ValueError("PORT must be between 1 and 65535")
        return v


config = AppConfig()
