from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="CarTrace MCP", alias="APP_NAME")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    cors_allow_origins: str = Field(default="*", alias="CORS_ALLOW_ORIGINS")

    # Snapshot behaviour
    mcp_min_plate_length: int = Field(default=5, alias="MCP_MIN_PLATE_LENGTH")
    randomize_history: bool = Field(default=False, alias="RANDOMIZE_HISTORY")
    simulate_latency: bool = Field(default=False, alias="SIMULATE_LATENCY")
    latency_per_event_ms: int = Field(default=120, alias="LATENCY_PER_EVENT_MS")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]
