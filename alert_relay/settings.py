from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ALERT_RELAY_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    config_file: Path = Path("config/settings.yaml")
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "info"
    # Kept under its historical, unprefixed name so existing deployments keep working.
    webhook_config: Optional[str] = Field(default=None, validation_alias="WEBHOOK_CONFIG")
