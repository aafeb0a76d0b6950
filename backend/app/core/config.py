# File: backend/app/core/config.py
# Version: v0.4.0
"""
Centralized application settings using Pydantic Settings.

Controls:
- App metadata and API prefix
- CORS origins
- Optional path to an assembly parameters JSON (falls back to built-in defaults)
- Output dir for CLI exports
- Server host/port and log level
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- App ---
    API_PREFIX: str = "/api"
    APP_NAME: str = "AIA Sanger Assembly"
    APP_VERSION: str = "0.4.0"

    # --- CORS ---
    CORS_ORIGINS: str = "*"  # comma-separated or '*' for all

    # --- Assembly parameters ---
    ASSEMBLY_PARAMS_PATH: Optional[Path] = None

    # --- Output ---
    OUTPUT_DIR: Path = Path("backend/data/out")

    # --- Server ---
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "info"

    # extra="allow": unknown env vars won't crash
    model_config = SettingsConfigDict(extra="allow", env_file=".env", env_file_encoding="utf-8")

    @property
    def cors_origins_list(self) -> list[str]:
        raw = self.CORS_ORIGINS.strip()
        if raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]


settings = Settings()
