"""
Agri Advisor - runtime settings (env vars / .env).
"""
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "Agri Advisor API"

    # Client side: where the advisory API lives
    API_BASE_URL: str = "http://localhost:3000"
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    # Mock leaf analysis
    ANALYSIS_DELAY_SECONDS: float = 1.5

    CORS_ORIGINS: List[str] = ["*"]
    STATIC_DIR: str = "public"

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper()


settings = Settings()
