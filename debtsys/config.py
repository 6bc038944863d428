import logging
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import EmailStr, Field, field_validator, model_validator
from typing import Optional

logger = logging.getLogger(__name__)

DEV_API_BASE_URL = "http://localhost:8080"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_env: str = Field(default="dev", alias="APP_ENV")
    api_base_url: Optional[str] = Field(default=None, alias="API_BASE_URL")
    api_timeout_seconds: float = Field(default=30.0, alias="API_TIMEOUT_SECONDS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="standard", alias="LOG_FORMAT")
    default_user_email: Optional[EmailStr] = Field(default=None, alias="DEFAULT_USER_EMAIL")
    error_log_capacity: int = Field(default=100, alias="ERROR_LOG_CAPACITY")

    @field_validator("app_env")
    @classmethod
    def _known_env(cls, v: str) -> str:
        v = v.lower()
        if v not in {"dev", "test", "prod"}:
            raise ValueError(f"unknown APP_ENV '{v}'")
        return v

    @field_validator("api_base_url")
    @classmethod
    def _strip_slash(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip().rstrip("/")
        return v or None

    @field_validator("error_log_capacity")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("ERROR_LOG_CAPACITY must be positive")
        return v

    # Production must point somewhere explicit; dev falls back to localhost
    @model_validator(mode="after")
    def _resolve_base_url(self) -> "Settings":
        if self.api_base_url:
            return self
        if self.app_env == "prod":
            raise ValueError("API_BASE_URL is required when APP_ENV=prod")
        logger.warning("API_BASE_URL not set, using %s", DEV_API_BASE_URL)
        self.api_base_url = DEV_API_BASE_URL
        return self


def get_settings() -> Settings:
    return Settings()
