"""Configuration using pydantic-settings.

Values come from ``DOCSCRIPT_*`` environment variables or a ``.env`` file in
the working directory.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docscript.transport import API_BASE, DEFAULT_TIMEOUT


class Settings(BaseSettings):
    """Settings for the docscript CLI.

    Environment variables:
    - DOCSCRIPT_ACCESS_TOKEN: OAuth2 token with the documents scope
    - DOCSCRIPT_API_BASE: Documents API endpoint
    - DOCSCRIPT_TIMEOUT: HTTP timeout in seconds
    - DOCSCRIPT_LOG_LEVEL: Minimum log level
    - DOCSCRIPT_JSON_LOGS: Emit JSON log lines instead of coloured text
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCSCRIPT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    access_token: str = ""
    api_base: str = API_BASE
    timeout: int = DEFAULT_TIMEOUT
    log_level: str = "WARNING"
    json_logs: bool = False

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known value."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of: {allowed}")
        return v_upper


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded once and cached for the lifetime of the process.
    """
    return Settings()
