"""Engine configuration (settings and environment).

Single source of truth for configuration. Uses pydantic-settings with .env
support. Values are validated at load time.
"""

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fieldservice.domain.enums import RuleLogic


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    All settings have defaults; the engine works without any environment.
    """

    # App
    app_name: str = "fieldservice"
    app_version: str = "1.0.0"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    # Inert conditions (unknown field, illegal operator) are logged at WARNING when True, DEBUG otherwise.
    log_inert_conditions: bool = True

    # Step conditions storage
    step_conditions_metadata_key: str = "step_conditions"
    # Logic used when a stored rule set omits "logic".
    default_rule_logic: RuleLogic = RuleLogic.ALL

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, value: object) -> str:
        """Normalize and validate the log level name."""
        level = str(value).strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a logging level name, got: {value!r}")
        return level

    @field_validator("step_conditions_metadata_key")
    @classmethod
    def validate_metadata_key(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("step_conditions_metadata_key must be a non-empty string")
        return value.strip()

    @property
    def effective_log_level(self) -> int:
        """Numeric log level; DEBUG whenever debug is enabled."""
        if self.debug:
            return logging.DEBUG
        return logging.getLevelNamesMapping()[self.log_level]


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    In tests, call get_settings.cache_clear() before overriding env vars so
    the next get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
