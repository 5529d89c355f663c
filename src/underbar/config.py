from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings read from ``UNDERBAR_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="UNDERBAR_", env_ignore_empty=True)

    LOG_LEVEL: str = "WARNING"
    SHUFFLE_SEED: Optional[int] = None
    TIMER_DAEMON: bool = True

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level '{value}'")
        return level

    @classmethod
    def load(cls) -> "Settings":
        return cls()


settings = Settings.load()
