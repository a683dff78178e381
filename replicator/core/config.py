# config.py

"""Configuration for form replicators.

Settings come from the process environment (a local .env file is loaded
first) and are validated once through pydantic models.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


load_dotenv()


class Settings(BaseModel):
    """Process-wide replicator settings."""

    log_level: str = "INFO"
    log_format: str = "text"

    # Default extension method names installed by bindings.register()
    dynamic_method: str = "add_dynamic"
    remove_method: str = "add_remove_on_click"
    create_method: str = "add_create_on_click"

    @field_validator("log_format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("text", "json"):
            raise ValueError(f"log_format must be 'text' or 'json', got {value!r}")
        return value

    @field_validator("dynamic_method", "remove_method", "create_method")
    @classmethod
    def _check_method_name(cls, value: str) -> str:
        if not value.isidentifier() or value.startswith("_"):
            raise ValueError(f"Invalid extension method name: {value!r}")
        return value


class ReplicatorOptions(BaseModel):
    """Per-replicator options."""

    default_count: int = Field(default=0, ge=0)
    force_default: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from the environment (cached)."""
    defaults = Settings()
    return Settings(
        log_level=os.getenv("REPLICATOR_LOG_LEVEL", defaults.log_level),
        log_format=os.getenv("REPLICATOR_LOG_FORMAT", defaults.log_format),
        dynamic_method=os.getenv("REPLICATOR_DYNAMIC_METHOD", defaults.dynamic_method),
        remove_method=os.getenv("REPLICATOR_REMOVE_METHOD", defaults.remove_method),
        create_method=os.getenv("REPLICATOR_CREATE_METHOD", defaults.create_method),
    )


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
