from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env file."""

    # Export settings
    default_export_format: str = Field("plain", description="Format used when none is chosen")
    encoding: str = Field("utf-8", description="Encoding of exported files")
    float_precision: int = Field(6, description="Digits after the point for plain floats")
    column_separator: str = Field("  ", description="Separator between plain text columns")
    last_open_dir: Optional[str] = Field(
        None, description="Directory used to resolve relative export paths"
    )

    # Display settings
    expand_all_threshold: int = Field(
        100, description="Row count below which the host expands the whole tree"
    )

    class Config:
        env_prefix = "TAP_STATS_"
        env_file = ".env"


@lru_cache()
def get_settings() -> Settings:
    """Return a singleton settings instance."""
    return Settings()


settings = get_settings()
