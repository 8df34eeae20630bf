"""Service configuration utilities."""
from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .gradient import GradientShape
from .text_fit import LABEL_WIDTH_RATIO, SCALE_MAX, SCALE_MIN


class Settings(BaseSettings):
    """Environment-driven configuration for the label service."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    enable_cache: bool = Field(True, validation_alias=AliasChoices("ENABLE_CACHE", "enable_cache"))
    cache_max_entries: int = Field(512, validation_alias=AliasChoices("CACHE_MAX_ENTRIES", "cache_max_entries"))
    label_width_ratio: float = Field(
        LABEL_WIDTH_RATIO, validation_alias=AliasChoices("LABEL_WIDTH_RATIO", "label_width_ratio")
    )
    scale_min: float = Field(SCALE_MIN, validation_alias=AliasChoices("SCALE_MIN", "scale_min"))
    scale_max: float = Field(SCALE_MAX, validation_alias=AliasChoices("SCALE_MAX", "scale_max"))
    default_gradient_shape: GradientShape = Field(
        GradientShape.AUTO, validation_alias=AliasChoices("DEFAULT_GRADIENT_SHAPE", "default_gradient_shape")
    )
    log_level: str = Field("INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))


@lru_cache()
def get_settings() -> Settings:
    """Return cached service settings."""

    return Settings()
