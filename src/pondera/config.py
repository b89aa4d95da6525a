"""
config.py

- Settings for grade entry and the calculation cache, read from environment
  variables (PONDERA_ prefix) or a .env file.
- pydantic v2 / pydantic-settings v2.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .data_models import GradeScale, GradingSystem


class PonderaSettings(BaseSettings):
    # =========================
    # Grade entry
    # =========================
    grading_system: GradingSystem = GradingSystem.TRIMESTRAL
    grade_scale: GradeScale = GradeScale.ZERO_TO_TEN

    # Older stored records used 0 for "not entered"
    zero_is_placeholder: bool = False

    # =========================
    # Calculation cache
    # =========================
    enable_cache: bool = True
    cache_duration_minutes: float = Field(5.0, ge=0.0)

    # =========================
    # Logging
    # =========================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="PONDERA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> PonderaSettings:
    """Process-wide settings instance"""
    return PonderaSettings()
