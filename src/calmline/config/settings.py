"""
CALMLINE Application Settings

Configuration management using Pydantic Settings.
All values are loaded from environment variables (or a local .env file).

CLINICAL_REVIEW_REQUIRED: Detector thresholds and the lexicon path
control who gets escalated. Changes must go through clinical review.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DetectorSettings(BaseSettings):
    """Stress-signal detector configuration."""

    # Built by default_factory on Settings, so it reads .env itself
    model_config = SettingsConfigDict(
        env_prefix="CALMLINE_DETECTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    lexicon_path: Optional[Path] = Field(
        default=None,
        description="JSON lexicon file; built-in lexicon is used when unset",
    )

    # Tier cut points (score >= threshold)
    tier_low: float = Field(default=1.0, gt=0, allow_inf_nan=False)
    tier_moderate: float = Field(default=3.0, gt=0, allow_inf_nan=False)
    tier_high: float = Field(default=6.0, gt=0, allow_inf_nan=False)
    tier_critical: float = Field(default=10.0, gt=0, allow_inf_nan=False)

    repeat_decay: float = Field(
        default=0.5,
        ge=0.0,
        lt=1.0,
        description="Contribution factor for repeated matches within a category",
    )

    crisis_line: str = Field(
        default="988 Suicide & Crisis Lifeline (call or text 988)",
        description="Crisis line text included in escalation messages",
    )
    support_resources_url: str = Field(
        default="https://988lifeline.org",
        description="Self-help resources link for lower tiers",
    )

    @model_validator(mode="after")
    def validate_threshold_order(self) -> "DetectorSettings":
        """Tier thresholds must be strictly increasing."""
        cuts = [self.tier_low, self.tier_moderate, self.tier_high, self.tier_critical]
        if any(a >= b for a, b in zip(cuts, cuts[1:])):
            raise ValueError(
                "Tier thresholds must be strictly increasing: "
                f"low={self.tier_low} moderate={self.tier_moderate} "
                f"high={self.tier_high} critical={self.tier_critical}"
            )
        return self


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with CALMLINE_ prefix.

    Usage:
        settings = get_settings()
        path = settings.detector.lexicon_path
    """

    model_config = SettingsConfigDict(
        env_prefix="CALMLINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode - NEVER enable in production")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    api_version: str = Field(default="v1", description="API version prefix")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins"
    )

    sentry_dsn: SecretStr = Field(default=SecretStr(""), description="Sentry DSN (empty disables)")

    # Nested settings
    detector: DetectorSettings = Field(default_factory=DetectorSettings)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.
    For testing, construct Settings directly and pass it in.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
