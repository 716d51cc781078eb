"""Application settings loaded from environment variables via pydantic-settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from agrisynch.models.enums import GrowthStage
from agrisynch.services.advisory_engine import AdvisoryPolicy


class LogFormat(StrEnum):
    json = "json"
    console = "console"


class Settings(BaseSettings):
    """Central configuration — all values sourced from env vars or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AGRISYNCH_",
        case_sensitive=False,
    )

    # ── Weather rules ───────────────────────────────────────────────────────
    high_precip_threshold: int = 70
    dry_precip_threshold: int = 20

    # ── Stage advisories ────────────────────────────────────────────────────
    elevated_pest_stages: list[GrowthStage] = [
        GrowthStage.flowering,
        GrowthStage.harvest,
    ]
    action_date_format: str = "%d %b %Y"

    # ── Presentation ────────────────────────────────────────────────────────
    feed_size: int = 3
    critical_alerts_only: bool = False
    cors_allow_origins: list[str] = ["*"]

    # ── Observability ───────────────────────────────────────────────────────
    log_level: str = "info"
    log_format: LogFormat = LogFormat.json

    def advisory_policy(self) -> AdvisoryPolicy:
        """Engine thresholds derived from the current settings."""
        return AdvisoryPolicy(
            high_precip_threshold=self.high_precip_threshold,
            dry_precip_threshold=self.dry_precip_threshold,
            elevated_pest_stages=frozenset(self.elevated_pest_stages),
            action_date_format=self.action_date_format,
        )


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance (cached after first call)."""
    return Settings()
