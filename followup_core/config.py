from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Read by setup_logging()
    LOG_LEVEL: str = "INFO"

    # =================================================================
    # REMINDER CLASSIFICATION
    # =================================================================
    REMINDER_TIMEZONE: str = "UTC"
    REMINDER_CACHE_BUCKET_SECONDS: int = 60  # 1 minute
    REMINDER_DUE_SOON_HOURS: float = 24.0
    REMINDER_DUE_WITHIN_HOURS: float = 1.0

    # =================================================================
    # PRIORITY SCORING - seeds DEFAULT_URGENCY_CONFIG
    # =================================================================
    REMINDER_OVERDUE_MULTIPLIER: float = 2.0
    REMINDER_DUE_SOON_MULTIPLIER: float = 1.5
    REMINDER_RECENCY_DECAY_DAYS: float = 7.0
    REMINDER_SNOOZE_PENALTY: float = 0.2

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def get_classifier_config(self) -> dict:
        """
        Get status classifier defaults, with out-of-range values corrected.
        """
        config = {
            "timezone": self.REMINDER_TIMEZONE,
            "bucket_seconds": self.REMINDER_CACHE_BUCKET_SECONDS,
            "due_soon_hours": self.REMINDER_DUE_SOON_HOURS,
            "due_within_hours": self.REMINDER_DUE_WITHIN_HOURS,
        }

        # Bucket width below one second would never produce a cache hit
        if config["bucket_seconds"] < 1:
            config["bucket_seconds"] = 1

        return config


settings = Settings()

# =================================================================
# QUICK CONFIGURATION REFERENCE
# =================================================================
"""
Every value above can be overridden from the environment or .env.local:

VERBOSE LOGS (picked up by setup_logging() when no level is passed):
LOG_LEVEL=DEBUG

PER-USER CALENDAR:
REMINDER_TIMEZONE=America/New_York

LONGER CACHE WINDOW (slower status roll-over, fewer recomputations):
REMINDER_CACHE_BUCKET_SECONDS=300

GENTLER SCORING (overdue items surface less aggressively):
REMINDER_OVERDUE_MULTIPLIER=1.5
REMINDER_DUE_SOON_MULTIPLIER=1.2
"""
