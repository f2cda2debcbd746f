"""
Application Settings
Load from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Process-level settings from environment"""

    # ======================
    # Database
    # ======================
    DATABASE_URL: str = "sqlite+aiosqlite:///./fluidtrack.db"
    AUTO_CREATE_TABLES: bool = True

    # ======================
    # Application
    # ======================
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # ======================
    # Telegram
    # ======================
    TELEGRAM_BOT_TOKEN: Optional[str] = None
    TELEGRAM_ENABLED: bool = False

    # Comma-separated Telegram chat ids allowed to receive reports
    AUTHORIZED_USER_IDS: str = ""

    # ======================
    # Scheduler
    # ======================
    SCHEDULER_ENABLED: bool = True

    # ======================
    # Timezone fallback (used when no timezone setting is stored)
    # ======================
    TZ: str = "America/New_York"

    # ======================
    # Dashboard
    # ======================
    # Wellness fields compared day over day on the history dashboard
    TREND_FIELDS: str = "energy,cyanosis"
    HISTORY_MAX_DAYS: int = 31

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="forbid",
    )


settings = Settings()
