from datetime import timedelta
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    database_url: str
    telegram_bot_token: str
    telegram_webhook_secret: str | None = None
    telegram_webhook_url: str | None = None

    bot_runtime: Literal["polling", "webhook"] = "polling"
    webhook_host: str = "0.0.0.0"
    webhook_port: int = 8000

    # Monthly experience accrual trigger
    accrual_day: int = 1
    accrual_hour: int = 0
    accrual_timezone: str = "UTC"

    # Abandoned registration/search drafts; None keeps them forever
    draft_ttl_minutes: int | None = 24 * 60
    draft_eviction_interval_minutes: int = 30

    log_level: str = "INFO"

    @property
    def accrual_zone(self) -> ZoneInfo:
        return ZoneInfo(self.accrual_timezone)

    @property
    def draft_ttl(self) -> timedelta | None:
        if self.draft_ttl_minutes is None:
            return None
        return timedelta(minutes=self.draft_ttl_minutes)

    def validate_runtime(self) -> None:
        if self.bot_runtime == "webhook" and not self.telegram_webhook_url:
            raise ValueError(
                "TELEGRAM_WEBHOOK_URL is required when BOT_RUNTIME=webhook"
            )
        if not 1 <= self.accrual_day <= 28:
            raise ValueError("ACCRUAL_DAY must be between 1 and 28")
        try:
            self.accrual_zone
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(
                f"ACCRUAL_TIMEZONE {self.accrual_timezone!r} is not a known timezone"
            ) from None


def get_settings() -> Settings:
    settings = Settings()  # pyright: ignore[reportCallIssue]
    settings.validate_runtime()
    return settings


SETTINGS = get_settings()
