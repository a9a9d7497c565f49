from __future__ import annotations
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ApiConfig:
    api_key: str | None = None
    rate_limit_n: int = 5
    rate_limit_window_sec: float = 1.0
    trust_forwarded_for: bool = False  # key the limiter on X-Forwarded-For (behind a proxy only)


def get_api_config() -> ApiConfig:
    return ApiConfig(
        api_key=os.getenv("API_KEY") or None,
        rate_limit_n=int(os.getenv("RATE_LIMIT_N", "5")),
        rate_limit_window_sec=float(os.getenv("RATE_LIMIT_WINDOW_SEC", "1.0")),
        trust_forwarded_for=os.getenv("TRUST_X_FORWARDED_FOR", "").lower() in ("1", "true", "yes"),
    )


@dataclass(frozen=True)
class LocaleConfig:
    default_locale: str = "en-US"


def get_locale_config() -> LocaleConfig:
    return LocaleConfig(default_locale=os.getenv("ROI_DEFAULT_LOCALE", "en-US"))


@dataclass(frozen=True)
class LogConfig:
    level: str = "INFO"


def get_log_config() -> LogConfig:
    return LogConfig(level=os.getenv("ROI_LOG_LEVEL", "INFO").upper())
