"""
Centralized configuration with environment variable overrides.

Timeouts, booking window, notification and analytics settings live here.
The availability slot grid is deliberately not configurable; see
``salon_booking.availability.engine``.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from salon_booking.logging_context import RequestIdFilter

load_dotenv()

logger = logging.getLogger(__name__)

VALID_INITIAL_STATUSES = ("pending", "confirmed")
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s [%(request_id)s]: %(message)s"


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    raw = os.getenv(env_var, default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


@dataclass(frozen=True)
class BookingConfig:
    """Booking window and upstream fetch settings."""

    fetch_timeout_sec: float = _safe_float("FETCH_TIMEOUT_SEC", "10.0")
    max_advance_days: int = _safe_int("MAX_ADVANCE_DAYS", "90")
    default_booking_status: str = os.getenv("DEFAULT_BOOKING_STATUS", "pending")


@dataclass(frozen=True)
class NotificationConfig:
    """WhatsApp deep-link and message formatting settings."""

    whatsapp_base_url: str = os.getenv("WHATSAPP_BASE_URL", "https://wa.me")
    country_code: str = os.getenv("PHONE_COUNTRY_CODE", "27")
    currency_symbol: str = os.getenv("CURRENCY_SYMBOL", "R")
    notifications_enabled: bool = _safe_bool("NOTIFICATIONS_ENABLED", "true")


@dataclass(frozen=True)
class AnalyticsConfig:
    """Visit analytics defaults."""

    default_stats_days: int = _safe_int("ANALYTICS_DEFAULT_DAYS", "30")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    booking: BookingConfig = field(default_factory=BookingConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "salon-booking")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.booking.fetch_timeout_sec <= 0:
        raise ValueError(
            f"FETCH_TIMEOUT_SEC must be > 0, got {config.booking.fetch_timeout_sec}"
        )
    if config.booking.max_advance_days < 1:
        raise ValueError(
            f"MAX_ADVANCE_DAYS must be >= 1, got {config.booking.max_advance_days}"
        )
    if config.booking.default_booking_status not in VALID_INITIAL_STATUSES:
        raise ValueError(
            f"DEFAULT_BOOKING_STATUS must be one of {VALID_INITIAL_STATUSES}, "
            f"got {config.booking.default_booking_status!r}"
        )
    if not config.notifications.country_code.isdigit():
        raise ValueError(
            "PHONE_COUNTRY_CODE must contain digits only, "
            f"got {config.notifications.country_code!r}"
        )
    if not config.notifications.whatsapp_base_url.startswith(("http://", "https://")):
        raise ValueError(
            "WHATSAPP_BASE_URL must be an http(s) URL, "
            f"got {config.notifications.whatsapp_base_url!r}"
        )
    if config.analytics.default_stats_days < 1:
        raise ValueError(
            f"ANALYTICS_DEFAULT_DAYS must be >= 1, got {config.analytics.default_stats_days}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())
    logger.info("Configuration loaded for '%s'", config.app_name)
    return config


# Singleton instance
settings = load_config()
