"""Settings read from environment variables."""

import logging
import os
from dataclasses import dataclass


def _get_str(name: str, default: str = "") -> str:
    return os.getenv(name, default)


def _get_float(name: str, default: float) -> float:
    """Get a float from the environment, falling back on bad values."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    api_base_url: str
    api_timeout: float
    currency: str
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_base_url=_get_str("AWARDS_API_URL", "http://localhost:8000/api").rstrip("/"),
            api_timeout=_get_float("AWARDS_API_TIMEOUT", 60.0),
            currency=_get_str("AWARDS_CURRENCY", "GH₵"),
            log_level=_get_str("AWARDS_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(settings: Settings) -> None:
    """Set up root logging at the configured level."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
