"""Environment-driven settings."""
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .constants import LABELS

load_dotenv()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    locale: str = "en"
    cache_size: int = 32
    data_dir: Path = Path("data")
    log_level: str = "WARNING"


def load_settings() -> Settings:
    """Read ANALYTICS_* variables; invalid values raise ValueError."""
    locale = os.getenv("ANALYTICS_LOCALE", "en").strip().lower()
    if locale not in LABELS:
        raise ValueError(f"ANALYTICS_LOCALE must be one of {sorted(LABELS)}, got {locale!r}")

    raw_size = os.getenv("ANALYTICS_CACHE_SIZE", "32").strip()
    try:
        cache_size = int(raw_size)
    except ValueError:
        raise ValueError(f"ANALYTICS_CACHE_SIZE must be an integer, got {raw_size!r}") from None
    if cache_size < 0:
        raise ValueError("ANALYTICS_CACHE_SIZE must be >= 0")

    log_level = os.getenv("ANALYTICS_LOG_LEVEL", "WARNING").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"ANALYTICS_LOG_LEVEL must be one of {LOG_LEVELS}, got {log_level!r}")

    return Settings(
        locale=locale,
        cache_size=cache_size,
        data_dir=Path(os.getenv("ANALYTICS_DATA_DIR", "data")),
        log_level=log_level,
    )
