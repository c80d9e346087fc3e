"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings`, which
reads the optional `SALESPULSE_*` environment variables and validates the
moving-average window and log level.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

from salespulse.logging_config import resolve_level

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_MA_WINDOW = 3


@dataclass(frozen=True)
class Settings:
    """Container for app configuration read from the environment.

    Attributes:
        csv_encoding: Text encoding used to decode uploaded CSV files.
        csv_delimiter: Field delimiter for uploaded CSV files.
        ma_window: Number of trailing months averaged by the MA baseline.
        log_path: Optional file that receives a copy of the logs.
        log_level: Numeric root logging level.
    """
    csv_encoding: str
    csv_delimiter: str
    ma_window: int
    log_path: Path | None
    log_level: int


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `SALESPULSE_MA_WINDOW` is not a positive integer or
            `SALESPULSE_LOG_LEVEL` is not a known level name.
    """
    csv_encoding = os.getenv("SALESPULSE_CSV_ENCODING", "utf-8-sig").strip() or "utf-8-sig"
    csv_delimiter = os.getenv("SALESPULSE_CSV_DELIMITER", ",") or ","
    raw_window = os.getenv("SALESPULSE_MA_WINDOW", str(DEFAULT_MA_WINDOW)).strip()
    raw_log_path = os.getenv("SALESPULSE_LOG_PATH", "").strip()
    raw_level = os.getenv("SALESPULSE_LOG_LEVEL", "INFO")

    try:
        ma_window = int(raw_window)
    except ValueError:
        ma_window = 0
    if ma_window < 1:
        raise RuntimeError(
            f"SALESPULSE_MA_WINDOW must be a positive integer, got {raw_window!r} "
            "(example: SALESPULSE_MA_WINDOW=3)."
        )

    try:
        log_level = resolve_level(raw_level)
    except ValueError as exc:
        raise RuntimeError(
            f"{exc}. Set SALESPULSE_LOG_LEVEL to DEBUG, INFO, WARNING or ERROR."
        ) from exc

    return Settings(
        csv_encoding=csv_encoding,
        csv_delimiter=csv_delimiter,
        ma_window=ma_window,
        log_path=Path(raw_log_path) if raw_log_path else None,
        log_level=log_level,
    )
