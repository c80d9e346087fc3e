"""Logging setup shared by the CLI and the Streamlit dashboard.

Streamlit re-executes the app script on every interaction, so
`configure_logging` replaces any handlers installed by an earlier run instead
of stacking new ones.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_level(name: str) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value.

    Raises:
        ValueError: if the name is not a standard logging level.
    """
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level


def configure_logging(
    log_path: Path | None = None,
    level: int = logging.INFO,
    stream: TextIO | None = None,
) -> None:
    """Install console (and optionally file) handlers on the root logger.

    Args:
        log_path: Optional file that receives a copy of every record.
        level: Root logging level (defaults to INFO).
        stream: Console stream; defaults to stdout. Pass stderr when stdout
            carries machine-readable output.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
