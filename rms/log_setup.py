"""Loguru logging configuration.

Call setup_logging() once at startup. Other modules just do
`from loguru import logger`. The terminal belongs to the TUI while it runs,
so only a file sink is installed.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from rms.config import LOG_DIR, LOG_LEVEL


def setup_logging(level: str = LOG_LEVEL, log_dir: str | Path = LOG_DIR) -> Path:
    """Configure a rotating file sink and return the log file path."""
    logger.remove()

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / "rms.log"
    logger.add(
        log_file,
        level=level,
        rotation="1 MB",
        retention=5,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
    )
    return log_file
