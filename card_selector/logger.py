"""Loguru sinks for the console and a rotating log file."""

import sys
from pathlib import Path

from loguru import logger

from card_selector.core.path_resolver import get_app_data_dir

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{module}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {module}:{function}:{line} | {message}"


def default_log_dir() -> Path:
    return get_app_data_dir() / "logs"


def setup_logger(log_dir: Path | None = None, debug: bool = False) -> Path:
    """Replace loguru's default sink with a console sink and a file sink.

    The console shows INFO and above unless *debug* is set; the file
    ``app.log`` always records DEBUG.  Returns the log file path.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if debug else "INFO",
        format=_CONSOLE_FORMAT,
        colorize=True,
    )

    log_dir = log_dir or default_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "app.log"
    logger.add(
        str(log_file),
        level="DEBUG",
        format=_FILE_FORMAT,
        rotation="10 MB",
        retention="7 days",
        encoding="utf-8",
    )

    logger.info("Logging to {}", log_file)
    return log_file
