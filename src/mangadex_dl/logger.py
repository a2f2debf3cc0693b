from pathlib import Path

from loguru import logger
from tqdm import tqdm

# Remove default handler
logger.remove()


def _tqdm_sink(message) -> None:
    # Route console output through tqdm so progress bars are redrawn cleanly
    tqdm.write(str(message), end="")


def configure_logger(
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    rotation: str = "00:00",
    retention: str = "1 week",
    log_name: str = "mangadex_dl",
    log_dir: str = "",
):
    """Configure logger with given settings.

    Args:
        console_level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        file_level: File log level
        rotation: Log rotation settings (time like "00:00" or size like "500 MB")
        retention: How long to keep old logs
        log_name: Base name for the log file
        log_dir: Directory for log files; file logging is disabled when empty
    """
    # Remove all existing handlers first
    logger.remove()

    # Add console handler
    logger.add(
        _tqdm_sink,
        level=console_level.upper(),
        colorize=True,
    )

    if not log_dir:
        return

    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    log_file = directory / f"{log_name}_{{time:YYYY-MM-DD}}.log"

    # Add file handler with rotation and retention
    logger.add(
        log_file,
        rotation=rotation,
        retention=retention,
        level=file_level.upper(),
        encoding="utf-8",
        mode="a",
    )


# Initialize with default settings
configure_logger()

__all__ = ["logger", "configure_logger"]
