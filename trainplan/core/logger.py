"""Logger configuration for trainplan.

Edits log at DEBUG, recoverable outcomes (stale ids, rejected orderings,
over-allocated targets) at WARNING and invariant failures at ERROR. Invariant
failures carry their code and details in the record's extra dict, which the
JSON file sink preserves.
"""

import sys
from pathlib import Path

from loguru import logger

from trainplan.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message} | {extra}"


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    json_file: bool = False,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> int | None:
    """Configure loguru with a console sink and an optional file sink.

    Args:
        level: Logging level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file. If None, only console logging.
        json_file: Write the file sink as one JSON record per line
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")

    Returns:
        Handler id of the file sink, or None without one
    """
    logger.remove()

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    file_handler = None
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logger.add(
            log_path,
            format="{message}" if json_file else FILE_FORMAT,
            serialize=json_file,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            backtrace=True,
            diagnose=False,
        )

    logger.debug(f"Logger initialized with level={level}, file={log_file or '-'}")
    return file_handler


def configure_logging() -> int | None:
    """Set up logging from LOG_LEVEL, LOG_FILE and LOG_JSON.

    Replaces every existing loguru handler, so only the host application
    should call it.
    """
    return setup_logger(level=settings.log_level, log_file=settings.log_file, json_file=settings.log_json)
