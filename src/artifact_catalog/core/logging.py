"""Loguru logging configuration for the API server and CLI.

Console output is human-readable by default, or one JSON object per line
when ``log_json`` is enabled. A rotating file sink is added when a log
directory is configured.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"
_LOG_FILE = "artifact-catalog.log"


def setup_logging(log_level: str = "INFO", log_dir: str | None = None, log_json: bool = False) -> None:
    """Replace Loguru's default sink with the configured ones.

    Args:
        log_level: Minimum log level to emit, case-insensitive.
        log_dir: Optional directory for ``artifact-catalog.log``, rotated
            daily and kept for a week.
        log_json: Serialize console records as JSON lines.
    """
    level = log_level.upper()
    logger.remove()
    if log_json:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=_LOG_FORMAT)

    if not log_dir:
        return
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    logger.add(log_path / _LOG_FILE, level=level, format=_LOG_FORMAT, rotation="24h", retention="7 days")
