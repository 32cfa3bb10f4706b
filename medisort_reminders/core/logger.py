"""loguru setup: call setup_logging once at startup, then `from loguru import logger` anywhere."""

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level:<7} | {name}:{line} - {message}"


def setup_logging(level: str = "INFO", log_file: Optional[Union[str, Path]] = None) -> None:
    level = level.upper()
    handlers = [{"sink": sys.stderr, "level": level, "format": LOG_FORMAT}]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append({"sink": str(log_file), "level": level, "format": LOG_FORMAT, "rotation": "10 MB"})

    logger.configure(handlers=handlers)
