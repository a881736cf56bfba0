"""
Logging setup: loguru sinks, with stdlib loggers forwarded into them
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from loguru import logger
from studyquest.core.config import Settings, settings as default_settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


class InterceptHandler(logging.Handler):
    """
    Hand stdlib log records (engine modules, uvicorn, sqlalchemy) to loguru
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(config: Optional[Settings] = None) -> Optional[Path]:
    """
    Configure loguru and route the root stdlib logger through it.

    Returns the log file path pattern when a file sink was added.
    """
    config = config or default_settings
    logger.remove()

    logger.add(
        sys.stdout,
        enqueue=True,
        colorize=True,
        format=CONSOLE_FORMAT,
        level=config.LOG_LEVEL,
    )

    log_file = None
    if config.LOG_DIR:
        log_dir = Path(config.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "studyquest_{time:YYYY-MM-DD}.log"

        logger.add(
            log_file,
            rotation=config.LOG_ROTATION,
            retention=config.LOG_RETENTION,
            enqueue=True,
            level=config.LOG_LEVEL,
            format=FILE_FORMAT,
        )

    # Everything propagates to root; named loggers keep no handlers of their own
    logging.basicConfig(handlers=[InterceptHandler()], level=config.LOG_LEVEL, force=True)
    for name in list(logging.root.manager.loggerDict):
        named = logging.getLogger(name)
        named.handlers = []
        named.propagate = True

    logger.info(f"Logging configured - Level: {config.LOG_LEVEL}, File sink: {log_file or 'disabled'}")
    return log_file
