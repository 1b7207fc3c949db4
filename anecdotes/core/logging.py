"""Logging setup: loguru sink plus interception of stdlib loggers."""
import logging
import sys

from loguru import logger


class InterceptHandler(logging.Handler):
    """Forward stdlib log records (uvicorn, sqlalchemy, alembic) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO", *, json_format: bool = False) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), serialize=json_format)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in ["uvicorn.access", "sqlalchemy.engine", "aiosqlite"]:
        logging.getLogger(name).setLevel(logging.WARNING)

    # passlib 1.7.4 logs a caught traceback while reading the bcrypt version
    logging.getLogger("passlib").setLevel(logging.ERROR)
