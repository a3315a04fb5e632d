import os
import sys
from typing import Optional

from loguru import logger


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{source}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "{message}\n{exception}"
)


def _format(record) -> str:
    # Records from unbound loggers carry no module; fall back to the logger name.
    source = "{extra[module]}" if "module" in record["extra"] else "{name}"
    return LOG_FORMAT.replace("{source}", source)


def configure_logging(level: Optional[str] = None) -> None:
    """Route log records to stderr at ``level`` (or ``LOG_LEVEL``)."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level or LOG_LEVEL,
        format=_format,
        backtrace=False,
        diagnose=False,
    )


def get_logger(name: Optional[str] = None, **kwargs):
    """Return a logger bound with an optional module/component name."""
    if name:
        return logger.bind(module=name, **kwargs)
    return logger.bind(**kwargs)
