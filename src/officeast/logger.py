"""Central logging configuration for the library."""

import logging
from typing import Optional

from officeast.config import settings

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger with default configuration applied."""
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=settings.log_level.upper(), format=_FORMAT)
    return logger


def configure_rich_logging(level: Optional[str] = None) -> None:
    """Route log records through rich, used by the CLI."""
    from rich.logging import RichHandler

    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
