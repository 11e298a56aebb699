"""Central logging configuration for the credit scoring service."""

import logging


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: int = logging.INFO, debug: bool = False) -> None:
    """Configure the root logger once for consistent scoring logs.

    Args:
        level: Log level used when no explicit debug flag is set.
        debug: Force DEBUG level, typically from `app.debug` in settings.
    """
    if logging.getLogger().handlers:
        return
    logging.basicConfig(level=logging.DEBUG if debug else level, format=LOG_FORMAT)


def get_logger(name: str) -> logging.Logger:
    """Create or retrieve a module logger."""
    return logging.getLogger(name)
