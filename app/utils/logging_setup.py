import logging
import sys

from app.config import LOG_LEVEL

_logger = logging.getLogger("app")


def configure_logging() -> logging.Logger:
    """Attach one stdout handler to the `app` logger. Safe to call on every rerun."""
    if _logger.handlers:
        return _logger

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s :: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    _logger.addHandler(handler)
    _logger.setLevel(LOG_LEVEL)
    _logger.propagate = False
    return _logger
