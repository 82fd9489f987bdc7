import logging
from typing import Optional

from signalkit.settings import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: Optional[str] = None, handler: Optional[logging.Handler] = None
) -> logging.Logger:
    """Route the ``signalkit`` loggers to ``handler`` at the configured level.

    Only the package logger is touched; the host application's root logger
    keeps its own setup. Calling this again replaces the handler added here
    before.
    """
    log_level = level or settings.log_level
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    package_logger = logging.getLogger("signalkit")
    for existing in list(package_logger.handlers):
        if getattr(existing, "signalkit_managed", False):
            package_logger.removeHandler(existing)

    handler = handler or logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.signalkit_managed = True
    package_logger.addHandler(handler)
    package_logger.setLevel(numeric_level)
    return package_logger
