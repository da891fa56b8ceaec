"""
Logging setup
"""
import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] in %(module)s: %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the `storefront` logger once per process"""
    logger = logging.getLogger("storefront")
    if getattr(logger, "_storefront_configured", False):
        return logger
    logger._storefront_configured = True

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.setLevel(level.upper())
    logger.addHandler(console_handler)
    return logger
