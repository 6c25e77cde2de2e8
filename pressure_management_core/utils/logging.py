import logging
import sys

from pressure_management_core.settings import Settings


def get_logger(settings: Settings, name=None):
    logger = logging.getLogger(name or settings.name)
    level = logging.getLevelName(settings.log_level.upper())
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(settings.log_format, style="{"))
        logger.addHandler(handler)
    return logger
