# optstream/utils.py
import logging
import sys

from optstream import config


def setup_logger(name, level_str=None):
    """Logger writing to stdout at the configured level, one handler per name."""
    level_name = (level_str or config.LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(config.LOG_FORMAT))
        logger.addHandler(handler)

    return logger
