"""Logging for plox. Modules log through children of the 'plox' logger (get_logger(__name__)), and setup_logging gives
that logger its one handler. Program output goes to stdout, so logs go to stderr unless a log file is given.
"""

import logging


ROOT = "plox"
FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logging(level="WARNING", log_file=None):
    """Sends plox log records at level or above to log_file (stderr if None). Calling it again replaces the previous
    destination. Raises OSError if log_file can't be opened. Returns the 'plox' logger.
    """
    if log_file is not None:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(FORMAT))

    logger = logging.getLogger(ROOT)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False  # records stay out of whatever the host application configured
    return logger


def get_logger(name):
    return logging.getLogger(name)
