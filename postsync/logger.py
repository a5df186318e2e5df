import logging
import sys

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logger(level=logging.INFO):
    # Shared logger for the whole tool
    logger = logging.getLogger("PostSync")
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    # Console output (only once, modules import this at load time)
    if not any(getattr(h, "_postsync_console", False) for h in logger.handlers):
        ch = logging.StreamHandler(sys.stdout)
        ch.setFormatter(formatter)
        ch._postsync_console = True
        logger.addHandler(ch)

    return logger


def add_file_handler(logger, path):
    """Also persist the log to `path` (appends)."""
    fh = logging.FileHandler(path, encoding="utf-8")
    fh.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(fh)
    return fh


# Global logger
logger = setup_logger()
