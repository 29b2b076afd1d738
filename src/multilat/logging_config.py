"""
Logging setup for multilat drivers.

The library modules only create module loggers under the 'multilat'
namespace (the LM solver logs every damping change at DEBUG). Handlers
are attached here, by scripts such as scripts/run_batch.py, never by the
solver itself.
"""
import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "multilat"


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach a stdout handler (and optionally a file handler) to the
    'multilat' logger and return it.

    Args:
        level: logging level, as an int or a name from YAML such as "DEBUG".
        log_file: optional path of a log file, overwritten on each call.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level: {level}")
        level = resolved

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Re-running a batch in the same interpreter must not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized at level %s.", logging.getLevelName(level))
    return logger
